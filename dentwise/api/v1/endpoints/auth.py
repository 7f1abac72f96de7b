"""Authentication endpoints."""

from fastapi import APIRouter, status

from dentwise.dependencies import DatabaseSession, UserServiceDep
from dentwise.schemas.auth import FirebaseAuthRequest, LoginResponse, Token, TokenRefresh
from dentwise.schemas.users import UserResponse
from dentwise.services.auth_service import AuthService

router = APIRouter()


@router.post(
    "/firebase/verify",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    tags=["Authentication"],
    summary="Firebase ID token verification",
)
async def firebase_verify(
    request: FirebaseAuthRequest,
    user_service: UserServiceDep,
    db: DatabaseSession,
) -> LoginResponse:
    """
    Exchange a Firebase ID token for API session tokens.

    The web app sends the ID token it receives after sign-in; the token is
    verified, the local user record is synced, and a JWT pair is returned.

    Args:
        request: Firebase ID token
        user_service: User sync service
        db: Database session

    Returns:
        Access token, refresh token, and the synced user
    """
    auth_service = AuthService(user_service)

    firebase_token_data = await auth_service.verify_firebase_id_token(request.id_token)
    user, tokens = await auth_service.handle_firebase_login(firebase_token_data, db)

    return LoginResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/refresh",
    response_model=Token,
    status_code=status.HTTP_200_OK,
    tags=["Authentication"],
    summary="Refresh access token",
)
async def refresh_token(
    request: TokenRefresh,
    user_service: UserServiceDep,
) -> Token:
    """Issue a new token pair from a valid refresh token."""
    auth_service = AuthService(user_service)
    return auth_service.refresh_access_token(request.refresh_token)
