"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from dentwise.core.exceptions import NotAuthenticatedException
from dentwise.core.firebase import FirebaseIdentityProvider
from dentwise.core.security import decode_access_token
from dentwise.database import get_db
from dentwise.services.user_service import IdentityProvider, UserService

# Missing credentials are reported by get_current_external_id, not by HTTPBearer
security = HTTPBearer(auto_error=False)


async def get_current_external_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """
    Extract the caller's external identity id from the session token.

    Args:
        credentials: Bearer token credentials

    Returns:
        Identity provider user id from the token subject

    Raises:
        NotAuthenticatedException: If the token is missing, invalid or expired
    """
    if credentials is None:
        raise NotAuthenticatedException()

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise NotAuthenticatedException("Could not validate credentials")

    external_id = payload.get("sub")
    if not external_id or not isinstance(external_id, str):
        raise NotAuthenticatedException("Could not validate credentials")

    return external_id


def get_identity_provider() -> IdentityProvider:
    """Identity provider used to read caller profiles."""
    return FirebaseIdentityProvider()


def get_user_service(
    identity_provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
) -> UserService:
    """User sync service bound to the configured identity provider."""
    return UserService(identity_provider)


# Type aliases for dependency injection
DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
CurrentExternalId = Annotated[str, Depends(get_current_external_id)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
