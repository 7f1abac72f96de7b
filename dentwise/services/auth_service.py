"""Authentication service for Firebase sign-in and JWT sessions."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from dentwise.core.exceptions import NotAuthenticatedException
from dentwise.core.firebase import verify_firebase_token
from dentwise.core.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
)
from dentwise.schemas.auth import Token
from dentwise.services.user_service import UserService

logger = structlog.get_logger(__name__)


class AuthService:
    """Authentication service for handling Firebase and JWT operations."""

    def __init__(self, user_service: UserService):
        """Initialize auth service with the user sync service."""
        self.users = user_service

    async def verify_firebase_id_token(self, id_token: str) -> dict:
        """
        Verify Firebase ID token and extract user claims.

        Raises:
            NotAuthenticatedException: If token verification fails
        """
        try:
            return await verify_firebase_token(id_token)
        except ValueError as e:
            raise NotAuthenticatedException(str(e)) from e

    async def handle_firebase_login(
        self, firebase_token_data: dict, db: AsyncSession
    ) -> tuple[dict, Token]:
        """
        Sync the signed-in user and open a session.

        Args:
            firebase_token_data: Decoded Firebase token
            db: Database session

        Returns:
            Tuple of (user dict, token pair)
        """
        external_id = firebase_token_data.get("uid")
        if not external_id:
            raise NotAuthenticatedException("Firebase token has no user id")

        user = await self.users.ensure_user(db, external_id)
        logger.info("user_signed_in", user_id=str(user["id"]))

        return user, self.create_tokens(external_id)

    def create_tokens(self, external_id: str) -> Token:
        """Create an access/refresh token pair whose subject is the external identity id."""
        return Token(
            access_token=create_access_token(data={"sub": external_id}),
            refresh_token=create_refresh_token(data={"sub": external_id}),
            token_type="bearer",
        )

    def refresh_access_token(self, refresh_token: str) -> Token:
        """
        Create new token pair from a refresh token.

        Raises:
            NotAuthenticatedException: If refresh token is invalid
        """
        payload = decode_refresh_token(refresh_token)

        if payload is None or not payload.get("sub"):
            raise NotAuthenticatedException("Invalid refresh token")

        return self.create_tokens(payload["sub"])
