"""User directory sync between the identity provider and the users table."""

from typing import Protocol

import structlog
from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from tenacity import RetryCallState, retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from dentwise.core.exceptions import IdentityProviderException, NotAuthenticatedException
from dentwise.models.users import users
from dentwise.schemas.users import IdentityProfile

logger = structlog.get_logger(__name__)

MAX_SYNC_ATTEMPTS = 3
SYNC_RETRY_DELAY_SECONDS = 0.5


class IdentityProvider(Protocol):
    """Source of truth for caller profile data."""

    async def get_profile(self, external_id: str) -> IdentityProfile:
        """Return the current profile for ``external_id``."""
        ...


def _log_sync_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "user_sync_retry",
        attempt=retry_state.attempt_number,
        error=str(error),
    )


class UserService:
    """Service for user operations."""

    def __init__(self, identity_provider: IdentityProvider):
        """Initialize service with the identity provider used for profile lookups."""
        self.identity = identity_provider

    async def ensure_user(
        self,
        db: AsyncSession,
        external_id: str | None,
        commit: bool = True,
    ) -> dict:
        """
        Create or refresh the local user for an external identity.

        The row is written with a single INSERT ... ON CONFLICT DO UPDATE keyed
        on ``firebase_uid``, so concurrent first calls for the same identity end
        with exactly one row. Profile fields are overwritten on every call.

        Args:
            db: Database session
            external_id: Identity provider user id of the caller
            commit: Commit immediately; pass False to join a larger transaction

        Returns:
            The stored user row

        Raises:
            NotAuthenticatedException: If no caller identity is available
        """
        if not external_id:
            raise NotAuthenticatedException()

        profile = await self.identity.get_profile(external_id)

        values = {
            "email": profile.primary_email,
            "first_name": profile.first_name,
            "last_name": profile.last_name,
            "phone": profile.primary_phone,
        }

        stmt = (
            insert(users)
            .values(firebase_uid=external_id, **values)
            .on_conflict_do_update(
                index_elements=[users.c.firebase_uid],
                set_={**values, "updated_at": func.now()},
            )
            .returning(users)
        )

        result = await db.execute(stmt)
        user = dict(result.mappings().one())

        if commit:
            await db.commit()

        logger.info("user_synced", user_id=str(user["id"]), external_id=external_id)
        return user

    @retry(
        retry=retry_if_exception_type((SQLAlchemyError, IdentityProviderException)),
        stop=stop_after_attempt(MAX_SYNC_ATTEMPTS),
        wait=wait_fixed(SYNC_RETRY_DELAY_SECONDS),
        before_sleep=_log_sync_retry,
        reraise=True,
    )
    async def get_current_db_user(self, db: AsyncSession, external_id: str | None) -> dict:
        """Sync the caller, retrying transient database and provider failures."""
        try:
            return await self.ensure_user(db, external_id)
        except SQLAlchemyError:
            await db.rollback()
            raise

