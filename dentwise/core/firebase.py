"""Firebase Admin SDK initialization and identity lookups."""

import json
import os

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin.exceptions import FirebaseError
from starlette.concurrency import run_in_threadpool
from structlog import get_logger

from dentwise.core.exceptions import IdentityProviderException
from dentwise.schemas.users import IdentityProfile

logger = get_logger(__name__)

_firebase_app: firebase_admin.App | None = None


def initialize_firebase(
    firebase_credentials_path: str | None = None, firebase_config_json: str | None = None
) -> None:
    """
    Initialize Firebase Admin SDK.

    Args:
        firebase_credentials_path: Optional path to service account JSON file.
        firebase_config_json: Optional raw JSON string of service account.

    Credentials are looked up in order: raw JSON string, file path, then
    Application Default Credentials.
    """
    global _firebase_app

    if _firebase_app is not None:
        logger.info("firebase_already_initialized")
        return

    cred = None

    if firebase_config_json:
        logger.info("firebase_init_from_json")
        cred = credentials.Certificate(json.loads(firebase_config_json))
    elif firebase_credentials_path and os.path.exists(firebase_credentials_path):
        logger.info("firebase_init_from_file", path=firebase_credentials_path)
        cred = credentials.Certificate(firebase_credentials_path)

    if cred:
        _firebase_app = firebase_admin.initialize_app(cred)
    else:
        _firebase_app = firebase_admin.initialize_app()
        logger.info("firebase_init_default_credentials")


async def verify_firebase_token(id_token: str) -> dict:
    """
    Verify a Firebase ID token.

    Args:
        id_token: Firebase ID token from the client

    Returns:
        Decoded token containing user claims

    Raises:
        ValueError: If token is invalid or expired
    """
    try:
        decoded_token = await run_in_threadpool(
            auth.verify_id_token, id_token, clock_skew_seconds=10
        )
    except auth.InvalidIdTokenError as e:
        logger.warning("firebase_token_invalid", error=str(e))
        raise ValueError(f"Invalid Firebase ID token: {e!s}") from e
    except (FirebaseError, ValueError) as e:
        logger.error("firebase_token_verification_failed", error=str(e))
        raise ValueError(f"Token verification failed: {e!s}") from e

    logger.info("firebase_token_verified", uid=decoded_token.get("uid"))
    return decoded_token


def split_display_name(display_name: str | None) -> tuple[str | None, str | None]:
    """Split a display name into given and family parts."""
    if not display_name or not display_name.strip():
        return None, None
    parts = display_name.strip().split(" ", 1)
    return parts[0], parts[1].strip() if len(parts) > 1 else None


def _unique(values: list[str | None]) -> list[str]:
    seen: list[str] = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen


def profile_from_user_record(record: auth.UserRecord) -> IdentityProfile:
    """Build an identity profile from a Firebase user record."""
    first_name, last_name = split_display_name(record.display_name)
    linked = record.provider_data or []

    return IdentityProfile(
        external_id=record.uid,
        first_name=first_name,
        last_name=last_name,
        email_addresses=_unique([record.email, *(p.email for p in linked)]),
        phone_numbers=_unique([record.phone_number, *(p.phone_number for p in linked)]),
    )


class FirebaseIdentityProvider:
    """Reads current profile data for a signed-in user from Firebase."""

    async def get_profile(self, external_id: str) -> IdentityProfile:
        """
        Fetch the provider's current profile for a user.

        Raises:
            IdentityProviderException: If the user is unknown or Firebase fails
        """
        try:
            record = await run_in_threadpool(auth.get_user, external_id)
        except auth.UserNotFoundError as e:
            logger.warning("identity_user_not_found", external_id=external_id)
            raise IdentityProviderException("No identity found for caller") from e
        except (FirebaseError, ValueError) as e:
            logger.error("identity_lookup_failed", external_id=external_id, error=str(e))
            raise IdentityProviderException() from e

        return profile_from_user_record(record)
