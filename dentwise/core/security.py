"""JWT session tokens issued after identity provider sign-in."""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from dentwise.config import settings

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def _encode_token(data: dict[str, Any], token_type: str, expires_delta: timedelta) -> str:
    now = datetime.now(UTC)
    to_encode = data.copy()
    to_encode.update({"exp": now + expires_delta, "iat": now, "type": token_type})

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def _decode_token(token: str, token_type: str) -> dict[str, Any] | None:
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None

    if payload.get("type") != token_type:
        return None

    return payload


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Payload data to encode; ``sub`` carries the external identity id
        expires_delta: Optional expiration time delta

    Returns:
        Encoded JWT token
    """
    return _encode_token(
        data,
        ACCESS_TOKEN_TYPE,
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes),
    )


def create_refresh_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT refresh token."""
    return _encode_token(
        data,
        REFRESH_TOKEN_TYPE,
        expires_delta or timedelta(days=settings.refresh_token_expire_days),
    )


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode an access token, returning None if it is invalid or of the wrong type."""
    return _decode_token(token, ACCESS_TOKEN_TYPE)


def decode_refresh_token(token: str) -> dict[str, Any] | None:
    """Decode a refresh token, returning None if it is invalid or of the wrong type."""
    return _decode_token(token, REFRESH_TOKEN_TYPE)
