"""Authentication schemas."""

from pydantic import BaseModel, Field

from dentwise.schemas.users import UserResponse


class Token(BaseModel):
    """JWT token response schema."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenRefresh(BaseModel):
    """Token refresh request schema."""

    refresh_token: str


class FirebaseAuthRequest(BaseModel):
    """Firebase ID token authentication request."""

    id_token: str = Field(..., min_length=1, description="Firebase ID token from the web app")


class LoginResponse(Token):
    """Login response with tokens and the synced user."""

    user: UserResponse
