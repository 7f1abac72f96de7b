"""User schemas for request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class IdentityProfile(BaseModel):
    """Current profile of a caller as reported by the identity provider."""

    external_id: str = Field(..., min_length=1, description="Firebase user ID")
    first_name: str | None = None
    last_name: str | None = None
    email_addresses: list[str] = Field(default_factory=list)
    phone_numbers: list[str] = Field(default_factory=list)

    @property
    def primary_email(self) -> str | None:
        """First email address on record, if any."""
        return self.email_addresses[0] if self.email_addresses else None

    @property
    def primary_phone(self) -> str | None:
        """First phone number on record, if any."""
        return self.phone_numbers[0] if self.phone_numbers else None


class UserResponse(BaseModel):
    """User schema for API responses."""

    id: UUID
    firebase_uid: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
