"""Doctor schemas for request/response validation."""

from uuid import UUID

from pydantic import BaseModel


class DoctorResponse(BaseModel):
    """Doctor response schema."""

    id: UUID
    name: str
    email: str | None = None
    phone: str | None = None
    speciality: str | None = None
    bio: str | None = None
    image_url: str | None = None
    gender: str | None = None
    is_active: bool
    appointment_count: int = 0

    model_config = {"from_attributes": True}


class SlotListResponse(BaseModel):
    """Time labels for a practitioner on one calendar date."""

    doctor_id: str
    date: str
    slots: list[str]
