"""Appointment schemas for request/response validation."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class AppointmentStatus(str, Enum):
    """Appointment status enumeration."""

    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# Statuses that hold a slot
ACTIVE_STATUSES = (AppointmentStatus.CONFIRMED, AppointmentStatus.COMPLETED)

ALLOWED_TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.CONFIRMED: frozenset(
        {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}
    ),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
}


def can_transition(current: AppointmentStatus, new: AppointmentStatus) -> bool:
    """Check whether an appointment may move from ``current`` to ``new``."""
    return new in ALLOWED_TRANSITIONS[current]


class AppointmentCreate(BaseModel):
    """
    Schema for booking a new appointment.

    Emptiness of the slot fields is checked by the booking service so that it
    is reported the same way for every caller.
    """

    doctor_id: str = ""
    date: str = Field("", description="Calendar date, YYYY-MM-DD")
    time: str = Field("", max_length=20, description="Time-of-day label, e.g. 09:30")
    reason: str | None = Field(None, max_length=500)


class AppointmentStatusUpdate(BaseModel):
    """Schema for updating appointment status."""

    status: AppointmentStatus


class AppointmentResponse(BaseModel):
    """Appointment joined with patient and practitioner display fields."""

    id: UUID
    user_id: UUID
    doctor_id: UUID
    date: str
    time: str
    reason: str
    status: AppointmentStatus
    created_at: datetime
    updated_at: datetime
    patient_name: str
    patient_email: str | None = None
    doctor_name: str
    doctor_image_url: str = ""

    model_config = {"from_attributes": True}


class AppointmentStats(BaseModel):
    """Dashboard counts for the signed-in user."""

    total_appointments: int = 0
    completed_appointments: int = 0
