"""Appointments table model using SQLAlchemy Core."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Index,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

from dentwise.models.base import metadata

ACTIVE_SLOT_INDEX = "uq_appointments_active_slot"

appointments = Table(
    "appointments",
    metadata,
    Column(
        "id",
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    ),
    # Ownership / references
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column(
        "doctor_id",
        UUID(as_uuid=True),
        ForeignKey("doctors.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    # Slot: calendar date plus time-of-day label
    Column("date", Date, nullable=False),
    Column("time", Text, nullable=False),
    Column("reason", Text, nullable=False, server_default=text("'General consultation'")),
    # Status management
    Column("status", Text, nullable=False, server_default=text("'CONFIRMED'")),
    # Audit fields
    Column("created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")),
    CheckConstraint(
        "status IN ('CONFIRMED', 'COMPLETED', 'CANCELLED')",
        name="status_check",
    ),
    # One active appointment per practitioner slot; cancelling frees it
    Index(
        ACTIVE_SLOT_INDEX,
        "doctor_id",
        "date",
        "time",
        unique=True,
        postgresql_where=text("status <> 'CANCELLED'"),
    ),
)
