"""Doctor model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import UUID

from dentwise.models.base import metadata

doctors = Table(
    "doctors",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()")),
    Column("name", Text, nullable=False),
    Column("email", Text, unique=True),
    Column("phone", String(32)),
    Column("speciality", String(200), index=True),
    Column("bio", Text),
    Column("image_url", Text),
    Column("gender", String(20)),
    Column("is_active", Boolean, nullable=False, server_default=text("true"), index=True),
    # Metadata
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
)
