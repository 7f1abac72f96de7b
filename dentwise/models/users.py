"""User model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Column,
    DateTime,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import UUID

from dentwise.models.base import metadata

users = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()")),
    # Firebase identity (SOURCE OF TRUTH)
    Column("firebase_uid", Text, nullable=False, unique=True, index=True),
    # Profile info mirrored from the identity provider
    Column("email", Text, index=True),
    Column("first_name", Text),
    Column("last_name", Text),
    Column("phone", String(32)),
    # Audit
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
)
