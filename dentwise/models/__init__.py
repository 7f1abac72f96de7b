"""Database models."""

from dentwise.models.appointments import appointments
from dentwise.models.base import metadata
from dentwise.models.doctors import doctors
from dentwise.models.users import users

__all__ = [
    "appointments",
    "doctors",
    "metadata",
    "users",
]
