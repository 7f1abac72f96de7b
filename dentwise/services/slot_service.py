"""Slot availability lookups for the booking form."""

from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dentwise.config import settings
from dentwise.models.appointments import appointments
from dentwise.schemas.appointments import ACTIVE_STATUSES
from dentwise.utils.dates import parse_calendar_date

logger = structlog.get_logger(__name__)


class SlotService:
    """Service answering which time labels a practitioner has free on a date."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def get_booked_slots(self, doctor_id: str, date: str) -> set[str]:
        """
        Get the time labels already held on a practitioner's calendar date.

        Only confirmed and completed appointments hold a slot. Lookup failures
        are logged and reported as "nothing booked".

        Args:
            doctor_id: Practitioner ID
            date: Calendar date (YYYY-MM-DD)

        Returns:
            Set of booked time labels
        """
        try:
            stmt = select(appointments.c.time).where(
                appointments.c.doctor_id == UUID(str(doctor_id)),
                appointments.c.date == parse_calendar_date(date),
                appointments.c.status.in_([status.value for status in ACTIVE_STATUSES]),
            )
        except ValueError as e:
            logger.warning("booked_slots_bad_request", doctor_id=doctor_id, date=date, error=str(e))
            return set()

        try:
            result = await self.db.execute(stmt)
            return set(result.scalars().all())
        except SQLAlchemyError as e:
            logger.warning(
                "booked_slots_lookup_failed", doctor_id=doctor_id, date=date, error=str(e)
            )
            await self.db.rollback()
            return set()

    async def get_available_slots(self, doctor_id: str, date: str) -> list[str]:
        """Offerable time labels for the date, in menu order, minus booked ones."""
        booked = await self.get_booked_slots(doctor_id, date)
        return [label for label in settings.booking_time_slots if label not in booked]
