"""Appointment service for booking, listing and status changes."""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import Select, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dentwise.config import TIME_LABEL_PATTERN, settings
from dentwise.core.exceptions import (
    BookingFailedException,
    IdentityProviderException,
    InvalidInputException,
    InvalidStatusTransitionException,
    NotAuthenticatedException,
    NotFoundException,
    QueryFailedException,
    SlotTakenException,
    UpdateFailedException,
)
from dentwise.models.appointments import ACTIVE_SLOT_INDEX, appointments
from dentwise.models.doctors import doctors
from dentwise.models.users import users
from dentwise.schemas.appointments import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentStats,
    AppointmentStatus,
    can_transition,
)
from dentwise.services.user_service import UserService
from dentwise.utils.dates import format_calendar_date, parse_calendar_date

logger = structlog.get_logger(__name__)


def appointment_view_query() -> Select:
    """Select appointments joined with patient and practitioner display columns."""
    return select(
        appointments,
        users.c.first_name,
        users.c.last_name,
        users.c.email.label("patient_email"),
        doctors.c.name.label("doctor_name"),
        doctors.c.image_url.label("doctor_image_url"),
    ).select_from(
        appointments.join(users, appointments.c.user_id == users.c.id).join(
            doctors, appointments.c.doctor_id == doctors.c.id
        )
    )


def transform_appointment(row: Mapping[str, Any]) -> AppointmentResponse:
    """Flatten a joined appointment row into its display form."""
    patient_name = f"{row['first_name'] or ''} {row['last_name'] or ''}".strip()

    return AppointmentResponse(
        id=row["id"],
        user_id=row["user_id"],
        doctor_id=row["doctor_id"],
        date=format_calendar_date(row["date"]),
        time=row["time"],
        reason=row["reason"],
        status=row["status"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        patient_name=patient_name,
        patient_email=row["patient_email"],
        doctor_name=row["doctor_name"],
        doctor_image_url=row["doctor_image_url"] or "",
    )


class AppointmentService:
    """Service for managing appointments."""

    def __init__(self, db: AsyncSession, user_service: UserService | None = None):
        """Initialize service with database session and the user sync service."""
        self.db = db
        self.users = user_service

    async def _fetch_view(self, appointment_id: UUID) -> Mapping[str, Any] | None:
        result = await self.db.execute(
            appointment_view_query().where(appointments.c.id == appointment_id)
        )
        return result.mappings().first()

    async def book_appointment(
        self,
        external_id: str | None,
        data: AppointmentCreate,
    ) -> AppointmentResponse:
        """
        Book an appointment for the caller.

        The user sync and the insert run in one transaction. A second active
        booking for the same practitioner, date and time is rejected by the
        ``uq_appointments_active_slot`` index.

        Args:
            external_id: Identity provider id of the caller
            data: Requested slot and optional reason

        Returns:
            Created appointment with display fields

        Raises:
            NotAuthenticatedException: If there is no caller
            InvalidInputException: If doctor, date or time is missing or malformed
            NotFoundException: If the practitioner does not exist
            SlotTakenException: If the slot already has an active booking
            BookingFailedException: On any other persistence failure
        """
        if not external_id:
            raise NotAuthenticatedException("You must be logged in to book an appointment")

        doctor_ref = data.doctor_id.strip()
        date_ref = data.date.strip()
        time_label = data.time.strip()
        if not doctor_ref or not date_ref or not time_label:
            raise InvalidInputException("Doctor, date, and time are required")

        if not TIME_LABEL_PATTERN.match(time_label):
            raise InvalidInputException("Time must be a 24-hour HH:MM label, e.g. 09:30")

        try:
            doctor_id = UUID(doctor_ref)
            appointment_date = parse_calendar_date(date_ref)
        except ValueError as e:
            raise InvalidInputException(f"Invalid doctor or date: {e!s}") from e

        reason = (data.reason or "").strip() or settings.default_appointment_reason

        try:
            user = await self.users.ensure_user(self.db, external_id, commit=False)

            doctor_found = await self.db.scalar(
                select(doctors.c.id).where(doctors.c.id == doctor_id)
            )
            if doctor_found is None:
                raise NotFoundException("Doctor not found")

            result = await self.db.execute(
                insert(appointments)
                .values(
                    user_id=user["id"],
                    doctor_id=doctor_id,
                    date=appointment_date,
                    time=time_label,
                    reason=reason,
                    status=AppointmentStatus.CONFIRMED.value,
                )
                .returning(appointments.c.id)
            )
            appointment_id = result.scalar_one()
            row = await self._fetch_view(appointment_id)
            await self.db.commit()
        except NotFoundException:
            await self.db.rollback()
            raise
        except IntegrityError as e:
            await self.db.rollback()
            if ACTIVE_SLOT_INDEX in str(e.orig):
                logger.info(
                    "appointment_slot_taken",
                    doctor_id=str(doctor_id),
                    date=str(appointment_date),
                    time=time_label,
                )
                raise SlotTakenException() from e
            logger.error("appointment_booking_failed", error=str(e))
            raise BookingFailedException() from e
        except (SQLAlchemyError, IdentityProviderException) as e:
            await self.db.rollback()
            logger.error("appointment_booking_failed", error=str(e))
            raise BookingFailedException() from e

        logger.info(
            "appointment_booked",
            appointment_id=str(appointment_id),
            doctor_id=str(doctor_id),
            date=str(appointment_date),
            time=time_label,
        )
        return transform_appointment(row)

    async def list_all_appointments(self) -> list[AppointmentResponse]:
        """List every appointment, newest booking first."""
        stmt = appointment_view_query().order_by(appointments.c.created_at.desc())

        try:
            result = await self.db.execute(stmt)
            rows = result.mappings().all()
        except SQLAlchemyError as e:
            logger.error("appointments_fetch_failed", error=str(e))
            raise QueryFailedException() from e

        return [transform_appointment(row) for row in rows]

    async def list_user_appointments(self, external_id: str | None) -> list[AppointmentResponse]:
        """
        List the caller's appointments, soonest first.

        Ordered by calendar date, then time label.
        """
        if not external_id:
            raise NotAuthenticatedException("You must be logged in to view appointments")

        try:
            user = await self.users.ensure_user(self.db, external_id)
            result = await self.db.execute(
                appointment_view_query()
                .where(appointments.c.user_id == user["id"])
                .order_by(appointments.c.date.asc(), appointments.c.time.asc())
            )
            rows = result.mappings().all()
        except (SQLAlchemyError, IdentityProviderException) as e:
            await self.db.rollback()
            logger.error("user_appointments_fetch_failed", external_id=external_id, error=str(e))
            raise QueryFailedException("Failed to fetch user appointments") from e

        return [transform_appointment(row) for row in rows]

    async def get_user_appointment_stats(self, external_id: str | None) -> AppointmentStats:
        """Total and completed counts for the caller; zero counts on any failure."""
        if not external_id:
            return AppointmentStats()

        try:
            user = await self.users.ensure_user(self.db, external_id)
            result = await self.db.execute(
                select(
                    func.count().label("total"),
                    func.count()
                    .filter(appointments.c.status == AppointmentStatus.COMPLETED.value)
                    .label("completed"),
                ).where(appointments.c.user_id == user["id"])
            )
            counts = result.one()
        except Exception as e:
            logger.warning("appointment_stats_unavailable", external_id=external_id, error=str(e))
            return AppointmentStats()

        return AppointmentStats(
            total_appointments=counts.total or 0,
            completed_appointments=counts.completed or 0,
        )

    async def update_status(
        self,
        appointment_id: UUID,
        new_status: AppointmentStatus,
    ) -> AppointmentResponse:
        """
        Move an appointment to a new lifecycle status.

        Setting the current status again changes nothing and succeeds.

        Raises:
            NotFoundException: If appointment not found
            InvalidStatusTransitionException: If the move is not allowed
            UpdateFailedException: On persistence failure
        """
        try:
            current = await self.db.scalar(
                select(appointments.c.status)
                .where(appointments.c.id == appointment_id)
                .with_for_update()
            )
            if current is None:
                raise NotFoundException("Appointment not found")

            current_status = AppointmentStatus(current)
            if current_status != new_status:
                if not can_transition(current_status, new_status):
                    raise InvalidStatusTransitionException(current_status.value, new_status.value)

                await self.db.execute(
                    update(appointments)
                    .where(appointments.c.id == appointment_id)
                    .values(status=new_status.value, updated_at=func.now())
                )

            row = await self._fetch_view(appointment_id)
            await self.db.commit()
        except (NotFoundException, InvalidStatusTransitionException):
            await self.db.rollback()
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                "appointment_status_update_failed",
                appointment_id=str(appointment_id),
                error=str(e),
            )
            raise UpdateFailedException() from e

        if current_status != new_status:
            logger.info(
                "appointment_status_updated",
                appointment_id=str(appointment_id),
                old_status=current_status.value,
                new_status=new_status.value,
            )
        return transform_appointment(row)
