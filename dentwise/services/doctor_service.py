"""Doctor service for business logic."""

from uuid import UUID

from sqlalchemy import and_, func, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from dentwise.models.appointments import appointments
from dentwise.models.doctors import doctors


class DoctorService:
    """Read-only practitioner lookups for the booking flow."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def list_doctors(
        self,
        speciality: str | None = None,
        include_inactive: bool = False,
    ) -> list[dict]:
        """List practitioners with their appointment counts, ordered by name."""
        conditions: list = []

        if not include_inactive:
            conditions.append(doctors.c.is_active.is_(True))

        if speciality:
            conditions.append(doctors.c.speciality.ilike(f"%{speciality}%"))

        query = (
            select(
                doctors,
                func.count(appointments.c.id).label("appointment_count"),
            )
            .select_from(doctors.outerjoin(appointments, appointments.c.doctor_id == doctors.c.id))
            .where(and_(*conditions) if conditions else true())
            .group_by(doctors.c.id)
            .order_by(doctors.c.name.asc())
        )

        result = await self.db.execute(query)
        return [dict(row) for row in result.mappings().all()]

    async def get_doctor(self, doctor_id: UUID) -> dict | None:
        """Get practitioner by ID."""
        result = await self.db.execute(select(doctors).where(doctors.c.id == doctor_id))
        doctor = result.mappings().first()
        return dict(doctor) if doctor else None
