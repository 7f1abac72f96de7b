"""Doctor endpoints."""

from uuid import UUID

from fastapi import APIRouter, Query, status

from dentwise.core.exceptions import NotFoundException
from dentwise.dependencies import DatabaseSession
from dentwise.schemas.doctors import DoctorResponse, SlotListResponse
from dentwise.services.doctor_service import DoctorService
from dentwise.services.slot_service import SlotService

router = APIRouter(prefix="/doctors", tags=["Doctors"])


@router.get(
    "/",
    response_model=list[DoctorResponse],
    status_code=status.HTTP_200_OK,
    summary="List practitioners",
)
async def list_doctors(
    db: DatabaseSession,
    speciality: str | None = Query(None, description="Filter by speciality"),
) -> list[DoctorResponse]:
    """List active practitioners that can be booked."""
    service = DoctorService(db)
    doctors = await service.list_doctors(speciality=speciality)
    return [DoctorResponse.model_validate(doctor) for doctor in doctors]


@router.get(
    "/{doctor_id}",
    response_model=DoctorResponse,
    status_code=status.HTTP_200_OK,
    summary="Get practitioner",
)
async def get_doctor(doctor_id: UUID, db: DatabaseSession) -> DoctorResponse:
    """Get a practitioner by ID."""
    service = DoctorService(db)
    doctor = await service.get_doctor(doctor_id)

    if not doctor:
        raise NotFoundException("Doctor not found")

    return DoctorResponse.model_validate(doctor)


@router.get(
    "/{doctor_id}/booked-slots",
    response_model=SlotListResponse,
    status_code=status.HTTP_200_OK,
    summary="Booked time labels",
)
async def get_booked_slots(
    doctor_id: str,
    db: DatabaseSession,
    date: str = Query(..., description="Calendar date, YYYY-MM-DD"),
) -> SlotListResponse:
    """Time labels already taken on the practitioner's calendar for the date."""
    service = SlotService(db)
    booked = await service.get_booked_slots(doctor_id, date)
    return SlotListResponse(doctor_id=doctor_id, date=date, slots=sorted(booked))


@router.get(
    "/{doctor_id}/available-slots",
    response_model=SlotListResponse,
    status_code=status.HTTP_200_OK,
    summary="Free time labels",
)
async def get_available_slots(
    doctor_id: str,
    db: DatabaseSession,
    date: str = Query(..., description="Calendar date, YYYY-MM-DD"),
) -> SlotListResponse:
    """Offerable time labels for the date that are not yet booked."""
    service = SlotService(db)
    available = await service.get_available_slots(doctor_id, date)
    return SlotListResponse(doctor_id=doctor_id, date=date, slots=available)
