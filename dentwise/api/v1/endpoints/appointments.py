"""Appointment endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from dentwise.dependencies import (
    CurrentExternalId,
    DatabaseSession,
    UserServiceDep,
    get_current_external_id,
)
from dentwise.schemas.appointments import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentStats,
    AppointmentStatusUpdate,
)
from dentwise.services.appointment_service import AppointmentService

router = APIRouter()


@router.post(
    "/",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Appointments"],
    summary="Book an appointment",
)
async def book_appointment(
    data: AppointmentCreate,
    external_id: CurrentExternalId,
    user_service: UserServiceDep,
    db: DatabaseSession,
) -> AppointmentResponse:
    """
    Book a practitioner time slot for the authenticated user.

    Args:
        data: Doctor, date, time label and optional reason
        external_id: Authenticated caller
        user_service: User sync service
        db: Database session

    Returns:
        Created appointment
    """
    service = AppointmentService(db, user_service)
    return await service.book_appointment(external_id, data)


@router.get(
    "/",
    response_model=list[AppointmentResponse],
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="List all appointments",
    dependencies=[Depends(get_current_external_id)],
)
async def list_all_appointments(db: DatabaseSession) -> list[AppointmentResponse]:
    """List every appointment, most recently booked first."""
    service = AppointmentService(db)
    return await service.list_all_appointments()


@router.get(
    "/me",
    response_model=list[AppointmentResponse],
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="List my appointments",
)
async def list_my_appointments(
    external_id: CurrentExternalId,
    user_service: UserServiceDep,
    db: DatabaseSession,
) -> list[AppointmentResponse]:
    """List the authenticated user's appointments, soonest first."""
    service = AppointmentService(db, user_service)
    return await service.list_user_appointments(external_id)


@router.get(
    "/me/stats",
    response_model=AppointmentStats,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="My appointment counts",
)
async def get_my_appointment_stats(
    external_id: CurrentExternalId,
    user_service: UserServiceDep,
    db: DatabaseSession,
) -> AppointmentStats:
    """Total and completed appointment counts for the dashboard."""
    service = AppointmentService(db, user_service)
    return await service.get_user_appointment_stats(external_id)


@router.patch(
    "/{appointment_id}/status",
    response_model=AppointmentResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="Update appointment status",
    dependencies=[Depends(get_current_external_id)],
)
async def update_appointment_status(
    appointment_id: UUID,
    data: AppointmentStatusUpdate,
    db: DatabaseSession,
) -> AppointmentResponse:
    """
    Move an appointment to COMPLETED or CANCELLED.

    Args:
        appointment_id: Appointment ID
        data: Requested status
        db: Database session

    Returns:
        Updated appointment

    Raises:
        HTTPException: If appointment not found or the transition is not allowed
    """
    service = AppointmentService(db)
    return await service.update_status(appointment_id, data.status)
