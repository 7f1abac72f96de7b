"""API v1 router configuration."""

from fastapi import APIRouter

from dentwise.api.v1.endpoints import (
    appointments,
    auth,
    doctors,
    health,
    users,
    voice,
)

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users.router, tags=["Users"])
api_router.include_router(doctors.router, tags=["Doctors"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["Appointments"])
api_router.include_router(voice.router, tags=["Voice"])
