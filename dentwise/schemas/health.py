"""Health check schemas."""

from typing import Literal

from pydantic import BaseModel

ServiceStatus = Literal["healthy", "degraded"]


class HealthResponse(BaseModel):
    """Liveness of the API process."""

    status: ServiceStatus
    version: str
    environment: str


class DetailedHealthResponse(HealthResponse):
    """Liveness plus the state of each dependency."""

    database: Literal["healthy", "unhealthy"]
    voice_assistant: Literal["configured", "missing"]
