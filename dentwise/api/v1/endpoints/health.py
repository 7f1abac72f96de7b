"""Health check endpoints."""

from fastapi import APIRouter

from dentwise.config import settings
from dentwise.database import check_database_connection
from dentwise.schemas.health import DetailedHealthResponse, HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse, summary="Liveness check")
async def health_check() -> HealthResponse:
    """Report that the process is serving requests; no dependency is checked."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get("/health/detailed", response_model=DetailedHealthResponse, summary="Dependency check")
async def detailed_health_check() -> DetailedHealthResponse:
    """
    Check the database and report voice assistant configuration.

    The service is ``degraded`` when the database is unreachable. A missing
    voice assistant id only disables the voice widget and does not degrade it.
    """
    database_ok = await check_database_connection()

    return DetailedHealthResponse(
        status="healthy" if database_ok else "degraded",
        version=settings.app_version,
        environment=settings.environment,
        database="healthy" if database_ok else "unhealthy",
        voice_assistant="configured" if settings.vapi_assistant_id else "missing",
    )


@router.get("/ping", summary="Ping")
async def ping() -> dict[str, str]:
    return {"message": "pong"}
