"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from dentwise.api.v1.router import api_router
from dentwise.config import settings
from dentwise.core.firebase import initialize_firebase
from dentwise.database import check_database_connection, engine
from dentwise.middleware.error_handler import register_exception_handlers
from dentwise.middleware.logging import LoggingMiddleware, configure_logging

configure_logging()
logger = structlog.get_logger()


async def _check_integrations() -> None:
    """Log which external integrations are usable; none of them block startup."""
    try:
        initialize_firebase(settings.firebase_credentials_path, settings.firebase_config_json)
    except Exception as e:
        logger.warning(
            "firebase_initialization_failed",
            error=str(e),
            note="Sign-in will not work. Set FIREBASE_CREDENTIALS_PATH or FIREBASE_CONFIG_JSON.",
        )
    else:
        logger.info("firebase_initialized")

    if await check_database_connection():
        logger.info("database_connected")
    else:
        logger.error("database_connection_failed")

    if not settings.vapi_assistant_id:
        logger.warning("voice_assistant_not_configured", setting="VAPI_ASSISTANT_ID")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Check integrations on startup and release database connections on shutdown."""
    logger.info("application_startup", environment=settings.environment)
    await _check_integrations()

    yield

    await engine.dispose()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Dental appointment booking and AI voice consultation backend",
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID", "X-Process-Time"],
)
app.add_middleware(LoggingMiddleware)

register_exception_handlers(app)

app.include_router(api_router, prefix=settings.api_v1_prefix)

Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=True,
    excluded_handlers=["/metrics", f"{settings.api_v1_prefix}/ping"],
).instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "dentwise.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )
