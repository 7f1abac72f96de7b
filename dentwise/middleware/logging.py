"""Structured logging setup and per-request access logging."""

import logging
import sys
import time
import uuid
from collections.abc import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from dentwise.config import settings

REQUEST_ID_HEADER = "X-Request-ID"


def quiet_paths(api_prefix: str) -> frozenset[str]:
    """Health and scrape paths that are not access-logged."""
    return frozenset({"/metrics", f"{api_prefix}/health", f"{api_prefix}/ping"})


QUIET_PATHS = quiet_paths(settings.api_v1_prefix)


def build_processors(log_format: str) -> list:
    """Processor chain ending in a JSON or console renderer."""
    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def configure_logging(level: str | None = None, log_format: str | None = None) -> None:
    """
    Configure structlog and route stdlib logging to stdout.

    Args:
        level: Log level name, defaults to ``LOG_LEVEL``
        log_format: ``json`` or ``console``, defaults to ``LOG_FORMAT``
    """
    level_name = (level or settings.log_level).upper()

    structlog.configure(
        processors=build_processors(log_format or settings.log_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name, logging.INFO),
    )
    # Requests are logged by LoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Binds a request id to the logging context and writes one access line per request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        logger = structlog.get_logger("dentwise.access")
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        path = request.url.path

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=path,
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                error=str(e),
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        if path not in QUIET_PATHS:
            if response.status_code >= 500:
                log = logger.error
            elif response.status_code >= 400:
                log = logger.warning
            else:
                log = logger.info
            log(
                "request_completed",
                status_code=response.status_code,
                duration_ms=duration_ms,
                client=request.client.host if request.client else None,
            )

        response.headers["X-Process-Time"] = str(duration_ms / 1000)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
