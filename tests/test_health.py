"""Tests for health and voice configuration endpoints."""

import pytest
from httpx import AsyncClient

from dentwise.config import settings
from dentwise.middleware.logging import QUIET_PATHS, quiet_paths


@pytest.mark.asyncio
async def test_health_check(anon_client: AsyncClient) -> None:
    """Test health check endpoint."""
    response = await anon_client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data
    assert response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_request_id_is_echoed(anon_client: AsyncClient) -> None:
    response = await anon_client.get("/api/v1/ping", headers={"X-Request-ID": "req-123"})

    assert response.json() == {"message": "pong"}
    assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
async def test_detailed_health_degraded(
    anon_client: AsyncClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def database_down() -> bool:
        return False

    monkeypatch.setattr("dentwise.api.v1.endpoints.health.check_database_connection", database_down)
    monkeypatch.setattr(settings, "vapi_assistant_id", None)

    response = await anon_client.get("/api/v1/health/detailed")

    data = response.json()
    assert data["status"] == "degraded"
    assert data["database"] == "unhealthy"
    assert data["voice_assistant"] == "missing"


@pytest.mark.asyncio
async def test_voice_config(
    anon_client: AsyncClient,
    auth_headers: dict,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(settings, "vapi_assistant_id", "asst_123")

    response = await anon_client.get("/api/v1/voice/config", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"assistant_id": "asst_123"}


@pytest.mark.asyncio
async def test_voice_config_missing(
    anon_client: AsyncClient,
    auth_headers: dict,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(settings, "vapi_assistant_id", None)

    response = await anon_client.get("/api/v1/voice/config", headers=auth_headers)

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_voice_config_requires_authentication(anon_client: AsyncClient) -> None:
    response = await anon_client.get("/api/v1/voice/config")

    assert response.status_code == 401


def test_quiet_paths_follow_api_prefix() -> None:
    assert quiet_paths("/api/v2") == frozenset({"/metrics", "/api/v2/health", "/api/v2/ping"})
    assert f"{settings.api_v1_prefix}/health" in QUIET_PATHS
