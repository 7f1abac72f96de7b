"""Tests for user sync endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from dentwise.models.users import users


@pytest.mark.asyncio
async def test_sync_creates_user_once(
    client: AsyncClient,
    db_session,
    auth_headers: dict,
    external_id: str,
    identity_provider,
) -> None:
    """Syncing the same identity twice leaves exactly one user row."""
    identity_provider.set_profile(
        external_id,
        first_name="Jane",
        last_name="Doe",
        email_addresses=["jane@example.com", "jane.doe@work.example.com"],
        phone_numbers=["+15550100"],
    )

    first = await client.post("/api/v1/users/sync", headers=auth_headers)
    second = await client.post("/api/v1/users/sync", headers=auth_headers)

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json()["id"] == second.json()["id"]
    assert first.json()["email"] == "jane@example.com"
    assert first.json()["phone"] == "+15550100"

    count = await db_session.scalar(
        select(func.count()).select_from(users).where(users.c.firebase_uid == external_id)
    )
    assert count == 1


@pytest.mark.asyncio
async def test_sync_refreshes_profile(
    client: AsyncClient,
    auth_headers: dict,
    external_id: str,
    identity_provider,
) -> None:
    """Profile changes at the identity provider overwrite the stored fields."""
    identity_provider.set_profile(external_id, first_name="Jane", last_name="Doe")
    await client.post("/api/v1/users/sync", headers=auth_headers)

    identity_provider.set_profile(
        external_id,
        first_name="Janet",
        last_name=None,
        email_addresses=["janet@example.com"],
    )
    response = await client.post("/api/v1/users/sync", headers=auth_headers)

    data = response.json()
    assert data["first_name"] == "Janet"
    assert data["last_name"] is None
    assert data["email"] == "janet@example.com"
    assert data["phone"] is None


@pytest.mark.asyncio
async def test_get_me_returns_synced_user(
    client: AsyncClient,
    auth_headers: dict,
    external_id: str,
) -> None:
    """The profile endpoint syncs and returns the caller."""
    response = await client.get("/api/v1/users/me", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["firebase_uid"] == external_id
    assert data["first_name"] == "Jane"


@pytest.mark.asyncio
async def test_sync_unknown_identity(
    client: AsyncClient,
    auth_headers: dict,
    external_id: str,
    identity_provider,
) -> None:
    """An identity the provider cannot resolve is reported as a provider failure."""
    identity_provider.missing.add(external_id)

    response = await client.post("/api/v1/users/sync", headers=auth_headers)
    assert response.status_code == 502


@pytest.mark.asyncio
async def test_sync_requires_authentication(anon_client: AsyncClient) -> None:
    """Sync without a session token returns 401."""
    response = await anon_client.post("/api/v1/users/sync")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_sync_rejects_invalid_token(anon_client: AsyncClient) -> None:
    """A malformed bearer token returns 401."""
    response = await anon_client.post(
        "/api/v1/users/sync", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401
