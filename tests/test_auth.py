"""Tests for session tokens and authentication endpoints."""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from dentwise.core.security import (
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
)


def test_access_token_round_trip() -> None:
    token = create_access_token({"sub": "uid-1"})

    payload = decode_access_token(token)

    assert payload["sub"] == "uid-1"
    assert payload["type"] == "access"


def test_token_types_are_not_interchangeable() -> None:
    access = create_access_token({"sub": "uid-1"})
    refresh = create_refresh_token({"sub": "uid-1"})

    assert decode_refresh_token(access) is None
    assert decode_access_token(refresh) is None


def test_expired_token_is_rejected() -> None:
    token = create_access_token({"sub": "uid-1"}, expires_delta=timedelta(seconds=-1))

    assert decode_access_token(token) is None


@pytest.mark.asyncio
async def test_expired_token_returns_401(anon_client: AsyncClient) -> None:
    token = create_access_token({"sub": "uid-1"}, expires_delta=timedelta(seconds=-1))

    response = await anon_client.get(
        "/api/v1/appointments/me", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 401
    assert response.json()["error"] == "NotAuthenticatedException"


@pytest.mark.asyncio
async def test_refresh_issues_new_pair(anon_client: AsyncClient) -> None:
    refresh = create_refresh_token({"sub": "uid-1"})

    response = await anon_client.post("/api/v1/auth/refresh", json={"refresh_token": refresh})

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert decode_access_token(data["access_token"])["sub"] == "uid-1"


@pytest.mark.asyncio
async def test_refresh_rejects_access_token(anon_client: AsyncClient) -> None:
    access = create_access_token({"sub": "uid-1"})

    response = await anon_client.post("/api/v1/auth/refresh", json={"refresh_token": access})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_firebase_verify_rejects_bad_token(
    anon_client: AsyncClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def reject(id_token: str) -> dict:
        raise ValueError("Invalid Firebase ID token: bad signature")

    monkeypatch.setattr("dentwise.services.auth_service.verify_firebase_token", reject)

    response = await anon_client.post("/api/v1/auth/firebase/verify", json={"id_token": "bogus"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_firebase_verify_syncs_user(
    client: AsyncClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def accept(id_token: str) -> dict:
        return {"uid": "firebase-uid-42"}

    monkeypatch.setattr("dentwise.services.auth_service.verify_firebase_token", accept)

    response = await client.post("/api/v1/auth/firebase/verify", json={"id_token": "valid"})

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["firebase_uid"] == "firebase-uid-42"
    assert decode_access_token(data["access_token"])["sub"] == "firebase-uid-42"

    me = await client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {data['access_token']}"}
    )
    assert me.json()["id"] == data["user"]["id"]
