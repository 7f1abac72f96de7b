"""Unit tests for user sync."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError
from tenacity import wait_none

from dentwise.core.exceptions import IdentityProviderException, NotAuthenticatedException
from dentwise.services.user_service import MAX_SYNC_ATTEMPTS, UserService


def upsert_result(user: dict) -> MagicMock:
    result = MagicMock()
    result.mappings.return_value.one.return_value = user
    return result


@pytest.fixture
def db() -> AsyncMock:
    return AsyncMock()


@pytest.mark.asyncio
async def test_ensure_user_requires_external_id(db, identity_provider) -> None:
    provider = identity_provider
    service = UserService(provider)

    with pytest.raises(NotAuthenticatedException):
        await service.ensure_user(db, None)

    assert provider.calls == []
    db.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_ensure_user_upserts_primary_contacts(db, identity_provider) -> None:
    provider = identity_provider
    provider.set_profile(
        "uid-1",
        first_name="Jane",
        email_addresses=["jane@example.com", "other@example.com"],
        phone_numbers=["+15550100", "+15550101"],
    )
    db.execute.return_value = upsert_result({"id": uuid4(), "firebase_uid": "uid-1"})
    service = UserService(provider)

    user = await service.ensure_user(db, "uid-1")

    assert user["firebase_uid"] == "uid-1"
    params = db.execute.await_args.args[0].compile(dialect=postgresql.dialect()).params
    assert params["firebase_uid"] == "uid-1"
    assert params["email"] == "jane@example.com"
    assert params["phone"] == "+15550100"
    db.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_ensure_user_can_join_transaction(db, identity_provider) -> None:
    db.execute.return_value = upsert_result({"id": uuid4(), "firebase_uid": "uid-1"})
    service = UserService(identity_provider)

    await service.ensure_user(db, "uid-1", commit=False)

    db.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_current_db_user_retries_database_errors(db, identity_provider) -> None:
    user = {"id": uuid4(), "firebase_uid": "uid-1"}
    db.execute.side_effect = [
        OperationalError("INSERT", {}, Exception("connection reset")),
        upsert_result(user),
    ]
    service = UserService(identity_provider)
    sync = UserService.get_current_db_user.retry_with(wait=wait_none())

    assert await sync(service, db, "uid-1") == user
    db.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_current_db_user_gives_up(db, identity_provider) -> None:
    provider = identity_provider
    provider.missing.add("uid-1")
    service = UserService(provider)
    sync = UserService.get_current_db_user.retry_with(wait=wait_none())

    with pytest.raises(IdentityProviderException):
        await sync(service, db, "uid-1")

    assert len(provider.calls) == MAX_SYNC_ATTEMPTS


@pytest.mark.asyncio
async def test_get_current_db_user_does_not_retry_missing_caller(db, identity_provider) -> None:
    service = UserService(identity_provider)
    sync = UserService.get_current_db_user.retry_with(wait=wait_none())

    with pytest.raises(NotAuthenticatedException):
        await sync(service, db, None)
