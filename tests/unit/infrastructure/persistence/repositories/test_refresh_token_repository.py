"""Unit tests for RefreshTokenRepository (the token store)."""

from datetime import timedelta

import pytest
import pytest_asyncio
from sqlalchemy import select

from nutrilens.core.clock import utcnow
from nutrilens.infrastructure.persistence.models import RefreshTokenModel, UserModel
from nutrilens.infrastructure.persistence.repositories import RefreshTokenRepository


@pytest_asyncio.fixture
async def user(db_session):
    user = UserModel(
        id="user-1",
        email="ana@example.com",
        password_hash="hash",
        name="Ana Pop",
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
def repo(db_session):
    return RefreshTokenRepository(db_session)


async def _get(db_session, token_hash: str) -> RefreshTokenModel:
    result = await db_session.execute(
        select(RefreshTokenModel).where(RefreshTokenModel.token_hash == token_hash)
    )
    return result.scalar_one()


@pytest.mark.asyncio
async def test_record_returns_id_and_stores_metadata(db_session, repo, user):
    token_id = await repo.record(
        user.id,
        "a" * 64,
        expires_at=utcnow() + timedelta(days=7),
        device_id="device-1",
        platform="ios",
        ip_address="10.0.0.1",
    )
    await db_session.commit()

    stored = await _get(db_session, "a" * 64)
    assert stored.id == token_id
    assert stored.user_id == user.id
    assert stored.device_id == "device-1"
    assert stored.platform == "ios"
    assert stored.ip_address == "10.0.0.1"
    assert stored.revoked is False
    assert stored.revoked_at is None


@pytest.mark.asyncio
async def test_live_token_resolves_user(db_session, repo, user):
    await repo.record(user.id, "a" * 64, expires_at=utcnow() + timedelta(days=7))
    await db_session.commit()

    assert await repo.is_live("a" * 64) is True
    assert await repo.resolve_user("a" * 64) == user.id


@pytest.mark.asyncio
async def test_unknown_token_is_not_live(repo, user):
    assert await repo.is_live("f" * 64) is False
    assert await repo.resolve_user("f" * 64) is None


@pytest.mark.asyncio
async def test_expired_token_is_not_live(db_session, repo, user):
    await repo.record(user.id, "a" * 64, expires_at=utcnow() - timedelta(seconds=1))
    await db_session.commit()

    assert await repo.is_live("a" * 64) is False


@pytest.mark.asyncio
async def test_revoked_token_is_never_live_again(db_session, repo, user):
    await repo.record(user.id, "a" * 64, expires_at=utcnow() + timedelta(days=7))
    await db_session.commit()

    assert await repo.revoke("a" * 64) is True
    await db_session.commit()

    assert await repo.is_live("a" * 64) is False
    stored = await _get(db_session, "a" * 64)
    assert stored.revoked is True
    assert stored.revoked_at is not None


@pytest.mark.asyncio
async def test_revoke_is_idempotent(db_session, repo, user):
    await repo.record(user.id, "a" * 64, expires_at=utcnow() + timedelta(days=7))
    await db_session.commit()

    assert await repo.revoke("a" * 64) is True
    await db_session.commit()
    db_session.expire_all()
    first_revoked_at = (await _get(db_session, "a" * 64)).revoked_at

    assert await repo.revoke("a" * 64) is False
    await db_session.commit()
    db_session.expire_all()

    assert (await _get(db_session, "a" * 64)).revoked_at == first_revoked_at


@pytest.mark.asyncio
async def test_revoke_unknown_token_is_noop(repo, user):
    assert await repo.revoke("f" * 64) is False


@pytest.mark.asyncio
async def test_multiple_live_tokens_per_user(db_session, repo, user):
    expires_at = utcnow() + timedelta(days=7)
    await repo.record(user.id, "a" * 64, expires_at=expires_at, device_id="phone")
    await repo.record(user.id, "b" * 64, expires_at=expires_at, device_id="tablet")
    await db_session.commit()

    await repo.revoke("a" * 64)
    await db_session.commit()

    assert await repo.is_live("a" * 64) is False
    assert await repo.is_live("b" * 64) is True
