"""Pytest configuration for all tests."""

import os

# Settings are cached on first use, so the test environment must be in
# place before anything from nutrilens is imported.
os.environ.setdefault("NUTRILENS_ENVIRONMENT", "testing")
os.environ.setdefault("NUTRILENS_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("NUTRILENS_RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("NUTRILENS_PASSWORD_HASH_COST", "1")
os.environ.setdefault("NUTRILENS_LOG_FORMAT", "console")

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from nutrilens.application.services import AuthService  # noqa: E402
from nutrilens.domain.entities import AuthConfig  # noqa: E402
from nutrilens.infrastructure.auth import CredentialHasher, TokenCodec  # noqa: E402
from nutrilens.infrastructure.persistence import models  # noqa: E402, F401
from nutrilens.infrastructure.persistence.database import Base  # noqa: E402

STRONG_PASSWORD = "Str0ng!Pass"


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def auth_config() -> AuthConfig:
    """Auth configuration with fixed secrets and the cheapest hash cost."""
    return AuthConfig(
        access_secret="test-access-secret",
        refresh_secret="test-refresh-secret",
        hash_cost=1,
    )


@pytest.fixture
def codec(auth_config: AuthConfig) -> TokenCodec:
    return TokenCodec(auth_config)


@pytest.fixture
def hasher() -> CredentialHasher:
    return CredentialHasher(hash_cost=1)


@pytest.fixture
def auth_service(
    db_session: AsyncSession,
    auth_config: AuthConfig,
    codec: TokenCodec,
    hasher: CredentialHasher,
) -> AuthService:
    return AuthService(db_session, auth_config, codec=codec, hasher=hasher)


@pytest.fixture
def app_codec() -> TokenCodec:
    """Codec configured exactly like the one the app injects."""
    from nutrilens.infrastructure.api.dependencies import get_auth_config

    return TokenCodec(get_auth_config())


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency."""
    from nutrilens.infrastructure.api.app import app
    from nutrilens.infrastructure.api.middleware import rate_limit_storage
    from nutrilens.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session
    rate_limit_storage.reset()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}
    rate_limit_storage.reset()


def _signup_payload(**overrides) -> dict:
    payload = {
        "name": "Ana Pop",
        "email": "ana@example.com",
        "password": STRONG_PASSWORD,
        "confirmPassword": STRONG_PASSWORD,
        "acceptTerms": True,
        "acceptPrivacy": True,
        "acceptGDPR": True,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def signup_payload():
    """Factory for a valid signup body; keyword arguments replace fields."""
    return _signup_payload
