import asyncio
from datetime import timedelta
from unittest.mock import patch

from click.testing import CliRunner
from sqlalchemy import func, select

from nutrilens import __version__
from nutrilens.cli import cli
from nutrilens.core.clock import utcnow
from nutrilens.infrastructure.persistence.database import DatabaseManager
from nutrilens.infrastructure.persistence.models import RefreshTokenModel, UserModel
from nutrilens.infrastructure.persistence.repositories import RefreshTokenRepository


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_info_shows_configuration():
    result = CliRunner().invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "NutriLens Configuration" in result.output
    assert "Environment:  testing" in result.output
    assert "Access TTL:   3600 seconds" in result.output


def test_cleanup_tokens_deletes_only_expired(tmp_path, monkeypatch):
    db = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")

    async def seed() -> None:
        await db.create_tables()
        async with db.session() as session:
            session.add(
                UserModel(
                    id="user-1",
                    email="ana@example.com",
                    password_hash="hash",
                    name="Ana Pop",
                )
            )
            await session.flush()
            tokens = RefreshTokenRepository(session)
            await tokens.record("user-1", "a" * 64, utcnow() - timedelta(days=1))
            await tokens.record("user-1", "b" * 64, utcnow() - timedelta(seconds=1))
            await tokens.record("user-1", "c" * 64, utcnow() + timedelta(days=7))
            await session.commit()
        await db.disconnect()

    async def remaining() -> int:
        async with db.session() as session:
            result = await session.execute(
                select(func.count()).select_from(RefreshTokenModel)
            )
            count = result.scalar_one()
        await db.disconnect()
        return count

    asyncio.run(seed())
    monkeypatch.setattr(
        "nutrilens.infrastructure.persistence.database.get_db_manager", lambda: db
    )

    result = CliRunner().invoke(cli, ["cleanup-tokens"])

    assert result.exit_code == 0, result.output
    assert "Deleted 2 expired refresh token(s)." in result.output
    assert asyncio.run(remaining()) == 1


def test_init_db_refuses_production_without_force(monkeypatch):
    from nutrilens.core.config import get_settings

    monkeypatch.setattr(get_settings(), "environment", "production")

    result = CliRunner().invoke(cli, ["init-db"])

    assert result.exit_code == 1
    assert "Pass --force" in result.output


def test_serve_trusts_only_configured_proxies(monkeypatch):
    from nutrilens.core.config import get_settings

    monkeypatch.setattr(get_settings(), "forwarded_allow_ips", "10.0.0.1")

    with patch("uvicorn.run") as mock_run:
        result = CliRunner().invoke(cli, ["serve"])

    assert result.exit_code == 0, result.output
    kwargs = mock_run.call_args.kwargs
    assert kwargs["proxy_headers"] is True
    assert kwargs["forwarded_allow_ips"] == "10.0.0.1"
