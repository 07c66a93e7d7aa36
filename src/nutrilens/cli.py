"""Command-line interface for NutriLens.

This module provides the CLI commands for running and managing
the NutriLens auth API.
"""

import asyncio
import sys
from typing import NoReturn

import click

from nutrilens import __version__
from nutrilens.core.config import get_settings
from nutrilens.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="NutriLens")
def cli() -> None:
    """NutriLens - authentication API for the NutriLens mobile app.

    Settings are read from NUTRILENS_* environment variables and .env.
    """


@cli.command()
@click.option(
    "--host",
    type=str,
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the NutriLens API server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting NutriLens server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "nutrilens.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
        proxy_headers=True,
        forwarded_allow_ips=settings.forwarded_allow_ips,
    )


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Create all database tables.

    Intended for development. Production schemas are managed outside the app.
    """
    from nutrilens.infrastructure.persistence import models  # noqa: F401
    from nutrilens.infrastructure.persistence.database import get_db_manager

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Pass --force to create tables anyway.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize():
        db = get_db_manager()
        try:
            await db.create_tables()
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    asyncio.run(initialize())


@cli.command("cleanup-tokens")
def cleanup_tokens() -> None:
    """Delete refresh token records whose expiry has passed.

    Meant to be run periodically by an external scheduler (cron, k8s CronJob).
    """
    from nutrilens.infrastructure.persistence.database import get_db_manager
    from nutrilens.infrastructure.persistence.repositories import RefreshTokenRepository

    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)

    async def cleanup() -> int:
        db = get_db_manager()
        try:
            async with db.session() as session:
                deleted = await RefreshTokenRepository(session).delete_expired()
                await session.commit()
                return deleted
        finally:
            await db.disconnect()

    deleted = asyncio.run(cleanup())
    logger.info("Expired refresh tokens deleted", count=deleted)
    click.echo(f"Deleted {deleted} expired refresh token(s).")


@cli.command()
def info() -> None:
    """Display NutriLens configuration information."""
    settings = get_settings()

    click.echo(f"""
NutriLens Configuration
=======================

Application:
  Name:         {settings.app_name}
  Version:      {settings.app_version}
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}
  Proxies:      {settings.forwarded_allow_ips}

Database:
  URL:          {settings.database_url}
  Pool Size:    {settings.db_pool_size}
  Echo:         {settings.db_echo}

Tokens:
  Access TTL:   {settings.access_token_ttl_seconds} seconds
  Refresh TTL:  {settings.refresh_token_ttl_seconds} seconds
  Issuer:       {settings.jwt_issuer}
  Audience:     {settings.jwt_audience}

Rate Limiting:
  Enabled:      {settings.rate_limit_enabled}
  General:      {settings.rate_limit_max} / {settings.rate_limit_window_seconds}s
  Auth:         {settings.auth_rate_limit_max} / {settings.auth_rate_limit_window_seconds}s

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `nutrilens` command is run
    or when using `python -m nutrilens`.
    """
    cli()


def serve_main() -> NoReturn:
    """Entry point for the `nutrilens-server` script."""
    sys.argv[0] = "nutrilens"
    if len(sys.argv) == 1:
        sys.argv.append("serve")
    main()


if __name__ == "__main__":
    main()
