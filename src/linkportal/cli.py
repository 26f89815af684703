"""Command-line interface for LinkPortal.

This module provides the CLI commands for running the service and for
unlinking or terminating accounts from an operator shell.
"""

import asyncio
from typing import Awaitable, Callable, NoReturn

import click

from linkportal import __version__
from linkportal.core.config import get_settings
from linkportal.core.errors import LinkPortalError
from linkportal.core.logging import LoggingContext, configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="LinkPortal")
def cli() -> None:
    """LinkPortal - lifecycle management for linked GitHub accounts.

    Settings are loaded from LINKPORTAL_* environment variables and .env.
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
    """Start the LinkPortal API server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    if bind_workers > 1 and settings.database_url.startswith("sqlite"):
        click.echo(
            "Error: SQLite does not support multiple worker processes. "
            "Use --workers 1 or switch to PostgreSQL.",
            err=True,
        )
        raise SystemExit(1)

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting LinkPortal server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "linkportal.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


def run_account_command(
    action: Callable[..., Awaitable[list[str]]], **log_context: str
) -> None:
    """Run an account workflow against the configured services and print its history."""
    from linkportal.infrastructure.api.app import build_operations
    from linkportal.infrastructure.hooks import register_builtin_hooks
    from linkportal.infrastructure.persistence.database import close_database, init_database

    settings = get_settings()
    configure_logging(settings)

    async def run() -> int:
        await init_database()
        operations = build_operations(settings)
        register_builtin_hooks(operations.hook_registry)
        try:
            with LoggingContext(**log_context):
                history = await action(operations)
        except LinkPortalError as e:
            for line in getattr(e, "history", None) or []:
                click.echo(line)
            click.echo(f"Error: {e.message}", err=True)
            return 1
        finally:
            await operations.github.aclose()
            await close_database()

        for line in history:
            click.echo(line)
        return 0

    exit_code = asyncio.run(run())
    if exit_code:
        raise SystemExit(exit_code)


@cli.command()
@click.argument("github_id")
def unlink(github_id: str) -> None:
    """Delete the corporate link of GITHUB_ID."""

    async def action(operations):
        return await operations.get_account(github_id).remove_link()

    run_account_command(action, github_id=github_id, workflow="unlink")


@cli.command()
@click.argument("github_id")
@click.option("--reason", type=str, default=None, help="Reason recorded with the termination")
@click.option(
    "--continue-on-error",
    is_flag=True,
    default=False,
    help="Remove the link even if organization membership removal fails",
)
def terminate(github_id: str, reason: str | None, continue_on_error: bool) -> None:
    """Remove GITHUB_ID from managed organizations, then delete its link."""

    async def action(operations):
        return await operations.get_account(github_id).terminate(
            reason=reason or "linkportal terminate",
            continue_on_error=continue_on_error,
        )

    run_account_command(action, github_id=github_id, workflow="terminate")


@cli.command("create-api-key")
@click.argument("name")
@click.option(
    "--apis",
    type=str,
    default="people",
    show_default=True,
    help="Comma-separated API scopes (people, unlink)",
)
@click.option(
    "--orgs",
    type=str,
    default="*",
    show_default=True,
    help="'*' or comma-separated organization names",
)
def create_api_key(name: str, apis: str, orgs: str) -> None:
    """Create an API key called NAME and print it once."""
    from linkportal.infrastructure.auth import api_key_service
    from linkportal.infrastructure.persistence.database import get_db_manager, init_database

    settings = get_settings()
    configure_logging(settings)

    async def create() -> str:
        await init_database()
        db = get_db_manager()
        try:
            async with db.session() as session:
                plaintext_key, _ = await api_key_service.create_api_key(
                    session=session,
                    name=name,
                    apis=apis.split(","),
                    orgs=orgs,
                )
                await session.commit()
            return plaintext_key
        finally:
            await db.disconnect()

    plaintext_key = asyncio.run(create())
    click.echo(f"API key created for {name}. It will not be shown again:\n{plaintext_key}")


@cli.command()
def info() -> None:
    """Display LinkPortal configuration."""
    settings = get_settings()

    click.echo(f"""
LinkPortal v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:    {settings.environment}
  API Prefix:     {settings.api_prefix}
  API Versions:   {', '.join(settings.supported_api_versions)}

GitHub:
  API URL:        {settings.github_api_url}
  Token:          {'configured' if settings.github_token else 'missing'}
  Organizations:  {', '.join(settings.organizations) or '(none)'}

Database:
  URL:            {settings.database_url}

Logging:
  Level:          {settings.log_level}
  Format:         {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `linkportal` command is run
    or when using `python -m linkportal`.
    """
    cli()


if __name__ == "__main__":
    main()
