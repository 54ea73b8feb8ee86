"""
API server command.

Checks DATABASE_URL up front, sets the loguru level, then hands over to
uvicorn. The app itself still verifies connectivity and the users table at
startup.

Usage:
    usersvc serve
    usersvc serve --port 8080 --log-level debug
    usersvc serve --reload          # development, single process
    usersvc serve --workers 4       # production
"""

import sys

import click
from loguru import logger

LOG_LEVELS = ["critical", "error", "warning", "info", "debug", "trace"]


@click.command("serve")
@click.option("--host", default=None, help="Bind address (default: API__HOST)")
@click.option("--port", default=None, type=int, help="Port (default: API__PORT)")
@click.option("--reload", is_flag=True, default=False, help="Auto-reload on code changes")
@click.option("--workers", default=None, type=int, help="Worker processes (default: API__WORKERS)")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(LOG_LEVELS),
    help="Level for both the service log and uvicorn (default: API__LOG_LEVEL)",
)
def serve_command(
    host: str | None,
    port: int | None,
    reload: bool,
    workers: int | None,
    log_level: str | None,
):
    """Start the User API server."""
    import uvicorn

    from ...settings import settings

    if not settings.database_url.strip():
        logger.critical("DATABASE_URL environment variable is not set or is empty")
        raise click.exceptions.Exit(1)

    if reload and workers:
        raise click.UsageError("--reload runs a single process; drop --workers")

    level = (log_level or settings.api.log_level).lower()
    logger.remove()
    logger.add(sys.stderr, level=level.upper())

    reload = reload or settings.api.reload
    bind_host = host or settings.api.host
    bind_port = port or settings.api.port

    logger.info(f"Server listening on http://{bind_host}:{bind_port}")
    uvicorn.run(
        "usersvc.api.main:app",
        host=bind_host,
        port=bind_port,
        log_level=level,
        reload=reload,
        workers=None if reload else (workers or settings.api.workers),
    )


def register_command(cli_group):
    """Register the serve command."""
    cli_group.add_command(serve_command)
