"""
Database management commands.

Usage:
    usersvc db init                    # Create the users table (idempotent)
    usersvc db init --database-url ... # Override DATABASE_URL
"""

import asyncio

import click
from loguru import logger

from ...services.postgres import PostgresService
from ...services.repositories import UserRepository


async def _init_schema(db: PostgresService) -> None:
    await db.connect()
    try:
        await UserRepository(db).init_schema()
    finally:
        await db.disconnect()


@click.command("init")
@click.option(
    "--database-url",
    default=None,
    help="PostgreSQL connection string (defaults to DATABASE_URL)",
)
def init_command(database_url: str | None):
    """Create the users table if it does not exist."""
    from ...settings import settings

    dsn = database_url or settings.database_url
    if not dsn.strip():
        logger.critical("DATABASE_URL environment variable is not set or is empty")
        raise click.exceptions.Exit(1)

    db = PostgresService(
        dsn,
        pool_min_size=1,
        pool_max_size=1,
    )

    try:
        asyncio.run(_init_schema(db))
    except Exception as e:
        logger.critical(f"Error creating users table: {e}")
        raise click.exceptions.Exit(1) from e

    click.echo("✓ users table ready")


def register_commands(db_group):
    """Register all database commands."""
    db_group.add_command(init_command)
