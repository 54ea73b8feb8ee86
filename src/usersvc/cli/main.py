"""
User service CLI entry point.

Usage:
    usersvc serve              # Start the API server
    usersvc db init            # Create the users table if missing
"""

import sys

import click
from loguru import logger


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool):
    """User service - CRUD API for users backed by PostgreSQL."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


@cli.group()
def db():
    """Database operations."""
    pass


# Register commands
from .commands.db import register_commands as register_db_commands
from .commands.serve import register_command as register_serve_command

register_db_commands(db)
register_serve_command(cli)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
