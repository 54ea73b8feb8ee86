"""
PostgreSQL service for database operations.
"""

from .service import PostgresService, affected_rows


def get_postgres_service() -> PostgresService:
    """
    Get PostgresService instance configured from settings.

    The pool is not opened here; call connect() on startup.
    """
    from ...settings import settings

    return PostgresService(
        settings.database_url,
        pool_min_size=settings.postgres.pool_min_size,
        pool_max_size=settings.postgres.pool_max_size,
    )


__all__ = ["PostgresService", "affected_rows", "get_postgres_service"]
