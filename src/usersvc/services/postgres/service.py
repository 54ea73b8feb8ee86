"""
PostgresService - PostgreSQL connection pool and query execution.

One instance is created per application and shared by every request. The
pool bounds concurrent connections; callers beyond the bound wait inside
asyncpg until a connection is released.

Each call acquires a connection, runs one statement and releases it. There
is no transaction spanning calls.
"""

from typing import Any, Optional

import asyncpg
from loguru import logger


def affected_rows(status: str) -> int:
    """
    Extract the row count from a command status tag.

    asyncpg's execute() returns the server's tag, e.g. "UPDATE 1",
    "DELETE 0" or "INSERT 0 1"; the count is always the last token.

    Args:
        status: Command status tag

    Returns:
        Number of rows affected (0 if the tag carries no count)
    """
    try:
        return int(status.rsplit(" ", 1)[-1])
    except ValueError:
        return 0


class PostgresService:
    """
    PostgreSQL database service.

    Manages the asyncpg connection pool and exposes thin fetch/execute helpers
    used by the repositories.
    """

    def __init__(
        self,
        connection_string: str,
        pool_min_size: int = 1,
        pool_max_size: int = 10,
    ):
        """
        Initialize PostgreSQL service.

        Args:
            connection_string: PostgreSQL connection string
            pool_min_size: Connections opened eagerly on connect()
            pool_max_size: Upper bound on concurrent connections
        """
        self.connection_string = connection_string
        self.pool_min_size = pool_min_size
        self.pool_max_size = pool_max_size
        self.pool: Optional[asyncpg.Pool] = None

    async def connect(self) -> None:
        """Establish database connection pool (fails if the server is unreachable)."""
        logger.info(
            f"Connecting to PostgreSQL with pool size "
            f"{self.pool_min_size}-{self.pool_max_size}"
        )
        self.pool = await asyncpg.create_pool(
            self.connection_string,
            min_size=self.pool_min_size,
            max_size=self.pool_max_size,
        )
        logger.info("PostgreSQL connection pool established")

    async def disconnect(self) -> None:
        """Close database connection pool."""
        if self.pool:
            logger.info("Closing PostgreSQL connection pool")
            await self.pool.close()
            self.pool = None
            logger.info("PostgreSQL connection pool closed")

    def _require_pool(self) -> asyncpg.Pool:
        if not self.pool:
            raise RuntimeError("PostgreSQL pool not connected. Call connect() first.")
        return self.pool

    async def fetch(self, query: str, *args: Any) -> list[asyncpg.Record]:
        """
        Run a query and return all rows.

        Args:
            query: SQL with $n placeholders
            *args: Positional parameters

        Returns:
            List of rows (empty if none)
        """
        async with self._require_pool().acquire() as conn:
            return await conn.fetch(query, *args)

    async def fetchrow(self, query: str, *args: Any) -> asyncpg.Record | None:
        """
        Run a query and return the first row.

        Returns:
            The row, or None when the query matched nothing
        """
        async with self._require_pool().acquire() as conn:
            return await conn.fetchrow(query, *args)

    async def execute(self, query: str, *args: Any) -> str:
        """
        Run a statement that returns no rows.

        Returns:
            Command status tag (see affected_rows())
        """
        async with self._require_pool().acquire() as conn:
            return await conn.execute(query, *args)
