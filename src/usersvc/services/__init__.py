"""
Services for the user API.

- postgres: connection pool and query helpers
- repositories: table-level persistence (UserRepository)
"""

from .postgres import PostgresService, get_postgres_service
from .repositories import UserRepository

__all__ = ["PostgresService", "get_postgres_service", "UserRepository"]
