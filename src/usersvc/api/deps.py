"""
FastAPI dependencies.

The connection pool is created once in create_app() and kept on app.state;
each request gets a repository bound to that pool. Tests replace
get_user_repository through app.dependency_overrides.
"""

from fastapi import Request

from ..services.postgres import PostgresService
from ..services.repositories import UserRepository


def get_db(request: Request) -> PostgresService:
    """Shared PostgresService of the running application."""
    return request.app.state.db


def get_user_repository(request: Request) -> UserRepository:
    """UserRepository bound to the application's pool."""
    return UserRepository(get_db(request))
