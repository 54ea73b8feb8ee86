"""
Pytest configuration and fixtures for user service tests.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from usersvc.api.deps import get_user_repository
from usersvc.api.main import create_app
from usersvc.errors import StorageError
from usersvc.models import User
from usersvc.services.postgres import PostgresService


class InMemoryUserRepository:
    """Stand-in for UserRepository keeping rows in a dict."""

    def __init__(self):
        self.rows: dict[int, User] = {}
        self.next_id = 1
        self.calls: list[str] = []

    async def list(self) -> list[User]:
        self.calls.append("list")
        return list(self.rows.values())

    async def get(self, user_id: int) -> User | None:
        self.calls.append("get")
        return self.rows.get(user_id)

    async def create(self, name: str, email: str) -> User:
        self.calls.append("create")
        user = User(id=self.next_id, name=name, email=email)
        self.rows[user.id] = user
        self.next_id += 1
        return user

    async def update(self, user_id: int, name: str, email: str) -> User | None:
        self.calls.append("update")
        if user_id not in self.rows:
            return None
        self.rows[user_id] = User(id=user_id, name=name, email=email)
        return self.rows[user_id]

    async def delete(self, user_id: int) -> bool:
        self.calls.append("delete")
        return self.rows.pop(user_id, None) is not None


class FailingUserRepository:
    """Every operation fails the way UserRepository does on a driver error."""

    async def list(self):
        raise StorageError("Error querying users")

    async def get(self, user_id):
        raise StorageError("Internal server error")

    async def create(self, name, email):
        raise StorageError("Database insert error")

    async def update(self, user_id, name, email):
        raise StorageError("Error updating user")

    async def delete(self, user_id):
        raise StorageError("Error deleting user")


@pytest.fixture
def repo() -> InMemoryUserRepository:
    """Empty in-memory repository."""
    return InMemoryUserRepository()


def _app_with(repository) -> FastAPI:
    app = create_app(db=PostgresService("postgresql://unused@localhost/unused"))
    app.dependency_overrides[get_user_repository] = lambda: repository
    return app


@pytest.fixture
def client(repo: InMemoryUserRepository) -> TestClient:
    """Test client backed by the in-memory repository (lifespan not run)."""
    return TestClient(_app_with(repo))


@pytest.fixture
def failing_client() -> TestClient:
    """Test client whose repository always raises StorageError."""
    return TestClient(_app_with(FailingUserRepository()))


class BrokenUserRepository:
    """Raises an error the service does not map to a domain error."""

    async def list(self):
        raise RuntimeError("unexpected state")


@pytest.fixture
def broken_client() -> TestClient:
    """Test client that renders unhandled errors instead of re-raising them."""
    return TestClient(_app_with(BrokenUserRepository()), raise_server_exceptions=False)
