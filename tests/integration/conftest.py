"""
Pytest configuration for integration tests.

Integration tests need a real PostgreSQL reachable through DATABASE_URL and
are skipped otherwise. They only create and delete their own rows.
"""

import pytest
from fastapi.testclient import TestClient

from usersvc.api.main import create_app
from usersvc.settings import settings


def pytest_collection_modifyitems(items):
    """Add markers to integration tests."""
    for item in items:
        if "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def live_client():
    """Client running the full lifespan (pool + users table) against DATABASE_URL."""
    if not settings.database_url.strip():
        pytest.skip("Database not configured (DATABASE_URL is empty)")

    with TestClient(create_app()) as client:
        yield client
