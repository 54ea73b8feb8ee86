"""
Tests for the usersvc command line.
"""

import sys
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner
from loguru import logger

from usersvc.cli.main import cli
from usersvc.settings import settings


@pytest.fixture(autouse=True)
def restore_logger():
    """The CLI group reconfigures loguru sinks; put stderr back afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def runner():
    return CliRunner()


def test_db_init_requires_database_url(runner, monkeypatch):
    monkeypatch.setattr(settings, "database_url", "")

    result = runner.invoke(cli, ["db", "init"])

    assert result.exit_code == 1


def test_db_init_reports_connection_failure(runner, monkeypatch):
    async def refuse(self):
        raise ConnectionRefusedError("connection refused")

    monkeypatch.setattr("usersvc.services.postgres.PostgresService.connect", refuse)

    result = runner.invoke(cli, ["db", "init", "--database-url", "postgresql://u@nowhere/db"])

    assert result.exit_code == 1


@pytest.fixture
def uvicorn_calls(monkeypatch):
    """Capture uvicorn.run kwargs instead of starting a server."""
    calls = []
    monkeypatch.setattr("uvicorn.run", lambda app, **kwargs: calls.append({"app": app, **kwargs}))
    monkeypatch.setattr(settings, "database_url", "postgresql://u:p@localhost:5432/db")
    monkeypatch.setattr(settings.api, "reload", False)
    return calls


def test_serve_requires_database_url(runner, uvicorn_calls, monkeypatch):
    monkeypatch.setattr(settings, "database_url", "  ")

    result = runner.invoke(cli, ["serve"])

    assert result.exit_code == 1
    assert uvicorn_calls == []


def test_serve_passes_options_to_uvicorn(runner, uvicorn_calls):
    result = runner.invoke(cli, ["serve", "--host", "127.0.0.1", "--port", "8081", "--workers", "2"])

    assert result.exit_code == 0, result.output
    (call,) = uvicorn_calls
    assert call["app"] == "usersvc.api.main:app"
    assert call["host"] == "127.0.0.1"
    assert call["port"] == 8081
    assert call["workers"] == 2
    assert call["reload"] is False


def test_serve_defaults_from_settings(runner, uvicorn_calls):
    result = runner.invoke(cli, ["serve"])

    assert result.exit_code == 0, result.output
    (call,) = uvicorn_calls
    assert call["host"] == settings.api.host
    assert call["port"] == settings.api.port
    assert call["workers"] == settings.api.workers
    assert call["log_level"] == settings.api.log_level.lower()


def test_serve_reload_is_single_process(runner, uvicorn_calls):
    result = runner.invoke(cli, ["serve", "--reload"])

    assert result.exit_code == 0, result.output
    assert uvicorn_calls[0]["reload"] is True
    assert uvicorn_calls[0]["workers"] is None


def test_serve_rejects_reload_with_workers(runner, uvicorn_calls):
    result = runner.invoke(cli, ["serve", "--reload", "--workers", "4"])

    assert result.exit_code == 2
    assert uvicorn_calls == []


def test_serve_log_level_applies_to_service_log(runner, uvicorn_calls, monkeypatch):
    service_logger = MagicMock()
    monkeypatch.setattr("usersvc.cli.commands.serve.logger", service_logger)

    result = runner.invoke(cli, ["serve", "--log-level", "warning"])

    assert result.exit_code == 0, result.output
    assert service_logger.add.call_args.kwargs["level"] == "WARNING"
    assert uvicorn_calls[0]["log_level"] == "warning"
