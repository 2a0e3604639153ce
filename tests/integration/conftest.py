"""Pytest fixtures for integration tests.

The CLI configures process-wide logging and application context; these
fixtures isolate each test from the working directory, the user's config
file, and whatever the previous invocation left behind.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import structlog
from typer.testing import CliRunner

import taskboard.main


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run each test from an empty directory with an empty home."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in ("TASKBOARD_LOGGING__LEVEL", "TASKBOARD_RULES__PEOPLE_MAX"):
        monkeypatch.delenv(name, raising=False)

    yield tmp_path

    logging.getLogger().handlers.clear()
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    taskboard.main._app_context = None


@pytest.fixture
def sequential_ids(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make stores created by the CLI issue proj-1, proj-2, ..."""
    counter = iter(range(1, 1000))
    monkeypatch.setattr(
        "taskboard.board.store._uuid_id", lambda: f"proj-{next(counter)}"
    )
