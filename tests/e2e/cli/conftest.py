"""Fixtures and test helpers for end-to-end CLI tests.

Provides a CliRunner, an isolated filesystem per test, and a factory that
writes declaration/records JSON files into it.
"""

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from recordgate.config import DB_URL_ENV_VAR
from tests.e2e.cli.samples import TASKS_DECLARATION

# pylint: disable=redefined-outer-name


@pytest.fixture(autouse=True)
def _restore_logger_levels():
    """Undo per-logger levels set by -L so they do not leak between tests."""
    loggers = [
        lg for lg in logging.Logger.manager.loggerDict.values() if isinstance(lg, logging.Logger)
    ]
    levels = {lg: lg.level for lg in loggers}
    yield
    for lg, level in levels.items():
        lg.setLevel(level)


@pytest.fixture
def runner(monkeypatch):
    """Return a Click CliRunner with no database URL in the environment."""
    monkeypatch.delenv(DB_URL_ENV_VAR, raising=False)
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Provide an isolated filesystem context for tests using CliRunner.

    Uses runner.isolated_filesystem() to ensure filesystem side-effects are
    confined to the test.
    """
    with runner.isolated_filesystem() as path:
        yield Path(path)


@pytest.fixture
def write_json(fs: Path) -> Callable[[str, Any], str]:
    """Write `data` as JSON to `name` inside the isolated filesystem."""

    def _write(name: str, data: Any) -> str:
        (fs / name).write_text(json.dumps(data), encoding="utf-8")
        return name

    return _write


@pytest.fixture
def task_files(write_json) -> Callable[..., tuple[str, str]]:
    """Write the tasks declaration plus the given rows; return both paths."""

    def _make(*rows: dict[str, Any]) -> tuple[str, str]:
        return write_json("tasks.json", TASKS_DECLARATION), write_json(
            "records.json", list(rows)
        )

    return _make
