"""Shared test fixtures for tasktrack tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest


SAMPLE_TASKS = [
    {"id": 1, "title": "Write report", "completed": False},
    {"id": 2, "title": "Buy groceries", "completed": True},
    {"id": 5, "title": "Call the bank", "completed": False},
]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch):
    """Keep the developer's own settings out of the tests."""
    for var in ("DB_FILE", "TASKTRACK_DOWNLOAD_URL", "TASKTRACK_HTTP_TIMEOUT",
                "TASKTRACK_LOG_LEVEL", "TASKTRACK_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    # The CLI installs its own handlers; put pytest's back.
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)


@pytest.fixture
def db_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Path of a store that does not exist yet, exported as DB_FILE."""
    path = tmp_path / "data" / "tasks.json"
    monkeypatch.setenv("DB_FILE", str(path))
    return path


@pytest.fixture
def store(db_file: Path) -> Path:
    """A store pre-filled with SAMPLE_TASKS."""
    db_file.parent.mkdir(parents=True, exist_ok=True)
    db_file.write_text(json.dumps(SAMPLE_TASKS, indent=2), encoding="utf-8")
    return db_file
