"""Task repository: validation and CRUD against the JSON store.

Every operation reads the whole store, changes it in memory and writes the
whole array back. Functions take an optional ``path``; ``None`` means the
store configured through DB_FILE.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from tasktrack.config import db_path as _db_path
from tasktrack.errors import (
    CorruptStoreError,
    DuplicateTitleError,
    StorageError,
    TaskNotFoundError,
    ValidationError,
)
from tasktrack.fileio import read_json, write_json
from tasktrack.models import MIN_TITLE_LENGTH, Task

logger = logging.getLogger(__name__)


# ── Validation ────────────────────────────────────────────────


def validate_task(task: dict[str, Any]) -> list[str]:
    """Validate a task record and return list of errors (empty if valid)."""
    errors = []
    title = task.get("title")
    if not isinstance(title, str):
        errors.append(f"Title must be a string and contain at least {MIN_TITLE_LENGTH} characters")
    elif len(title) < MIN_TITLE_LENGTH:
        errors.append(f"Title must be a string and contain at least {MIN_TITLE_LENGTH} characters")

    task_id = task.get("id", 0)
    if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 0:
        errors.append(f"Invalid task id: {task_id!r}")

    if "completed" in task and not isinstance(task["completed"], bool):
        errors.append("completed must be true or false")

    return errors


def _check(task: Task) -> None:
    errors = validate_task(task.to_dict())
    if errors:
        raise ValidationError("; ".join(errors))


def _check_id(task_id: Any) -> None:
    """Reject anything but a positive integer id."""
    if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 1:
        raise ValidationError(f"Invalid task id: {task_id!r}")


# ── Store file ────────────────────────────────────────────────


def db_exists(path: Path | None = None) -> bool:
    return _db_path(path).exists()


def _write_store(path: Path, records: list[dict[str, Any]]) -> None:
    try:
        write_json(path, records)
    except OSError as e:
        raise StorageError(f"Cannot write to {path}") from e
    logger.debug("Wrote %d task(s) to %s", len(records), path)


def create_db(path: Path | None = None) -> bool:
    """Create an empty store. Returns False if one already exists."""
    path = _db_path(path)
    if path.exists():
        logger.warning("DB file already exists: %s", path)
        return False
    _write_store(path, [])
    logger.info("DB file created: %s", path)
    return True


def reset_db(path: Path | None = None) -> None:
    """Overwrite the store with an empty array."""
    path = _db_path(path)
    _write_store(path, [])
    logger.info("DB file reset to empty: %s", path)


def _read_records(path: Path) -> list[dict[str, Any]]:
    if not path.exists():
        create_db(path)
        return []
    try:
        data = read_json(path)
    except json.JSONDecodeError as e:
        raise CorruptStoreError(f"Syntax error in DB file. {e}") from e
    except OSError as e:
        raise StorageError(f"Cannot read {path}") from e
    if data is None:
        return []
    if not isinstance(data, list):
        raise CorruptStoreError("Syntax error in DB file. Expected a JSON array of tasks.")
    return data


# ── CRUD ──────────────────────────────────────────────────────


def load_tasks(path: Path | None = None) -> list[Task]:
    """Load every task from the store, creating an empty store if absent."""
    tasks = []
    for raw in _read_records(_db_path(path)):
        if not isinstance(raw, dict):
            raise CorruptStoreError(f"Syntax error in DB file. Not a task record: {raw!r}")
        errors = validate_task(raw)
        if errors:
            raise CorruptStoreError(f"Syntax error in DB file. Bad task record {raw!r}: {'; '.join(errors)}")
        tasks.append(Task.from_dict(raw))
    return tasks


def save_tasks(tasks: list[Task], path: Path | None = None) -> None:
    """Write the full task list back to the store."""
    _write_store(_db_path(path), [t.to_dict() for t in tasks])


def get_all_tasks(path: Path | None = None) -> list[Task]:
    return load_tasks(path)


def find_task(tasks: list[Task], task_id: int) -> Task | None:
    """Find a task by ID in an already loaded list."""
    for t in tasks:
        if t.id == task_id:
            return t
    return None


def find_task_by_title(tasks: list[Task], title: str) -> Task | None:
    for t in tasks:
        if t.title == title:
            return t
    return None


def get_task_by_id(task_id: int, path: Path | None = None) -> Task | None:
    _check_id(task_id)
    return find_task(load_tasks(path), task_id)


def get_task_by_title(title: str, path: Path | None = None) -> Task | None:
    return find_task_by_title(load_tasks(path), title)


def next_id(tasks: list[Task]) -> int:
    """Next free id: one past the largest, or 1 for an empty store."""
    return max((t.id for t in tasks), default=0) + 1


def add_to(tasks: list[Task], task: Task) -> Task:
    """Validate ``task`` against ``tasks`` and insert or update it in place.

    Used by save_task and by bulk imports.
    """
    _check(task)
    clash = find_task_by_title(tasks, task.title)
    if clash is not None and clash.id != task.id:
        raise DuplicateTitleError(task.title)

    if task.is_new:
        task.id = next_id(tasks)
        tasks.append(Task(id=task.id, title=task.title, completed=task.completed))
        return task

    existing = find_task(tasks, task.id)
    if existing is None:
        raise TaskNotFoundError(task.id)
    existing.title = task.title
    existing.completed = bool(task.completed)
    return task


def save_task(task: Task, path: Path | None = None) -> Task:
    """Persist ``task``: insert when its id is 0, otherwise update by id.

    Raises ValidationError (title, id), DuplicateTitleError or
    TaskNotFoundError before anything is written.
    """
    path = _db_path(path)
    tasks = load_tasks(path)
    add_to(tasks, task)
    save_tasks(tasks, path)
    logger.debug("Saved task %d (%r)", task.id, task.title)
    return task


def create_task(title: str, completed: bool = False, path: Path | None = None) -> Task:
    return save_task(Task(title=title, completed=completed), path)


def update_task(
    task_id: int,
    title: str | None = None,
    completed: bool | None = None,
    path: Path | None = None,
) -> Task:
    """Update a task's title and/or completion flag by ID."""
    _check_id(task_id)
    path = _db_path(path)
    task = get_task_by_id(task_id, path)
    if task is None:
        raise TaskNotFoundError(task_id)
    if title is not None:
        task.title = title
    if completed is not None:
        task.completed = completed
    return save_task(task, path)


def delete_task(task_id: int, path: Path | None = None) -> bool:
    """Remove a task. Returns False, leaving the file untouched, if absent."""
    _check_id(task_id)
    path = _db_path(path)
    tasks = load_tasks(path)
    remaining = [t for t in tasks if t.id != task_id]
    if len(remaining) == len(tasks):
        return False
    save_tasks(remaining, path)
    logger.debug("Deleted task %d", task_id)
    return True


def delete_all_tasks(path: Path | None = None) -> int:
    """Empty the store. Returns how many tasks were removed."""
    path = _db_path(path)
    count = len(load_tasks(path))
    reset_db(path)
    return count
