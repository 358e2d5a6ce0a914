"""Error taxonomy for tasktrack.

Library code raises these; only the CLI catches and prints them.
"""

from __future__ import annotations


class TaskTrackError(Exception):
    """Base class for every error tasktrack raises on purpose."""


class ConfigError(TaskTrackError):
    """A required setting is missing or unusable."""


class ValidationError(TaskTrackError):
    """Input rejected before anything was written."""


class DuplicateTitleError(ValidationError):
    def __init__(self, title: str) -> None:
        super().__init__(f"A task titled {title!r} already exists")
        self.title = title


class TaskNotFoundError(ValidationError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class StorageError(TaskTrackError):
    """A file could not be read or written."""


class CorruptStoreError(StorageError):
    """The store exists but does not hold a JSON array."""


class DownloadError(StorageError):
    """Fetching tasks over HTTP failed."""
