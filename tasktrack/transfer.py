"""Export, import and download of whole task collections.

Formats are picked from the file suffix unless given explicitly:
json (array of records), yaml/yml (list of records) and csv
(header id,title,completed).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
import yaml

from tasktrack.config import db_path as _db_path, get_settings
from tasktrack.errors import DownloadError, StorageError, TaskTrackError, ValidationError
from tasktrack.fileio import read_csv, read_json, read_yaml, write_csv, write_json, write_yaml
from tasktrack.models import FIELDS, Task
from tasktrack.tasks import add_to, load_tasks, save_tasks

logger = logging.getLogger(__name__)

FORMATS = ("json", "yaml", "csv")

_SUFFIXES = {".json": "json", ".yaml": "yaml", ".yml": "yaml", ".csv": "csv"}
_TRUE = {"true", "1", "yes", "y", "x"}
_FALSE = {"false", "0", "no", "n", ""}


@dataclass
class ImportReport:
    """Outcome of an import: the tasks added and the records skipped."""

    added: list[Task] = field(default_factory=list)
    skipped: list[tuple[str, str]] = field(default_factory=list)  # (title, reason)

    @property
    def total(self) -> int:
        return len(self.added) + len(self.skipped)


def detect_format(path: Path, fmt: str | None = None) -> str:
    """Resolve the transfer format from an explicit name or the suffix."""
    if fmt:
        fmt = fmt.lower()
        if fmt == "yml":
            fmt = "yaml"
        if fmt not in FORMATS:
            raise ValidationError(f"Unknown format: {fmt} (expected one of {', '.join(FORMATS)})")
        return fmt
    detected = _SUFFIXES.get(path.suffix.lower())
    if detected is None:
        raise ValidationError(
            f"Cannot tell the format of {path.name}; use a .json, .yaml or .csv file or pass a format"
        )
    return detected


def parse_completed(value: Any) -> bool:
    """Coerce a completed flag read from CSV/YAML into a bool."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValidationError(f"Invalid completed value: {value!r}")


# ── Export ────────────────────────────────────────────────────


def export_tasks(dest: Path, fmt: str | None = None, path: Path | None = None) -> int:
    """Write every task in the store to ``dest``. Returns the count."""
    dest = Path(dest)
    fmt = detect_format(dest, fmt)
    tasks = load_tasks(path)
    records = [t.to_dict() for t in tasks]
    try:
        if fmt == "json":
            write_json(dest, records)
        elif fmt == "yaml":
            write_yaml(dest, records)
        else:
            rows = [dict(r, completed="true" if r["completed"] else "false") for r in records]
            write_csv(dest, FIELDS, rows)
    except OSError as e:
        raise StorageError(f"Cannot write to {dest}") from e
    logger.info("Exported %d task(s) to %s as %s", len(records), dest, fmt)
    return len(records)


# ── Import ────────────────────────────────────────────────────


def read_records(src: Path, fmt: str | None = None) -> list[dict[str, Any]]:
    """Read raw task records from a transfer file."""
    src = Path(src)
    fmt = detect_format(src, fmt)
    if not src.exists():
        raise StorageError(f"File not found: {src}")
    try:
        if fmt == "json":
            data = read_json(src)
        elif fmt == "yaml":
            data = read_yaml(src)
        else:
            data = read_csv(src)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValidationError(f"Cannot parse {src.name}: {e}") from e
    except OSError as e:
        raise StorageError(f"Cannot read {src}") from e
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValidationError(f"{src.name} must contain a list of tasks")
    return data


def merge_records(records: list[Any], path: Path | None = None) -> ImportReport:
    """Add each record to the store as a new task, skipping the invalid ones.

    Source ids are ignored. The store is written once, at the end, and only
    if something was added.
    """
    path = _db_path(path)
    tasks = load_tasks(path)
    report = ImportReport()
    for raw in records:
        if not isinstance(raw, dict):
            report.skipped.append((str(raw), "not a task record"))
            continue
        title = raw.get("title")
        label = str(title) if title is not None else "<untitled>"
        try:
            task = Task(title=title, completed=parse_completed(raw.get("completed")))  # type: ignore[arg-type]
            add_to(tasks, task)
        except TaskTrackError as e:
            logger.warning("Skipped %r: %s", label, e)
            report.skipped.append((label, str(e)))
            continue
        report.added.append(task)
    if report.added:
        save_tasks(tasks, path)
    logger.info("Imported %d task(s), skipped %d", len(report.added), len(report.skipped))
    return report


def import_tasks(src: Path, fmt: str | None = None, path: Path | None = None) -> ImportReport:
    """Import tasks from a JSON, YAML or CSV file."""
    return merge_records(read_records(src, fmt), path)


# ── Download ──────────────────────────────────────────────────


def fetch_records(
    url: str,
    timeout: float,
    client: httpx.Client | None = None,
) -> list[Any]:
    """GET a JSON array of task records."""
    own_client = client is None
    if client is None:
        client = httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        logger.debug("GET %s", url)
        resp = client.get(url)
        resp.raise_for_status()
        data = resp.json()
    except httpx.HTTPStatusError as e:
        raise DownloadError(f"Download failed: HTTP {e.response.status_code} from {url}") from e
    except httpx.HTTPError as e:
        raise DownloadError(f"Download failed: {e}") from e
    except ValueError as e:
        raise DownloadError(f"Download failed: {url} did not return JSON") from e
    finally:
        if own_client:
            client.close()
    if not isinstance(data, list):
        raise DownloadError(f"Download failed: expected a JSON array from {url}")
    return data


def download_tasks(
    url: str | None = None,
    limit: int | None = None,
    timeout: float | None = None,
    path: Path | None = None,
    client: httpx.Client | None = None,
) -> ImportReport:
    """Download tasks over HTTP and import them like a local file."""
    if limit is not None and limit < 1:
        raise ValidationError(f"Invalid limit: {limit} (must be at least 1)")
    settings = get_settings()
    url = url or settings.download_url
    timeout = settings.http_timeout if timeout is None else timeout
    records = fetch_records(url, timeout, client)
    if limit is not None:
        records = records[:limit]
    return merge_records(records, path)
