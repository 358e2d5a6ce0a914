"""File I/O utilities for tasktrack."""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path
from typing import Any

import yaml


def read_text(path: Path) -> str:
    """Read a text file, returning empty string if missing."""
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8")


def read_json(path: Path) -> Any:
    """Read a JSON document, returning None if missing or blank."""
    text = read_text(path)
    if not text.strip():
        return None
    return json.loads(text)


def read_yaml(path: Path) -> Any:
    """Read a YAML document, returning None if missing or empty."""
    text = read_text(path)
    if not text.strip():
        return None
    return yaml.safe_load(text)


def read_csv(path: Path) -> list[dict[str, str]]:
    """Read a CSV file with a header row into a list of dicts."""
    text = read_text(path)
    if not text.strip():
        return []
    return list(csv.DictReader(io.StringIO(text)))


def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def dump_json(data: Any) -> str:
    """Pretty-print JSON the way the store keeps it on disk."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json(path: Path, data: Any) -> None:
    write_text(path, dump_json(data))


def write_yaml(path: Path, data: Any) -> None:
    write_text(path, yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False))


def write_csv(path: Path, fieldnames: list[str], rows: list[dict[str, Any]]) -> None:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=fieldnames, lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    write_text(path, buf.getvalue())
