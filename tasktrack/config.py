"""Settings and store path resolution for tasktrack.

Everything comes from environment variables, with an optional local .env
loaded first. Real environment variables always win over .env values.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from tasktrack.errors import ConfigError

DB_FILE_VAR = "DB_FILE"
ENV_PREFIX = "TASKTRACK"

DEFAULT_DOWNLOAD_URL = "https://jsonplaceholder.typicode.com/todos"
DEFAULT_HTTP_TIMEOUT = 10.0

load_dotenv(find_dotenv(usecwd=True), override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw.strip()).expanduser()


def _env_level(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


@dataclass(frozen=True, slots=True)
class Settings:
    db_file: Path | None
    download_url: str
    http_timeout: float
    log_level: int
    log_file: Path | None

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            db_file=_env_path(DB_FILE_VAR),
            download_url=_env(_k("DOWNLOAD_URL"), DEFAULT_DOWNLOAD_URL),
            http_timeout=_env_float(_k("HTTP_TIMEOUT"), DEFAULT_HTTP_TIMEOUT),
            log_level=_env_level(_k("LOG_LEVEL"), logging.WARNING),
            log_file=_env_path(_k("LOG_FILE")),
        )


def get_settings() -> Settings:
    """Read settings fresh from the environment."""
    return Settings.from_env()


def db_path(path: Path | None = None) -> Path:
    """Resolve the JSON store path; an explicit path wins over DB_FILE."""
    if path is not None:
        return Path(path)
    configured = get_settings().db_file
    if configured is None:
        raise ConfigError(f"{DB_FILE_VAR} is not defined in environment variables.")
    return configured
