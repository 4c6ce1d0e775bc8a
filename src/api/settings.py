from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - SQLITE_DB_PATH: path to the sqlite db file holding the 'todos' table. Default './data/todos.db'
    - SQLITE_TIMEOUT: seconds to wait for a locked database before failing. Default 5.0
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: DEBUG, INFO (default), WARNING, ERROR or CRITICAL
    - LOG_FILE: optional path of a rotating log file; stdout only when unset
    """

    sqlite_db_path: str
    sqlite_timeout: float
    cors_allow_origins: List[str]
    log_level: str
    log_file: Optional[str]


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_timeout(value: str, default: float = 5.0) -> float:
    try:
        timeout = float(value.strip())
    except ValueError:
        return default
    return timeout if timeout > 0 else default


def _parse_log_level(value: str, default: str = "INFO") -> str:
    level = value.strip().upper()
    return level if level in _LOG_LEVELS else default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        # Star will be handled in main via allow_origins=["*"]
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    log_file = os.getenv("LOG_FILE", "").strip()
    return Settings(
        sqlite_db_path=_get_env("SQLITE_DB_PATH", "./data/todos.db").strip(),
        sqlite_timeout=_parse_timeout(_get_env("SQLITE_TIMEOUT", "5.0")),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=_parse_log_level(_get_env("LOG_LEVEL", "INFO")),
        log_file=log_file or None,
    )
