"""
Environment-driven settings and logging setup.

Every setting is read lazily so tests can override it with environment
variables before the app starts.
"""

from __future__ import annotations

import logging
import os

DEFAULT_DATABASE_PATH = "blog.db"
DEFAULT_BUSY_TIMEOUT_MS = 5000
DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def database_path() -> str:
    return os.environ.get("DATABASE_PATH", DEFAULT_DATABASE_PATH).strip() or DEFAULT_DATABASE_PATH


def database_busy_timeout_ms() -> int:
    value = _env_int("DATABASE_BUSY_TIMEOUT_MS", DEFAULT_BUSY_TIMEOUT_MS)
    return value if value >= 0 else DEFAULT_BUSY_TIMEOUT_MS


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL


def configure_logging() -> None:
    # basicConfig is a no-op once the root logger has handlers (uvicorn, pytest).
    logging.basicConfig(level=log_level(), format=LOG_FORMAT)
