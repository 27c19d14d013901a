# src/todo_app/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Every path defaults to the per-user application-data directory.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

ENV_PREFIX = "TODOS"
APP_DIR_NAME = "todos"
TODOS_FILE_NAME = "todos.json"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def default_data_dir() -> Path:
    """Per-user application-data directory for this platform."""
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME
    if os.name == "nt":
        base = os.getenv("APPDATA")
        if base:
            return Path(base) / APP_DIR_NAME
        return Path.home() / "AppData" / "Roaming" / APP_DIR_NAME
    xdg = os.getenv("XDG_DATA_HOME")
    base_dir = Path(xdg).expanduser() if xdg else Path.home() / ".local" / "share"
    return base_dir / APP_DIR_NAME


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths ----
    data_dir: Path
    todos_path: Path
    log_dir: Path

    # ---- Reminders ----
    notifications_enabled: bool
    reminder_title: str
    reminder_poll_seconds: float

    # ---- Connector flags ----
    console_enabled: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todos") or "todos"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), default_data_dir())
        todos_path = _env_path(_k("TODOS_PATH"), data_dir / TODOS_FILE_NAME)
        log_dir = _env_path(_k("LOG_DIR"), data_dir / "logs")

        notifications_enabled = _env_bool(_k("NOTIFICATIONS_ENABLED"), True)
        reminder_title = _env(_k("REMINDER_TITLE"), "To-do reminder") or "To-do reminder"
        reminder_poll_seconds = max(0.5, _env_float(_k("REMINDER_POLL_SECONDS"), 5.0))

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            todos_path=todos_path,
            log_dir=log_dir,
            notifications_enabled=notifications_enabled,
            reminder_title=reminder_title,
            reminder_poll_seconds=reminder_poll_seconds,
            console_enabled=console_enabled,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
