# src/taskmanager/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No network or secrets required at import time.
- Local overrides via config_local.py for a few safe switches.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKMGR"

DEFAULT_REMOTE_BASE_URL = "https://jsonplaceholder.typicode.com/"

logger = logging.getLogger(__name__)

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


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


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Remote task source ----
    remote_enabled: bool
    remote_base_url: str
    remote_tasks_path: str
    remote_timeout_seconds: float

    # ---- Behaviour ----
    persist_removals: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskmanager").strip() or "taskmanager"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        remote_base_url = _env(_k("REMOTE_BASE_URL"), DEFAULT_REMOTE_BASE_URL).strip()
        # An empty base URL means "no remote": same as disabling it.
        remote_enabled = _env_bool(_k("REMOTE_ENABLED"), True) and bool(remote_base_url)
        remote_tasks_path = _env(_k("REMOTE_TASKS_PATH"), "todos").strip() or "todos"
        remote_timeout_seconds = max(1.0, _env_float(_k("REMOTE_TIMEOUT_SECONDS"), 15.0))

        persist_removals = _env_bool(_k("PERSIST_REMOVALS"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskmanager"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            remote_enabled=remote_enabled,
            remote_base_url=remote_base_url,
            remote_tasks_path=remote_tasks_path,
            remote_timeout_seconds=remote_timeout_seconds,
            persist_removals=persist_removals,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
        )


def _apply_local_overrides(settings: Settings) -> None:
    """Optional config_local.py overrides (never committed). Keep it explicit."""
    try:
        import config_local as _config_local  # type: ignore
    except ModuleNotFoundError:
        return

    if hasattr(_config_local, "CONSOLE_ENABLED"):
        object.__setattr__(settings, "console_enabled", bool(_config_local.CONSOLE_ENABLED))
    if hasattr(_config_local, "REMOTE_ENABLED"):
        object.__setattr__(settings, "remote_enabled", bool(_config_local.REMOTE_ENABLED))
    if hasattr(_config_local, "PERSIST_REMOVALS"):
        object.__setattr__(settings, "persist_removals", bool(_config_local.PERSIST_REMOVALS))
    logger.debug("Applied config_local overrides")


SETTINGS = Settings.from_env()
_apply_local_overrides(SETTINGS)


def get_settings() -> Settings:
    return SETTINGS
