# src/taskmanager/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (store/remote source/synchronizer).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import TaskSource
from ..core.state import AppState
from ..tasks.task_source import HttpTaskSource, OfflineTaskSource
from ..tasks.task_store import TaskStore
from ..tasks.task_sync import TaskSynchronizer

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def build_task_source(settings) -> TaskSource:
    if not getattr(settings, "remote_enabled", False):
        return OfflineTaskSource()
    return HttpTaskSource(
        settings.remote_base_url,
        tasks_path=getattr(settings, "remote_tasks_path", "todos"),
        timeout_seconds=float(getattr(settings, "remote_timeout_seconds", 15.0)),
    )


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(settings.tasks_db_path)
    source = build_task_source(settings)
    logger.info("Remote source: %s", type(source).__name__)

    return AppState(
        settings=settings,
        task_store=store,
        task_source=source,
        sync=TaskSynchronizer(
            store,
            source,
            persist_removals=bool(getattr(settings, "persist_removals", True)),
        ),
    )
