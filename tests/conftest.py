# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskmanager.core.state import AppState
from taskmanager.tasks.task_models import Task
from taskmanager.tasks.task_store import TaskStore
from taskmanager.tasks.task_sync import TaskSynchronizer

from .fakes import FakeTaskRepo, FakeTaskSource


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskmanager-test",
        log_level="DEBUG",
        console_enabled=False,
        remote_enabled=False,
        remote_base_url="",
        remote_tasks_path="todos",
        remote_timeout_seconds=1.0,
        persist_removals=True,
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
    )


@pytest.fixture()
def remote_tasks() -> list[Task]:
    return [Task(1, "A", False), Task(2, "B", True)]


@pytest.fixture()
def source(remote_tasks: list[Task]) -> FakeTaskSource:
    return FakeTaskSource(remote_tasks)


@pytest.fixture()
def repo() -> FakeTaskRepo:
    return FakeTaskRepo()


@pytest.fixture()
def sync(repo: FakeTaskRepo, source: FakeTaskSource) -> TaskSynchronizer:
    return TaskSynchronizer(repo, source)


@pytest.fixture()
def state(settings: SimpleNamespace, source: FakeTaskSource) -> AppState:
    """
    AppState wired with a deterministic remote source.

    NOTE: We keep the real SQLite TaskStore here because
    its correctness is part of what we want to test.
    """
    store = TaskStore(settings.tasks_db_path)
    return AppState(
        settings=settings,
        task_store=store,
        task_source=source,
        sync=TaskSynchronizer(store, source, persist_removals=settings.persist_removals),
    )
