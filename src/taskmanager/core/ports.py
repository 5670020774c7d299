# src/taskmanager/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The synchronizer depends on Protocols instead of concrete implementations.
This keeps storage/remote providers swappable and makes testing easier.
"""

from typing import Awaitable, Iterable, Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """
    Durable keyed task storage (SQLite in production).

    Calls are blocking; the synchronizer runs them in a worker thread.
    """

    def count_tasks(self) -> int: ...
    def get_all_tasks(self) -> list[Task]: ...
    def get_task_by_id(self, task_id: int) -> Task | None: ...

    # Strict: raises TaskConstraintError on an id collision.
    def insert_task(self, task: Task) -> int: ...

    # Lenient: colliding ids are skipped, returns rows inserted.
    def insert_tasks(self, tasks: Iterable[Task]) -> int: ...

    # Raises TaskNotFoundError if the id is absent.
    def update_task(self, task: Task) -> None: ...

    def delete_task(self, task_id: int) -> bool: ...


class TaskSource(Protocol):
    """
    Read-only remote task list.

    fetch_all() returns the full authoritative list or raises TaskNetworkError.
    """

    def fetch_all(self) -> Awaitable[list[Task]]: ...
    def aclose(self) -> Awaitable[None]: ...
