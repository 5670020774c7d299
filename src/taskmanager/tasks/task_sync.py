# src/taskmanager/tasks/task_sync.py

from __future__ import annotations

"""
Task synchronizer.

Owns the session state of the task list:
- reconciles the remote list with the local store once per session (initialize),
- applies user mutations write-through (store first, then the in-memory mirror),
- derives the filtered/sorted view and the counters,
- reports every operation outcome through the `status` observable.

Key invariants:
- the store assigns ids; unstored tasks carry id 0,
- memory is mutated only after the store call succeeded,
- status is LOADING only while an operation is running; every path ends in LOADED or ERROR,
- collaborator faults never escape: they are logged and turned into an ERROR status.

Mutating operations are serialized by an asyncio.Lock. Store calls are blocking
(SQLite) and run via asyncio.to_thread; filter/sort changes are synchronous.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import Any, TypeVar

from ..core.observable import Observable
from ..core.ports import TaskRepo, TaskSource
from .task_errors import TaskNetworkError, TaskNotFoundError
from .task_models import UNASSIGNED_ID, Task, TaskFilter, TaskUiState

logger = logging.getLogger(__name__)

R = TypeVar("R")

MSG_TASKS_LOADED = "Tasks Loaded"
MSG_NETWORK_ERROR = "Network Error"
MSG_TASK_ADDED = "Task added"
MSG_TASK_ADD_ERROR = "Task added error"
MSG_TASK_REMOVED = "Task removed"
MSG_TASK_REMOVE_ERROR = "Task removal error"
MSG_TASK_UPDATED = "Task updated"
MSG_TASK_UPDATE_ERROR = "Task update error"
MSG_TASK_NOT_FOUND = "Task not found"
MSG_NO_CHANGES = "No changes detected"


def filter_tasks(tasks: Sequence[Task], task_filter: TaskFilter) -> list[Task]:
    """Keep tasks matching the filter, preserving order."""
    if task_filter is TaskFilter.COMPLETED:
        return [t for t in tasks if t.completed]
    if task_filter is TaskFilter.INCOMPLETE:
        return [t for t in tasks if not t.completed]
    return list(tasks)


def derive_view(tasks: Sequence[Task], task_filter: TaskFilter, reversed_order: bool) -> list[Task]:
    """Filtered view, reversed when requested. Pure: depends only on its arguments."""
    filtered = filter_tasks(tasks, task_filter)
    if reversed_order:
        filtered.reverse()
    return filtered


class TaskSynchronizer:
    def __init__(
        self,
        store: TaskRepo,
        source: TaskSource,
        *,
        persist_removals: bool = True,
    ) -> None:
        self._store = store
        self._source = source
        self._persist_removals = bool(persist_removals)
        self._lock = asyncio.Lock()
        self._tasks: list[Task] = []

        # Outbound state (push on change, latest value on subscribe).
        self.status: Observable[TaskUiState] = Observable(TaskUiState.empty(), name="status")
        self.active_filter: Observable[TaskFilter] = Observable(TaskFilter.ALL, name="active_filter")
        self.sort_reversed: Observable[bool] = Observable(False, name="sort_reversed")
        self.all_tasks: Observable[list[Task]] = Observable([], name="all_tasks")
        self.sorted_tasks: Observable[list[Task]] = Observable([], name="sorted_tasks")
        self.all_count: Observable[int] = Observable(0, name="all_count")
        self.completed_count: Observable[int] = Observable(0, name="completed_count")
        self.incomplete_count: Observable[int] = Observable(0, name="incomplete_count")

    # ---- read helpers ----

    @property
    def tasks(self) -> list[Task]:
        """Copy of the in-memory mirror (store order)."""
        return list(self._tasks)

    @property
    def persist_removals(self) -> bool:
        return self._persist_removals

    def find_task(self, task_id: int) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    # ---- internals ----

    @staticmethod
    async def _io(fn: Callable[..., R], *args: Any) -> R:
        return await asyncio.to_thread(fn, *args)

    def _begin(self) -> None:
        self.status.set(TaskUiState.loading())

    def _finish(self, state: TaskUiState) -> TaskUiState:
        self.status.set(state)
        return state

    def _publish(self) -> None:
        tasks = list(self._tasks)
        completed = sum(1 for t in tasks if t.completed)

        self.all_tasks.set(tasks)
        self.sorted_tasks.set(derive_view(tasks, self.active_filter.value, self.sort_reversed.value))
        self.all_count.set(len(tasks))
        self.completed_count.set(completed)
        self.incomplete_count.set(len(tasks) - completed)

    def _replace_in_memory(self, task: Task) -> None:
        self._tasks = [task if t.id == task.id else t for t in self._tasks]
        self._publish()

    async def _write_update(self, task: Task) -> TaskUiState:
        try:
            await self._io(self._store.update_task, task)
        except TaskNotFoundError as e:
            logger.warning("Task update failed: id=%s not found", task.id)
            return self._finish(TaskUiState.error(MSG_TASK_NOT_FOUND, str(e)))
        except Exception as e:
            logger.exception("Task update failed id=%s", task.id)
            return self._finish(TaskUiState.error(MSG_TASK_UPDATE_ERROR, str(e)))

        self._replace_in_memory(task)
        logger.info(
            "Task %s id=%s completed=%s",
            "completed" if task.completed else "edited",
            task.id,
            task.completed,
        )
        return self._finish(TaskUiState.loaded(MSG_TASK_UPDATED))

    # ---- operations ----

    async def initialize(self) -> TaskUiState:
        """
        Reconcile the remote list with the local store.

        Remote tasks are inserted with ignore-on-conflict, then the mirror is
        reloaded from the store (store order wins over remote order).
        On failure the mirror keeps whatever it held before.
        """
        async with self._lock:
            self._begin()
            try:
                remote = await self._source.fetch_all()
                inserted = await self._io(self._store.insert_tasks, remote)
                stored = await self._io(self._store.get_all_tasks)
            except TaskNetworkError as e:
                logger.warning("Task fetch failed: %s", e)
                return self._finish(TaskUiState.error(MSG_NETWORK_ERROR, str(e)))
            except Exception as e:
                logger.exception("Task reconciliation failed")
                return self._finish(TaskUiState.error(MSG_NETWORK_ERROR, str(e) or type(e).__name__))

            self._tasks = list(stored)
            self._publish()
            logger.info(
                "Tasks fetched remote=%d inserted=%d total=%d",
                len(remote),
                inserted,
                len(self._tasks),
            )
            return self._finish(TaskUiState.loaded(MSG_TASKS_LOADED))

    async def add_task(self, title: str) -> TaskUiState:
        async with self._lock:
            self._begin()
            new_task = Task(id=UNASSIGNED_ID, title=title, completed=False)
            try:
                task_id = await self._io(self._store.insert_task, new_task)
            except Exception as e:
                logger.exception("Task insert failed title=%r", title)
                return self._finish(TaskUiState.error(MSG_TASK_ADD_ERROR, str(e)))

            inserted = replace(new_task, id=int(task_id))
            self._tasks.append(inserted)
            self._publish()
            logger.info("Task added id=%s title=%r", inserted.id, inserted.title)
            return self._finish(TaskUiState.loaded(MSG_TASK_ADDED))

    async def remove_task(self, task: Task) -> TaskUiState:
        """
        Remove a task by id.

        With persist_removals the store row is deleted first (a missing row is
        fine); otherwise only the session mirror drops it and the next
        initialize() brings it back from the store.
        """
        async with self._lock:
            self._begin()
            if self._persist_removals:
                try:
                    removed = await self._io(self._store.delete_task, task.id)
                except Exception as e:
                    logger.exception("Task delete failed id=%s", task.id)
                    return self._finish(TaskUiState.error(MSG_TASK_REMOVE_ERROR, str(e)))
                if not removed:
                    logger.debug("Task id=%s was not in the store", task.id)

            self._tasks = [t for t in self._tasks if t.id != task.id]
            self._publish()
            logger.info("Task removed id=%s persisted=%s", task.id, self._persist_removals)
            return self._finish(TaskUiState.loaded(MSG_TASK_REMOVED))

    async def update_task(self, task: Task) -> TaskUiState:
        """Write title/completed edits; no-op (and no write) when nothing changed."""
        async with self._lock:
            self._begin()
            try:
                existing = await self._io(self._store.get_task_by_id, task.id)
            except Exception as e:
                logger.exception("Task lookup failed id=%s", task.id)
                return self._finish(TaskUiState.error(MSG_TASK_UPDATE_ERROR, str(e)))

            if existing is None:
                logger.warning("Task update skipped: id=%s not found", task.id)
                return self._finish(TaskUiState.error(MSG_TASK_NOT_FOUND))

            if existing.title == task.title and existing.completed == task.completed:
                logger.debug("Task update skipped: id=%s unchanged", task.id)
                return self._finish(TaskUiState.loaded(MSG_NO_CHANGES))

            return await self._write_update(task)

    async def toggle_task_completion(self, task: Task) -> TaskUiState:
        async with self._lock:
            self._begin()
            return await self._write_update(replace(task, completed=not task.completed))

    def set_filter(self, task_filter: TaskFilter | str) -> None:
        self.active_filter.set(TaskFilter.parse(task_filter))
        self._publish()

    def toggle_sort_order(self) -> None:
        self.sort_reversed.set(not self.sort_reversed.value)
        self._publish()
