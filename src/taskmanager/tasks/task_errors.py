# src/taskmanager/tasks/task_errors.py

from __future__ import annotations


class TaskError(Exception):
    """Base class for faults raised by task collaborators (store / remote source)."""


class TaskNetworkError(TaskError):
    """Remote fetch failed: transport error, bad HTTP status or malformed payload."""


class TaskConstraintError(TaskError):
    """Strict insert hit an id that already exists in the store."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"task id {task_id} already exists")
        self.task_id = task_id


class TaskNotFoundError(TaskError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"task id {task_id} not found")
        self.task_id = task_id
