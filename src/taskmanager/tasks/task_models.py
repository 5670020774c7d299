# src/taskmanager/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

UNASSIGNED_ID = 0


@dataclass(slots=True, frozen=True)
class Task:
    """
    A single task record.

    id is assigned by the store on insert; UNASSIGNED_ID (0) means "not stored yet".
    Edits produce a new instance via dataclasses.replace().
    """

    id: int
    title: str
    completed: bool = False

    @classmethod
    def from_payload(cls, raw: dict[str, Any]) -> Task:
        """
        Build a Task from a remote JSON object. Unknown keys (userId, ...) are ignored.

        Raises KeyError/TypeError when id or title is missing or has the wrong JSON type.
        """
        task_id = raw["id"]
        title = raw["title"]
        completed = raw.get("completed", False)
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise TypeError(f"id must be an integer, got {task_id!r}")
        if not isinstance(title, str):
            raise TypeError(f"title must be a string, got {title!r}")
        if not isinstance(completed, bool):
            raise TypeError(f"completed must be a boolean, got {completed!r}")
        return cls(id=task_id, title=title, completed=completed)


class TaskFilter(StrEnum):
    ALL = "all"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"

    @classmethod
    def parse(cls, raw: str | TaskFilter) -> TaskFilter:
        if isinstance(raw, TaskFilter):
            return raw
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            raise ValueError(f"unknown task filter: {raw!r}") from None


class StatusKind(StrEnum):
    EMPTY = "empty"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass(slots=True, frozen=True)
class TaskUiState:
    """
    Outcome of the last synchronizer operation.

    detail carries the underlying fault text for logs/diagnostics and
    does not take part in equality.
    """

    kind: StatusKind
    message: str | None = None
    detail: str | None = field(default=None, compare=False)

    @classmethod
    def empty(cls) -> TaskUiState:
        return cls(StatusKind.EMPTY)

    @classmethod
    def loading(cls) -> TaskUiState:
        return cls(StatusKind.LOADING)

    @classmethod
    def loaded(cls, message: str | None = None) -> TaskUiState:
        return cls(StatusKind.LOADED, message)

    @classmethod
    def error(cls, message: str, detail: str | None = None) -> TaskUiState:
        return cls(StatusKind.ERROR, message, detail)

    @property
    def is_loading(self) -> bool:
        return self.kind is StatusKind.LOADING

    @property
    def is_error(self) -> bool:
        return self.kind is StatusKind.ERROR

    def __str__(self) -> str:
        if self.message:
            return f"{self.kind.value}: {self.message}"
        return self.kind.value
