# src/taskmanager/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_sync import TaskSynchronizer
from .ports import TaskRepo, TaskSource


@dataclass
class AppState:
    """
    Runtime state shared by connectors.

    Holds concrete dependencies wired by cli/bootstrap.py.
    """

    settings: Any
    task_store: TaskRepo
    task_source: TaskSource
    sync: TaskSynchronizer
