# src/taskmanager/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import cast

from ..core.state import AppState
from ..tasks.task_models import Task, TaskFilter, TaskUiState

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], Awaitable[str] | str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str] | str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Handlers may be sync or async, with or without the emit parameter.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            result = cast(CommandHandler3, handler)(state, args, emit)
        else:
            result = cast(CommandHandler2, handler)(state, args)

        if inspect.isawaitable(result):
            result = await result
        return cast(str, result)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def format_task(task: Task) -> str:
    mark = "x" if task.completed else " "
    return f"{task.id:>4}. [{mark}] {task.title}"


def format_outcome(outcome: TaskUiState) -> str:
    if outcome.is_error:
        return f"Error: {outcome.message}"
    return outcome.message or str(outcome)


def _reply(state: AppState, outcome: TaskUiState) -> str:
    """Errors as text; on success the refreshed list (the outcome itself is pushed via status)."""
    if outcome.is_error:
        return format_outcome(outcome)
    return cmd_list(state, [])


def _parse_id(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def _lookup(state: AppState, args: list[str]) -> tuple[Task | None, str | None]:
    """Resolve args[0] against the session mirror. Returns (task, error_text)."""
    if not args:
        return None, "Missing task id."
    task_id = _parse_id(args[0])
    if task_id is None:
        return None, f"Not a task id: {args[0]}"
    task = state.sync.find_task(task_id)
    if task is None:
        return None, f"No task with id {task_id}."
    return task, None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    sync = state.sync
    order = "reversed" if sync.sort_reversed.value else "store order"
    header = (
        f"Tasks (filter={sync.active_filter.value.value}, {order}) "
        f"all={sync.all_count.value} completed={sync.completed_count.value} "
        f"incomplete={sync.incomplete_count.value}"
    )
    rows = [format_task(t) for t in sync.sorted_tasks.value]
    if not rows:
        rows = ["  (no tasks)"]
    return "\n".join([header, *rows])


async def cmd_add(state: AppState, args: list[str]) -> str:
    title = " ".join(args).strip()
    if not title:
        return "Usage: /add <title>"
    return _reply(state, await state.sync.add_task(title))


async def cmd_done(state: AppState, args: list[str]) -> str:
    """
    /done <id>  -> toggle completion (done <-> not done)
    """
    task, err = _lookup(state, args)
    if task is None:
        return err or "Usage: /done <id>"
    return _reply(state, await state.sync.toggle_task_completion(task))


async def cmd_edit(state: AppState, args: list[str]) -> str:
    task, err = _lookup(state, args)
    if task is None:
        return err or "Usage: /edit <id> <title>"
    title = " ".join(args[1:]).strip()
    if not title:
        return "Usage: /edit <id> <title>"
    return _reply(state, await state.sync.update_task(replace(task, title=title)))


async def cmd_rm(state: AppState, args: list[str]) -> str:
    task, err = _lookup(state, args)
    if task is None:
        return err or "Usage: /rm <id>"
    return _reply(state, await state.sync.remove_task(task))


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter              -> show the active filter
    /filter all          -> every task
    /filter completed    -> done tasks only
    /filter incomplete   -> open tasks only
    """
    if not args:
        return f"Filter is {state.sync.active_filter.value.value}. Use /filter all|completed|incomplete."
    try:
        task_filter = TaskFilter.parse(args[0])
    except ValueError:
        return "Usage: /filter all|completed|incomplete"
    state.sync.set_filter(task_filter)
    return cmd_list(state, [])


def cmd_sort(state: AppState, args: list[str]) -> str:
    state.sync.toggle_sort_order()
    return cmd_list(state, [])


def cmd_status(state: AppState, args: list[str]) -> str:
    sync = state.sync
    remote = type(state.task_source).__name__
    return (
        "Status:\n"
        f"  Last operation: {sync.status.value}\n"
        f"  Filter: {sync.active_filter.value.value}\n"
        f"  Reversed: {'ON' if sync.sort_reversed.value else 'OFF'}\n"
        f"  Counts: all={sync.all_count.value} completed={sync.completed_count.value} "
        f"incomplete={sync.incomplete_count.value}\n"
        f"  Remote source: {remote}\n"
        f"  Removals persisted: {'ON' if sync.persist_removals else 'OFF'}"
    )


async def cmd_reload(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        emit("Fetching tasks...")
    return _reply(state, await state.sync.initialize())


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks (current filter/order).", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <title>.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>.", aliases=["toggle"])
registry.register("edit", cmd_edit, help_text="Rename a task: /edit <id> <title>.")
registry.register("rm", cmd_rm, help_text="Remove a task: /rm <id>.", aliases=["remove"])
registry.register(
    "filter", cmd_filter, help_text="Filter tasks: /filter all | completed | incomplete."
)
registry.register("sort", cmd_sort, help_text="Toggle reversed order.")
registry.register("status", cmd_status, help_text="Show last operation, filter, order and counts.")
registry.register("reload", cmd_reload, help_text="Fetch the remote list again and reconcile.")
