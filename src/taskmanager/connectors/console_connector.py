# src/taskmanager/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_models import StatusKind, TaskUiState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def _on_status(status: TaskUiState) -> None:
    # Errors reach the user through the command reply; print successful outcomes only.
    if status.kind is StatusKind.LOADED and status.message:
        _print_ts(f"[STATUS] {status.message}")


async def run_console_loop(state: AppState) -> None:
    """
    Interactive REPL.

    - "/command args" lines go to the command registry,
    - any other non-empty line is added as a new task,
    - status changes are pushed by the synchronizer and printed as they happen.
    """
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type a task title to add it. Use /help for commands. Use /exit to quit.\n")

    unsubscribe = state.sync.status.subscribe(_on_status)

    try:
        while True:
            try:
                user_input = (await asyncio.to_thread(input, ">>> ")).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            if not user_input.startswith("/"):
                user_input = f"/add {user_input}"

            try:
                reply = await command_registry.handle(state, user_input, emit=_print_ts)
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."

            if reply:
                print(reply, flush=True)
    finally:
        unsubscribe()

    logger.info("Console connector finished.")
