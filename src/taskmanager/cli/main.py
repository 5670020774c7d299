# src/taskmanager/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, reconciles the task list once,
then runs the console REPL (optional) until exit or a signal.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        await state.task_source.aclose()
    except Exception:
        logger.debug("Task source close failed.", exc_info=True)

    # TaskStore uses short-lived sqlite connections per call; close() is a no-op hook.
    with contextlib.suppress(Exception):
        close = getattr(state.task_store, "close", None)
        if close is not None:
            close()


async def run(state: AppState) -> None:
    outcome = await state.sync.initialize()
    if outcome.is_error:
        logger.warning("Initial sync failed: %s (%s)", outcome.message, outcome.detail)
        print(f"[SYNC] {outcome.message}. Remote fetch failed; use /reload to retry.", flush=True)
    else:
        print(f"[SYNC] {outcome.message}: {state.sync.all_count.value} tasks.", flush=True)

    try:
        if state.settings.console_enabled:
            await run_console_loop(state)
        else:
            logger.info("Console disabled. Press Ctrl+C to stop.")
            stop = asyncio.Event()
            loop = asyncio.get_running_loop()
            for sig in (signal.SIGINT, signal.SIGTERM):
                # Some platforms (Windows) lack add_signal_handler.
                with contextlib.suppress(NotImplementedError):
                    loop.add_signal_handler(sig, stop.set)
            await stop.wait()
    finally:
        await _shutdown(state)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    try:
        asyncio.run(run(state))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
