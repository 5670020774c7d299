# src/taskmanager/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "taskmanager.log"

# Libraries that log every request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore")


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the REPL readable.

    taskmanager.* records pass at the handler level, captured Python warnings
    pass from WARNING up, everything else (httpx, asyncio, ...) only at ERROR+.
    """

    def __init__(self, *, warnings_level: int = logging.WARNING, other_level: int = logging.ERROR) -> None:
        super().__init__()
        self.warnings_level = warnings_level
        self.other_level = other_level

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("taskmanager."):
            return True
        if record.name == "py.warnings":
            return record.levelno >= self.warnings_level
        return record.levelno >= self.other_level


def _formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskmanager",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Install a filtered stderr handler and a full file handler on the root logger.

    Replaces handlers left by an earlier call. Returns the log file path.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = _formatter()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_file
