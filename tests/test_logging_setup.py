# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from taskmanager.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_thresholds() -> None:
    f = _ConsoleNoiseFilter()

    assert f.filter(_record("taskmanager.tasks.task_sync", logging.DEBUG))
    assert f.filter(_record("py.warnings", logging.WARNING))
    assert not f.filter(_record("httpx", logging.WARNING))
    assert f.filter(_record("httpx", logging.ERROR))
    assert not f.filter(_record("taskmanagerx", logging.INFO))


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def test_setup_logging_writes_file_and_replaces_handlers(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=tmp_path)
    log_file = setup_logging(log_dir=tmp_path / "nested")

    logging.getLogger("taskmanager.test").info("hello file")
    for h in logging.getLogger().handlers:
        h.flush()

    assert log_file == tmp_path / "nested" / "taskmanager.log"
    assert len(logging.getLogger().handlers) == 2
    assert "hello file" in log_file.read_text(encoding="utf-8")
    assert logging.getLogger("httpx").level == logging.WARNING
