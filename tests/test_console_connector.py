# tests/test_console_connector.py

from __future__ import annotations

import pytest

from taskmanager.connectors.console_connector import run_console_loop


def _feed(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> None:
    pending = list(lines)

    def fake_input(prompt: str = "") -> str:
        if not pending:
            raise EOFError
        return pending.pop(0)

    monkeypatch.setattr("builtins.input", fake_input)


@pytest.mark.asyncio
async def test_plain_text_adds_task_and_status_is_pushed(state, monkeypatch, capsys) -> None:
    await state.sync.initialize()
    _feed(monkeypatch, ["buy bread", "", "/ls", "/exit", "never read"])

    await run_console_loop(state)

    out = capsys.readouterr().out
    assert "[STATUS] Task added" in out
    assert "buy bread" in out
    assert [t.title for t in state.sync.tasks] == ["A", "B", "buy bread"]


@pytest.mark.asyncio
async def test_eof_ends_loop_and_unsubscribes(state, monkeypatch, capsys) -> None:
    _feed(monkeypatch, [])

    await run_console_loop(state)
    await state.sync.add_task("after exit")

    assert "[STATUS] Task added" not in capsys.readouterr().out
