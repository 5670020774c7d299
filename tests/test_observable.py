# tests/test_observable.py

from __future__ import annotations

import asyncio
import logging

import pytest

from taskmanager.core.observable import Observable


def test_subscribe_gets_current_value_then_changes_only() -> None:
    obs = Observable(0, name="n")
    seen: list[int] = []

    unsubscribe = obs.subscribe(seen.append)
    assert obs.set(1) is True
    assert obs.set(1) is False
    obs.set(2)
    unsubscribe()
    unsubscribe()
    obs.set(3)

    assert seen == [0, 1, 2]
    assert obs.value == 3


def test_failing_subscriber_does_not_block_others(caplog: pytest.LogCaptureFixture) -> None:
    obs = Observable("a", name="letters")
    seen: list[str] = []

    def broken(value: str) -> None:
        if value != "a":
            raise RuntimeError("subscriber bug")

    obs.subscribe(broken)
    obs.subscribe(seen.append)

    with caplog.at_level(logging.ERROR, logger="taskmanager.core.observable"):
        obs.set("b")

    assert seen == ["a", "b"]
    assert "Observable subscriber failed" in caplog.text


@pytest.mark.asyncio
async def test_stream_yields_latest_and_subsequent_values() -> None:
    obs = Observable([1], name="list")
    received: list[list[int]] = []

    async def consume() -> None:
        async for value in obs.stream():
            received.append(value)
            if len(received) == 3:
                break

    consumer = asyncio.create_task(consume())
    await asyncio.sleep(0)
    obs.set([1, 2])
    await asyncio.sleep(0)
    obs.set([1, 2])
    obs.set([1, 2, 3])
    await asyncio.wait_for(consumer, timeout=1.0)

    assert received == [[1], [1, 2], [1, 2, 3]]


@pytest.mark.asyncio
async def test_stream_slow_consumer_sees_only_newest_value() -> None:
    obs = Observable(0, name="counter")
    stream = obs.stream()

    assert await anext(stream) == 0
    for n in range(1, 6):
        obs.set(n)
    assert await anext(stream) == 5

    obs.set(6)
    assert await anext(stream) == 6
    await stream.aclose()
