# src/taskmanager/core/observable.py

"""
Observable state holder.

Semantics mirror a "state flow":
- there is always a current value,
- subscribers receive the current value immediately on subscribe,
- set() notifies only when the new value differs from the current one.

Callbacks run synchronously in the caller of set(), i.e. on the event loop
that owns the synchronizer.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from typing import Generic, TypeVar

T = TypeVar("T")

Subscriber = Callable[[T], None]

logger = logging.getLogger(__name__)


class Observable(Generic[T]):
    def __init__(self, initial: T, *, name: str = "") -> None:
        self._value = initial
        self._name = name
        self._subscribers: list[Subscriber[T]] = []

    @property
    def value(self) -> T:
        return self._value

    @property
    def name(self) -> str:
        return self._name

    def set(self, value: T) -> bool:
        """Publish value if it changed. Returns True when subscribers were notified."""
        if value == self._value:
            return False
        self._value = value
        for cb in list(self._subscribers):
            try:
                cb(value)
            except Exception:
                logger.exception("Observable subscriber failed name=%s", self._name)
        return True

    def subscribe(self, callback: Subscriber[T]) -> Callable[[], None]:
        """
        Register callback and deliver the current value right away.

        Returns an unsubscribe function (idempotent).
        """
        self._subscribers.append(callback)
        callback(self._value)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    async def stream(self) -> AsyncIterator[T]:
        """
        Async iterator over the current value and later changes.

        A slow consumer skips intermediate values and sees only the newest one.
        """
        queue: asyncio.Queue[T] = asyncio.Queue(maxsize=1)

        def _offer(value: T) -> None:
            if queue.full():
                queue.get_nowait()
            queue.put_nowait(value)

        unsubscribe = self.subscribe(_offer)
        try:
            while True:
                yield await queue.get()
        finally:
            unsubscribe()

    def __repr__(self) -> str:
        return f"Observable(name={self._name!r}, value={self._value!r})"
