# src/taskmanager/tasks/task_source.py

"""
Remote task sources.

- HttpTaskSource: GET <base_url>/<tasks_path> returning a JSON array of
  {"id", "title", "completed", ...} objects (jsonplaceholder-style "todos").
- OfflineTaskSource: used when no remote is configured; returns an empty list
  so the app still starts from whatever the local store holds.

Every transport/status/payload problem surfaces as TaskNetworkError.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .task_errors import TaskNetworkError
from .task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0


def parse_tasks_payload(payload: Any) -> list[Task]:
    """Convert decoded JSON into Tasks. Raises TaskNetworkError on malformed data."""
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise TaskNetworkError(f"expected a JSON array of tasks, got {type(payload).__name__}")

    out: list[Task] = []
    for i, item in enumerate(payload):
        if not isinstance(item, dict):
            raise TaskNetworkError(f"task #{i} is not an object")
        try:
            out.append(Task.from_payload(item))
        except (KeyError, TypeError, ValueError) as e:
            raise TaskNetworkError(f"task #{i} is malformed: {e}") from e
    return out


class HttpTaskSource:
    """
    Fetches the full task list over HTTP with httpx.

    The AsyncClient is created lazily and reused for the session; call aclose()
    on shutdown. A transport can be injected for tests (httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        *,
        tasks_path: str = "todos",
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url or not base_url.strip():
            raise ValueError("base_url is required")
        self._base_url = base_url.strip()
        self._tasks_path = tasks_path.strip().lstrip("/") or "todos"
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def url(self) -> str:
        return f"{self._base_url.rstrip('/')}/{self._tasks_path}"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def fetch_all(self) -> list[Task]:
        url = self.url
        logger.debug("Fetching tasks url=%s", url)
        try:
            response = await self._get_client().get(url)
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            raise TaskNetworkError(f"request timeout for {url}") from e
        except httpx.HTTPStatusError as e:
            raise TaskNetworkError(f"HTTP {e.response.status_code} for {url}") from e
        except httpx.RequestError as e:
            raise TaskNetworkError(f"request failed for {url}: {e}") from e
        except ValueError as e:
            raise TaskNetworkError(f"invalid JSON from {url}") from e

        tasks = parse_tasks_payload(payload)
        logger.info("Fetched %d tasks from %s", len(tasks), url)
        return tasks

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


class OfflineTaskSource:
    """
    Offline source used when the remote is disabled.

    Behaves like a remote that has nothing new: the local store stays authoritative.
    """

    async def fetch_all(self) -> list[Task]:
        logger.info("Remote source disabled; skipping fetch.")
        return []

    async def aclose(self) -> None:
        return
