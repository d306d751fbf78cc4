# tasktracker/client/api.py
from __future__ import annotations

from typing import Any, Optional

import httpx

from tasktracker.core.config import settings
from tasktracker.schemas.task import TaskRead

TASKS_PATH = "/api/tasks"


class TaskAPIError(Exception):
    """Non-2xx answer from the Task API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _raise_for_status(r: httpx.Response) -> None:
    if r.is_success:
        return
    try:
        message = r.json().get("error") or r.reason_phrase
    except (ValueError, AttributeError):
        message = r.text or r.reason_phrase
    raise TaskAPIError(r.status_code, message)


class TaskAPIClient:
    """Async client for ``GET/POST /api/tasks``.

    Pass ``http`` to reuse an existing ``httpx.AsyncClient`` (tests hand in one
    with a mock or ASGI transport); otherwise a client for ``base_url`` is
    created and owned by this instance.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        http: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            base_url=base_url or settings.api_url, timeout=timeout
        )

    async def list_tasks(self) -> list[TaskRead]:
        r = await self._http.get(TASKS_PATH)
        _raise_for_status(r)
        return [TaskRead.model_validate(item) for item in r.json()]

    async def create_task(self, body: dict[str, Any]) -> TaskRead:
        r = await self._http.post(TASKS_PATH, json=body)
        _raise_for_status(r)
        return TaskRead.model_validate(r.json())

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "TaskAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
