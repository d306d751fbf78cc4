# tasktracker/client/task_list.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional
from uuid import UUID

import httpx

from tasktracker.client.api import TaskAPIClient, TaskAPIError
from tasktracker.client.task_form import TaskForm
from tasktracker.client.toast import Toaster
from tasktracker.schemas.task import TaskRead

log = logging.getLogger(__name__)

EMPTY_STATE_ACTION = "Create your first task"


class ListView(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    GRID = "grid"


@dataclass(frozen=True)
class TaskItem:
    task: TaskRead
    on_update: Callable[[], Awaitable[None]]

    @property
    def key(self) -> UUID:
        return self.task.id


class TaskList:
    """List of tasks plus the dialog hosting the creation form.

    State is local to the instance. The list is fetched on ``mount()`` and
    again after every successful creation. A failed fetch keeps the previous
    ``tasks`` on screen and records the message in ``fetch_error``.
    """

    def __init__(self, api: TaskAPIClient, toaster: Optional[Toaster] = None):
        self.api = api
        self.toaster = toaster or Toaster()
        self.tasks: list[TaskRead] = []
        self.is_loading = True
        self.is_dialog_open = False
        self.fetch_error: Optional[str] = None
        self.form = TaskForm(api, self.toaster, on_success=self._on_created)
        self._inflight: Optional[asyncio.Task] = None

    async def mount(self) -> None:
        await self.refresh()

    async def refresh(self) -> None:
        """Fetch the list, superseding any fetch still running."""
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        fetch = asyncio.create_task(self._fetch())
        self._inflight = fetch
        try:
            await fetch
        except asyncio.CancelledError:
            # superseded by a newer refresh or cancelled by close()
            if self._inflight is fetch:
                raise
        finally:
            if self._inflight is fetch:
                self._inflight = None

    async def _fetch(self) -> None:
        self.is_loading = True
        try:
            tasks = await self.api.list_tasks()
        except (TaskAPIError, httpx.HTTPError, ValueError) as exc:
            log.exception("Error fetching tasks")
            self.fetch_error = str(exc) or exc.__class__.__name__
        else:
            self.tasks = tasks
            self.fetch_error = None
        finally:
            self.is_loading = False

    def close(self) -> None:
        """Cancel the in-flight fetch, if any."""
        fetch, self._inflight = self._inflight, None
        if fetch is not None and not fetch.done():
            fetch.cancel()

    @property
    def view(self) -> ListView:
        if self.is_loading:
            return ListView.LOADING
        if not self.tasks:
            return ListView.EMPTY
        return ListView.GRID

    def items(self) -> list[TaskItem]:
        if self.view is not ListView.GRID:
            return []
        return [TaskItem(task=t, on_update=self.refresh) for t in self.tasks]

    def set_dialog_open(self, is_open: bool) -> None:
        self.is_dialog_open = is_open

    def open_dialog(self) -> None:
        self.set_dialog_open(True)

    async def _on_created(self) -> None:
        self.set_dialog_open(False)
        await self.refresh()
