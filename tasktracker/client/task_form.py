# tasktracker/client/task_form.py
from __future__ import annotations

import logging
from datetime import date
from typing import Awaitable, Callable, Optional, Union

import httpx
from pydantic import ValidationError

from tasktracker.client.api import TaskAPIClient, TaskAPIError
from tasktracker.client.toast import Toaster
from tasktracker.schemas.task import Priority, TaskFormInput, TaskStatus, field_errors

log = logging.getLogger(__name__)

DUE_DATE_FORMAT = "%Y-%m-%d"
CREATE_FAILED_MESSAGE = "Failed to create task"
CREATE_OK_MESSAGE = "Task created successfully"
GENERIC_ERROR_MESSAGE = "Something went wrong"


class TaskForm:
    """Entry form for a new task.

    Fields are plain attributes. ``errors``/``can_submit`` are recomputed from
    the shared ``TaskFormInput`` schema on every access, so a caller binding
    a submit button reads ``can_submit`` directly.
    """

    def __init__(
        self,
        api: TaskAPIClient,
        toaster: Toaster,
        on_success: Optional[Callable[[], Awaitable[None]]] = None,
    ):
        self.api = api
        self.toaster = toaster
        self.on_success = on_success
        self.is_submitting = False
        self.reset()

    def reset(self) -> None:
        self.title: str = ""
        self.description: str = ""
        self.priority: str = Priority.MEDIUM.value
        self.due_date: Optional[Union[date, str]] = None

    def values(self) -> dict:
        values = {
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
        }
        if self.due_date not in (None, ""):
            values["due_date"] = self.due_date
        return values

    def _validate(self) -> TaskFormInput:
        return TaskFormInput.model_validate(self.values())

    @property
    def errors(self) -> dict[str, str]:
        try:
            self._validate()
        except ValidationError as exc:
            return field_errors(exc)
        return {}

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def can_submit(self) -> bool:
        return self.is_valid and not self.is_submitting

    @staticmethod
    def build_payload(valid: TaskFormInput) -> dict:
        return {
            "title": valid.title,
            "description": valid.description or "",
            "priority": valid.priority,
            "due_date": valid.due_date.strftime(DUE_DATE_FORMAT),
            "status": TaskStatus.PENDING.value,
        }

    async def submit(self) -> bool:
        """Returns True when the task was created. Invalid or busy forms issue no request."""
        if self.is_submitting:
            return False
        try:
            valid = self._validate()
        except ValidationError:
            return False

        self.is_submitting = True
        try:
            await self.api.create_task(self.build_payload(valid))
        except TaskAPIError as exc:
            log.warning("Task creation rejected: %s", exc)
            self.toaster.error(CREATE_FAILED_MESSAGE)
            return False
        except httpx.HTTPError as exc:
            log.warning("Task creation failed: %r", exc)
            self.toaster.error(str(exc) or GENERIC_ERROR_MESSAGE)
            return False
        except ValueError:
            # 2xx with a body that is not a task (bad JSON or wrong shape)
            log.exception("Unreadable task creation response")
            self.toaster.error(GENERIC_ERROR_MESSAGE)
            return False
        finally:
            self.is_submitting = False

        self.toaster.success(CREATE_OK_MESSAGE)
        self.reset()
        if self.on_success is not None:
            await self.on_success()
        return True
