# tasktracker/services/task_service.py
from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from tasktracker.core.errors import (
    INVALID_BODY_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    TaskRequestError,
)
from tasktracker.models.task import Task
from tasktracker.schemas.task import REQUIRED_FIELDS, TaskCreate, first_error_message
from tasktracker.services.task_store import TaskStore

log = logging.getLogger(__name__)


def parse_create_payload(body: Any) -> TaskCreate:
    """Presence check first, then the shared schema. Raises ``TaskRequestError``."""
    if not isinstance(body, dict):
        raise TaskRequestError(INVALID_BODY_MESSAGE)
    if any(not body.get(field) for field in REQUIRED_FIELDS):
        raise TaskRequestError(MISSING_FIELDS_MESSAGE)
    try:
        return TaskCreate.model_validate(body)
    except ValidationError as exc:
        raise TaskRequestError(first_error_message(exc)) from exc


def list_tasks(store: TaskStore) -> list[Task]:
    return store.select_all()


def create_task(store: TaskStore, payload: TaskCreate) -> Task:
    task = store.insert(payload.model_dump())
    log.info("Created task %s (priority=%s, due=%s)", task.id, task.priority, task.due_date)
    return task
