# tasktracker/schemas/task.py
"""Shared task schema.

The API boundary (``TaskCreate``) and the entry form (``TaskFormInput``)
validate against the same field definitions in ``TaskFields``.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
REQUIRED_FIELDS = ("title", "due_date", "priority")


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TaskStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class TaskFields(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    priority: Priority
    due_date: date


class TaskCreate(TaskFields):
    """Request body of ``POST /api/tasks``."""

    status: TaskStatus = Field(default=TaskStatus.PENDING, validate_default=True)

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, v):
        return v or TaskStatus.PENDING


class TaskFormInput(TaskFields):
    """Form-side validation: same fields, plus the due date may not be in the past."""

    @field_validator("due_date")
    @classmethod
    def _not_in_past(cls, v: date) -> date:
        if v < date.today():
            raise ValueError("Due date cannot be in the past")
        return v


class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: UUID
    title: str
    description: Optional[str] = None
    priority: Priority
    due_date: date
    status: TaskStatus
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive values; stored timestamps are always UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


_FIELD_MESSAGES = {
    ("title", "missing"): "Title is required",
    ("title", "string_too_short"): "Title is required",
    ("title", "string_too_long"): f"Title must be at most {TITLE_MAX_LENGTH} characters",
    ("description", "string_too_long"): (
        f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters"
    ),
    ("priority", "missing"): "Priority is required",
    ("priority", "enum"): "Priority must be Low, Medium or High",
    ("status", "enum"): "Status must be Pending, In Progress or Completed",
    ("due_date", "missing"): "Due date is required",
}


def field_errors(exc: ValidationError) -> dict[str, str]:
    """First message per field, in field order."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "__root__"
        if field in errors:
            continue
        msg = _FIELD_MESSAGES.get((field, err["type"]))
        if msg is None:
            if field == "due_date":
                msg = "Due date must be a valid date"
                if err["type"] == "value_error":
                    msg = err["msg"].removeprefix("Value error, ")
            else:
                msg = err["msg"].removeprefix("Value error, ")
        errors[field] = msg
    return errors


def first_error_message(exc: ValidationError) -> str:
    errors = field_errors(exc)
    return next(iter(errors.values()), "Invalid request")
