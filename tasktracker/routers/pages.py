# tasktracker/routers/pages.py
from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from tasktracker.core.errors import TaskStoreError
from tasktracker.routers.task import get_task_store
from tasktracker.schemas.task import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Priority,
    TaskCreate,
    TaskFormInput,
    TaskStatus,
    field_errors,
)
from tasktracker.services import task_service
from tasktracker.services.task_store import TaskStore

log = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["Pages"])

_EMPTY_FORM = {"title": "", "description": "", "priority": Priority.MEDIUM.value, "due_date": ""}


def _render(
    request: Request,
    store: TaskStore,
    *,
    form: Optional[dict] = None,
    errors: Optional[dict] = None,
    dialog_open: bool = False,
    toast: Optional[dict] = None,
    status_code: int = 200,
) -> HTMLResponse:
    load_error = None
    try:
        tasks = task_service.list_tasks(store)
    except TaskStoreError as exc:
        log.error("Error fetching tasks: %s", exc.message)
        tasks, load_error = [], "Tasks could not be loaded."

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "tasks": tasks,
            "load_error": load_error,
            "form": form or dict(_EMPTY_FORM),
            "errors": errors or {},
            "dialog_open": dialog_open,
            "toast": toast,
            "priorities": [p.value for p in Priority],
            "today": date.today().isoformat(),
            "title_max": TITLE_MAX_LENGTH,
            "description_max": DESCRIPTION_MAX_LENGTH,
        },
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    new: bool = False,
    created: bool = False,
    store: TaskStore = Depends(get_task_store),
):
    toast = {"level": "success", "message": "Task created successfully"} if created else None
    return _render(request, store, dialog_open=new, toast=toast)


@router.post("/tasks/new", response_class=HTMLResponse)
def create_from_form(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    priority: str = Form(Priority.MEDIUM.value),
    due_date: str = Form(""),
    store: TaskStore = Depends(get_task_store),
):
    form = {"title": title, "description": description, "priority": priority, "due_date": due_date}
    values = {k: v for k, v in form.items() if not (k == "due_date" and not v)}

    try:
        valid = TaskFormInput.model_validate(values)
    except ValidationError as exc:
        return _render(
            request, store, form=form, errors=field_errors(exc), dialog_open=True, status_code=400
        )

    payload = TaskCreate(**valid.model_dump(), status=TaskStatus.PENDING)
    try:
        task_service.create_task(store, payload)
    except TaskStoreError as exc:
        log.error("Error creating task: %s", exc.message)
        return _render(
            request,
            store,
            form=form,
            dialog_open=True,
            toast={"level": "error", "message": "Failed to create task"},
            status_code=500,
        )
    return RedirectResponse("/?created=1", status_code=303)
