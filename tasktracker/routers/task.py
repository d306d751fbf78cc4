# tasktracker/routers/task.py
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlmodel import Session

from tasktracker.db.session import get_session
from tasktracker.schemas.task import TaskRead
from tasktracker.services import task_service
from tasktracker.services.task_store import TaskStore

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


def get_task_store(db: Session = Depends(get_session)) -> TaskStore:
    return TaskStore(db)


@router.get("", response_model=list[TaskRead])
def list_tasks(store: TaskStore = Depends(get_task_store)):
    """All tasks, newest first."""
    return task_service.list_tasks(store)


@router.post("", response_model=TaskRead, status_code=201)
def create_task(
    body: Any = Body(None),
    store: TaskStore = Depends(get_task_store),
):
    payload = task_service.parse_create_payload(body)
    return task_service.create_task(store, payload)
