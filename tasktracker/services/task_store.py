# tasktracker/services/task_store.py
from __future__ import annotations

from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from tasktracker.core.errors import TaskStoreError
from tasktracker.models.task import Task


def _store_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc)


class TaskStore:
    """Thin client over the ``tasks`` table.

    Every driver error is re-raised as ``TaskStoreError`` with the driver's
    message unchanged; callers decide how to present it.
    """

    def __init__(self, db: Session):
        self.db = db

    def select_all(self) -> list[Task]:
        stmt = select(Task).order_by(Task.created_at.desc())
        try:
            return list(self.db.exec(stmt).all())
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise TaskStoreError(_store_message(exc)) from exc

    def insert(self, values: dict[str, Any]) -> Task:
        """Insert one row and return it as stored (``insert().select().single()``)."""
        task = Task(**values)
        try:
            self.db.add(task)
            self.db.commit()
            self.db.refresh(task)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise TaskStoreError(_store_message(exc)) from exc
        return task

    def count(self) -> int:
        try:
            return int(self.db.exec(select(func.count()).select_from(Task)).one())
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise TaskStoreError(_store_message(exc)) from exc
