"""Tasks service layer.

Every operation is scoped by the calling principal (``owner_id``). Lookups
always use the compound (id, owner) predicate, so a task that exists but
belongs to someone else is reported exactly like one that does not exist.
Updates are merged first and validated against the record they would produce.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from .api_types import PrincipalId, TaskId, TaskView
from .errors import NotFoundError, ValidationError
from .models import Task
from .task_validation import (
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    SORTABLE_FIELDS,
    parse_due_date,
    sanitize_input,
    validate_task_input,
)

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"


def iso_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:  # sqlite drops tzinfo; values are stored as UTC
        value = value.replace(tzinfo=UTC)
    return value.isoformat()


def serialize_task(t: Task) -> TaskView:
    return {
        "id": TaskId(t.id),
        "title": t.title,
        "description": t.description,
        "status": t.status,  # type: ignore[typeddict-item]
        "priority": t.priority,  # type: ignore[typeddict-item]
        "dueDate": iso_timestamp(t.due_date),
        "ownerId": PrincipalId(t.user_id),
        "createdAt": iso_timestamp(t.created_at),
        "updatedAt": iso_timestamp(t.updated_at),
    }


def _clean_description(value: Any) -> str | None:
    cleaned = sanitize_input(value)
    return cleaned or None


def _find_owned(db: Session, owner_id: str, task_id: str) -> Task:
    t = db.execute(
        select(Task).where(Task.id == task_id, Task.user_id == owner_id)
    ).scalar_one_or_none()
    if t is None:
        raise NotFoundError(TASK_NOT_FOUND)
    return t


def create_task(db: Session, *, owner_id: str, payload: Mapping[str, Any]) -> TaskView:
    errors = validate_task_input(payload)
    if errors:
        raise ValidationError(errors)
    t = Task(
        title=sanitize_input(payload["title"]),
        description=_clean_description(payload.get("description")),
        status=payload.get("status") or DEFAULT_STATUS,
        priority=payload.get("priority") or DEFAULT_PRIORITY,
        due_date=parse_due_date(payload.get("dueDate")),
        user_id=owner_id,
    )
    db.add(t)
    db.commit()
    db.refresh(t)
    logger.info("task created id=%s owner=%s", t.id, owner_id)
    return serialize_task(t)


def list_tasks(
    db: Session,
    *,
    owner_id: str,
    status: str | None = None,
    priority: str | None = None,
    sort_by: str | None = None,
    order: str | None = None,
) -> list[TaskView]:
    q = select(Task).where(Task.user_id == owner_id)
    if status:
        q = q.where(Task.status == status)
    if priority:
        q = q.where(Task.priority == priority)
    attr = SORTABLE_FIELDS.get(sort_by or "")
    if attr is None:
        # unknown or absent sort field: newest first, order ignored
        q = q.order_by(Task.created_at.desc(), Task.id.desc())
    else:
        column = getattr(Task, attr)
        if order == "desc":
            q = q.order_by(column.desc(), Task.id.desc())
        else:
            q = q.order_by(column.asc(), Task.id.asc())
    return [serialize_task(t) for t in db.execute(q).scalars()]


def get_task(db: Session, *, owner_id: str, task_id: str) -> TaskView:
    return serialize_task(_find_owned(db, owner_id, task_id))


def update_task(db: Session, *, owner_id: str, task_id: str, payload: Mapping[str, Any]) -> TaskView:
    t = _find_owned(db, owner_id, task_id)
    # Effective record: null for title/status/priority means "keep"
    effective: dict[str, Any] = {
        "title": payload["title"] if payload.get("title") is not None else t.title,
        "status": payload["status"] if payload.get("status") is not None else t.status,
        "priority": payload["priority"] if payload.get("priority") is not None else t.priority,
    }
    for key in ("description", "dueDate"):
        if key in payload:
            effective[key] = payload[key]
    errors = validate_task_input(effective)
    if errors:
        raise ValidationError(errors)
    t.title = sanitize_input(effective["title"])
    t.status = effective["status"]
    t.priority = effective["priority"]
    if "description" in payload:
        t.description = _clean_description(payload["description"])
    if "dueDate" in payload:
        t.due_date = parse_due_date(payload["dueDate"])
    db.commit()
    db.refresh(t)
    logger.info("task updated id=%s owner=%s", t.id, owner_id)
    return serialize_task(t)


def delete_task(db: Session, *, owner_id: str, task_id: str) -> dict[str, str]:
    t = _find_owned(db, owner_id, task_id)
    db.delete(t)
    db.commit()
    logger.info("task deleted id=%s owner=%s", task_id, owner_id)
    return {"id": task_id}


__all__ = [
    "TASK_NOT_FOUND",
    "iso_timestamp",
    "serialize_task",
    "create_task",
    "list_tasks",
    "get_task",
    "update_task",
    "delete_task",
]
