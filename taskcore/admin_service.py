"""Administrative read-only queries across all accounts.

Callers must pass the admin gate first; nothing here checks roles.
"""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from .api_types import AccountView, AdminTaskView, PrincipalId
from .models import Task, User
from .tasks_service import iso_timestamp, serialize_task


def list_all_tasks(db: Session) -> list[AdminTaskView]:
    q = select(Task).options(joinedload(Task.owner)).order_by(Task.created_at.desc(), Task.id.desc())
    rows: list[AdminTaskView] = []
    for t in db.execute(q).scalars():
        item: AdminTaskView = {**serialize_task(t), "owner": None}  # type: ignore[typeddict-item]
        if t.owner is not None:
            item["owner"] = {
                "id": PrincipalId(t.owner.id),
                "username": t.owner.username,
                "email": t.owner.email,
            }
        rows.append(item)
    return rows


def list_all_accounts(db: Session) -> list[AccountView]:
    q = select(User).order_by(User.created_at.desc(), User.id.desc())
    return [
        {
            "id": PrincipalId(u.id),
            "username": u.username,
            "email": u.email,
            "password": u.password_hash,
            "role": u.role,
            "createdAt": iso_timestamp(u.created_at),
            "updatedAt": iso_timestamp(u.updated_at),
        }
        for u in db.execute(q).scalars()
    ]


__all__ = ["list_all_tasks", "list_all_accounts"]
