"""Tasks API

Thin transport over tasks_service: parse request, resolve principal, run the
service inside one session scope, wrap the result in the success envelope.
Every route requires an authenticated principal.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request
from flask.typing import ResponseReturnValue

from .admin_service import list_all_tasks as svc_list_all_tasks
from .api_types import (
    AdminTaskListResponse,
    TaskDeleteResponse,
    TaskListResponse,
    TaskResponse,
)
from .app_authz import require_admin
from .app_sessions import require_principal
from .db import session_scope
from .tasks_service import (
    create_task as svc_create_task,
    delete_task as svc_delete_task,
    get_task as svc_get_task,
    list_tasks as svc_list_tasks,
    update_task as svc_update_task,
)

bp = Blueprint("tasks_api", __name__)


@bp.before_request
def _require_auth() -> None:
    require_principal()


def _json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@bp.post("")
def create_task() -> ResponseReturnValue:
    owner = require_principal()
    payload = _json_body()
    with session_scope("Server error while creating task") as db:
        task = svc_create_task(db, owner_id=owner, payload=payload)
    body: TaskResponse = {"success": True, "message": "Task created successfully", "task": task}
    return jsonify(body), 201


@bp.get("")
def list_tasks() -> ResponseReturnValue:
    owner = require_principal()
    args = request.args
    with session_scope("Server error while fetching tasks") as db:
        tasks = svc_list_tasks(
            db,
            owner_id=owner,
            status=args.get("status"),
            priority=args.get("priority"),
            sort_by=args.get("sortBy"),
            order=args.get("order"),
        )
    body: TaskListResponse = {"success": True, "count": len(tasks), "tasks": tasks}
    return jsonify(body)


@bp.get("/admin/all")
@require_admin
def list_all_tasks() -> ResponseReturnValue:
    with session_scope("Server error while fetching all tasks") as db:
        tasks = svc_list_all_tasks(db)
    body: AdminTaskListResponse = {"success": True, "count": len(tasks), "tasks": tasks}
    return jsonify(body)


@bp.get("/<task_id>")
def get_task(task_id: str) -> ResponseReturnValue:
    owner = require_principal()
    with session_scope("Server error while fetching task") as db:
        task = svc_get_task(db, owner_id=owner, task_id=task_id)
    body: TaskResponse = {"success": True, "task": task}
    return jsonify(body)


@bp.put("/<task_id>")
@bp.patch("/<task_id>")
def update_task(task_id: str) -> ResponseReturnValue:
    owner = require_principal()
    payload = _json_body()
    with session_scope("Server error while updating task") as db:
        task = svc_update_task(db, owner_id=owner, task_id=task_id, payload=payload)
    body: TaskResponse = {"success": True, "message": "Task updated successfully", "task": task}
    return jsonify(body)


@bp.delete("/<task_id>")
def delete_task(task_id: str) -> ResponseReturnValue:
    owner = require_principal()
    with session_scope("Server error while deleting task") as db:
        svc_delete_task(db, owner_id=owner, task_id=task_id)
    body: TaskDeleteResponse = {"success": True, "message": "Task deleted successfully"}
    return jsonify(body)
