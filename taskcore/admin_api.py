from __future__ import annotations

from flask import Blueprint, jsonify
from flask.typing import ResponseReturnValue

from .admin_service import list_all_accounts as svc_list_all_accounts
from .api_types import AccountListResponse
from .app_authz import require_admin
from .db import session_scope

bp = Blueprint("admin_api", __name__)


@bp.get("/users")
@require_admin
def list_users() -> ResponseReturnValue:
    with session_scope("Server error while fetching users") as db:
        users = svc_list_all_accounts(db)
    body: AccountListResponse = {"success": True, "count": len(users), "users": users}
    return jsonify(body)
