"""Caller's own account profile.

Credential issuance lives in the authentication service; this blueprint only
reads the account behind an already-resolved principal.
"""
from __future__ import annotations

from flask import Blueprint, g, jsonify
from flask.typing import ResponseReturnValue
from sqlalchemy import select

from .app_authz import require_roles
from .app_sessions import require_principal
from .db import session_scope
from .errors import NotFoundError
from .models import User
from .roles import ADMIN, USER
from .tasks_service import iso_timestamp

bp = Blueprint("account_api", __name__)


@bp.get("/me")
@require_roles(USER, ADMIN)
def me() -> ResponseReturnValue:
    principal = require_principal()
    with session_scope("Server error while fetching profile") as db:
        u = db.execute(select(User).where(User.id == principal)).scalar_one_or_none()
        if u is None:  # removed between the role check and this read
            raise NotFoundError("User not found")
        user = {
            "id": u.id,
            "username": u.username,
            "email": u.email,
            "role": g.user_role,
            "createdAt": iso_timestamp(u.created_at),
            "updatedAt": iso_timestamp(u.updated_at),
        }
    return jsonify({"success": True, "user": user})
