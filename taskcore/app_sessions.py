"""Principal resolution.

The authentication service issues tokens; this module only turns an inbound
request into a principal identifier. Sources, in order:
 1. ``Authorization: Bearer <jwt>`` verified with JWT_SECRET
 2. Flask session ``user_id``
 3. ``X-User-Id`` header, honored only when TESTING

No principal means the task core is never reached (401).
"""
from __future__ import annotations

from flask import current_app, g, request
from flask import session as flask_session

from .jwt_utils import JWTError, decode as jwt_decode, principal_from_claims


class SessionError(Exception):
    """Signals a 401 unauthorized due to missing/invalid credentials."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


def persist_login(sess, user_id: str) -> None:
    """Persist minimal auth session state (cookie-based clients)."""
    sess["user_id"] = str(user_id)


def _from_bearer() -> str | None:
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.lower().startswith("bearer "):
        return None
    parts = auth_header.split(None, 1)
    if len(parts) < 2 or not parts[1].strip():
        return None
    token = parts[1].strip()
    try:
        payload = jwt_decode(
            token,
            secret=current_app.config.get("JWT_SECRET", "dev-secret"),
            leeway=current_app.config.get("JWT_LEEWAY_SECONDS", 60),
        )
    except JWTError as e:
        current_app.logger.debug({"jwt_reject": str(e)})
        return None
    return principal_from_claims(payload)


def load_principal() -> str | None:
    """Resolve and cache the principal for the current request on ``g``."""
    principal = _from_bearer()
    if principal is None and flask_session.get("user_id"):
        principal = str(flask_session["user_id"])
    if principal is None and current_app.config.get("TESTING"):
        principal = request.headers.get("X-User-Id") or None
    g.principal_id = principal
    return principal


def get_principal() -> str | None:
    if "principal_id" not in g:
        return load_principal()
    return g.principal_id


def require_principal() -> str:
    principal = get_principal()
    if not principal:
        raise SessionError("Authentication required")
    return principal


__all__ = [
    "SessionError",
    "persist_login",
    "load_principal",
    "get_principal",
    "require_principal",
]
