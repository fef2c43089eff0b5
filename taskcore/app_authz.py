"""Authorization gate.

Role is re-read from the account store on every gated call (one lookup, no
cache) so promotions and demotions take effect on the next request. A missing
account is denied exactly like a role mismatch. Storage faults surface as
StorageUnavailableError, never as a denial.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from flask import g
from sqlalchemy import select
from sqlalchemy.orm import Session

from .app_sessions import require_principal
from .db import session_scope
from .models import User
from .roles import ADMIN, Role, is_role

P = ParamSpec("P")
R = TypeVar("R")

ADMIN_REQUIRED = "Access denied. Admin privileges required."
AUTHZ_STORAGE_FAILURE = "Server error during authorization"


class AuthzError(Exception):
    """Signals an authorization (403) failure to centralized handlers."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


def resolve_role(db: Session, principal_id: str) -> str | None:
    return db.execute(select(User.role).where(User.id == principal_id)).scalar_one_or_none()


def check_roles(principal_id: str, allowed: tuple[str, ...], message: str) -> str:
    """Return the principal's role if it is in ``allowed``; raise AuthzError otherwise."""
    with session_scope(AUTHZ_STORAGE_FAILURE) as db:
        role = resolve_role(db, principal_id)
    if not is_role(role) or role not in allowed:
        raise AuthzError(message)
    g.user_role = role
    return role


def _gate(allowed: tuple[str, ...], message: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    def decorator(fn: Callable[P, R]) -> Callable[P, R]:
        @wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            principal = require_principal()
            check_roles(principal, allowed, message)
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def require_admin(fn: Callable[P, R]) -> Callable[P, R]:
    return _gate((ADMIN,), ADMIN_REQUIRED)(fn)


def require_roles(*roles: Role) -> Callable[[Callable[P, R]], Callable[P, R]]:
    return _gate(tuple(roles), f"Access denied. Required role: {' or '.join(roles)}")


__all__ = [
    "AuthzError",
    "ADMIN_REQUIRED",
    "resolve_role",
    "check_roles",
    "require_admin",
    "require_roles",
]
