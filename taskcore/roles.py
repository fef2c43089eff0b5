"""Role vocabulary.

Role: the two roles an account may carry. Comparisons are exact; an
unknown or missing role never matches anything.
"""

from __future__ import annotations

from typing import Literal

Role = Literal["user", "admin"]

USER: Role = "user"
ADMIN: Role = "admin"
ROLES: tuple[Role, ...] = (USER, ADMIN)


def is_role(value: object) -> bool:
    return isinstance(value, str) and value in ROLES


__all__ = [
    "Role",
    "USER",
    "ADMIN",
    "ROLES",
    "is_role",
]
