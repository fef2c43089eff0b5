"""Task input validation and sanitization.

Pure functions only: no persistence access, no request context. Validation
returns every problem at once so a client can fix a payload in one round trip.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

TASK_STATUSES: tuple[str, ...] = ("pending", "in-progress", "completed")
TASK_PRIORITIES: tuple[str, ...] = ("low", "medium", "high")
DEFAULT_STATUS = "pending"
DEFAULT_PRIORITY = "medium"

# Wire name -> Task attribute
SORTABLE_FIELDS: dict[str, str] = {
    "title": "title",
    "status": "status",
    "priority": "priority",
    "dueDate": "due_date",
    "createdAt": "created_at",
}

TITLE_REQUIRED = "Title is required"
STATUS_INVALID = "Status must be pending, in-progress, or completed"
PRIORITY_INVALID = "Priority must be low, medium, or high"
DESCRIPTION_INVALID = "Description must be a string"
DUE_DATE_INVALID = "Due date must be a valid date"

_MARKUP_CHARS = re.compile(r"[<>]")


def sanitize_input(value: Any) -> Any:
    """Strip angle brackets and surrounding whitespace from strings."""
    if not isinstance(value, str):
        return value
    return _MARKUP_CHARS.sub("", value).strip()


def parse_due_date(value: Any) -> datetime | None:
    """Parse an ISO-8601 date or datetime; null/empty means no deadline.

    Naive values are taken as UTC. Raises ValueError on anything else.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError("due date must be an ISO-8601 string")
    raw = value.strip()
    if not raw:
        return None
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)  # accepts date-only strings too
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=UTC)
        return parsed.astimezone(UTC)
    except OverflowError as e:
        raise ValueError("due date out of range") from e


def validate_task_input(data: Mapping[str, Any]) -> list[str]:
    """Return ordered validation errors for a candidate (effective) task payload."""
    errors: list[str] = []
    title = data.get("title")
    if not isinstance(title, str) or not sanitize_input(title):
        errors.append(TITLE_REQUIRED)
    status = data.get("status")
    if status is not None and status not in TASK_STATUSES:
        errors.append(STATUS_INVALID)
    priority = data.get("priority")
    if priority is not None and priority not in TASK_PRIORITIES:
        errors.append(PRIORITY_INVALID)
    description = data.get("description")
    if description is not None and not isinstance(description, str):
        errors.append(DESCRIPTION_INVALID)
    if "dueDate" in data:
        try:
            parse_due_date(data.get("dueDate"))
        except ValueError:
            errors.append(DUE_DATE_INVALID)
    return errors


__all__ = [
    "TASK_STATUSES",
    "TASK_PRIORITIES",
    "DEFAULT_STATUS",
    "DEFAULT_PRIORITY",
    "SORTABLE_FIELDS",
    "sanitize_input",
    "parse_due_date",
    "validate_task_input",
]
