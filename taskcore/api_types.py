"""Central API response/request type contracts.

Runtime behavior of endpoints does not depend on these definitions; they
document the JSON shapes and keep service signatures precise for mypy.
Wire keys are camelCase to match the browser client.
"""

from __future__ import annotations

from typing import Literal, NewType, NotRequired, TypedDict

TaskId = NewType("TaskId", str)
PrincipalId = NewType("PrincipalId", str)

TaskStatus = Literal["pending", "in-progress", "completed"]
TaskPriority = Literal["low", "medium", "high"]


## Envelopes
class OkBase(TypedDict):
    success: Literal[True]


# --- Tasks ---
class TaskView(TypedDict):
    id: TaskId
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    dueDate: str | None
    ownerId: PrincipalId
    createdAt: str | None
    updatedAt: str | None


class TaskPayload(TypedDict, total=False):
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    dueDate: str | None


class TaskResponse(OkBase):
    task: TaskView
    message: NotRequired[str]


class TaskListResponse(OkBase):
    count: int
    tasks: list[TaskView]


class TaskDeleteResponse(OkBase):
    message: str


# --- Admin ---
class OwnerSummary(TypedDict):
    id: PrincipalId
    username: str
    email: str


class AdminTaskView(TaskView):
    owner: OwnerSummary | None


class AdminTaskListResponse(OkBase):
    count: int
    tasks: list[AdminTaskView]


class AccountView(TypedDict):
    id: PrincipalId
    username: str
    email: str
    password: str  # stored one-way hash
    role: str
    createdAt: str | None
    updatedAt: str | None


class AccountListResponse(OkBase):
    count: int
    users: list[AccountView]


__all__ = [
    "TaskId",
    "PrincipalId",
    "TaskStatus",
    "TaskPriority",
    "OkBase",
    "TaskView",
    "TaskPayload",
    "TaskResponse",
    "TaskListResponse",
    "TaskDeleteResponse",
    "OwnerSummary",
    "AdminTaskView",
    "AdminTaskListResponse",
    "AccountView",
    "AccountListResponse",
]
