"""Fixed colour coding for badges. Display only; no behaviour depends on it."""

from __future__ import annotations

from enum import Enum
from typing import Union

from ..core.enums import LeaveStatus, Role, TaskPriority, TaskStatus

NEUTRAL = "bg-gray-100 text-gray-800"
RED = "bg-red-100 text-red-800"
YELLOW = "bg-yellow-100 text-yellow-800"
GREEN = "bg-green-100 text-green-800"
BLUE = "bg-blue-100 text-blue-800"
PURPLE = "bg-purple-100 text-purple-800"

PRIORITY_COLORS = {
    TaskPriority.HIGH: RED,
    TaskPriority.MEDIUM: YELLOW,
    TaskPriority.LOW: GREEN,
}

LEAVE_STATUS_COLORS = {
    LeaveStatus.APPROVED: GREEN,
    LeaveStatus.PENDING: YELLOW,
    LeaveStatus.REJECTED: RED,
}

TASK_STATUS_COLORS = {
    TaskStatus.COMPLETED: GREEN,
    TaskStatus.IN_PROGRESS: BLUE,
    TaskStatus.PENDING: YELLOW,
}

ROLE_COLORS = {
    Role.OWNER: PURPLE,
    Role.ADMIN: BLUE,
    Role.EMPLOYEE: GREEN,
}


def _lookup(table: dict, enum_cls: type[Enum], value: Union[str, Enum, None]) -> str:
    try:
        return table.get(enum_cls(value), NEUTRAL)
    except ValueError:
        return NEUTRAL


def priority_color(value) -> str:
    return _lookup(PRIORITY_COLORS, TaskPriority, value)


def leave_status_color(value) -> str:
    return _lookup(LEAVE_STATUS_COLORS, LeaveStatus, value)


def task_status_color(value) -> str:
    return _lookup(TASK_STATUS_COLORS, TaskStatus, value)


def role_color(value) -> str:
    return _lookup(ROLE_COLORS, Role, value)


def humanize(value) -> str:
    """``in_progress`` -> ``In Progress``."""
    raw = value.value if isinstance(value, Enum) else str(value or "")
    return raw.replace("_", " ").title()


JINJA_FILTERS = {
    "priority_color": priority_color,
    "leave_status_color": leave_status_color,
    "task_status_color": task_status_color,
    "role_color": role_color,
    "humanize": humanize,
}
