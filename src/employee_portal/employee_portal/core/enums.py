from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role; decides the dashboard and which mutations are allowed."""

    OWNER = "owner"
    ADMIN = "admin"
    EMPLOYEE = "employee"

    @property
    def is_manager(self) -> bool:
        return self in {Role.OWNER, Role.ADMIN}


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AttendanceStatus(str, Enum):
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
