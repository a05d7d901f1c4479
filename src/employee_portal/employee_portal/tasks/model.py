from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TaskPriority, TaskStatus

# Allowed forward moves; nothing leaves COMPLETED.
TASK_TRANSITIONS: dict[TaskStatus, frozenset[TaskStatus]] = {
    TaskStatus.PENDING: frozenset({TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED}),
    TaskStatus.IN_PROGRESS: frozenset({TaskStatus.COMPLETED}),
    TaskStatus.COMPLETED: frozenset(),
}

ACTIVE_STATUSES = (TaskStatus.PENDING, TaskStatus.IN_PROGRESS)


@dataclass(frozen=True)
class Task:
    id: int
    title: str
    description: str
    assignee_id: int
    assigned_by: int
    priority: TaskPriority
    status: TaskStatus
    due_date: date
    category: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    assignee_name: Optional[str] = None

    def can_move_to(self, status: TaskStatus) -> bool:
        return status in TASK_TRANSITIONS[self.status]

    @property
    def can_start(self) -> bool:
        return self.can_move_to(TaskStatus.IN_PROGRESS)

    @property
    def can_complete(self) -> bool:
        return self.can_move_to(TaskStatus.COMPLETED)
