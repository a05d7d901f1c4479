from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import TaskPriority, TaskStatus
from .model import Task


class TaskRepository(Protocol):
    def create(
        self,
        *,
        title: str,
        description: str,
        assignee_id: int,
        assigned_by: int,
        priority: TaskPriority,
        due_date: date,
        category: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def get(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

    def list_for_assignee(self, user_id: int, *, limit: int = 30) -> Sequence[Task]:
        raise NotImplementedError

    def list_active(self, *, department: Optional[str] = None, limit: int = 50) -> Sequence[Task]:
        """Pending and in-progress tasks joined with the assignee's name, by due date."""

        raise NotImplementedError

    def count(
        self,
        *,
        statuses: Iterable[TaskStatus],
        assignee_id: Optional[int] = None,
        department: Optional[str] = None,
        updated_since: Optional[date] = None,
        due_before: Optional[date] = None,
        on_time: bool = False,
    ) -> int:
        """Count tasks by status. ``on_time`` keeps tasks last updated on or before their due date."""

        raise NotImplementedError

    def update_status(self, *, task_id: int, status: TaskStatus, expected: TaskStatus) -> bool:
        """Set ``status`` only if the row still has ``expected``."""

        raise NotImplementedError
