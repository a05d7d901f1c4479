from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

import structlog

from ..common.datetime_utils import month_start
from ..common.stats import percentage
from ..common.validators import optional_text, require_non_empty
from ..core.constants import ACTIVE_TASKS_LIMIT, DEFAULT_HISTORY_LIMIT
from ..core.enums import TaskPriority, TaskStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..profiles.repository import ProfileRepository
from ..profiles.service import SessionUser
from .model import ACTIVE_STATUSES, Task
from .repository import TaskRepository

log = structlog.get_logger(__name__)


class TaskService:
    def __init__(self, tasks: TaskRepository, profiles: ProfileRepository):
        self._tasks = tasks
        self._profiles = profiles

    def assign_task(
        self,
        *,
        actor: SessionUser,
        title: str,
        description: str,
        assignee_id: Optional[int],
        priority: TaskPriority,
        due_date: Optional[date],
        category: str = "",
    ) -> int:
        if not actor.role.is_manager:
            raise AuthorizationError("You do not have permission to assign tasks")

        title = require_non_empty(title, "Title")
        description = require_non_empty(description, "Description")
        if due_date is None:
            raise ValidationError("Due date is required")
        if not assignee_id:
            raise ValidationError("Assignee is required")

        assignee = self._profiles.get_by_id(int(assignee_id))
        if not assignee:
            raise ValidationError("Assignee not found")
        if actor.team_department and assignee.department != actor.team_department:
            raise AuthorizationError("Assignee is outside your team")

        task_id = self._tasks.create(
            title=title,
            description=description,
            assignee_id=assignee.id,
            assigned_by=actor.id,
            priority=priority,
            due_date=due_date,
            category=optional_text(category),
        )
        log.info("task_assigned", task_id=task_id, assignee_id=assignee.id, by=actor.id)
        return task_id

    def _advance(self, *, actor: SessionUser, task_id: int, status: TaskStatus) -> Task:
        task = self._tasks.get(int(task_id))
        if not task:
            raise ValidationError("Task not found")
        if task.assignee_id != actor.id and not actor.role.is_manager:
            raise AuthorizationError("You can only update your own tasks")
        if actor.team_department and task.assignee_id != actor.id:
            assignee = self._profiles.get_by_id(task.assignee_id)
            if not assignee or assignee.department != actor.team_department:
                raise AuthorizationError("This task is outside your team")
        if task.status == status:
            raise ValidationError(f"Task is already {status.value.replace('_', ' ')}")
        if not task.can_move_to(status):
            raise ValidationError(
                f"Task cannot move from {task.status.value.replace('_', ' ')} to {status.value.replace('_', ' ')}"
            )

        if not self._tasks.update_status(task_id=task.id, status=status, expected=task.status):
            raise ValidationError("Task was changed by someone else, please reload")

        log.info("task_status_changed", task_id=task.id, status=status.value, by=actor.id)
        return task

    def start_task(self, *, actor: SessionUser, task_id: int) -> None:
        self._advance(actor=actor, task_id=task_id, status=TaskStatus.IN_PROGRESS)

    def complete_task(self, *, actor: SessionUser, task_id: int) -> None:
        self._advance(actor=actor, task_id=task_id, status=TaskStatus.COMPLETED)

    def list_mine(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[Task]:
        return self._tasks.list_for_assignee(int(user_id), limit=limit)

    def list_active(self, *, actor: SessionUser, limit: int = ACTIVE_TASKS_LIMIT) -> Sequence[Task]:
        return self._tasks.list_active(department=actor.team_department, limit=limit)

    def count_active(self, *, assignee_id: Optional[int] = None, department: Optional[str] = None) -> int:
        return self._tasks.count(statuses=ACTIVE_STATUSES, assignee_id=assignee_id, department=department)

    def count_completed_this_month(
        self,
        *,
        today: date,
        assignee_id: Optional[int] = None,
        department: Optional[str] = None,
    ) -> int:
        return self._tasks.count(
            statuses=(TaskStatus.COMPLETED,),
            assignee_id=assignee_id,
            department=department,
            updated_since=month_start(today),
        )

    def completion_rate(self, *, today: date, department: Optional[str] = None) -> int:
        """Percentage of completed or overdue tasks that were finished by their due date."""
        completed = self._tasks.count(statuses=(TaskStatus.COMPLETED,), department=department)
        on_time = self._tasks.count(statuses=(TaskStatus.COMPLETED,), department=department, on_time=True)
        overdue = self._tasks.count(statuses=ACTIVE_STATUSES, department=department, due_before=today)
        return percentage(on_time, completed + overdue)
