from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.enums import TaskPriority
from ..core.exceptions import ValidationError
from ..profiles.service import SessionUser
from ..tasks.service import TaskService
from .base import BaseForm


class AssignTaskForm(BaseForm):
    modal = "task"
    title = "Assign Task"
    fields = ("title", "description", "assignee_id", "priority", "due_date", "category")

    def __init__(self, service: TaskService, data: Optional[Mapping[str, Any]] = None):
        super().__init__(data)
        self._service = service

    def defaults(self) -> dict[str, str]:
        return {"priority": TaskPriority.MEDIUM.value}

    def save(self, *, actor: SessionUser) -> int:
        try:
            priority = TaskPriority(self.data["priority"])
        except ValueError:
            raise ValidationError("Priority is not valid")
        try:
            assignee_id = int(self.data["assignee_id"] or 0)
        except ValueError:
            raise ValidationError("Assignee is not valid")

        return self._service.assign_task(
            actor=actor,
            title=self.data["title"],
            description=self.data["description"],
            assignee_id=assignee_id,
            priority=priority,
            due_date=self.date_value("due_date", "Due date"),
            category=self.data["category"],
        )
