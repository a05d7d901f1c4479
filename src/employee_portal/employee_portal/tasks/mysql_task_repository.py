from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import TaskPriority, TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import ColumnRef, ProfileJoin, TableGateway
from .model import ACTIVE_STATUSES, Task
from .repository import TaskRepository

TASK_COLUMNS = (
    "id",
    "title",
    "description",
    "assignee_id",
    "assigned_by",
    "priority",
    "status",
    "due_date",
    "category",
    "created_at",
    "updated_at",
)


def _to_task(row: dict) -> Task:
    return Task(
        id=int(row["id"]),
        title=row["title"],
        description=row["description"],
        assignee_id=int(row["assignee_id"]),
        assigned_by=int(row["assigned_by"]),
        priority=TaskPriority(row["priority"]),
        status=TaskStatus(row["status"]),
        due_date=row["due_date"],
        category=row.get("category"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        assignee_name=row.get("assignee_name"),
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._table = TableGateway(conn_factory, table="tasks", columns=TASK_COLUMNS)

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
        return self._table.insert(
            {
                "title": title,
                "description": description,
                "assignee_id": int(assignee_id),
                "assigned_by": int(assigned_by),
                "priority": priority.value,
                "status": TaskStatus.PENDING.value,
                "due_date": due_date,
                "category": category,
            }
        )

    def get(self, task_id: int) -> Optional[Task]:
        row = self._table.get(int(task_id))
        return _to_task(row) if row else None

    def list_for_assignee(self, user_id: int, *, limit: int = 30) -> Sequence[Task]:
        rows = self._table.list(filters={"assignee_id": int(user_id)}, order_by="due_date", limit=limit)
        return [_to_task(r) for r in rows]

    def list_active(self, *, department: Optional[str] = None, limit: int = 50) -> Sequence[Task]:
        rows = self._table.list(
            filters={"status__in": [s.value for s in ACTIVE_STATUSES]},
            order_by="due_date",
            limit=limit,
            join=ProfileJoin("assignee_id", alias="assignee_name", department=department),
        )
        return [_to_task(r) for r in rows]

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
        filters: dict = {"status__in": [s.value for s in statuses]}
        if assignee_id is not None:
            filters["assignee_id"] = int(assignee_id)
        if updated_since is not None:
            filters["updated_at__gte"] = updated_since
        if due_before is not None:
            filters["due_date__lt"] = due_before
        if on_time:
            filters["updated_at__date__lte"] = ColumnRef("due_date")
        join = ProfileJoin("assignee_id", department=department) if department else None
        return self._table.count(filters=filters, join=join)

    def update_status(self, *, task_id: int, status: TaskStatus, expected: TaskStatus) -> bool:
        return self._table.update_by_id(
            int(task_id),
            {"status": status.value},
            where={"status": expected.value},
        )
