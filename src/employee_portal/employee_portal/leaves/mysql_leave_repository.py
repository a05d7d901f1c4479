from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import ProfileJoin, TableGateway
from .model import LeaveRequest
from .repository import LeaveRepository

LEAVE_COLUMNS = (
    "id",
    "user_id",
    "type",
    "start_date",
    "end_date",
    "reason",
    "emergency_contact",
    "status",
    "approved_by",
    "approved_at",
    "created_at",
)


def _to_leave(row: dict) -> LeaveRequest:
    return LeaveRequest(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        type=row["type"],
        start_date=row["start_date"],
        end_date=row["end_date"],
        reason=row["reason"],
        status=LeaveStatus(row["status"]),
        emergency_contact=row.get("emergency_contact"),
        approved_by=row.get("approved_by"),
        approved_at=row.get("approved_at"),
        created_at=row.get("created_at"),
        requester_name=row.get("requester_name"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._table = TableGateway(conn_factory, table="leave_requests", columns=LEAVE_COLUMNS)

    def create(
        self,
        *,
        user_id: int,
        type: str,
        start_date: date,
        end_date: date,
        reason: str,
        emergency_contact: Optional[str] = None,
    ) -> int:
        return self._table.insert(
            {
                "user_id": int(user_id),
                "type": type,
                "start_date": start_date,
                "end_date": end_date,
                "reason": reason,
                "emergency_contact": emergency_contact,
                "status": LeaveStatus.PENDING.value,
            }
        )

    def get(self, leave_id: int) -> Optional[LeaveRequest]:
        row = self._table.get(int(leave_id))
        return _to_leave(row) if row else None

    def list_pending(self, *, department: Optional[str] = None, limit: int = 50) -> Sequence[LeaveRequest]:
        rows = self._table.list(
            filters={"status": LeaveStatus.PENDING.value},
            order_by="created_at",
            limit=limit,
            join=ProfileJoin("user_id", alias="requester_name", department=department),
        )
        return [_to_leave(r) for r in rows]

    def count_pending(self, *, department: Optional[str] = None, user_id: Optional[int] = None) -> int:
        filters: dict = {"status": LeaveStatus.PENDING.value}
        if user_id is not None:
            filters["user_id"] = int(user_id)
        join = ProfileJoin("user_id", department=department) if department else None
        return self._table.count(filters=filters, join=join)

    def list_for_user(self, user_id: int, *, limit: int = 30) -> Sequence[LeaveRequest]:
        rows = self._table.list(
            filters={"user_id": int(user_id)},
            order_by="start_date",
            descending=True,
            limit=limit,
        )
        return [_to_leave(r) for r in rows]

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        approved_by: int,
        approved_at: datetime,
    ) -> bool:
        return self._table.update_by_id(
            int(leave_id),
            {"status": status.value, "approved_by": int(approved_by), "approved_at": approved_at},
            where={"status": LeaveStatus.PENDING.value},
        )
