from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import ProfileJoin, TableGateway
from .model import AttendanceRecord
from .repository import AttendanceRepository

ATTENDANCE_COLUMNS = ("id", "user_id", "work_date", "check_in_time", "check_out_time", "status", "notes")


def _to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        work_date=row["work_date"],
        check_in_time=row.get("check_in_time"),
        check_out_time=row.get("check_out_time"),
        status=AttendanceStatus(row["status"]),
        notes=row.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._table = TableGateway(conn_factory, table="attendance", columns=ATTENDANCE_COLUMNS)

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        rows = self._table.list(filters={"user_id": int(user_id), "work_date": work_date}, limit=1)
        return _to_record(rows[0]) if rows else None

    def list_recent_for_user(self, user_id: int, *, limit: int = 30) -> Sequence[AttendanceRecord]:
        rows = self._table.list(
            filters={"user_id": int(user_id)},
            order_by="work_date",
            descending=True,
            limit=limit,
        )
        return [_to_record(r) for r in rows]

    def create_checkin(self, *, user_id: int, work_date: date, check_in_time: datetime) -> int:
        return self._table.insert(
            {
                "user_id": int(user_id),
                "work_date": work_date,
                "check_in_time": check_in_time,
                "status": AttendanceStatus.CHECKED_IN.value,
            }
        )

    def set_checkout(self, *, attendance_id: int, check_out_time: Optional[datetime]) -> bool:
        return self._table.update_by_id(
            int(attendance_id),
            {"check_out_time": check_out_time, "status": AttendanceStatus.CHECKED_OUT.value},
            where={"status": AttendanceStatus.CHECKED_IN.value},
        )

    def reopen(self, *, attendance_id: int) -> bool:
        return self._table.update_by_id(
            int(attendance_id),
            {"check_out_time": None, "status": AttendanceStatus.CHECKED_IN.value},
            where={"status": AttendanceStatus.CHECKED_OUT.value},
        )

    def list_open_before(self, user_id: int, work_date: date) -> Sequence[AttendanceRecord]:
        rows = self._table.list(
            filters={
                "user_id": int(user_id),
                "work_date__lt": work_date,
                "status": AttendanceStatus.CHECKED_IN.value,
            },
            order_by="work_date",
        )
        return [_to_record(r) for r in rows]

    def count_days(self, *, since: date, until: date, department: Optional[str] = None) -> int:
        return self._table.count(
            filters={"work_date__gte": since, "work_date__lte": until},
            join=ProfileJoin("user_id", department=department, role=Role.EMPLOYEE.value),
        )
