from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import TableGateway
from .model import WorkReport
from .repository import WorkReportRepository

REPORT_COLUMNS = (
    "id",
    "user_id",
    "report_date",
    "hours_worked",
    "tasks_completed",
    "achievements",
    "challenges",
    "next_day_plan",
    "created_at",
)
_REPLACEABLE = ("hours_worked", "tasks_completed", "achievements", "challenges", "next_day_plan")


def _to_report(row: dict) -> WorkReport:
    return WorkReport(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        report_date=row["report_date"],
        hours_worked=float(row["hours_worked"]),
        tasks_completed=row["tasks_completed"],
        achievements=row.get("achievements"),
        challenges=row.get("challenges"),
        next_day_plan=row.get("next_day_plan"),
        created_at=row.get("created_at"),
    )


class MySQLWorkReportRepository(WorkReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._table = TableGateway(conn_factory, table="work_reports", columns=REPORT_COLUMNS)

    def upsert(
        self,
        *,
        user_id: int,
        report_date: date,
        hours_worked: float,
        tasks_completed: str,
        achievements: Optional[str] = None,
        challenges: Optional[str] = None,
        next_day_plan: Optional[str] = None,
    ) -> int:
        return self._table.upsert(
            {
                "user_id": int(user_id),
                "report_date": report_date,
                "hours_worked": hours_worked,
                "tasks_completed": tasks_completed,
                "achievements": achievements,
                "challenges": challenges,
                "next_day_plan": next_day_plan,
            },
            update_columns=_REPLACEABLE,
        )

    def get_for_user_and_date(self, user_id: int, report_date: date) -> Optional[WorkReport]:
        rows = self._table.list(filters={"user_id": int(user_id), "report_date": report_date}, limit=1)
        return _to_report(rows[0]) if rows else None

    def list_for_user(self, user_id: int, *, limit: int = 30) -> Sequence[WorkReport]:
        rows = self._table.list(
            filters={"user_id": int(user_id)},
            order_by="report_date",
            descending=True,
            limit=limit,
        )
        return [_to_report(r) for r in rows]
