from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import WorkReport


class WorkReportRepository(Protocol):
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
        """Insert, or replace the existing report for the same user and date."""

        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, report_date: date) -> Optional[WorkReport]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, limit: int = 30) -> Sequence[WorkReport]:
        raise NotImplementedError
