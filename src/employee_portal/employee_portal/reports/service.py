from __future__ import annotations

from datetime import date
from typing import Optional, Sequence, Union

import structlog

from ..common.validators import optional_text, require_half_hours, require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT, MAX_HOURS_PER_DAY
from ..core.exceptions import ValidationError
from ..profiles.service import SessionUser
from .model import WorkReport
from .repository import WorkReportRepository

log = structlog.get_logger(__name__)


class WorkReportService:
    def __init__(self, reports: WorkReportRepository):
        self._reports = reports

    @staticmethod
    def _parse_hours(value: Union[str, float, int, None]) -> float:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError("Hours worked is required")
        try:
            hours = float(value)
        except (TypeError, ValueError):
            raise ValidationError("Hours worked must be a number")
        return require_half_hours(hours, "Hours worked", minimum=0, maximum=MAX_HOURS_PER_DAY)

    def submit_report(
        self,
        *,
        actor: SessionUser,
        report_date: Optional[date],
        hours_worked: Union[str, float, int, None],
        tasks_completed: str,
        achievements: str = "",
        challenges: str = "",
        next_day_plan: str = "",
    ) -> int:
        """Save the day's report; resubmitting the same date replaces it."""

        if report_date is None:
            raise ValidationError("Date is required")
        hours = self._parse_hours(hours_worked)
        tasks_completed = require_non_empty(tasks_completed, "Tasks completed")

        existing = self._reports.get_for_user_and_date(actor.id, report_date)
        report_id = self._reports.upsert(
            user_id=actor.id,
            report_date=report_date,
            hours_worked=hours,
            tasks_completed=tasks_completed,
            achievements=optional_text(achievements),
            challenges=optional_text(challenges),
            next_day_plan=optional_text(next_day_plan),
        )
        log.info(
            "work_report_saved",
            report_id=report_id,
            user_id=actor.id,
            report_date=report_date.isoformat(),
            replaced=existing is not None,
        )
        return report_id

    def history(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[WorkReport]:
        return self._reports.list_for_user(int(user_id), limit=limit)
