from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from ..profiles.service import SessionUser
from ..reports.service import WorkReportService
from .base import BaseForm


class WorkReportForm(BaseForm):
    modal = "report"
    title = "Daily Work Report"
    fields = ("report_date", "hours_worked", "tasks_completed", "achievements", "challenges", "next_day_plan")

    def __init__(self, service: WorkReportService, data: Optional[Mapping[str, Any]] = None):
        super().__init__(data)
        self._service = service

    def defaults(self) -> dict[str, str]:
        return {"report_date": date.today().isoformat()}

    def save(self, *, actor: SessionUser) -> int:
        return self._service.submit_report(
            actor=actor,
            report_date=self.date_value("report_date", "Date"),
            hours_worked=self.data["hours_worked"],
            tasks_completed=self.data["tasks_completed"],
            achievements=self.data["achievements"],
            challenges=self.data["challenges"],
            next_day_plan=self.data["next_day_plan"],
        )
