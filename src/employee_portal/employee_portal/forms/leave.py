from __future__ import annotations

from typing import Any, Mapping, Optional

from ..common.datetime_utils import leave_days
from ..core.exceptions import ValidationError
from ..leaves.service import LeaveService
from ..profiles.service import SessionUser
from .base import BaseForm

LEAVE_TYPES = ("Sick Leave", "Vacation", "Personal", "Emergency", "Maternity/Paternity")


class LeaveRequestForm(BaseForm):
    modal = "leave"
    title = "Request Leave"
    fields = ("type", "start_date", "end_date", "reason", "emergency_contact")

    def __init__(self, service: LeaveService, data: Optional[Mapping[str, Any]] = None):
        super().__init__(data)
        self._service = service

    @property
    def days(self) -> int:
        """Day count shown under the date pickers; 0 until both dates parse."""
        try:
            start = self.date_value("start_date", "Start date")
            end = self.date_value("end_date", "End date")
        except ValidationError:
            return 0
        if not start or not end:
            return 0
        return leave_days(start, end)

    def save(self, *, actor: SessionUser) -> int:
        return self._service.request_leave(
            actor=actor,
            type=self.data["type"],
            start_date=self.date_value("start_date", "Start date"),
            end_date=self.date_value("end_date", "End date"),
            reason=self.data["reason"],
            emergency_contact=self.data["emergency_contact"],
        )
