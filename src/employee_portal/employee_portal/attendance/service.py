from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import structlog

from ..common.datetime_utils import month_start, now_local, working_days
from ..common.stats import percentage
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceRecord
from .repository import AttendanceRepository

log = structlog.get_logger(__name__)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def _close_stale(self, user_id: int, today: date) -> None:
        # A check-in left open on an earlier day is closed without a check-out time.
        for record in self._attendance.list_open_before(user_id, today):
            if self._attendance.set_checkout(attendance_id=record.id, check_out_time=None):
                log.warning("stale_checkin_closed", user_id=user_id, work_date=record.work_date.isoformat())

    def check_in(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceStatus:
        now = now or now_local()
        today = now.date()

        self._close_stale(user_id, today)
        record = self._attendance.get_for_user_and_date(user_id, today)
        if record is None:
            self._attendance.create_checkin(user_id=user_id, work_date=today, check_in_time=now)
        elif record.is_checked_in:
            raise ValidationError("You are already checked in")
        elif not self._attendance.reopen(attendance_id=record.id):
            raise ValidationError("Attendance changed in another session, please reload")

        log.info("checked_in", user_id=user_id, work_date=today.isoformat())
        return AttendanceStatus.CHECKED_IN

    def check_out(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceStatus:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if record is None or not record.is_checked_in:
            raise ValidationError("You have not checked in today")
        if not self._attendance.set_checkout(attendance_id=record.id, check_out_time=now):
            raise ValidationError("Attendance changed in another session, please reload")

        log.info("checked_out", user_id=user_id, work_date=today.isoformat())
        return AttendanceStatus.CHECKED_OUT

    def toggle(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceStatus:
        """Check in if not currently checked in for today, otherwise check out."""
        now = now or now_local()
        record = self._attendance.get_for_user_and_date(user_id, now.date())
        if record is not None and record.is_checked_in:
            return self.check_out(user_id, now=now)
        return self.check_in(user_id, now=now)

    def get_today_record(self, user_id: int, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(user_id, today)

    def history(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.list_recent_for_user(user_id, limit=limit)

    def monthly_rate(self, *, today: date, headcount: int, department: Optional[str] = None) -> int:
        """Month-to-date attendance: days attended over headcount times working days so far."""
        start = month_start(today)
        attended = self._attendance.count_days(since=start, until=today, department=department)
        return percentage(attended, headcount * working_days(start, today))
