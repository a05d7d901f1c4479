from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_recent_for_user(self, user_id: int, *, limit: int = 30) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(self, *, user_id: int, work_date: date, check_in_time: datetime) -> int:
        raise NotImplementedError

    def set_checkout(self, *, attendance_id: int, check_out_time: Optional[datetime]) -> bool:
        """Close a checked-in record; ``False`` if it was not checked in."""

        raise NotImplementedError

    def reopen(self, *, attendance_id: int) -> bool:
        """Check a checked-out record back in, clearing its check-out time."""

        raise NotImplementedError

    def list_open_before(self, user_id: int, work_date: date) -> Sequence[AttendanceRecord]:
        """Records still checked in from days before ``work_date``."""

        raise NotImplementedError

    def count_days(self, *, since: date, until: date, department: Optional[str] = None) -> int:
        """Employee attendance rows with ``since <= work_date <= until``."""

        raise NotImplementedError
