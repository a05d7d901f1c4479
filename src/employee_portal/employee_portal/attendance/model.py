from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One row per user per work date."""

    id: int
    user_id: int
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    notes: Optional[str] = None

    @property
    def is_checked_in(self) -> bool:
        return self.status == AttendanceStatus.CHECKED_IN
