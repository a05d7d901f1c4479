from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import leave_days
from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    id: int
    user_id: int
    type: str
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    emergency_contact: Optional[str] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    # Filled when listed with a join on profiles.
    requester_name: Optional[str] = None

    @property
    def days(self) -> int:
        return leave_days(self.start_date, self.end_date)

    @property
    def is_resolved(self) -> bool:
        return self.status != LeaveStatus.PENDING
