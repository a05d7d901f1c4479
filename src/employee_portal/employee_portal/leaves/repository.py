from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        type: str,
        start_date: date,
        end_date: date,
        reason: str,
        emergency_contact: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def get(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_pending(self, *, department: Optional[str] = None, limit: int = 50) -> Sequence[LeaveRequest]:
        """Pending requests joined with the requester's name, oldest first."""

        raise NotImplementedError

    def count_pending(self, *, department: Optional[str] = None, user_id: Optional[int] = None) -> int:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, limit: int = 30) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        approved_by: int,
        approved_at: datetime,
    ) -> bool:
        """Resolve a request that is still pending; ``False`` when nothing changed."""

        raise NotImplementedError
