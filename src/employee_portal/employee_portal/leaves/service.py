from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import structlog

from ..common.datetime_utils import leave_days, now_local
from ..common.validators import optional_text, require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT, PENDING_LEAVES_LIMIT
from ..core.enums import LeaveStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..profiles.repository import ProfileRepository
from ..profiles.service import SessionUser
from .model import LeaveRequest
from .repository import LeaveRepository

log = structlog.get_logger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, profiles: ProfileRepository):
        self._leaves = leaves
        self._profiles = profiles

    def request_leave(
        self,
        *,
        actor: SessionUser,
        type: str,
        start_date: Optional[date],
        end_date: Optional[date],
        reason: str,
        emergency_contact: str = "",
    ) -> int:
        leave_type = require_non_empty(type, "Leave type")
        if start_date is None or end_date is None:
            raise ValidationError("Start date and end date are required")
        if leave_days(start_date, end_date) <= 0:
            raise ValidationError("End date must be on or after the start date")
        reason = require_non_empty(reason, "Reason")

        leave_id = self._leaves.create(
            user_id=actor.id,
            type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            emergency_contact=optional_text(emergency_contact),
        )
        log.info("leave_requested", leave_id=leave_id, user_id=actor.id, days=leave_days(start_date, end_date))
        return leave_id

    def decide(
        self,
        *,
        actor: SessionUser,
        leave_id: int,
        approved: bool,
        now: Optional[datetime] = None,
    ) -> LeaveStatus:
        """Approve or reject a pending request.

        A request can be resolved once only; a second call raises and leaves
        the stored status untouched.
        """
        if not actor.role.is_manager:
            raise AuthorizationError("You do not have permission to decide leave requests")

        leave = self._leaves.get(int(leave_id))
        if not leave:
            raise ValidationError("Leave request not found")
        if leave.user_id == actor.id:
            raise AuthorizationError("You cannot decide your own leave request")
        if leave.is_resolved:
            raise ValidationError(f"Leave request is already {leave.status.value}")

        if actor.team_department:
            requester = self._profiles.get_by_id(leave.user_id)
            if not requester or requester.department != actor.team_department:
                raise AuthorizationError("This leave request is outside your team")

        status = LeaveStatus.APPROVED if approved else LeaveStatus.REJECTED
        ok = self._leaves.decide(
            leave_id=leave.id,
            status=status,
            approved_by=actor.id,
            approved_at=now or now_local(),
        )
        if not ok:
            # Another session resolved it between our read and the guarded update.
            raise ValidationError("Leave request has already been resolved")

        log.info("leave_decided", leave_id=leave.id, status=status.value, by=actor.id)
        return status

    def approve_leave(self, *, actor: SessionUser, leave_id: int, now: Optional[datetime] = None) -> LeaveStatus:
        return self.decide(actor=actor, leave_id=leave_id, approved=True, now=now)

    def reject_leave(self, *, actor: SessionUser, leave_id: int, now: Optional[datetime] = None) -> LeaveStatus:
        return self.decide(actor=actor, leave_id=leave_id, approved=False, now=now)

    def list_pending(self, *, actor: SessionUser, limit: int = PENDING_LEAVES_LIMIT) -> Sequence[LeaveRequest]:
        if not actor.role.is_manager:
            raise AuthorizationError("You do not have permission to review leave requests")
        return self._leaves.list_pending(department=actor.team_department, limit=limit)

    def count_pending(self, *, actor: SessionUser) -> int:
        if not actor.role.is_manager:
            raise AuthorizationError("You do not have permission to review leave requests")
        return self._leaves.count_pending(department=actor.team_department)

    def count_pending_for_user(self, user_id: int) -> int:
        return self._leaves.count_pending(user_id=int(user_id))

    def history(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[LeaveRequest]:
        return self._leaves.list_for_user(int(user_id), limit=limit)
