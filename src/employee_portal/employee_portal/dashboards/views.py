from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Optional, TypeVar

import structlog

from ..attendance.service import AttendanceService
from ..core.exceptions import AuthenticationError, DataAccessError
from ..leaves.service import LeaveService
from ..profiles.service import ProfileService, SessionUser
from ..reports.service import WorkReportService
from ..tasks.service import TaskService

log = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class DashboardServices:
    profiles: ProfileService
    leaves: LeaveService
    tasks: TaskService
    reports: WorkReportService
    attendance: AttendanceService


class Dashboard(ABC):
    """One role-specific page: which template, and the data it needs."""

    template: str = ""

    def __init__(self, services: DashboardServices):
        self._services = services

    def _load(self, panel: str, default: T, fetch: Callable[[], T], errors: list[str]) -> T:
        # A failed panel keeps its empty default; the rest of the page still renders.
        try:
            return fetch()
        except DataAccessError as exc:
            log.error("dashboard_fetch_failed", dashboard=type(self).__name__, panel=panel, error=str(exc))
            errors.append(panel)
            return default

    @abstractmethod
    def build(self, *, user: Optional[SessionUser], today: date) -> dict[str, Any]:
        raise NotImplementedError


class ManagerDashboard(Dashboard):
    """Shared by owner and admin; scope comes from ``SessionUser.team_department``."""

    title = ""

    def build(self, *, user: Optional[SessionUser], today: date) -> dict[str, Any]:
        if user is None:
            raise AuthenticationError("Please sign in to continue")
        s = self._services
        dept = user.team_department
        errors: list[str] = []

        pending_leaves = self._load("pending_leaves", [], lambda: list(s.leaves.list_pending(actor=user)), errors)
        recent = self._load("recent_employees", [], lambda: list(s.profiles.recent_employees(actor=user)), errors)
        team = self._load("team_members", [], lambda: list(s.profiles.list_assignable(actor=user)), errors)
        stats = {
            "total_employees": self._load("total_employees", 0, lambda: s.profiles.count_employees(actor=user), errors),
            "pending_leaves": self._load(
                "pending_leaves_count", 0, lambda: s.leaves.count_pending(actor=user), errors
            ),
            "completed_tasks": self._load(
                "completed_tasks",
                0,
                lambda: s.tasks.count_completed_this_month(today=today, department=dept),
                errors,
            ),
        }

        return {
            "title": self.title,
            "stats": stats,
            "pending_leaves": pending_leaves,
            "recent_employees": recent,
            "team_members": team,
            "load_errors": errors,
            **self._extra(user=user, today=today, errors=errors, stats=stats),
        }

    def _extra(self, *, user: SessionUser, today: date, errors: list[str], stats: dict) -> dict[str, Any]:
        return {}


class OwnerDashboard(ManagerDashboard):
    template = "dashboards/owner.html"
    title = "Owner Dashboard"

    def _extra(self, *, user: SessionUser, today: date, errors: list[str], stats: dict) -> dict[str, Any]:
        s = self._services
        stats["attendance_rate"] = self._load(
            "attendance_rate",
            0,
            lambda: s.attendance.monthly_rate(today=today, headcount=stats["total_employees"]),
            errors,
        )
        reports = {
            "attendance_rate": stats["attendance_rate"],
            "task_completion_rate": self._load(
                "task_completion_rate", 0, lambda: s.tasks.completion_rate(today=today), errors
            ),
        }
        return {"reports": reports}


class AdminDashboard(ManagerDashboard):
    template = "dashboards/admin.html"
    title = "Admin Dashboard"

    def _extra(self, *, user: SessionUser, today: date, errors: list[str], stats: dict) -> dict[str, Any]:
        s = self._services
        active_tasks = self._load("active_tasks", [], lambda: list(s.tasks.list_active(actor=user)), errors)
        stats["active_tasks"] = self._load(
            "active_tasks_count", 0, lambda: s.tasks.count_active(department=user.team_department), errors
        )
        return {"active_tasks": active_tasks}


class EmployeeDashboard(Dashboard):
    template = "dashboards/employee.html"

    def build(self, *, user: Optional[SessionUser], today: date) -> dict[str, Any]:
        if user is None:
            raise AuthenticationError("Please sign in to continue")
        s = self._services
        errors: list[str] = []

        attendance_today = self._load(
            "attendance_today", None, lambda: s.attendance.get_today_record(user.id, today), errors
        )
        tasks = self._load("tasks", [], lambda: list(s.tasks.list_mine(user.id)), errors)
        leaves = self._load("leave_history", [], lambda: list(s.leaves.history(user.id)), errors)
        reports = self._load("work_reports", [], lambda: list(s.reports.history(user.id)), errors)

        stats = {
            "checked_in": bool(attendance_today and attendance_today.is_checked_in),
            "pending_leaves": self._load(
                "pending_leaves", 0, lambda: s.leaves.count_pending_for_user(user.id), errors
            ),
            "active_tasks": self._load("active_tasks", 0, lambda: s.tasks.count_active(assignee_id=user.id), errors),
            "completed_tasks": self._load(
                "completed_tasks",
                0,
                lambda: s.tasks.count_completed_this_month(today=today, assignee_id=user.id),
                errors,
            ),
        }

        return {
            "title": f"Welcome back, {user.name}!",
            "stats": stats,
            "attendance_today": attendance_today,
            "tasks": tasks,
            "leave_history": leaves,
            "work_reports": reports,
            "load_errors": errors,
        }


class InvalidRoleDashboard(Dashboard):
    """Shown when the session carries a role no dashboard is bound to."""

    template = "dashboards/invalid_role.html"

    def build(self, *, user: Optional[SessionUser], today: date) -> dict[str, Any]:
        return {"title": "Invalid user role", "load_errors": []}
