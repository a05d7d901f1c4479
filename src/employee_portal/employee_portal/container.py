from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .dashboards.dispatcher import DashboardDispatcher
from .dashboards.views import DashboardServices
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.service import AuthService, ProfileService
from .reports.mysql_report_repository import MySQLWorkReportRepository
from .reports.service import WorkReportService
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.service import TaskService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    profile_service: ProfileService
    leave_service: LeaveService
    task_service: TaskService
    report_service: WorkReportService
    attendance_service: AttendanceService

    dispatcher: DashboardDispatcher


def build_services(*, profiles_repo, leaves_repo, tasks_repo, reports_repo, attendance_repo) -> Container:
    """Wire services over any set of repositories (MySQL or in-memory)."""
    auth_service = AuthService(profiles_repo)
    profile_service = ProfileService(profiles_repo)
    leave_service = LeaveService(leaves_repo, profiles_repo)
    task_service = TaskService(tasks_repo, profiles_repo)
    report_service = WorkReportService(reports_repo)
    attendance_service = AttendanceService(attendance_repo)

    dispatcher = DashboardDispatcher(
        DashboardServices(
            profiles=profile_service,
            leaves=leave_service,
            tasks=task_service,
            reports=report_service,
            attendance=attendance_service,
        )
    )

    return Container(
        auth_service=auth_service,
        profile_service=profile_service,
        leave_service=leave_service,
        task_service=task_service,
        report_service=report_service,
        attendance_service=attendance_service,
        dispatcher=dispatcher,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))

    return build_services(
        profiles_repo=MySQLProfileRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        tasks_repo=MySQLTaskRepository(conn),
        reports_repo=MySQLWorkReportRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
    )
