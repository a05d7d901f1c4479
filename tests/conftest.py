from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.employee_portal.employee_portal.attendance.model import AttendanceRecord
from src.employee_portal.employee_portal.container import build_services
from src.employee_portal.employee_portal.core.enums import AttendanceStatus, LeaveStatus, Role, TaskStatus
from src.employee_portal.employee_portal.leaves.model import LeaveRequest
from src.employee_portal.employee_portal.profiles.model import Profile
from src.employee_portal.employee_portal.profiles.service import SessionUser
from src.employee_portal.employee_portal.reports.model import WorkReport
from src.employee_portal.employee_portal.tasks.model import Task

FAST_HASH = "pbkdf2:sha256:1000"


class InMemoryProfiles:
    def __init__(self):
        self.rows: dict[int, Profile] = {}
        self._id = 0

    def add(self, *, name, email, role, department=None, join_date=date(2023, 1, 1), password="secret123") -> Profile:
        self._id += 1
        profile = Profile(
            id=self._id,
            name=name,
            email=email,
            role=role,
            department=department,
            join_date=join_date,
            password_hash=generate_password_hash(password, method=FAST_HASH),
        )
        self.rows[profile.id] = profile
        return profile

    def get_by_id(self, profile_id: int) -> Optional[Profile]:
        return self.rows.get(int(profile_id))

    def get_by_email(self, email: str) -> Optional[Profile]:
        return next((p for p in self.rows.values() if p.email == email), None)

    def create(self, *, name, email, password_hash, role, department, join_date) -> int:
        self._id += 1
        self.rows[self._id] = Profile(
            id=self._id,
            name=name,
            email=email,
            role=role,
            department=department,
            join_date=join_date,
            password_hash=password_hash,
        )
        return self._id

    def _employees(self, department):
        return [
            p for p in self.rows.values()
            if p.role == Role.EMPLOYEE and (department is None or p.department == department)
        ]

    def count_employees(self, *, department=None) -> int:
        return len(self._employees(department))

    def list_recent_employees(self, *, department=None, limit=5):
        return sorted(self._employees(department), key=lambda p: p.join_date, reverse=True)[:limit]

    def list_employees(self, *, department=None):
        return sorted(self._employees(department), key=lambda p: p.name)


class InMemoryLeaves:
    def __init__(self, profiles: InMemoryProfiles):
        self.rows: dict[int, LeaveRequest] = {}
        self._profiles = profiles
        self._id = 0

    def create(self, *, user_id, type, start_date, end_date, reason, emergency_contact=None) -> int:
        self._id += 1
        self.rows[self._id] = LeaveRequest(
            id=self._id,
            user_id=user_id,
            type=type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            emergency_contact=emergency_contact,
            created_at=datetime(2024, 1, 10, 8, 0),
        )
        return self._id

    def get(self, leave_id: int) -> Optional[LeaveRequest]:
        return self.rows.get(int(leave_id))

    def _in_department(self, leave: LeaveRequest, department) -> bool:
        if department is None:
            return True
        requester = self._profiles.get_by_id(leave.user_id)
        return bool(requester and requester.department == department)

    def list_pending(self, *, department=None, limit=50):
        items = [
            replace(leave, requester_name=self._profiles.get_by_id(leave.user_id).name)
            for leave in self.rows.values()
            if leave.status == LeaveStatus.PENDING and self._in_department(leave, department)
        ]
        return items[:limit]

    def count_pending(self, *, department=None, user_id=None) -> int:
        return len([
            leave for leave in self.rows.values()
            if leave.status == LeaveStatus.PENDING
            and self._in_department(leave, department)
            and (user_id is None or leave.user_id == user_id)
        ])

    def list_for_user(self, user_id, *, limit=30):
        return [leave for leave in self.rows.values() if leave.user_id == user_id][::-1][:limit]

    def decide(self, *, leave_id, status, approved_by, approved_at) -> bool:
        leave = self.rows.get(int(leave_id))
        if not leave or leave.status != LeaveStatus.PENDING:
            return False
        self.rows[leave.id] = replace(leave, status=status, approved_by=approved_by, approved_at=approved_at)
        return True


class InMemoryTasks:
    def __init__(self, profiles: InMemoryProfiles, clock: datetime):
        self.rows: dict[int, Task] = {}
        self._profiles = profiles
        self.clock = clock
        self._id = 0

    def create(self, *, title, description, assignee_id, assigned_by, priority, due_date, category=None) -> int:
        self._id += 1
        self.rows[self._id] = Task(
            id=self._id,
            title=title,
            description=description,
            assignee_id=assignee_id,
            assigned_by=assigned_by,
            priority=priority,
            status=TaskStatus.PENDING,
            due_date=due_date,
            category=category,
            created_at=self.clock,
            updated_at=self.clock,
        )
        return self._id

    def get(self, task_id: int) -> Optional[Task]:
        return self.rows.get(int(task_id))

    def _in_department(self, task: Task, department) -> bool:
        if department is None:
            return True
        assignee = self._profiles.get_by_id(task.assignee_id)
        return bool(assignee and assignee.department == department)

    def list_for_assignee(self, user_id, *, limit=30):
        items = [t for t in self.rows.values() if t.assignee_id == user_id]
        return sorted(items, key=lambda t: t.due_date)[:limit]

    def list_active(self, *, department=None, limit=50):
        items = [
            replace(t, assignee_name=self._profiles.get_by_id(t.assignee_id).name)
            for t in self.rows.values()
            if t.status != TaskStatus.COMPLETED and self._in_department(t, department)
        ]
        return sorted(items, key=lambda t: t.due_date)[:limit]

    def count(self, *, statuses, assignee_id=None, department=None, updated_since=None,
              due_before=None, on_time=False) -> int:
        statuses = set(statuses)
        return len([
            t for t in self.rows.values()
            if t.status in statuses
            and (assignee_id is None or t.assignee_id == assignee_id)
            and self._in_department(t, department)
            and (updated_since is None or t.updated_at.date() >= updated_since)
            and (due_before is None or t.due_date < due_before)
            and (not on_time or t.updated_at.date() <= t.due_date)
        ])

    def update_status(self, *, task_id, status, expected) -> bool:
        task = self.rows.get(int(task_id))
        if not task or task.status != expected:
            return False
        self.rows[task.id] = replace(task, status=status, updated_at=self.clock)
        return True


class InMemoryReports:
    def __init__(self):
        self.rows: dict[tuple[int, date], WorkReport] = {}
        self._id = 0

    def upsert(self, *, user_id, report_date, hours_worked, tasks_completed,
               achievements=None, challenges=None, next_day_plan=None) -> int:
        existing = self.rows.get((user_id, report_date))
        if existing:
            report_id = existing.id
        else:
            self._id += 1
            report_id = self._id
        self.rows[(user_id, report_date)] = WorkReport(
            id=report_id,
            user_id=user_id,
            report_date=report_date,
            hours_worked=hours_worked,
            tasks_completed=tasks_completed,
            achievements=achievements,
            challenges=challenges,
            next_day_plan=next_day_plan,
        )
        return report_id

    def get_for_user_and_date(self, user_id, report_date) -> Optional[WorkReport]:
        return self.rows.get((user_id, report_date))

    def list_for_user(self, user_id, *, limit=30):
        items = [r for r in self.rows.values() if r.user_id == user_id]
        return sorted(items, key=lambda r: r.report_date, reverse=True)[:limit]


class InMemoryAttendance:
    def __init__(self, profiles: InMemoryProfiles):
        self.rows: dict[tuple[int, date], AttendanceRecord] = {}
        self._profiles = profiles
        self._id = 0

    def get_for_user_and_date(self, user_id, work_date) -> Optional[AttendanceRecord]:
        return self.rows.get((user_id, work_date))

    def list_recent_for_user(self, user_id, *, limit=30):
        items = [r for r in self.rows.values() if r.user_id == user_id]
        return sorted(items, key=lambda r: r.work_date, reverse=True)[:limit]

    def create_checkin(self, *, user_id, work_date, check_in_time) -> int:
        assert (user_id, work_date) not in self.rows, "duplicate attendance row"
        self._id += 1
        self.rows[(user_id, work_date)] = AttendanceRecord(
            id=self._id,
            user_id=user_id,
            work_date=work_date,
            check_in_time=check_in_time,
            check_out_time=None,
            status=AttendanceStatus.CHECKED_IN,
        )
        return self._id

    def _by_id(self, attendance_id):
        return next((k for k, r in self.rows.items() if r.id == attendance_id), None)

    def set_checkout(self, *, attendance_id, check_out_time) -> bool:
        key = self._by_id(attendance_id)
        if key is None or self.rows[key].status != AttendanceStatus.CHECKED_IN:
            return False
        self.rows[key] = replace(self.rows[key], check_out_time=check_out_time, status=AttendanceStatus.CHECKED_OUT)
        return True

    def reopen(self, *, attendance_id) -> bool:
        key = self._by_id(attendance_id)
        if key is None or self.rows[key].status != AttendanceStatus.CHECKED_OUT:
            return False
        self.rows[key] = replace(self.rows[key], check_out_time=None, status=AttendanceStatus.CHECKED_IN)
        return True

    def list_open_before(self, user_id, work_date):
        items = [
            r for r in self.rows.values()
            if r.user_id == user_id and r.work_date < work_date and r.status == AttendanceStatus.CHECKED_IN
        ]
        return sorted(items, key=lambda r: r.work_date)

    def count_days(self, *, since, until, department=None) -> int:
        employees = {p.id for p in self._profiles._employees(department)}
        return len([r for r in self.rows.values() if r.user_id in employees and since <= r.work_date <= until])


class Repos:
    """Seeded in-memory store: one owner, one admin (Development) and three employees."""

    def __init__(self, clock: datetime):
        self.profiles = InMemoryProfiles()
        self.leaves = InMemoryLeaves(self.profiles)
        self.tasks = InMemoryTasks(self.profiles, clock)
        self.reports = InMemoryReports()
        self.attendance = InMemoryAttendance(self.profiles)

        self.owner = self.profiles.add(name="Olivia Owner", email="owner@company.com", role=Role.OWNER,
                                       department="Management", password="owner123")
        self.admin = self.profiles.add(name="Adam Admin", email="admin@company.com", role=Role.ADMIN,
                                       department="Development", password="admin123")
        self.employee = self.profiles.add(name="Erin Employee", email="employee@company.com", role=Role.EMPLOYEE,
                                          department="Development", join_date=date(2023, 6, 1),
                                          password="employee123")
        self.dev2 = self.profiles.add(name="Dan Developer", email="dan@company.com", role=Role.EMPLOYEE,
                                      department="Development", join_date=date(2023, 3, 1))
        self.sales = self.profiles.add(name="Sam Sales", email="sam@company.com", role=Role.EMPLOYEE,
                                       department="Sales", join_date=date(2023, 9, 1))

    def services(self):
        return build_services(
            profiles_repo=self.profiles,
            leaves_repo=self.leaves,
            tasks_repo=self.tasks,
            reports_repo=self.reports,
            attendance_repo=self.attendance,
        )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 15, 9, 0, 0)


@pytest.fixture
def repos(fixed_now) -> Repos:
    return Repos(fixed_now)


@pytest.fixture
def container(repos):
    return repos.services()


@pytest.fixture
def owner(repos) -> SessionUser:
    return SessionUser.from_profile(repos.owner)


@pytest.fixture
def admin(repos) -> SessionUser:
    return SessionUser.from_profile(repos.admin)


@pytest.fixture
def employee(repos) -> SessionUser:
    return SessionUser.from_profile(repos.employee)
