from __future__ import annotations

from datetime import date

import pytest

from src.employee_portal.employee_portal.core.enums import LeaveStatus, TaskPriority, TaskStatus
from src.employee_portal.employee_portal.core.exceptions import DataAccessError
from src.employee_portal.employee_portal.main import create_app


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


def sign_in(client, email, password):
    return client.post("/", data={"email": email, "password": password})


def test_login_redirects_to_dashboard(client):
    response = sign_in(client, "employee@company.com", "employee123")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/dashboard")
    with client.session_transaction() as session:
        assert session["role"] == "employee"


def test_login_failure_shows_message(client):
    response = sign_in(client, "employee@company.com", "nope")

    assert response.status_code == 200
    assert b"Invalid email or password" in response.data


def test_dashboard_requires_login(client):
    response = client.get("/dashboard")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/")


@pytest.mark.parametrize(
    "email, password, heading",
    [
        ("owner@company.com", "owner123", b"Owner Dashboard"),
        ("admin@company.com", "admin123", b"Admin Dashboard"),
        ("employee@company.com", "employee123", b"Welcome back, Erin Employee!"),
    ],
)
def test_each_role_renders_its_dashboard(client, email, password, heading):
    sign_in(client, email, password)

    response = client.get("/dashboard")

    assert response.status_code == 200
    assert heading in response.data


def test_unknown_role_renders_fallback(client, repos, monkeypatch):
    def unavailable(profile_id):
        raise DataAccessError("Lost connection to MySQL server")

    monkeypatch.setattr(repos.profiles, "get_by_id", unavailable)
    with client.session_transaction() as session:
        session["user_id"] = repos.employee.id
        session["role"] = "intern"

    response = client.get("/dashboard")

    assert response.status_code == 200
    assert b"Invalid user role" in response.data


def test_unknown_role_cannot_act(client, repos):
    with client.session_transaction() as session:
        session["user_id"] = repos.employee.id
        session["role"] = "intern"

    response = client.post("/attendance/toggle")

    assert response.status_code == 403
    assert repos.attendance.rows == {}


def test_deleted_profile_is_signed_out(client):
    with client.session_transaction() as session:
        session["user_id"] = 999
        session["role"] = "employee"

    response = client.get("/dashboard")

    assert response.status_code == 302
    with client.session_transaction() as session:
        assert "user_id" not in session


def test_employee_cannot_approve(client, container, repos, employee):
    dan = container.auth_service.resolve(repos.dev2.id)
    leave_id = container.leave_service.request_leave(
        actor=dan, type="Vacation", start_date=date(2024, 2, 1), end_date=date(2024, 2, 2), reason="Trip"
    )
    sign_in(client, "employee@company.com", "employee123")

    response = client.post(f"/leaves/{leave_id}/approve")

    assert response.status_code == 403
    assert repos.leaves.get(leave_id).status == LeaveStatus.PENDING


def test_leave_request_and_approval_flow(client, repos, employee):
    sign_in(client, "employee@company.com", "employee123")
    response = client.post(
        "/leaves",
        data={"type": "Sick Leave", "start_date": "2024-01-15", "end_date": "2024-01-16", "reason": "Flu"},
    )
    assert response.status_code == 302
    client.get("/logout")

    sign_in(client, "admin@company.com", "admin123")
    page = client.get("/dashboard")
    assert b"Erin Employee" in page.data
    assert b"2 days" in page.data

    response = client.post("/leaves/1/approve", follow_redirects=True)
    assert b"Leave request approved" in response.data
    assert repos.leaves.get(1).status == LeaveStatus.APPROVED

    response = client.post("/leaves/1/reject", follow_redirects=True)
    assert b"already approved" in response.data
    assert repos.leaves.get(1).status == LeaveStatus.APPROVED


def test_invalid_form_reopens_modal_with_values(client, repos):
    sign_in(client, "employee@company.com", "employee123")

    response = client.post(
        "/reports",
        data={"report_date": "2024-01-15", "hours_worked": "30", "tasks_completed": "Refactoring"},
    )

    assert response.status_code == 200
    assert b'id="modal-report" open' in response.data
    assert response.data.count(b"Hours worked must be between 0 and 24") == 1
    assert b"Refactoring" in response.data
    assert repos.reports.rows == {}


def test_modal_opens_from_query(client):
    sign_in(client, "owner@company.com", "owner123")

    response = client.get("/dashboard?modal=employee")

    assert b'id="modal-employee" open' in response.data
    assert b'id="modal-task" open' not in response.data


def test_attendance_toggle(client, repos, employee):
    sign_in(client, "employee@company.com", "employee123")

    client.post("/attendance/toggle")
    record = repos.attendance.get_for_user_and_date(employee.id, date.today())
    assert record.is_checked_in

    response = client.post("/attendance/toggle", follow_redirects=True)
    assert b"Checked out" in response.data
    assert len(repos.attendance.rows) == 1


def test_complete_task_hides_action(client, container, repos, admin, employee):
    task_id = container.task_service.assign_task(
        actor=admin,
        title="Fix login",
        description="Session expires",
        assignee_id=employee.id,
        priority=TaskPriority.HIGH,
        due_date=date(2024, 1, 20),
    )
    sign_in(client, "employee@company.com", "employee123")
    assert f"/tasks/{task_id}/complete".encode() in client.get("/dashboard").data

    response = client.post(f"/tasks/{task_id}/complete", follow_redirects=True)

    assert repos.tasks.get(task_id).status == TaskStatus.COMPLETED
    assert f"/tasks/{task_id}/complete".encode() not in response.data


def test_admin_cannot_complete_task_outside_team(client, container, repos, owner):
    task_id = container.task_service.assign_task(
        actor=owner,
        title="Quarterly forecast",
        description="Update the sales pipeline",
        assignee_id=repos.sales.id,
        priority=TaskPriority.MEDIUM,
        due_date=date(2024, 1, 31),
    )
    sign_in(client, "admin@company.com", "admin123")

    response = client.post(f"/tasks/{task_id}/complete", follow_redirects=True)

    assert b"This task is outside your team" in response.data
    assert repos.tasks.get(task_id).status == TaskStatus.PENDING


def test_owner_sees_system_reports(client):
    sign_in(client, "owner@company.com", "owner123")

    page = client.get("/dashboard").data

    assert b"System reports" in page
    assert b"Attendance rate this month" in page
    assert b"Tasks completed on time" in page
    assert b"Team members" not in page


def test_admin_sees_team_members(client):
    sign_in(client, "admin@company.com", "admin123")

    page = client.get("/dashboard").data

    assert b"Team members" in page
    assert b"Dan Developer" in page
    assert b"dan@company.com" in page
    assert b"Sam Sales" not in page
    assert b"System reports" not in page


def test_admin_adds_employee(client, repos):
    sign_in(client, "admin@company.com", "admin123")

    response = client.post(
        "/employees",
        data={
            "name": "Nina New",
            "email": "nina@company.com",
            "password": "welcome1",
            "role": "employee",
            "department": "Development",
            "join_date": "2024-01-15",
        },
    )

    assert response.status_code == 302
    assert repos.profiles.get_by_email("nina@company.com").department == "Development"


def test_request_id_is_echoed(client):
    response = client.get("/", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
    assert client.get("/").headers["X-Request-ID"]
