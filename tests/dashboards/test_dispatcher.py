from __future__ import annotations

import pytest

from src.employee_portal.employee_portal.core.enums import Role
from src.employee_portal.employee_portal.dashboards.views import (
    AdminDashboard,
    EmployeeDashboard,
    InvalidRoleDashboard,
    OwnerDashboard,
)


@pytest.mark.parametrize(
    "role, expected",
    [
        (Role.OWNER, OwnerDashboard),
        (Role.ADMIN, AdminDashboard),
        (Role.EMPLOYEE, EmployeeDashboard),
        ("owner", OwnerDashboard),
        ("admin", AdminDashboard),
        ("employee", EmployeeDashboard),
    ],
)
def test_each_role_gets_its_dashboard(container, role, expected):
    assert type(container.dispatcher.for_role(role)) is expected


@pytest.mark.parametrize("role", ["manager", "", "OWNER", None])
def test_unknown_role_falls_back(container, role):
    assert type(container.dispatcher.for_role(role)) is InvalidRoleDashboard


def test_invalid_role_dashboard_fetches_nothing(container):
    context = container.dispatcher.for_role("intern").build(user=None, today=None)
    assert context == {"title": "Invalid user role", "load_errors": []}
