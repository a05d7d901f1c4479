from __future__ import annotations

from datetime import date

import pytest

from src.employee_portal.employee_portal.core.enums import Role
from src.employee_portal.employee_portal.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)


def test_login_with_valid_credentials(container, repos):
    user = container.auth_service.authenticate(" Admin@Company.com ", "admin123")

    assert user.id == repos.admin.id
    assert user.role == Role.ADMIN
    assert user.team_department == "Development"


@pytest.mark.parametrize("email, password", [("admin@company.com", "wrong"), ("ghost@company.com", "admin123")])
def test_login_rejects_bad_credentials(container, email, password):
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        container.auth_service.authenticate(email, password)


def test_placeholder_hash_never_matches(container, repos):
    repos.profiles.create(
        name="Seeded", email="seed@company.com", password_hash="CHANGE_ME",
        role=Role.EMPLOYEE, department=None, join_date=date(2024, 1, 1),
    )

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("seed@company.com", "CHANGE_ME")


def test_resolve_missing_profile(container):
    assert container.auth_service.resolve(None) is None
    assert container.auth_service.resolve(999) is None


def test_owner_scope_is_organisation_wide(owner):
    assert owner.team_department is None


def test_admin_adds_employee_to_own_department(container, repos, admin):
    new_id = container.profile_service.add_employee(
        actor=admin,
        name="Nina New",
        email="Nina@Company.com",
        password="welcome1",
        role=Role.EMPLOYEE,
        department="Development",
        join_date=date(2024, 1, 15),
    )

    profile = repos.profiles.get_by_id(new_id)
    assert profile.email == "nina@company.com"
    assert profile.password_hash != "welcome1"
    assert container.auth_service.authenticate("nina@company.com", "welcome1").id == new_id
    assert container.profile_service.count_employees(actor=admin) == 3


def test_admin_cannot_add_to_other_department(container, admin):
    with pytest.raises(AuthorizationError):
        container.profile_service.add_employee(
            actor=admin, name="X", email="x@company.com", password="secret1", role=Role.EMPLOYEE, department="Sales"
        )


def test_only_owner_adds_admins(container, repos, owner, admin):
    with pytest.raises(AuthorizationError):
        container.profile_service.add_employee(
            actor=admin, name="X", email="x@company.com", password="secret1", role=Role.ADMIN, department="Development"
        )

    new_id = container.profile_service.add_employee(
        actor=owner, name="X", email="x@company.com", password="secret1", role=Role.ADMIN, department="Sales"
    )
    assert repos.profiles.get_by_id(new_id).role == Role.ADMIN


def test_nobody_creates_owners(container, owner):
    with pytest.raises(ValidationError):
        container.profile_service.add_employee(
            actor=owner, name="X", email="x@company.com", password="secret1", role=Role.OWNER, department=""
        )


def test_employee_cannot_add(container, employee):
    with pytest.raises(AuthorizationError):
        container.profile_service.add_employee(
            actor=employee, name="X", email="x@company.com", password="secret1", role=Role.EMPLOYEE, department=""
        )


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"name": ""}, "Name is required"),
        ({"email": "nope"}, "Email is not valid"),
        ({"password": "12345"}, "at least 6 characters"),
        ({"email": "employee@company.com"}, "already exists"),
    ],
)
def test_add_employee_validation(container, owner, overrides, message):
    values = dict(name="Nina", email="nina@company.com", password="welcome1", role=Role.EMPLOYEE, department="Sales")
    values.update(overrides)

    with pytest.raises(ValidationError, match=message):
        container.profile_service.add_employee(actor=owner, **values)
