from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

import structlog
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_text, require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, RECENT_EMPLOYEES_LIMIT
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .model import Profile
from .repository import ProfileRepository

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    id: int
    name: str
    email: str
    role: Role
    department: Optional[str]

    @property
    def team_department(self) -> Optional[str]:
        """Department an admin is scoped to; ``None`` means organisation-wide."""
        if self.role == Role.ADMIN and self.department:
            return self.department
        return None

    @classmethod
    def from_profile(cls, profile: Profile) -> "SessionUser":
        return cls(
            id=profile.id,
            name=profile.name,
            email=profile.email,
            role=profile.role,
            department=profile.department,
        )


class AuthService:
    """Use case: authenticate a profile (login)."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def authenticate(self, email: str, password: str) -> SessionUser:
        profile = self._profiles.get_by_email((email or "").strip().lower())
        if not profile:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(profile.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME'
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser.from_profile(profile)

    def resolve(self, user_id: Optional[int]) -> Optional[SessionUser]:
        """Re-read the signed-in profile so role changes apply on the next request."""
        if not user_id:
            return None
        profile = self._profiles.get_by_id(int(user_id))
        return SessionUser.from_profile(profile) if profile else None


class ProfileService:
    """Use case: manage employees (admin/owner)."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def add_employee(
        self,
        *,
        actor: SessionUser,
        name: str,
        email: str,
        password: str,
        role: Role,
        department: str,
        join_date: Optional[date] = None,
    ) -> int:
        if not actor.role.is_manager:
            raise AuthorizationError("You do not have permission to add employees")
        if role == Role.OWNER:
            raise ValidationError("Owner accounts cannot be created here")
        if role == Role.ADMIN and actor.role != Role.OWNER:
            raise AuthorizationError("Only the owner can add admins")

        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        dept = optional_text(department)
        if actor.team_department and dept != actor.team_department:
            raise AuthorizationError("Admins can only add employees to their own department")

        if self._profiles.get_by_email(email):
            raise ValidationError("A profile with this email already exists")

        profile_id = self._profiles.create(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            department=dept,
            join_date=join_date or date.today(),
        )
        log.info("employee_added", profile_id=profile_id, role=role.value, by=actor.id)
        return profile_id

    def list_assignable(self, *, actor: SessionUser) -> Sequence[Profile]:
        if not actor.role.is_manager:
            raise AuthorizationError("You do not have permission to assign tasks")
        return self._profiles.list_employees(department=actor.team_department)

    def count_employees(self, *, actor: SessionUser) -> int:
        return self._profiles.count_employees(department=actor.team_department)

    def recent_employees(self, *, actor: SessionUser, limit: int = RECENT_EMPLOYEES_LIMIT) -> Sequence[Profile]:
        return self._profiles.list_recent_employees(department=actor.team_department, limit=limit)
