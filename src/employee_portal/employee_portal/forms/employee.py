from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..profiles.service import ProfileService, SessionUser
from .base import BaseForm


class AddEmployeeForm(BaseForm):
    modal = "employee"
    title = "Add Employee"
    fields = ("name", "email", "password", "role", "department", "join_date")

    def __init__(self, service: ProfileService, data: Optional[Mapping[str, Any]] = None):
        super().__init__(data)
        self._service = service

    def defaults(self) -> dict[str, str]:
        return {"role": Role.EMPLOYEE.value, "join_date": date.today().isoformat()}

    def save(self, *, actor: SessionUser) -> int:
        try:
            role = Role(self.data["role"])
        except ValueError:
            raise ValidationError("Role is not valid")

        return self._service.add_employee(
            actor=actor,
            name=self.data["name"],
            email=self.data["email"],
            password=self.data["password"],
            role=role,
            department=self.data["department"],
            join_date=self.date_value("join_date", "Join date"),
        )
