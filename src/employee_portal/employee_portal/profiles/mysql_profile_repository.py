from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import TableGateway
from .model import Profile
from .repository import ProfileRepository

PROFILE_COLUMNS = ("id", "name", "email", "password_hash", "role", "department", "join_date", "created_at")


def _to_profile(row: dict) -> Profile:
    return Profile(
        id=int(row["id"]),
        name=row["name"],
        email=row["email"],
        role=Role(row["role"]),
        department=row.get("department"),
        join_date=row["join_date"],
        password_hash=row.get("password_hash") or "",
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._table = TableGateway(conn_factory, table="profiles", columns=PROFILE_COLUMNS)

    @staticmethod
    def _employee_filters(department: Optional[str]) -> dict:
        filters = {"role": Role.EMPLOYEE.value}
        if department:
            filters["department"] = department
        return filters

    def get_by_id(self, profile_id: int) -> Optional[Profile]:
        row = self._table.get(int(profile_id))
        return _to_profile(row) if row else None

    def get_by_email(self, email: str) -> Optional[Profile]:
        rows = self._table.list(filters={"email": email}, limit=1)
        return _to_profile(rows[0]) if rows else None

    def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        department: Optional[str],
        join_date: date,
    ) -> int:
        return self._table.insert(
            {
                "name": name,
                "email": email,
                "password_hash": password_hash,
                "role": role.value,
                "department": department,
                "join_date": join_date,
            }
        )

    def count_employees(self, *, department: Optional[str] = None) -> int:
        return self._table.count(filters=self._employee_filters(department))

    def list_recent_employees(self, *, department: Optional[str] = None, limit: int = 5) -> Sequence[Profile]:
        rows = self._table.list(
            filters=self._employee_filters(department),
            order_by="join_date",
            descending=True,
            limit=limit,
        )
        return [_to_profile(r) for r in rows]

    def list_employees(self, *, department: Optional[str] = None) -> Sequence[Profile]:
        rows = self._table.list(filters=self._employee_filters(department), order_by="name")
        return [_to_profile(r) for r in rows]
