from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Profile


class ProfileRepository(Protocol):
    """Repository interface for profiles.

    Services depend on this protocol, never on a concrete database.
    """

    def get_by_id(self, profile_id: int) -> Optional[Profile]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Profile]:
        raise NotImplementedError

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
        raise NotImplementedError

    def count_employees(self, *, department: Optional[str] = None) -> int:
        raise NotImplementedError

    def list_recent_employees(self, *, department: Optional[str] = None, limit: int = 5) -> Sequence[Profile]:
        """Employees ordered by join date, newest first."""

        raise NotImplementedError

    def list_employees(self, *, department: Optional[str] = None) -> Sequence[Profile]:
        raise NotImplementedError
