from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """Identity record: one per login.

    Plain data object; no database access here.
    """

    id: int
    name: str
    email: str
    role: Role
    department: Optional[str]
    join_date: date
    password_hash: str = ""
