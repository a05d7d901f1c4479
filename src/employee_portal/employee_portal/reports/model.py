from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class WorkReport:
    """Daily work report; at most one per (user_id, report_date)."""

    id: int
    user_id: int
    report_date: date
    hours_worked: float
    tasks_completed: str
    achievements: Optional[str] = None
    challenges: Optional[str] = None
    next_day_plan: Optional[str] = None
    created_at: Optional[datetime] = None
