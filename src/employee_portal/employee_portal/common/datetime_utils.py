from __future__ import annotations

import math
from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_start(today: date) -> date:
    return today.replace(day=1)


def leave_days(start_date: date, end_date: date) -> int:
    """Inclusive number of calendar days covered by a leave request.

    Dates are compared as calendar days (timezone-naive), so a one-day leave
    counts as 1. A range ending before it starts counts as 0.
    """
    if isinstance(start_date, datetime):
        start_date = start_date.date()
    if isinstance(end_date, datetime):
        end_date = end_date.date()

    seconds = (end_date - start_date).total_seconds()
    days = math.ceil(seconds / 86400) + 1
    return days if days > 0 else 0


def working_days(start: date, end: date) -> int:
    """Monday to Friday days in ``start``..``end`` inclusive."""
    if end < start:
        return 0
    full_weeks, extra = divmod((end - start).days + 1, 7)
    days = full_weeks * 5
    for offset in range(extra):
        if (start.weekday() + offset) % 7 < 5:
            days += 1
    return days
