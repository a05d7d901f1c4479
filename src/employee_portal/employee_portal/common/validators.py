from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: Optional[str]) -> str:
    email = require_non_empty(value, "Email").lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Email is not valid")
    return email


def optional_text(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None


def require_half_hours(value: float, field_name: str, *, minimum: float, maximum: float) -> float:
    if value < minimum or value > maximum:
        raise ValidationError(f"{field_name} must be between {minimum:g} and {maximum:g}")
    if not float(value * 2).is_integer():
        raise ValidationError(f"{field_name} must be in steps of 0.5")
    return value
