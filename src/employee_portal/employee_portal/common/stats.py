from __future__ import annotations


def percentage(part: int, whole: int) -> int:
    """Whole-number share of ``part`` in ``whole``; 0 for an empty whole, capped at 100."""
    if whole <= 0:
        return 0
    return round(100 * min(part, whole) / whole)
