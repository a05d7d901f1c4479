from __future__ import annotations

from typing import Optional

from flask import flash


def notify(title: str, description: Optional[str] = None, *, error: bool = False) -> None:
    """Queue a one-line message for the next rendered page."""
    message = f"{title}: {description}" if description else title
    flash(message, "danger" if error else "success")
