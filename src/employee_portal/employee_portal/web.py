from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import flash, redirect, render_template, session, url_for

from .core.enums import Role
from .profiles.service import SessionUser


def store_user(user: SessionUser) -> None:
    session["user_id"] = user.id
    session["name"] = user.name
    session["email"] = user.email
    session["role"] = user.role.value
    session["department"] = user.department


def current_user() -> Optional[SessionUser]:
    """Signed-in user from the session, or ``None`` (also for an unknown role)."""
    if "user_id" not in session:
        return None
    try:
        role = Role(session.get("role"))
    except ValueError:
        return None
    return SessionUser(
        id=int(session["user_id"]),
        name=session.get("name") or "",
        email=session.get("email") or "",
        role=role,
        department=session.get("department"),
    )


def forbidden():
    current = {"name": session.get("name"), "role": session.get("role")}
    return render_template("403.html", current_user=current), 403


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            flash("Please sign in to continue", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def manager_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return redirect(url_for("login"))
        user = current_user()
        if user is None or not user.role.is_manager:
            return forbidden()
        return view(*args, **kwargs)

    return wrapper


def member_required(view):
    """Signed in with a role the portal knows; actions need a real actor."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            flash("Please sign in to continue", "warning")
            return redirect(url_for("login"))
        if current_user() is None:
            return forbidden()
        return view(*args, **kwargs)

    return wrapper
