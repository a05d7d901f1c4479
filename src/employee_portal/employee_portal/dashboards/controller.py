from __future__ import annotations

from datetime import date
from typing import Optional

import structlog
from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.notify import notify
from ..container import Container
from ..core.enums import Role, TaskPriority
from ..core.exceptions import DataAccessError
from ..forms import (
    FORMS_BY_MODAL,
    LEAVE_TYPES,
    AddEmployeeForm,
    AssignTaskForm,
    BaseForm,
    LeaveRequestForm,
    WorkReportForm,
)
from ..profiles.service import SessionUser
from ..web import current_user, login_required, store_user

log = structlog.get_logger(__name__)


_FORM_SERVICES = {
    LeaveRequestForm.modal: "leave_service",
    WorkReportForm.modal: "report_service",
    AddEmployeeForm.modal: "profile_service",
    AssignTaskForm.modal: "task_service",
}


def build_form(container: Container, modal: str, data=None) -> Optional[BaseForm]:
    form_cls = FORMS_BY_MODAL.get(modal)
    if form_cls is None:
        return None
    return form_cls(getattr(container, _FORM_SERVICES[modal]), data)


def render_dashboard(container: Container, *, form: Optional[BaseForm] = None, status: int = 200):
    """Render the signed-in user's dashboard, optionally with one modal open."""
    user = current_user()
    dashboard = container.dispatcher.for_role(session.get("role"))
    context = dashboard.build(user=user, today=date.today())

    return (
        render_template(
            dashboard.template,
            user=user,
            form=form,
            today=date.today().isoformat(),
            leave_types=LEAVE_TYPES,
            priorities=[p.value for p in TaskPriority],
            roles=[r.value for r in Role if r != Role.OWNER],
            **context,
        ),
        status,
    )


def submit_form(container: Container, form: BaseForm, *, actor: SessionUser, success: str):
    """Save a modal form: redirect on success, re-render it open on failure."""

    def on_success(record_id: int) -> None:
        notify(success)

    try:
        if form.submit(actor=actor, on_success=on_success):
            return redirect(url_for("dashboard"))
    except Exception:
        log.exception("form_submit_failed", modal=form.modal)
        form.error = "System error, please try again"

    return render_dashboard(container, form=form)


def register(app: Flask, container: Container) -> None:
    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        # Re-read the profile so role or department changes apply without re-login.
        try:
            fresh = container.auth_service.resolve(session.get("user_id"))
        except DataAccessError as exc:
            log.warning("session_refresh_failed", user_id=session.get("user_id"), error=str(exc))
        else:
            if fresh is None:
                session.clear()
                flash("Your account no longer exists", "warning")
                return redirect(url_for("login"))
            store_user(fresh)

        form = build_form(container, request.args.get("modal", ""))
        return render_dashboard(container, form=form)
