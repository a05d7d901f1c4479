from __future__ import annotations

import structlog
from flask import Flask, redirect, request, url_for

from ..common.notify import notify
from ..container import Container
from ..core.exceptions import AuthorizationError, DataAccessError, ValidationError
from ..dashboards.controller import submit_form
from ..forms import LeaveRequestForm
from ..web import current_user, member_required, manager_required

log = structlog.get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    def _decide(leave_id: int, approved: bool):
        try:
            status = container.leave_service.decide(actor=current_user(), leave_id=int(leave_id), approved=approved)
            notify(f"Leave request {status.value}")
        except (ValidationError, AuthorizationError, DataAccessError) as e:
            notify("Error", str(e), error=True)
        except Exception:
            log.exception("leave_decision_failed", leave_id=leave_id)
            notify("Error", "System error while updating the leave request", error=True)
        return redirect(url_for("dashboard"))

    @app.route("/leaves", methods=["POST"], endpoint="request_leave")
    @member_required
    def request_leave():
        form = LeaveRequestForm(container.leave_service, request.form)
        return submit_form(container, form, actor=current_user(), success="Leave request submitted")

    @app.route("/leaves/<int:leave_id>/approve", methods=["POST"], endpoint="approve_leave")
    @manager_required
    def approve_leave(leave_id: int):
        return _decide(leave_id, True)

    @app.route("/leaves/<int:leave_id>/reject", methods=["POST"], endpoint="reject_leave")
    @manager_required
    def reject_leave(leave_id: int):
        return _decide(leave_id, False)
