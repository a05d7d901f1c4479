from __future__ import annotations

import structlog
from flask import Flask, redirect, request, url_for

from ..common.notify import notify
from ..container import Container
from ..core.exceptions import AuthorizationError, DataAccessError, ValidationError
from ..dashboards.controller import submit_form
from ..forms import AssignTaskForm
from ..web import current_user, member_required, manager_required

log = structlog.get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/tasks", methods=["POST"], endpoint="assign_task")
    @manager_required
    def assign_task():
        form = AssignTaskForm(container.task_service, request.form)
        return submit_form(container, form, actor=current_user(), success="Task assigned")

    @app.route("/tasks/<int:task_id>/start", methods=["POST"], endpoint="start_task")
    @member_required
    def start_task(task_id: int):
        try:
            container.task_service.start_task(actor=current_user(), task_id=task_id)
            notify("Task started")
        except (ValidationError, AuthorizationError, DataAccessError) as e:
            notify("Error", str(e), error=True)
        except Exception:
            log.exception("task_update_failed", task_id=task_id)
            notify("Error", "System error while updating the task", error=True)
        return redirect(url_for("dashboard"))

    @app.route("/tasks/<int:task_id>/complete", methods=["POST"], endpoint="complete_task")
    @member_required
    def complete_task(task_id: int):
        try:
            container.task_service.complete_task(actor=current_user(), task_id=task_id)
            notify("Task marked as completed")
        except (ValidationError, AuthorizationError, DataAccessError) as e:
            notify("Error", str(e), error=True)
        except Exception:
            log.exception("task_update_failed", task_id=task_id)
            notify("Error", "System error while updating the task", error=True)
        return redirect(url_for("dashboard"))
