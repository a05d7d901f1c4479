from __future__ import annotations

import structlog
from flask import Flask, redirect, url_for

from ..common.notify import notify
from ..container import Container
from ..core.enums import AttendanceStatus
from ..core.exceptions import DataAccessError, ValidationError
from ..web import current_user, member_required

log = structlog.get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/attendance/toggle", methods=["POST"], endpoint="toggle_attendance")
    @member_required
    def toggle_attendance():
        user = current_user()
        try:
            status = container.attendance_service.toggle(user.id)
            if status == AttendanceStatus.CHECKED_IN:
                notify("Checked in", "Have a productive day")
            else:
                notify("Checked out", "See you tomorrow")
        except (ValidationError, DataAccessError) as e:
            notify("Error", str(e), error=True)
        except Exception:
            log.exception("attendance_toggle_failed", user_id=user.id)
            notify("Error", "System error while recording attendance", error=True)
        return redirect(url_for("dashboard"))
