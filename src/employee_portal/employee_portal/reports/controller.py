from __future__ import annotations

from flask import Flask, request

from ..container import Container
from ..dashboards.controller import submit_form
from ..forms import WorkReportForm
from ..web import current_user, member_required


def register(app: Flask, container: Container) -> None:
    @app.route("/reports", methods=["POST"], endpoint="submit_report")
    @member_required
    def submit_report():
        form = WorkReportForm(container.report_service, request.form)
        return submit_form(container, form, actor=current_user(), success="Work report submitted")
