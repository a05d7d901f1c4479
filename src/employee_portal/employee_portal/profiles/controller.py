from __future__ import annotations

from datetime import timedelta

import structlog
from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.notify import notify
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import AuthenticationError, DataAccessError
from ..dashboards.controller import submit_form
from ..forms import AddEmployeeForm
from ..web import current_user, manager_required, store_user

log = structlog.get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if "user_id" in session:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            remember = request.form.get("remember_me")

            try:
                user = container.auth_service.authenticate(email, password)

                session.permanent = bool(remember)
                store_user(user)

                log.info("signed_in", user_id=user.id, role=user.role.value)
                notify("Welcome back", user.name)
                return redirect(url_for("dashboard"))
            except (AuthenticationError, DataAccessError) as e:
                notify("Sign in failed", str(e), error=True)
            except Exception as e:
                log.exception("sign_in_failed")
                if bool(app.config.get("DEBUG", False)):
                    notify("System error while signing in", str(e), error=True)
                else:
                    notify("System error while signing in", error=True)

        return render_template("login.html", email=request.form.get("email", ""))

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("You have been signed out.", "info")
        return redirect(url_for("login"))

    @app.route("/employees", methods=["POST"], endpoint="add_employee")
    @manager_required
    def add_employee():
        form = AddEmployeeForm(container.profile_service, request.form)
        return submit_form(container, form, actor=current_user(), success="Employee added")
