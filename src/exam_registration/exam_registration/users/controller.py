from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.guards import current_user
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container
from .service import LoginResult

logger = logging.getLogger(__name__)


def _home_for(role: Role) -> str:
    return url_for("admin_dashboard") if role == Role.ADMIN else url_for("dashboard")


def register(app: Flask, container: Container) -> None:
    def start_session(result: LoginResult, *, remember: bool) -> None:
        session.clear()
        session.permanent = remember
        session["user"] = result.user.to_session()
        session["token"] = result.token

    @app.route("/", endpoint="landing")
    def landing():
        return render_template("landing.html", current_user=current_user())

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        user = current_user()
        if user:
            return redirect(_home_for(user.role))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            remember = bool(request.form.get("remember_me"))

            try:
                result = container.auth_service.login_user(email, password)
                start_session(result, remember=remember)
                flash(f"Welcome back, {result.user.name}!", "success")
                return redirect(_home_for(result.user.role))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception as e:
                logger.exception("Login failed")
                if bool(app.config.get("DEBUG", False)):
                    flash(f"System error while logging in: {e}", "danger")
                else:
                    flash("System error while logging in", "danger")

        return render_template("login.html", email=request.form.get("email", ""))

    @app.route("/register", methods=["GET", "POST"], endpoint="register")
    def register_account():
        if current_user():
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            try:
                password = request.form.get("password", "")
                if password != request.form.get("confirm_password", password):
                    raise ValidationError("Passwords do not match")

                result = container.auth_service.register_user(
                    name=request.form.get("name", ""),
                    email=request.form.get("email", ""),
                    password=password,
                )
                start_session(result, remember=False)
                flash("Account created. You can now register for exams.", "success")
                return redirect(url_for("dashboard"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Sign-up failed")
                flash("System error while creating the account", "danger")

        return render_template(
            "register.html",
            name=request.form.get("name", ""),
            email=request.form.get("email", ""),
        )

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("You have been logged out.", "info")
        return redirect(url_for("login"))

    app.permanent_session_lifetime = timedelta(days=int(app.config.get("SESSION_DAYS", DEFAULT_SESSION_DAYS)))
