"""Exam Registration package.

Organized by feature modules (users, exams, registrations, payments) with a
thin Flask controller layer over service/repository layers. All data lives
in process memory and is reset on restart.
"""
from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, render_template

from config import get_settings_module

from .common.guards import current_user
from .container import build_container
from .core.constants import DEFAULT_SESSION_DAYS
from .database.bootstrap import ensure_admin_user, seed_demo_exams
from .exams.controller import register as register_exams
from .payments.controller import register as register_payments
from .registrations.controller import register as register_registrations
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_DAYS"] = int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info("Starting exam-registration with settings=%s", settings_module)

    container = build_container(settings)
    app.extensions["container"] = container

    ensure_admin_user(
        container.auth_service,
        name=getattr(settings, "ADMIN_NAME", "Admin User"),
        email=getattr(settings, "ADMIN_EMAIL"),
        password=getattr(settings, "ADMIN_PASSWORD"),
    )
    if bool(getattr(settings, "SEED_DEMO_EXAMS", False)):
        seed_demo_exams(container.exams_repo)

    register_users(app, container)
    register_exams(app, container)
    register_registrations(app, container)
    register_payments(app, container)

    @app.context_processor
    def inject_user():
        return {"current_user": current_user()}

    @app.errorhandler(404)
    def not_found(_error):
        return render_template("404.html", current_user=current_user()), 404

    return app
