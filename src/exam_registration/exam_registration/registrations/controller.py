from __future__ import annotations

import io
import json
import logging

import pandas as pd
import qrcode
from flask import Flask, flash, jsonify, redirect, render_template, request, send_file, url_for

from ..common.datetime_utils import now_local
from ..common.guards import admin_required, current_user, student_required
from ..core.constants import ADMIT_CARD_STATUSES
from ..core.enums import RegistrationStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from .service import seat_number_for

logger = logging.getLogger(__name__)

STATUS_CSS = {
    RegistrationStatus.PENDING: "bg-warning text-dark",
    RegistrationStatus.PAID: "bg-success",
    RegistrationStatus.SHOWN: "bg-success",
    RegistrationStatus.CONFIRMED: "bg-primary",
    RegistrationStatus.CANCELLED: "bg-secondary",
}


def register(app: Flask, container: Container) -> None:
    app.jinja_env.globals["status_css"] = lambda status: STATUS_CSS.get(status, "bg-secondary")

    @app.route("/dashboard", endpoint="dashboard")
    @student_required
    def dashboard():
        user = current_user()
        return render_template(
            "dashboard.html",
            current_user=user,
            exams=container.exam_service.get_exams(),
            active=container.registration_service.active_by_exam(user.user_id),
            rows=container.registration_service.list_rows(user.user_id),
            today=now_local().date(),
            active_tab=request.args.get("tab", "upcoming"),
        )

    @app.route("/exams/<exam_id>/register", methods=["POST"], endpoint="register_exam")
    @student_required
    def register_exam(exam_id: str):
        try:
            registration = container.registration_service.register_for_exam(exam_id, current_user().user_id)
            flash("You've been registered for the exam. Please complete the payment to confirm.", "success")
            return redirect(url_for("payment", registration_id=registration.registration_id))
        except (ValidationError, NotFoundError) as e:
            flash(f"Registration failed: {e}", "danger")
        except Exception:
            logger.exception("Registering for %s failed", exam_id)
            flash("An error occurred during registration.", "danger")
        return redirect(url_for("dashboard"))

    @app.route("/registrations/<registration_id>/cancel", methods=["POST"], endpoint="cancel_registration")
    @student_required
    def cancel_registration(registration_id: str):
        try:
            container.registration_service.cancel_registration(current_user().user_id, registration_id)
            flash("Your registration has been cancelled.", "info")
        except (ValidationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Cancelling %s failed", registration_id)
            flash("System error while cancelling the registration", "danger")
        return redirect(url_for("dashboard", tab="registrations"))

    @app.route("/admit-card/<registration_id>", endpoint="admit_card")
    @student_required
    def admit_card(registration_id: str):
        try:
            card = container.registration_service.get_admit_card(current_user().user_id, registration_id)
        except (ValidationError, NotFoundError) as e:
            flash(str(e), "danger")
            return redirect(url_for("dashboard"))
        return render_template("admit_card.html", card=card, current_user=current_user())

    @app.route("/admit-card/<registration_id>/qr.png", endpoint="admit_card_qr")
    @student_required
    def admit_card_qr(registration_id: str):
        try:
            registration = container.registration_service.get_registration_for_user(
                current_user().user_id, registration_id
            )
        except NotFoundError:
            return jsonify({"success": False, "message": "Registration not found"}), 404
        if registration.status not in ADMIT_CARD_STATUSES:
            return jsonify({"success": False, "message": "Payment is required to access admit card"}), 403

        data = {
            "registration_id": registration.registration_id,
            "exam_id": registration.exam_id,
            "seat": seat_number_for(registration.registration_id),
        }
        img = qrcode.make(json.dumps(data))
        buf = io.BytesIO()
        img.save(buf)
        buf.seek(0)
        return send_file(buf, mimetype="image/png")

    @app.route("/admin", endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        return render_template(
            "admin/dashboard.html",
            current_user=current_user(),
            exams=container.exam_service.get_exams(),
            counts=container.exam_service.registration_counts(),
            rows=container.registration_service.list_rows(),
            statuses=list(RegistrationStatus),
            active_tab=request.args.get("tab", "exams"),
        )

    @app.route(
        "/admin/registrations/<registration_id>/status",
        methods=["POST"],
        endpoint="update_registration_status",
    )
    @admin_required
    def update_registration_status(registration_id: str):
        try:
            status = RegistrationStatus(request.form.get("status", ""))
        except ValueError:
            flash("Unknown registration status", "danger")
            return redirect(url_for("admin_dashboard", tab="registrations"))

        try:
            updated = container.registration_service.update_registration_status(registration_id, status)
            if updated is None:
                flash("Registration not found", "danger")
            else:
                flash(f"{registration_id} is now {updated.status.value}.", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Updating %s failed", registration_id)
            flash("System error while updating the registration", "danger")
        return redirect(url_for("admin_dashboard", tab="registrations"))

    @app.route("/admin/registrations/export", endpoint="export_registrations")
    @admin_required
    def export_registrations():
        try:
            records = []
            for row in container.registration_service.list_rows():
                r = row.registration
                student = container.auth_service.get_user(r.user_id)
                records.append(
                    {
                        "Registration ID": r.registration_id,
                        "Exam": row.exam_title,
                        "Exam Date": row.exam.date if row.exam else None,
                        "Student ID": r.user_id,
                        "Student": student.name if student else "",
                        "Email": student.email if student else "",
                        "Status": r.status.value.upper(),
                        "Payment ID": r.payment_id or "",
                        "Registered At": r.created_at.strftime("%Y-%m-%d %H:%M"),
                    }
                )
            df = pd.DataFrame(
                records,
                columns=[
                    "Registration ID",
                    "Exam",
                    "Exam Date",
                    "Student ID",
                    "Student",
                    "Email",
                    "Status",
                    "Payment ID",
                    "Registered At",
                ],
            )

            out = io.BytesIO()
            with pd.ExcelWriter(out, engine="openpyxl") as writer:
                df.to_excel(writer, index=False, sheet_name="Registrations")
            out.seek(0)
            return send_file(
                out,
                mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                as_attachment=True,
                download_name="registrations.xlsx",
            )
        except Exception as e:
            logger.exception("Exporting registrations failed")
            flash(f"Export failed: {e}", "danger")
            return redirect(url_for("admin_dashboard", tab="registrations"))

    @app.route("/api/stats", endpoint="api_stats")
    @admin_required
    def api_stats():
        return jsonify(
            {
                "success": True,
                "exams": len(container.exam_service.get_exams()),
                "registrations": container.registration_service.status_counts(),
            }
        )
