from __future__ import annotations

import logging

from flask import Flask, abort, flash, jsonify, redirect, render_template, request, url_for

from ..common.guards import admin_required, current_user
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from .service import EXAM_FIELDS

logger = logging.getLogger(__name__)


def _form_data() -> dict:
    return {field: request.form.get(field, "") for field in EXAM_FIELDS}


def _exam_form_values(exam) -> dict:
    return {
        "title": exam.title,
        "description": exam.description,
        "date": exam.date.isoformat(),
        "application_deadline": exam.application_deadline.isoformat(),
        "fee": f"{exam.fee:.2f}",
        "location": exam.location,
        "available_seats": exam.available_seats,
        "seats_baseline": exam.available_seats,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/exams", endpoint="exams")
    def exams():
        query = request.args.get("q", "")
        items = container.exam_service.get_exams(query)
        return render_template("exams.html", exams=items, query=query, current_user=current_user())

    @app.route("/api/exams", endpoint="api_exams")
    def api_exams():
        items = container.exam_service.get_exams(request.args.get("q", ""))
        return jsonify({"success": True, "exams": [e.to_dict() for e in items]})

    @app.route("/admin/exams/new", methods=["GET", "POST"], endpoint="create_exam")
    @admin_required
    def create_exam():
        values = {}
        if request.method == "POST":
            values = _form_data()
            try:
                exam = container.exam_service.create_exam(values)
                flash(f"{exam.title} has been successfully created.", "success")
                return redirect(url_for("admin_dashboard"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Creating exam failed")
                flash("System error while creating the exam", "danger")

        return render_template(
            "admin/exam_form.html",
            values=values,
            is_editing=False,
            current_user=current_user(),
        )

    @app.route("/admin/exams/<exam_id>/edit", methods=["GET", "POST"], endpoint="edit_exam")
    @admin_required
    def edit_exam(exam_id: str):
        exam = container.exam_service.get_exam_by_id(exam_id)
        if not exam:
            abort(404)

        values = _exam_form_values(exam)
        if request.method == "POST":
            values = _form_data()
            values["seats_baseline"] = request.form.get("seats_baseline", "")
            try:
                updated = container.exam_service.update_exam(
                    exam_id, values, seats_baseline=values["seats_baseline"]
                )
                if updated is None:
                    raise NotFoundError("Exam not found")
                flash(f"{updated.title} has been successfully updated.", "success")
                return redirect(url_for("admin_dashboard"))
            except (ValidationError, NotFoundError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Updating exam %s failed", exam_id)
                flash("System error while updating the exam", "danger")

        return render_template(
            "admin/exam_form.html",
            exam=exam,
            values=values,
            is_editing=True,
            current_user=current_user(),
        )

    @app.route("/admin/exams/<exam_id>/delete", methods=["POST"], endpoint="delete_exam")
    @admin_required
    def delete_exam(exam_id: str):
        try:
            if container.exam_service.delete_exam(exam_id):
                flash("The exam has been successfully deleted.", "success")
            else:
                flash("Exam not found", "danger")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Deleting exam %s failed", exam_id)
            flash("System error while deleting the exam", "danger")
        return redirect(url_for("admin_dashboard"))
