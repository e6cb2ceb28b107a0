from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.guards import current_user, student_required
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/payment/<registration_id>", methods=["GET", "POST"], endpoint="payment")
    @student_required
    def payment(registration_id: str):
        user = current_user()
        try:
            checkout = container.payment_service.get_checkout(user.user_id, registration_id)
        except (ValidationError, NotFoundError) as e:
            flash(str(e), "danger")
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            try:
                container.payment_service.pay(user.user_id, registration_id, request.form.get("amount", ""))
                flash("Payment successful. Your exam registration is now paid.", "success")
                return redirect(url_for("payment", registration_id=registration_id))
            except (ValidationError, NotFoundError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Payment for %s failed", registration_id)
                flash("Failed to update payment status.", "danger")

        return render_template("payment.html", checkout=checkout, current_user=user)
