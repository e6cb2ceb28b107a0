from __future__ import annotations

import logging
from dataclasses import dataclass

from ..common.validators import require_money
from ..core.enums import RegistrationStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..exams.model import Exam
from ..exams.repository import ExamRepository
from ..registrations.model import Registration
from ..registrations.service import RegistrationService
from .model import Payment
from .repository import PaymentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Checkout:
    """What the payment page shows."""

    registration: Registration
    exam: Exam

    @property
    def is_paid(self) -> bool:
        return self.registration.status != RegistrationStatus.PENDING


class PaymentService:
    """Use case: pay the exam fee for a pending registration."""

    def __init__(self, payments: PaymentRepository, registrations: RegistrationService, exams: ExamRepository):
        self._payments = payments
        self._registrations = registrations
        self._exams = exams

    def get_checkout(self, user_id: str, registration_id: str) -> Checkout:
        registration = self._registrations.get_registration_for_user(user_id, registration_id)
        if registration.status == RegistrationStatus.CANCELLED:
            raise ValidationError("Registration was cancelled")

        exam = self._exams.get_by_id(registration.exam_id)
        if not exam:
            raise NotFoundError("Exam not found")
        return Checkout(registration=registration, exam=exam)

    def pay(self, user_id: str, registration_id: str, amount) -> Payment:
        amount = require_money(amount, "Amount")

        # Same lock as cancel and admin status changes, so the pending check,
        # the ledger write and the transition happen as one step.
        with self._registrations.lock:
            checkout = self.get_checkout(user_id, registration_id)
            if checkout.is_paid:
                raise ValidationError("Registration is already paid")
            if amount != checkout.exam.fee:
                raise ValidationError(f"Amount must be {checkout.exam.fee:.2f}")

            payment = self._payments.create(registration_id=registration_id, user_id=user_id, amount=amount)
            try:
                self._registrations.update_registration_status(
                    registration_id, RegistrationStatus.PAID, payment_id=payment.payment_id
                )
            except Exception:
                self._payments.delete(payment.payment_id)
                raise

        logger.info("Payment %s recorded for %s (%s)", payment.payment_id, registration_id, amount)
        return payment
