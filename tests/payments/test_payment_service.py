from __future__ import annotations

import threading
from datetime import date
from decimal import Decimal

import pytest

from src.exam_registration.exam_registration.core.enums import RegistrationStatus
from src.exam_registration.exam_registration.core.exceptions import NotFoundError, ValidationError

TODAY = date(2026, 3, 1)


@pytest.fixture
def registration(container, exam, student):
    return container.registration_service.register_for_exam(exam.exam_id, student.user_id, today=TODAY)


def test_pay_moves_registration_from_pending_to_paid(container, student, registration):
    payment = container.payment_service.pay(student.user_id, registration.registration_id, "50")

    assert payment.payment_id.startswith("py_")
    assert len(payment.payment_id) == len("py_") + 13
    assert payment.amount == Decimal("50.00")

    updated = container.registrations_repo.get_by_id(registration.registration_id)
    assert updated.status == RegistrationStatus.PAID
    assert updated.payment_id == payment.payment_id
    assert container.payments_repo.list_for_registration(registration.registration_id) == [payment]


def test_pay_twice_is_rejected(container, student, registration):
    container.payment_service.pay(student.user_id, registration.registration_id, "50.00")

    with pytest.raises(ValidationError, match="already paid"):
        container.payment_service.pay(student.user_id, registration.registration_id, "50.00")
    assert len(container.payments_repo.list_for_registration(registration.registration_id)) == 1


def test_pay_wrong_amount_is_rejected(container, student, registration):
    with pytest.raises(ValidationError, match="Amount must be 50.00"):
        container.payment_service.pay(student.user_id, registration.registration_id, "49.99")

    assert container.registrations_repo.get_by_id(registration.registration_id).status == RegistrationStatus.PENDING


def test_pay_cancelled_registration_is_rejected(container, student, registration):
    container.registration_service.cancel_registration(student.user_id, registration.registration_id)

    with pytest.raises(ValidationError, match="cancelled"):
        container.payment_service.pay(student.user_id, registration.registration_id, "50")


def test_pay_for_someone_else_is_not_found(container, registration):
    other = container.auth_service.register_user(name="Other", email="other@example.com", password="secret123").user

    with pytest.raises(NotFoundError, match="Registration not found"):
        container.payment_service.pay(other.user_id, registration.registration_id, "50")


def test_checkout_reports_paid_state(container, student, registration):
    checkout = container.payment_service.get_checkout(student.user_id, registration.registration_id)
    assert checkout.is_paid is False
    assert checkout.exam.fee == Decimal("50.00")

    container.payment_service.pay(student.user_id, registration.registration_id, "50")

    assert container.payment_service.get_checkout(student.user_id, registration.registration_id).is_paid is True


def test_payment_is_discarded_when_registration_is_cancelled_mid_payment(container, student, registration, monkeypatch):
    original_create = container.payments_repo.create

    def create_then_cancel(**kwargs):
        payment = original_create(**kwargs)
        container.registration_service.cancel_registration(student.user_id, registration.registration_id)
        return payment

    monkeypatch.setattr(container.payments_repo, "create", create_then_cancel)

    with pytest.raises(ValidationError, match="from cancelled to paid"):
        container.payment_service.pay(student.user_id, registration.registration_id, "50")

    assert container.payments_repo.list_for_registration(registration.registration_id) == []
    assert container.registrations_repo.get_by_id(registration.registration_id).status == RegistrationStatus.CANCELLED


def test_pay_waits_for_a_pending_status_change(container, student, registration):
    results = []

    def pay():
        try:
            results.append(container.payment_service.pay(student.user_id, registration.registration_id, "50"))
        except ValidationError as e:
            results.append(e)

    with container.registration_service.lock:
        worker = threading.Thread(target=pay)
        worker.start()
        worker.join(timeout=0.2)
        assert worker.is_alive()
        container.registration_service.cancel_registration(student.user_id, registration.registration_id)
    worker.join()

    assert isinstance(results[0], ValidationError)
    assert container.payments_repo.list_for_registration(registration.registration_id) == []
