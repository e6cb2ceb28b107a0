"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the rules live in the services.
"""

import importlib
from decimal import Decimal

from config import get_settings_module

from src.exam_registration.exam_registration.container import build_container
from src.exam_registration.exam_registration.database.bootstrap import seed_demo_exams


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)
    seed_demo_exams(container.exams_repo)

    login = container.auth_service.register_user(name="Demo Student", email="demo@example.com", password="secret123")
    student_id = login.user.user_id

    registration = container.registration_service.register_for_exam("exam-001", student_id)
    exam = container.exam_service.get_exam_by_id("exam-001")
    container.payment_service.pay(student_id, registration.registration_id, Decimal(exam.fee))

    card = container.registration_service.get_admit_card(student_id, registration.registration_id)
    print(f"{card.candidate_name}: {card.exam_title} seat {card.seat_number} ({card.status.value})")


if __name__ == "__main__":
    main()
