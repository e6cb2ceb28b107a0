from __future__ import annotations

import threading
from dataclasses import dataclass
from types import ModuleType

from .core.constants import DEFAULT_EXAM_CENTER, DEFAULT_REPORTING_TIME
from .exams.memory_exam_repository import InMemoryExamRepository
from .exams.service import ExamService
from .payments.memory_payment_repository import InMemoryPaymentRepository
from .payments.service import PaymentService
from .registrations.memory_registration_repository import InMemoryRegistrationRepository
from .registrations.service import RegistrationService
from .users.memory_user_repository import InMemoryUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    users_repo: InMemoryUserRepository
    exams_repo: InMemoryExamRepository
    registrations_repo: InMemoryRegistrationRepository
    payments_repo: InMemoryPaymentRepository

    auth_service: AuthService
    exam_service: ExamService
    registration_service: RegistrationService
    payment_service: PaymentService


def build_container(settings: ModuleType | None = None) -> Container:
    users_repo = InMemoryUserRepository()
    exams_repo = InMemoryExamRepository()
    registrations_repo = InMemoryRegistrationRepository()
    payments_repo = InMemoryPaymentRepository()

    # One lock for every write that touches seats or registration status.
    lock = threading.RLock()

    auth_service = AuthService(users_repo)
    exam_service = ExamService(exams_repo, registrations_repo, lock=lock)
    registration_service = RegistrationService(
        registrations_repo,
        exams_repo,
        users_repo,
        exam_center=getattr(settings, "EXAM_CENTER", DEFAULT_EXAM_CENTER),
        reporting_time=getattr(settings, "REPORTING_TIME", DEFAULT_REPORTING_TIME),
        lock=lock,
    )
    payment_service = PaymentService(payments_repo, registration_service, exams_repo)

    return Container(
        users_repo=users_repo,
        exams_repo=exams_repo,
        registrations_repo=registrations_repo,
        payments_repo=payments_repo,
        auth_service=auth_service,
        exam_service=exam_service,
        registration_service=registration_service,
        payment_service=payment_service,
    )
