from __future__ import annotations

import hashlib
import logging
import threading
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import (
    ADMIT_CARD_STATUSES,
    DEFAULT_EXAM_CENTER,
    DEFAULT_REPORTING_TIME,
    SEAT_LETTERS,
    SEAT_NUMBERS,
    STATUS_TRANSITIONS,
)
from ..core.enums import RegistrationStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..exams.model import Exam
from ..exams.repository import ExamRepository
from ..users.repository import UserRepository
from .model import AdmitCard, Registration
from .repository import RegistrationRepository

logger = logging.getLogger(__name__)


def seat_number_for(registration_id: str) -> str:
    """Stable seat label such as ``K-07`` derived from the registration id."""
    digest = hashlib.sha256(registration_id.encode("utf-8")).digest()
    letter = SEAT_LETTERS[digest[0] % len(SEAT_LETTERS)]
    number = int.from_bytes(digest[1:3], "big") % SEAT_NUMBERS + 1
    return f"{letter}-{number:02d}"


@dataclass(frozen=True)
class RegistrationRow:
    """Registration joined with its exam, for dashboards."""

    registration: Registration
    exam: Optional[Exam]

    @property
    def exam_title(self) -> str:
        return self.exam.title if self.exam else "Unknown Exam"


class RegistrationService:
    def __init__(
        self,
        registrations: RegistrationRepository,
        exams: ExamRepository,
        users: UserRepository,
        *,
        exam_center: str = DEFAULT_EXAM_CENTER,
        reporting_time: str = DEFAULT_REPORTING_TIME,
        lock: Optional[threading.RLock] = None,
    ):
        self._registrations = registrations
        self._exams = exams
        self._users = users
        self._exam_center = exam_center
        self._reporting_time = reporting_time
        # Serialises duplicate check, seat reservation and append.
        self._lock = lock or threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def register_for_exam(self, exam_id: str, user_id: str, *, today: Optional[date] = None) -> Registration:
        today = today or now_local().date()

        with self._lock:
            exam = self._exams.get_by_id(exam_id)
            if not exam:
                raise NotFoundError("Exam not found")
            if not exam.is_open(today):
                raise ValidationError("Application deadline has passed")
            if any(r.is_active for r in self._registrations.list_for_user(user_id) if r.exam_id == exam_id):
                raise ValidationError("You are already registered for this exam")

            if not self._exams.reserve_seat(exam_id):
                raise ValidationError("No available seats")
            try:
                registration = self._registrations.create(exam_id=exam_id, user_id=user_id)
            except Exception:
                self._exams.release_seat(exam_id)
                raise

        logger.info("Registered %s for %s as %s", user_id, exam_id, registration.registration_id)
        return registration

    def get_registrations(self, user_id: Optional[str] = None) -> list[Registration]:
        if user_id:
            return list(self._registrations.list_for_user(user_id))
        return list(self._registrations.list_all())

    def get_registration_for_user(self, user_id: str, registration_id: str) -> Registration:
        registration = self._registrations.get_by_id(registration_id)
        if not registration or registration.user_id != user_id:
            raise NotFoundError("Registration not found")
        return registration

    def update_registration_status(
        self,
        registration_id: str,
        status: RegistrationStatus,
        payment_id: Optional[str] = None,
    ) -> Optional[Registration]:
        status = RegistrationStatus(status)

        with self._lock:
            current = self._registrations.get_by_id(registration_id)
            if not current:
                return None
            if current.status == status and not payment_id:
                return current
            if current.status != status and status not in STATUS_TRANSITIONS[current.status]:
                raise ValidationError(
                    f"Cannot change registration from {current.status.value} to {status.value}"
                )

            updated = self._registrations.set_status(registration_id, status=status, payment_id=payment_id)
            if status == RegistrationStatus.CANCELLED and current.status != RegistrationStatus.CANCELLED:
                self._exams.release_seat(current.exam_id)

        logger.info("Registration %s: %s -> %s", registration_id, current.status.value, status.value)
        return updated

    def cancel_registration(self, user_id: str, registration_id: str) -> Registration:
        registration = self.get_registration_for_user(user_id, registration_id)
        if registration.status == RegistrationStatus.CANCELLED:
            raise ValidationError("Registration is already cancelled")
        return self.update_registration_status(registration.registration_id, RegistrationStatus.CANCELLED)

    def get_admit_card(self, user_id: str, registration_id: str) -> AdmitCard:
        registration = self.get_registration_for_user(user_id, registration_id)
        if registration.status not in ADMIT_CARD_STATUSES:
            raise ValidationError("Payment is required to access admit card")

        exam = self._exams.get_by_id(registration.exam_id)
        if not exam:
            raise NotFoundError("Exam not found")
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        if registration.status == RegistrationStatus.PAID:
            registration = self.update_registration_status(registration_id, RegistrationStatus.SHOWN)

        return AdmitCard(
            registration_id=registration.registration_id,
            status=registration.status,
            candidate_name=user.name,
            candidate_email=user.email,
            exam_id=exam.exam_id,
            exam_title=exam.title,
            exam_date=exam.date,
            exam_location=exam.location,
            seat_number=seat_number_for(registration.registration_id),
            exam_center=self._exam_center,
            reporting_time=self._reporting_time,
            payment_id=registration.payment_id,
        )

    def list_rows(self, user_id: Optional[str] = None) -> list[RegistrationRow]:
        return [
            RegistrationRow(registration=r, exam=self._exams.get_by_id(r.exam_id))
            for r in self.get_registrations(user_id)
        ]

    def active_by_exam(self, user_id: str) -> dict[str, Registration]:
        """Map exam id -> the user's active registration for it."""
        return {r.exam_id: r for r in self._registrations.list_for_user(user_id) if r.is_active}

    def status_counts(self) -> dict[str, int]:
        counts = {s.value: 0 for s in RegistrationStatus}
        for r in self._registrations.list_all():
            counts[r.status.value] += 1
        return counts
