from __future__ import annotations

import logging
import threading
from typing import Mapping, Optional

from ..common.validators import (
    require_date,
    require_money,
    require_non_empty,
    require_non_negative_int,
)
from ..core.enums import RegistrationStatus
from ..core.exceptions import ValidationError
from ..registrations.repository import RegistrationRepository
from .model import Exam, ExamDraft
from .repository import ExamRepository

logger = logging.getLogger(__name__)

EXAM_FIELDS = ("title", "description", "date", "application_deadline", "fee", "location", "available_seats")


class ExamService:
    """Use cases: browse exams (everyone) and manage them (admin)."""

    def __init__(
        self,
        exams: ExamRepository,
        registrations: RegistrationRepository,
        *,
        lock: Optional[threading.RLock] = None,
    ):
        self._exams = exams
        self._registrations = registrations
        # Shared with RegistrationService so seat counts and the delete guard
        # never interleave with a registration.
        self._lock = lock or threading.RLock()

    @staticmethod
    def build_draft(data: Mapping, *, base: Optional[Exam] = None) -> ExamDraft:
        """Validate exam fields. With ``base``, missing fields keep the base value."""

        def pick(field: str):
            if field in data and data[field] is not None:
                return data[field]
            if base is not None:
                return getattr(base, field)
            return None

        title = require_non_empty(pick("title"), "Title")
        description = require_non_empty(pick("description"), "Description")
        location = require_non_empty(pick("location"), "Location")
        exam_date = require_date(pick("date"), "Exam date")
        deadline = require_date(pick("application_deadline"), "Application deadline")
        fee = require_money(pick("fee"), "Fee")
        seats = require_non_negative_int(pick("available_seats"), "Available seats")

        if deadline > exam_date:
            raise ValidationError("Application deadline cannot be after the exam date")
        if base is None and seats < 1:
            raise ValidationError("A new exam needs at least one seat")

        return ExamDraft(
            title=title,
            description=description,
            date=exam_date,
            application_deadline=deadline,
            fee=fee,
            location=location,
            available_seats=seats,
        )

    def get_exams(self, query: str = "") -> list[Exam]:
        exams = sorted(self._exams.list_all(), key=lambda e: (e.date, e.title))
        q = (query or "").strip().lower()
        if not q:
            return exams
        return [e for e in exams if q in e.title.lower() or q in e.description.lower()]

    def get_exam_by_id(self, exam_id: str) -> Optional[Exam]:
        return self._exams.get_by_id(exam_id)

    def create_exam(self, data: Mapping) -> Exam:
        exam = self._exams.create(self.build_draft(data))
        logger.info("Created exam %s (%s)", exam.exam_id, exam.title)
        return exam

    def update_exam(self, exam_id: str, data: Mapping, *, seats_baseline=None) -> Optional[Exam]:
        """Merge ``data`` into the stored exam.

        With ``seats_baseline`` (the seat count the edit form was rendered
        with), ``available_seats`` is applied as a delta so seats taken while
        the form was open stay taken.
        """
        with self._lock:
            current = self._exams.get_by_id(exam_id)
            if not current:
                return None

            data = dict(data)
            requested = data.get("available_seats")
            if seats_baseline not in (None, "") and requested not in (None, ""):
                baseline = require_non_negative_int(seats_baseline, "Available seats")
                wanted = require_non_negative_int(requested, "Available seats")
                data["available_seats"] = max(current.available_seats + wanted - baseline, 0)

            exam = self._exams.update(exam_id, self.build_draft(data, base=current))
        logger.info("Updated exam %s", exam_id)
        return exam

    def delete_exam(self, exam_id: str) -> bool:
        with self._lock:
            if not self._exams.get_by_id(exam_id):
                return False

            active = [
                r
                for r in self._registrations.list_for_exam(exam_id)
                if r.status != RegistrationStatus.CANCELLED
            ]
            if active:
                raise ValidationError(f"Cannot delete an exam with {len(active)} active registration(s)")

            deleted = self._exams.delete(exam_id)
        if deleted:
            logger.info("Deleted exam %s", exam_id)
        return deleted

    def registration_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for r in self._registrations.list_all():
            counts[r.exam_id] = counts.get(r.exam_id, 0) + 1
        return counts
