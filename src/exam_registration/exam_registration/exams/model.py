from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class Exam:
    """Domain entity: an exam students can register for."""

    exam_id: str
    title: str
    description: str
    date: date
    application_deadline: date
    fee: Decimal
    location: str
    available_seats: int

    def is_open(self, today: date) -> bool:
        return today <= self.application_deadline

    def to_dict(self) -> dict:
        return {
            "id": self.exam_id,
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat(),
            "applicationDeadline": self.application_deadline.isoformat(),
            "fee": float(self.fee),
            "location": self.location,
            "availableSeats": self.available_seats,
        }


@dataclass(frozen=True)
class ExamDraft:
    """Validated exam fields, before an id is assigned."""

    title: str
    description: str
    date: date
    application_deadline: date
    fee: Decimal
    location: str
    available_seats: int
