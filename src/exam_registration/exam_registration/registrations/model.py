from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RegistrationStatus


@dataclass(frozen=True)
class Registration:
    """Domain entity: one student's registration for one exam."""

    registration_id: str
    exam_id: str
    user_id: str
    status: RegistrationStatus
    created_at: datetime
    payment_id: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status != RegistrationStatus.CANCELLED

    def to_dict(self) -> dict:
        data = {
            "id": self.registration_id,
            "examId": self.exam_id,
            "userId": self.user_id,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
        }
        if self.payment_id:
            data["paymentId"] = self.payment_id
        return data


@dataclass(frozen=True)
class AdmitCard:
    """Read-model rendered as the printable admit card."""

    registration_id: str
    status: RegistrationStatus
    candidate_name: str
    candidate_email: str
    exam_id: str
    exam_title: str
    exam_date: date
    exam_location: str
    seat_number: str
    exam_center: str
    reporting_time: str
    payment_id: Optional[str] = None
