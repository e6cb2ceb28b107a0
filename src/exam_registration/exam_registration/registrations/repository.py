from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import RegistrationStatus
from .model import Registration


class RegistrationRepository(Protocol):
    def create(self, *, exam_id: str, user_id: str) -> Registration:
        """Append a pending registration."""

        raise NotImplementedError

    def get_by_id(self, registration_id: str) -> Optional[Registration]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Registration]:
        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[Registration]:
        raise NotImplementedError

    def list_for_exam(self, exam_id: str) -> Sequence[Registration]:
        raise NotImplementedError

    def set_status(
        self,
        registration_id: str,
        *,
        status: RegistrationStatus,
        payment_id: Optional[str] = None,
    ) -> Optional[Registration]:
        raise NotImplementedError
