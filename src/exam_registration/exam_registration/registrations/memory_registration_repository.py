from __future__ import annotations

import threading
from dataclasses import replace
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import RegistrationStatus
from .model import Registration
from .repository import RegistrationRepository


class InMemoryRegistrationRepository(RegistrationRepository):
    """Process-local registrations, kept in creation order."""

    def __init__(self):
        self._lock = threading.RLock()
        self._items: dict[str, Registration] = {}
        self._next_id = 1

    def create(self, *, exam_id: str, user_id: str) -> Registration:
        with self._lock:
            registration = Registration(
                registration_id=f"reg-{self._next_id:04d}",
                exam_id=exam_id,
                user_id=user_id,
                status=RegistrationStatus.PENDING,
                created_at=now_local(),
            )
            self._next_id += 1
            self._items[registration.registration_id] = registration
            return registration

    def get_by_id(self, registration_id: str) -> Optional[Registration]:
        with self._lock:
            return self._items.get(registration_id)

    def list_all(self) -> Sequence[Registration]:
        with self._lock:
            return list(self._items.values())

    def list_for_user(self, user_id: str) -> Sequence[Registration]:
        with self._lock:
            return [r for r in self._items.values() if r.user_id == user_id]

    def list_for_exam(self, exam_id: str) -> Sequence[Registration]:
        with self._lock:
            return [r for r in self._items.values() if r.exam_id == exam_id]

    def set_status(
        self,
        registration_id: str,
        *,
        status: RegistrationStatus,
        payment_id: Optional[str] = None,
    ) -> Optional[Registration]:
        with self._lock:
            current = self._items.get(registration_id)
            if not current:
                return None
            updated = replace(current, status=status, payment_id=payment_id or current.payment_id)
            self._items[registration_id] = updated
            return updated
