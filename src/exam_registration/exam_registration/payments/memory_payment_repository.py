from __future__ import annotations

import threading
import uuid
from decimal import Decimal
from typing import Sequence

from ..common.datetime_utils import now_local
from .model import Payment
from .repository import PaymentRepository


class InMemoryPaymentRepository(PaymentRepository):
    def __init__(self):
        self._lock = threading.RLock()
        self._items: dict[str, Payment] = {}

    def create(self, *, registration_id: str, user_id: str, amount: Decimal) -> Payment:
        with self._lock:
            payment_id = f"py_{uuid.uuid4().hex[:13]}"
            while payment_id in self._items:
                payment_id = f"py_{uuid.uuid4().hex[:13]}"
            payment = Payment(
                payment_id=payment_id,
                registration_id=registration_id,
                user_id=user_id,
                amount=amount,
                created_at=now_local(),
            )
            self._items[payment_id] = payment
            return payment

    def delete(self, payment_id: str) -> bool:
        with self._lock:
            return self._items.pop(payment_id, None) is not None

    def list_for_registration(self, registration_id: str) -> Sequence[Payment]:
        with self._lock:
            return [p for p in self._items.values() if p.registration_id == registration_id]
