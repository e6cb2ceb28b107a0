from __future__ import annotations

from decimal import Decimal
from typing import Protocol, Sequence

from .model import Payment


class PaymentRepository(Protocol):
    def create(self, *, registration_id: str, user_id: str, amount: Decimal) -> Payment:
        raise NotImplementedError

    def delete(self, payment_id: str) -> bool:
        raise NotImplementedError

    def list_for_registration(self, registration_id: str) -> Sequence[Payment]:
        raise NotImplementedError
