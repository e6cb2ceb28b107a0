from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Payment:
    """A recorded exam-fee payment."""

    payment_id: str
    registration_id: str
    user_id: str
    amount: Decimal
    created_at: datetime
