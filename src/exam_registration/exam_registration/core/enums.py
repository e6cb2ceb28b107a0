from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for route guards."""

    ADMIN = "admin"
    STUDENT = "student"


class RegistrationStatus(str, Enum):
    """Lifecycle of a student's registration for one exam."""

    PENDING = "pending"
    PAID = "paid"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    SHOWN = "shown"
