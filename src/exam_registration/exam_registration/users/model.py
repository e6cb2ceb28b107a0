from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object; repositories own storage.
    """

    user_id: str
    name: str
    email: str
    role: Role
    password_hash: str
    created_at: datetime
