from __future__ import annotations

import threading
from dataclasses import replace
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.enums import Role
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    """Process-local user store. Emails are keyed lower-cased."""

    def __init__(self):
        self._lock = threading.RLock()
        self._by_id: dict[str, User] = {}
        self._id_by_email: dict[str, str] = {}
        self._next_id = 1

    def get_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user_id = self._id_by_email.get((email or "").strip().lower())
            return self._by_id.get(user_id) if user_id else None

    def create_user(self, *, name: str, email: str, password_hash: str, role: Role) -> User:
        key = email.strip().lower()
        with self._lock:
            if key in self._id_by_email:
                raise ValueError(f"Duplicate email: {key}")
            user = User(
                user_id=f"user-{self._next_id:04d}",
                name=name,
                email=key,
                role=role,
                password_hash=password_hash,
                created_at=now_local(),
            )
            self._next_id += 1
            self._by_id[user.user_id] = user
            self._id_by_email[key] = user.user_id
            return user

    def update_password(self, user_id: str, *, password_hash: str) -> bool:
        with self._lock:
            user = self._by_id.get(user_id)
            if not user:
                return False
            self._by_id[user_id] = replace(user, password_hash=password_hash)
            return True
