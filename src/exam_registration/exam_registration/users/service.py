from __future__ import annotations

import logging
import secrets
from dataclasses import asdict, dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: str
    name: str
    email: str
    role: Role

    def to_session(self) -> dict:
        data = asdict(self)
        data["role"] = self.role.value
        return data

    @classmethod
    def from_session(cls, data: dict) -> "SessionUser":
        return cls(
            user_id=str(data["user_id"]),
            name=str(data["name"]),
            email=str(data["email"]),
            role=Role(data["role"]),
        )


@dataclass(frozen=True)
class LoginResult:
    user: SessionUser
    token: str


class AuthService:
    """Use cases: sign up and log in."""

    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def _issue(user: User) -> LoginResult:
        session_user = SessionUser(user_id=user.user_id, name=user.name, email=user.email, role=user.role)
        return LoginResult(user=session_user, token=secrets.token_urlsafe(32))

    def login_user(self, email: str, password: str) -> LoginResult:
        user = self._users.get_by_email(email or "")
        if not user or not password:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        logger.info("User %s logged in (%s)", user.user_id, user.role.value)
        return self._issue(user)

    def register_user(self, *, name: str, email: str, password: str) -> LoginResult:
        """Create a student account and log it in.

        Admin accounts are never created from the sign-up form; see ``ensure_admin``.
        """
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")

        user = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.STUDENT,
        )
        logger.info("Registered student %s", user.user_id)
        return self._issue(user)

    def ensure_admin(self, *, name: str, email: str, password: str) -> User:
        """Create the admin account, or reset its password if it already exists."""
        email = require_email(email)
        require_non_empty(password, "Admin password")

        existing = self._users.get_by_email(email)
        if existing:
            if existing.role != Role.ADMIN:
                raise ValidationError(f"{email} is already registered as a student")
            self._users.update_password(existing.user_id, password_hash=generate_password_hash(password))
            return existing

        return self._users.create_user(
            name=require_non_empty(name, "Admin name"),
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.ADMIN,
        )

    def get_user(self, user_id: str) -> User | None:
        return self._users.get_by_id(user_id)
