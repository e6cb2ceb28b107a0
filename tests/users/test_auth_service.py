from __future__ import annotations

import pytest

from src.exam_registration.exam_registration.core.enums import Role
from src.exam_registration.exam_registration.core.exceptions import AuthenticationError, ValidationError
from src.exam_registration.exam_registration.users.memory_user_repository import InMemoryUserRepository
from src.exam_registration.exam_registration.users.service import AuthService, SessionUser


@pytest.fixture
def auth():
    return AuthService(InMemoryUserRepository())


def test_register_user_creates_student_and_logs_in(auth):
    result = auth.register_user(name="  Jane  ", email="Jane@Example.com", password="secret123")

    assert result.user.role == Role.STUDENT
    assert result.user.name == "Jane"
    assert result.user.email == "jane@example.com"
    assert result.token


def test_register_user_rejects_duplicate_email_case_insensitive(auth):
    auth.register_user(name="Jane", email="jane@example.com", password="secret123")

    with pytest.raises(ValidationError, match="already registered"):
        auth.register_user(name="Other", email="JANE@example.com", password="secret123")


@pytest.mark.parametrize(
    "name,email,password",
    [
        ("", "a@example.com", "secret123"),
        ("A", "not-an-email", "secret123"),
        ("A", "a@example.com", "short"),
    ],
)
def test_register_user_validates_input(auth, name, email, password):
    with pytest.raises(ValidationError):
        auth.register_user(name=name, email=email, password=password)


def test_login_user_checks_password_hash(auth):
    auth.register_user(name="Jane", email="jane@example.com", password="secret123")

    result = auth.login_user("JANE@example.com", "secret123")
    assert result.user.email == "jane@example.com"

    with pytest.raises(AuthenticationError):
        auth.login_user("jane@example.com", "wrong-password")
    with pytest.raises(AuthenticationError):
        auth.login_user("nobody@example.com", "secret123")
    with pytest.raises(AuthenticationError):
        auth.login_user("jane@example.com", "")


def test_tokens_differ_per_login(auth):
    auth.register_user(name="Jane", email="jane@example.com", password="secret123")

    assert auth.login_user("jane@example.com", "secret123").token != auth.login_user("jane@example.com", "secret123").token


def test_ensure_admin_is_idempotent_and_resets_password(auth):
    first = auth.ensure_admin(name="Admin User", email="admin@example.com", password="password")
    again = auth.ensure_admin(name="Admin User", email="admin@example.com", password="new-password")

    assert first.user_id == again.user_id
    assert auth.login_user("admin@example.com", "new-password").user.role == Role.ADMIN
    with pytest.raises(AuthenticationError):
        auth.login_user("admin@example.com", "password")


def test_ensure_admin_refuses_to_promote_student(auth):
    auth.register_user(name="Jane", email="jane@example.com", password="secret123")

    with pytest.raises(ValidationError):
        auth.ensure_admin(name="Admin", email="jane@example.com", password="password")


def test_session_user_round_trips_through_session_dict():
    user = SessionUser(user_id="user-0001", name="Jane", email="jane@example.com", role=Role.STUDENT)

    data = user.to_session()

    assert data["role"] == "student"
    assert SessionUser.from_session(data) == user
