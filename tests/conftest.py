from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest

from src.exam_registration.exam_registration import create_app
from src.exam_registration.exam_registration.container import build_container
from src.exam_registration.exam_registration.exams.model import ExamDraft

TODAY = date(2026, 3, 1)


def make_draft(**overrides) -> ExamDraft:
    fields = dict(
        title="Computer Science Fundamentals",
        description="Algorithms and data structures.",
        date=TODAY + timedelta(days=60),
        application_deadline=TODAY + timedelta(days=30),
        fee=Decimal("50.00"),
        location="Online",
        available_seats=2,
    )
    fields.update(overrides)
    return ExamDraft(**fields)


@pytest.fixture
def container():
    return build_container()


@pytest.fixture
def student(container):
    return container.auth_service.register_user(name="Jane Student", email="jane@example.com", password="secret123").user


@pytest.fixture
def exam(container):
    return container.exams_repo.create(make_draft())


@pytest.fixture
def app():
    app = create_app("config.testing")
    yield app


@pytest.fixture
def client(app):
    return app.test_client()
