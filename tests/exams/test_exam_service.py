from __future__ import annotations

import threading
from datetime import date
from decimal import Decimal

import pytest

from src.exam_registration.exam_registration.core.exceptions import NotFoundError, ValidationError

TODAY = date(2026, 3, 1)

VALID = {
    "title": "Advanced Mathematics",
    "description": "Calculus, linear algebra, and statistics.",
    "date": "2026-06-20",
    "application_deadline": "2026-05-20",
    "fee": "60",
    "location": "Main Campus - Building A",
    "available_seats": "150",
}


def test_create_exam_assigns_id_and_normalises_fields(container):
    exam = container.exam_service.create_exam(VALID)

    assert exam.exam_id == "exam-001"
    assert exam.date == date(2026, 6, 20)
    assert exam.fee == Decimal("60.00")
    assert exam.available_seats == 150
    assert container.exam_service.get_exam_by_id("exam-001") == exam


@pytest.mark.parametrize(
    "field,value,message",
    [
        ("title", "  ", "Title"),
        ("date", "20/06/2026", "Exam date"),
        ("application_deadline", "2026-07-01", "deadline cannot be after"),
        ("fee", "-1", "Fee"),
        ("fee", "abc", "Fee"),
        ("available_seats", "0", "at least one seat"),
        ("available_seats", "1.5", "whole number"),
    ],
)
def test_create_exam_validation(container, field, value, message):
    with pytest.raises(ValidationError, match=message):
        container.exam_service.create_exam({**VALID, field: value})


def test_update_exam_is_partial(container):
    exam = container.exam_service.create_exam(VALID)

    updated = container.exam_service.update_exam(exam.exam_id, {"title": "Applied Mathematics", "available_seats": 0})

    assert updated.title == "Applied Mathematics"
    assert updated.available_seats == 0
    assert updated.location == exam.location
    assert updated.date == exam.date


def test_update_exam_keeps_seat_taken_during_the_edit(container, exam, student, monkeypatch):
    original_update = container.exams_repo.update
    worker = threading.Thread(
        target=container.registration_service.register_for_exam,
        args=(exam.exam_id, student.user_id),
        kwargs={"today": TODAY},
    )

    def register_then_update(exam_id, draft):
        worker.start()
        worker.join(timeout=0.2)
        return original_update(exam_id, draft)

    monkeypatch.setattr(container.exams_repo, "update", register_then_update)

    container.exam_service.update_exam(exam.exam_id, {"title": "Renamed"})
    worker.join()

    stored = container.exams_repo.get_by_id(exam.exam_id)
    assert stored.title == "Renamed"
    assert stored.available_seats == exam.available_seats - 1
    assert len(container.registrations_repo.list_for_exam(exam.exam_id)) == 1


def test_update_exam_applies_seats_relative_to_form_baseline(container, exam, student):
    container.registration_service.register_for_exam(exam.exam_id, student.user_id, today=TODAY)

    # Form rendered with 2 seats, admin raised it to 10; one seat was taken meanwhile.
    updated = container.exam_service.update_exam(exam.exam_id, {"available_seats": "10"}, seats_baseline="2")

    assert updated.available_seats == 9


def test_update_unknown_exam_returns_none(container):
    assert container.exam_service.update_exam("exam-999", {"title": "x"}) is None


def test_get_exams_sorted_and_searchable(container):
    container.exam_service.create_exam({**VALID, "title": "Physics Principles", "date": "2026-07-05"})
    container.exam_service.create_exam(
        {**VALID, "title": "English Literature", "description": "Essay-based examination.", "date": "2026-06-25"}
    )
    container.exam_service.create_exam(VALID)

    titles = [e.title for e in container.exam_service.get_exams()]
    assert titles == ["Advanced Mathematics", "English Literature", "Physics Principles"]

    assert [e.title for e in container.exam_service.get_exams("ESSAY")] == ["English Literature"]
    assert container.exam_service.get_exams("chemistry") == []


def test_delete_exam(container, exam):
    assert container.exam_service.delete_exam(exam.exam_id) is True
    assert container.exam_service.get_exam_by_id(exam.exam_id) is None
    assert container.exam_service.delete_exam(exam.exam_id) is False


def test_delete_exam_with_active_registration_is_refused(container, exam, student):
    reg = container.registration_service.register_for_exam(exam.exam_id, student.user_id, today=TODAY)

    with pytest.raises(ValidationError, match="active registration"):
        container.exam_service.delete_exam(exam.exam_id)

    container.registration_service.cancel_registration(student.user_id, reg.registration_id)
    assert container.exam_service.delete_exam(exam.exam_id) is True


def test_registration_counts(container, exam, student):
    container.registration_service.register_for_exam(exam.exam_id, student.user_id, today=TODAY)

    assert container.exam_service.registration_counts() == {exam.exam_id: 1}


def test_delete_exam_blocks_concurrent_registration(container, exam, student, monkeypatch):
    original_list = container.registrations_repo.list_for_exam
    errors = []

    def register():
        try:
            container.registration_service.register_for_exam(exam.exam_id, student.user_id, today=TODAY)
        except NotFoundError as e:
            errors.append(e)

    worker = threading.Thread(target=register)

    def list_then_register(exam_id):
        rows = original_list(exam_id)
        worker.start()
        worker.join(timeout=0.2)
        return rows

    monkeypatch.setattr(container.registrations_repo, "list_for_exam", list_then_register)

    assert container.exam_service.delete_exam(exam.exam_id) is True
    worker.join()

    assert [str(e) for e in errors] == ["Exam not found"]
    assert list(container.registrations_repo.list_all()) == []
