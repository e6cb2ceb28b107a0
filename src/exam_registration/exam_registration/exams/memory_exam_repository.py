from __future__ import annotations

import threading
from dataclasses import replace
from typing import Optional, Sequence

from .model import Exam, ExamDraft
from .repository import ExamRepository


class InMemoryExamRepository(ExamRepository):
    """Process-local exam list; reset on restart."""

    def __init__(self):
        self._lock = threading.RLock()
        self._exams: dict[str, Exam] = {}
        self._next_id = 1

    def list_all(self) -> Sequence[Exam]:
        with self._lock:
            return list(self._exams.values())

    def get_by_id(self, exam_id: str) -> Optional[Exam]:
        with self._lock:
            return self._exams.get(exam_id)

    def create(self, draft: ExamDraft, *, exam_id: Optional[str] = None) -> Exam:
        with self._lock:
            if exam_id is None:
                exam_id = f"exam-{self._next_id:03d}"
                while exam_id in self._exams:
                    self._next_id += 1
                    exam_id = f"exam-{self._next_id:03d}"
                self._next_id += 1
            elif exam_id in self._exams:
                raise ValueError(f"Duplicate exam id: {exam_id}")

            exam = Exam(exam_id=exam_id, **vars(draft))
            self._exams[exam_id] = exam
            return exam

    def update(self, exam_id: str, draft: ExamDraft) -> Optional[Exam]:
        with self._lock:
            if exam_id not in self._exams:
                return None
            exam = Exam(exam_id=exam_id, **vars(draft))
            self._exams[exam_id] = exam
            return exam

    def delete(self, exam_id: str) -> bool:
        with self._lock:
            return self._exams.pop(exam_id, None) is not None

    def reserve_seat(self, exam_id: str) -> bool:
        with self._lock:
            exam = self._exams.get(exam_id)
            if not exam or exam.available_seats <= 0:
                return False
            self._exams[exam_id] = replace(exam, available_seats=exam.available_seats - 1)
            return True

    def release_seat(self, exam_id: str) -> bool:
        with self._lock:
            exam = self._exams.get(exam_id)
            if not exam:
                return False
            self._exams[exam_id] = replace(exam, available_seats=exam.available_seats + 1)
            return True
