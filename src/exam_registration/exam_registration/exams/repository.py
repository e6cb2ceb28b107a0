from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Exam, ExamDraft


class ExamRepository(Protocol):
    def list_all(self) -> Sequence[Exam]:
        raise NotImplementedError

    def get_by_id(self, exam_id: str) -> Optional[Exam]:
        raise NotImplementedError

    def create(self, draft: ExamDraft, *, exam_id: Optional[str] = None) -> Exam:
        raise NotImplementedError

    def update(self, exam_id: str, draft: ExamDraft) -> Optional[Exam]:
        raise NotImplementedError

    def delete(self, exam_id: str) -> bool:
        raise NotImplementedError

    def reserve_seat(self, exam_id: str) -> bool:
        """Atomically take one seat. False when the exam is missing or full."""

        raise NotImplementedError

    def release_seat(self, exam_id: str) -> bool:
        raise NotImplementedError
