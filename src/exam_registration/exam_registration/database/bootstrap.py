"""Startup data for the in-memory stores.

Everything here runs on each ``create_app`` call; nothing survives a restart.
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import now_local
from ..exams.repository import ExamRepository
from ..exams.model import ExamDraft
from ..users.service import AuthService

logger = logging.getLogger(__name__)

# (id, title, description, days until exam, days until deadline, fee, location, seats)
DEMO_EXAMS = (
    (
        "exam-001",
        "Computer Science Fundamentals",
        "Test your knowledge of algorithms, data structures, and programming concepts.",
        60, 30, "50.00", "Online", 200,
    ),
    (
        "exam-002",
        "Advanced Mathematics",
        "Comprehensive test covering calculus, linear algebra, and statistics.",
        65, 35, "60.00", "Main Campus - Building A", 150,
    ),
    (
        "exam-003",
        "English Literature",
        "Essay-based examination on classical and contemporary literary works.",
        70, 40, "45.00", "Liberal Arts Center", 100,
    ),
    (
        "exam-004",
        "Physics Principles",
        "Theoretical and practical examination of fundamental physics concepts.",
        80, 50, "55.00", "Science Building - Lab 103", 80,
    ),
    (
        "exam-005",
        "Database Management System",
        "Relational modelling, SQL, normalisation, and transaction processing.",
        65, 56, "60.00", "Main Campus - Building A", 150,
    ),
)


def seed_demo_exams(exams: ExamRepository, *, today: Optional[date] = None) -> int:
    """Load the demo catalogue, dated relative to ``today``. Existing ids are skipped."""
    today = today or now_local().date()
    created = 0
    for exam_id, title, description, exam_days, deadline_days, fee, location, seats in DEMO_EXAMS:
        if exams.get_by_id(exam_id):
            continue
        exams.create(
            ExamDraft(
                title=title,
                description=description,
                date=today + timedelta(days=exam_days),
                application_deadline=today + timedelta(days=deadline_days),
                fee=Decimal(fee),
                location=location,
                available_seats=seats,
            ),
            exam_id=exam_id,
        )
        created += 1
    logger.info("Seeded %d demo exam(s)", created)
    return created


def ensure_admin_user(auth: AuthService, *, name: str, email: str, password: str) -> str:
    admin = auth.ensure_admin(name=name, email=email, password=password)
    logger.info("Admin account ready: %s", admin.email)
    return admin.user_id
