"""
Tests for the user XP read model
"""

from datetime import date, timedelta

import pytest

from lexiq.core.exceptions import NotFoundError
from lexiq.services.progress_tracker import ProgressTracker
from lexiq.services.user_xp import get_user_xp

from tests.conftest import add_completion, at_noon, make_user


def test_new_user(db, student):
    xp = get_user_xp(db, student.id)

    assert xp.total_xp == 0
    assert xp.completed_exercises == 0
    assert xp.level == 1
    assert xp.last_activity_at is None


def test_after_submissions(db, student, course):
    tracker = ProgressTracker(db)
    tracker.submit_answer(student.id, course.fill_in_blank_id, "chiamo")
    tracker.submit_answer(student.id, course.translation_id, "bona")

    xp = get_user_xp(db, student.id)
    assert xp.total_xp == 10
    assert xp.completed_exercises == 1


def test_level_and_last_activity(db):
    user = make_user(db, "anna", total_points_earned=600)
    first = at_noon(date(2026, 3, 1))
    add_completion(db, user.id, 300, first)
    add_completion(db, user.id, 300, first + timedelta(days=2))

    xp = get_user_xp(db, user.id)
    assert xp.level == 3
    assert xp.completed_exercises == 2
    assert xp.last_activity_at.date() == (first + timedelta(days=2)).date()


def test_missing_user(db):
    with pytest.raises(NotFoundError):
        get_user_xp(db, 9999)
