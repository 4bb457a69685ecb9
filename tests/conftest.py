import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import pytest

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALGORITHM", "HS256")

from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from lexiq.core.security import create_access_token
from lexiq.db.base import build_engine
from lexiq.models import Base
from lexiq.models.course import Course, Lesson
from lexiq.models.exercise import (
    ExerciseOption,
    FillInBlankExercise,
    ListeningExercise,
    MultipleChoiceExercise,
    TranslationExercise,
)
from lexiq.models.progress import UserExerciseProgress
from lexiq.models.user import User


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'lexiq_test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


def make_user(db, username: str, role: str = "student", total_points_earned: int = 0, **kwargs) -> User:
    user = User(
        email=f"{username}@example.com",
        username=username,
        role=role,
        total_points_earned=total_points_earned,
        **kwargs,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@dataclass
class Course1:
    """Ids of the seeded course. Exercises in lesson 1 are worth 10, 10, 15, 15 XP."""

    course_id: int
    lesson1_id: int
    lesson2_id: int
    lesson3_id: int
    fill_in_blank_id: int
    multiple_choice_id: int
    correct_option_id: int
    wrong_option_id: int
    translation_id: int
    listening_id: int
    lesson2_exercise_id: int


@pytest.fixture
def student(db) -> User:
    return make_user(db, "giulia")


@pytest.fixture
def admin(db) -> User:
    return make_user(db, "admin", role="admin")


@pytest.fixture
def course(db) -> Course1:
    course = Course(title="Italian for Beginners", language="Italian", order_index=0)
    lesson1 = Lesson(title="Greetings", order_index=0, is_locked=False)
    lesson2 = Lesson(title="Introductions", order_index=1, is_locked=True)
    lesson3 = Lesson(title="Review", order_index=2, is_locked=True)
    course.lessons = [lesson1, lesson2, lesson3]

    fill_in_blank = FillInBlankExercise(
        title="Mi ___ Marco",
        points=10,
        order_index=0,
        is_locked=False,
        correct_answer="chiamo",
        case_sensitive=False,
        trim_whitespace=True,
        explanation="'Mi chiamo' means 'my name is'.",
    )
    correct_option = ExerciseOption(option_text="Ciao", is_correct=True, order_index=0)
    wrong_option = ExerciseOption(option_text="Grazie", is_correct=False, order_index=1)
    multiple_choice = MultipleChoiceExercise(
        title="How do you say 'hello'?",
        points=10,
        order_index=1,
        is_locked=True,
        options=[correct_option, wrong_option],
    )
    translation = TranslationExercise(
        title="Translate 'Good evening'",
        points=15,
        order_index=2,
        is_locked=True,
        source_text="Good evening",
        target_text="Buonasera",
        source_lang="en",
        target_lang="it",
        matching_threshold=0.85,
    )
    listening = ListeningExercise(
        title="Write what you hear",
        points=15,
        order_index=3,
        is_locked=True,
        audio_url="/media/audio/buongiorno.mp3",
        correct_answer="Buongiorno",
        accepted_answers="buon giorno",
        case_sensitive=False,
        max_replays=3,
    )
    lesson1.exercises = [fill_in_blank, multiple_choice, translation, listening]

    lesson2_exercise = FillInBlankExercise(
        title="Io ___ italiano",
        points=10,
        order_index=0,
        is_locked=True,
        correct_answer="sono",
        case_sensitive=False,
        trim_whitespace=True,
    )
    lesson2.exercises = [lesson2_exercise]

    db.add(course)
    db.commit()

    return Course1(
        course_id=course.id,
        lesson1_id=lesson1.id,
        lesson2_id=lesson2.id,
        lesson3_id=lesson3.id,
        fill_in_blank_id=fill_in_blank.id,
        multiple_choice_id=multiple_choice.id,
        correct_option_id=correct_option.id,
        wrong_option_id=wrong_option.id,
        translation_id=translation.id,
        listening_id=listening.id,
        lesson2_exercise_id=lesson2_exercise.id,
    )


def add_completion(
    db,
    user_id: int,
    points: int,
    completed_at: datetime,
    lesson_id: Optional[int] = None,
) -> UserExerciseProgress:
    """Insert a completed progress row on a fresh exercise worth ``points``."""
    if lesson_id is None:
        lesson = db.query(Lesson).first()
        if lesson is None:
            course = Course(title="History", order_index=99)
            lesson = Lesson(title="History", order_index=0, is_locked=False, course=course)
            db.add(lesson)
            db.flush()
        lesson_id = lesson.id

    next_order = db.query(FillInBlankExercise).filter(FillInBlankExercise.lesson_id == lesson_id).count() + 100
    exercise = FillInBlankExercise(
        lesson_id=lesson_id,
        title=f"Exercise {next_order}",
        points=points,
        order_index=next_order,
        is_locked=False,
        correct_answer="x",
    )
    db.add(exercise)
    db.flush()

    progress = UserExerciseProgress(
        user_id=user_id,
        exercise_id=exercise.id,
        is_completed=True,
        points_earned=points,
        completed_at=completed_at,
        attempts_count=1,
    )
    db.add(progress)
    db.commit()
    return progress


def at_noon(day) -> datetime:
    return datetime(day.year, day.month, day.day, 12, 0, tzinfo=timezone.utc)


def auth_headers(user_id: int) -> dict:
    return {"Authorization": f"Bearer {create_access_token(str(user_id))}"}


@pytest.fixture
def client(session_factory):
    from lexiq.core.dependencies import get_db
    from lexiq.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
