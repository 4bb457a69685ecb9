"""
Database initialization and seeding.
"""
import logging

from sqlalchemy.orm import Session

from lexiq.models.course import Course, Lesson
from lexiq.models.exercise import (
    ExerciseOption,
    FillInBlankExercise,
    ListeningExercise,
    MultipleChoiceExercise,
    TranslationExercise,
)
from lexiq.models.user import User

logger = logging.getLogger(__name__)


def _seed_demo_course(db: Session) -> Course:
    course = Course(title="Italian for Beginners", language="Italian", order_index=0)

    greetings = Lesson(title="Greetings", order_index=0, is_locked=False)
    introductions = Lesson(title="Introducing yourself", order_index=1, is_locked=True)
    course.lessons = [greetings, introductions]

    greetings.exercises = [
        MultipleChoiceExercise(
            title="How do you say 'hello'?",
            points=10,
            order_index=0,
            is_locked=False,
            explanation="'Ciao' is the informal greeting.",
            options=[
                ExerciseOption(option_text="Ciao", is_correct=True, order_index=0),
                ExerciseOption(option_text="Grazie", is_correct=False, order_index=1),
                ExerciseOption(option_text="Prego", is_correct=False, order_index=2),
            ],
        ),
        FillInBlankExercise(
            title="Mi ___ Marco",
            points=10,
            order_index=1,
            correct_answer="chiamo",
            case_sensitive=False,
            trim_whitespace=True,
            explanation="'Mi chiamo' means 'my name is'.",
        ),
        ListeningExercise(
            title="Write what you hear",
            points=15,
            order_index=2,
            audio_url="/media/audio/buongiorno.mp3",
            correct_answer="buongiorno",
            accepted_answers="buon giorno",
            case_sensitive=False,
            max_replays=3,
        ),
        TranslationExercise(
            title="Translate 'Good evening'",
            points=15,
            order_index=3,
            source_text="Good evening",
            target_text="Buonasera",
            source_lang="en",
            target_lang="it",
            matching_threshold=0.85,
        ),
    ]

    introductions.exercises = [
        FillInBlankExercise(
            title="Io ___ italiano",
            points=10,
            order_index=0,
            correct_answer="sono",
            case_sensitive=False,
            trim_whitespace=True,
        ),
        TranslationExercise(
            title="Translate 'Nice to meet you'",
            points=20,
            order_index=1,
            source_text="Nice to meet you",
            target_text="Piacere di conoscerti",
            source_lang="en",
            target_lang="it",
            matching_threshold=0.8,
        ),
    ]

    db.add(course)
    return course


def init_db(db: Session) -> None:
    """
    Initialize database with default data.

    Args:
        db: Database session
    """
    admin = db.query(User).filter(User.email == "admin@example.com").first()
    if not admin:
        admin = User(
            email="admin@example.com",
            username="admin",
            full_name="System Administrator",
            role="admin",
            is_active=True,
        )
        db.add(admin)
        logger.info("Admin user created")

    if db.query(Course).count() == 0:
        _seed_demo_course(db)
        logger.info("Demo course created")

    db.commit()
