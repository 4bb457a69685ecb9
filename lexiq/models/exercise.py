"""
Exercise models.

Exercises are stored in a single table discriminated by ``exercise_type``.
Each variant maps to its own subclass, so loading an exercise always yields
the concrete type the answer validator dispatches on.
"""
import enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from lexiq.db.base import Base


class ExerciseType(str, enum.Enum):
    """Exercise variants."""

    MULTIPLE_CHOICE = "multiple_choice"
    FILL_IN_BLANK = "fill_in_blank"
    LISTENING = "listening"
    TRANSLATION = "translation"


class Exercise(Base):
    """Common exercise columns plus the nullable per-variant columns."""

    __tablename__ = "exercises"
    __table_args__ = (
        UniqueConstraint("lesson_id", "order_index", name="uq_exercises_lesson_order"),
        CheckConstraint("points >= 0", name="ck_exercises_points_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    lesson_id = Column(Integer, ForeignKey("lessons.id", ondelete="CASCADE"), nullable=False)
    exercise_type = Column(String(50), nullable=False)
    title = Column(String, nullable=False)
    instructions = Column(Text, nullable=True)
    points = Column(Integer, nullable=False, default=10)
    order_index = Column(Integer, nullable=False)
    is_locked = Column(Boolean, nullable=False, default=True)
    explanation = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Fill in blank / listening
    correct_answer = Column(String, nullable=True)
    accepted_answers = Column(String, nullable=True)  # comma separated alternatives
    case_sensitive = Column(Boolean, nullable=True, default=False)
    trim_whitespace = Column(Boolean, nullable=True, default=True)

    # Listening
    audio_url = Column(String, nullable=True)
    max_replays = Column(Integer, nullable=True, default=3)

    # Translation
    source_text = Column(Text, nullable=True)
    target_text = Column(Text, nullable=True)
    source_lang = Column(String(10), nullable=True)
    target_lang = Column(String(10), nullable=True)
    matching_threshold = Column(Float, nullable=True, default=0.85)

    # Relationships
    lesson = relationship("Lesson", back_populates="exercises")

    __mapper_args__ = {"polymorphic_on": exercise_type}

    @property
    def kind(self) -> ExerciseType:
        return ExerciseType(self.exercise_type)


class MultipleChoiceExercise(Exercise):
    """Answer is the id of one of the options."""

    options = relationship(
        "ExerciseOption",
        back_populates="exercise",
        cascade="all, delete-orphan",
        order_by="ExerciseOption.order_index",
    )

    __mapper_args__ = {"polymorphic_identity": ExerciseType.MULTIPLE_CHOICE.value}


class FillInBlankExercise(Exercise):
    """Free text answer compared after optional trimming and lowercasing."""

    __mapper_args__ = {"polymorphic_identity": ExerciseType.FILL_IN_BLANK.value}


class ListeningExercise(Exercise):
    """Transcription of an audio clip. Answers are always trimmed."""

    __mapper_args__ = {"polymorphic_identity": ExerciseType.LISTENING.value}


class TranslationExercise(Exercise):
    """Free translation accepted above a similarity threshold."""

    __mapper_args__ = {"polymorphic_identity": ExerciseType.TRANSLATION.value}


class ExerciseOption(Base):
    """Option of a multiple choice exercise. Exactly one is correct."""

    __tablename__ = "exercise_options"

    id = Column(Integer, primary_key=True, index=True)
    exercise_id = Column(Integer, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False)
    option_text = Column(String, nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False)
    order_index = Column(Integer, nullable=False, default=0)

    # Relationships
    exercise = relationship("MultipleChoiceExercise", back_populates="options")
