"""Models module - Import all models here for Alembic."""
from lexiq.db.base import Base
from lexiq.models.user import User
from lexiq.models.course import Course, Lesson
from lexiq.models.exercise import (
    Exercise,
    ExerciseOption,
    ExerciseType,
    FillInBlankExercise,
    ListeningExercise,
    MultipleChoiceExercise,
    TranslationExercise,
)
from lexiq.models.progress import UserExerciseProgress

__all__ = ["Base", "User", "Course", "Lesson", "Exercise", "ExerciseOption", "ExerciseType", "FillInBlankExercise", "ListeningExercise", "MultipleChoiceExercise", "TranslationExercise", "UserExerciseProgress"]
