"""
Lesson progress aggregation.
"""
from typing import Dict, List, Tuple

from sqlalchemy import and_
from sqlalchemy.orm import Session

from lexiq.models.exercise import Exercise
from lexiq.models.progress import UserExerciseProgress
from lexiq.schemas.progress import LessonProgressSummary

# Fixed pass bar: earned / possible XP needed to complete a lesson.
COMPLETION_THRESHOLD = 0.70


class ProgressSummarizer:
    """Aggregates a user's progress rows into lesson completion figures."""

    def __init__(self, db: Session):
        self.db = db

    def _lesson_rows(self, user_id: int, lesson_id: int) -> List[Tuple]:
        # Outer join: un-attempted exercises still count towards possible XP.
        return (
            self.db.query(
                Exercise.id,
                Exercise.points,
                UserExerciseProgress.is_completed,
                UserExerciseProgress.points_earned,
            )
            .outerjoin(
                UserExerciseProgress,
                and_(
                    UserExerciseProgress.exercise_id == Exercise.id,
                    UserExerciseProgress.user_id == user_id,
                ),
            )
            .filter(Exercise.lesson_id == lesson_id)
            .all()
        )

    def summarize_lesson(self, user_id: int, lesson_id: int) -> LessonProgressSummary:
        """
        Summarize one user's progress in a lesson.

        An empty lesson (or one worth 0 XP) is vacuously complete. The
        threshold check uses the unrounded ratio; only the reported
        percentage is rounded.
        """
        rows = self._lesson_rows(user_id, lesson_id)

        completed = [r for r in rows if r.is_completed]
        earned_xp = sum(r.points_earned or 0 for r in completed)
        total_possible_xp = sum(r.points or 0 for r in rows)
        ratio = earned_xp / total_possible_xp if total_possible_xp > 0 else 1.0

        return LessonProgressSummary(
            completed_exercises=len(completed),
            total_exercises=len(rows),
            earned_xp=earned_xp,
            total_possible_xp=total_possible_xp,
            completion_percentage=round(ratio, 2),
            meets_completion_threshold=ratio >= COMPLETION_THRESHOLD,
        )

    def exercise_progress(self, user_id: int, lesson_id: int) -> Dict[int, UserExerciseProgress]:
        """Progress rows of the user in the lesson, keyed by exercise id."""
        rows = (
            self.db.query(UserExerciseProgress)
            .join(Exercise, Exercise.id == UserExerciseProgress.exercise_id)
            .filter(
                Exercise.lesson_id == lesson_id,
                UserExerciseProgress.user_id == user_id,
            )
            .all()
        )
        return {row.exercise_id: row for row in rows}
