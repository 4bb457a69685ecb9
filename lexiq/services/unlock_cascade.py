"""
Locked -> Unlocked transitions for the next exercise and the next lesson.

Unlocked is terminal: nothing here ever sets ``is_locked`` back to True.
Each transition is a guarded UPDATE (``WHERE is_locked``), so firing it twice
is a no-op and concurrent callers cannot both report an unlock.
"""
import enum
import logging
from typing import Optional

from sqlalchemy.orm import Session

from lexiq.models.course import Lesson
from lexiq.models.exercise import Exercise

logger = logging.getLogger(__name__)


class UnlockStatus(str, enum.Enum):
    UNLOCKED = "unlocked"
    ALREADY_UNLOCKED = "already_unlocked"
    NO_NEXT = "no_next"


class UnlockCascade:
    """Unlocks the successor of a completed exercise or lesson."""

    def __init__(self, db: Session):
        self.db = db

    # ============= Lookups =============

    def next_exercise(self, exercise: Exercise) -> Optional[Exercise]:
        return (
            self.db.query(Exercise)
            .filter(
                Exercise.lesson_id == exercise.lesson_id,
                Exercise.order_index > exercise.order_index,
            )
            .order_by(Exercise.order_index)
            .first()
        )

    def first_exercise(self, lesson_id: int) -> Optional[Exercise]:
        return (
            self.db.query(Exercise)
            .filter(Exercise.lesson_id == lesson_id)
            .order_by(Exercise.order_index)
            .first()
        )

    def next_lesson(self, lesson: Lesson) -> Optional[Lesson]:
        return (
            self.db.query(Lesson)
            .filter(
                Lesson.course_id == lesson.course_id,
                Lesson.order_index > lesson.order_index,
            )
            .order_by(Lesson.order_index)
            .first()
        )

    def is_last_in_course(self, lesson: Lesson) -> bool:
        return self.next_lesson(lesson) is None

    # ============= Transitions =============

    def _unlock(self, model, row_id: int) -> UnlockStatus:
        """Guarded update in the caller's transaction. The caller commits."""
        updated = (
            self.db.query(model)
            .filter(model.id == row_id, model.is_locked.is_(True))
            .update({model.is_locked: False}, synchronize_session=False)
        )
        return UnlockStatus.UNLOCKED if updated else UnlockStatus.ALREADY_UNLOCKED

    def unlock_next_exercise(self, exercise: Exercise) -> UnlockStatus:
        """
        Unlock the exercise following ``exercise`` in its lesson.

        Returns:
            NO_NEXT when ``exercise`` is the last one in the lesson.
        """
        nxt = self.next_exercise(exercise)
        if nxt is None:
            return UnlockStatus.NO_NEXT

        exercise_id, next_id = exercise.id, nxt.id
        status = self._unlock(Exercise, next_id)
        self.db.commit()
        if status is UnlockStatus.UNLOCKED:
            logger.info(f"Unlocked exercise {next_id} after exercise {exercise_id}")
        return status

    def unlock_next_lesson(self, lesson: Lesson) -> UnlockStatus:
        """
        Unlock the lesson following ``lesson`` in its course, together with
        that lesson's first exercise, in one transaction.

        Returns:
            NO_NEXT when ``lesson`` is the last one in the course.
        """
        nxt = self.next_lesson(lesson)
        if nxt is None:
            return UnlockStatus.NO_NEXT

        lesson_id, next_id = lesson.id, nxt.id
        status = self._unlock(Lesson, next_id)
        if status is UnlockStatus.UNLOCKED:
            first = self.first_exercise(next_id)
            if first is not None:
                self._unlock(Exercise, first.id)
        self.db.commit()

        if status is UnlockStatus.UNLOCKED:
            logger.info(f"Unlocked lesson {next_id} after lesson {lesson_id}")
        return status
