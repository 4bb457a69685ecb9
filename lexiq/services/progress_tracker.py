"""
Answer submission and lesson completion.

ProgressTracker is the only writer of ``UserExerciseProgress`` rows and of the
cached ``User.total_points_earned`` aggregate.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from lexiq.core.exceptions import ForbiddenError, NotFoundError
from lexiq.core.permissions import RoleProvider
from lexiq.models.course import Lesson
from lexiq.models.exercise import Exercise
from lexiq.models.progress import UserExerciseProgress
from lexiq.models.user import User
from lexiq.schemas.progress import (
    CompleteLessonResponse,
    ExerciseProgress,
    ExerciseSubmission,
    LessonProgressResult,
    LessonSubmissions,
    NextLessonInfo,
    SubmitAnswerResponse,
)
from lexiq.services.answer_validator import correct_answer_for, validate_answer
from lexiq.services.progress_summarizer import COMPLETION_THRESHOLD, ProgressSummarizer
from lexiq.services.unlock_cascade import UnlockCascade, UnlockStatus

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProgressTracker:
    """
    Orchestrates one submission: lock check, validation, progress upsert,
    idempotent XP award and unlock cascade.
    """

    def __init__(
        self,
        db: Session,
        can_bypass_locks: Optional[Callable[[int], bool]] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.db = db
        self.can_bypass_locks = can_bypass_locks or RoleProvider(db).can_bypass_locks
        self.clock = clock
        self.unlocks = UnlockCascade(db)
        self.summarizer = ProgressSummarizer(db)

    # ============= Loaders =============

    def _get_user(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFoundError(f"User with ID {user_id} not found")
        return user

    def _get_exercise(self, exercise_id: int) -> Exercise:
        exercise = (
            self.db.query(Exercise)
            .options(joinedload(Exercise.lesson))
            .filter(Exercise.id == exercise_id)
            .first()
        )
        if exercise is None:
            raise NotFoundError(f"Exercise with ID {exercise_id} not found")
        return exercise

    def _get_lesson(self, lesson_id: int) -> Lesson:
        lesson = self.db.query(Lesson).filter(Lesson.id == lesson_id).first()
        if lesson is None:
            raise NotFoundError(f"Lesson with ID {lesson_id} not found")
        return lesson

    # ============= Submission =============

    def submit_answer(self, user_id: int, exercise_id: int, answer: str) -> SubmitAnswerResponse:
        """
        Grade an answer and record it.

        Args:
            user_id: Submitting user
            exercise_id: Target exercise
            answer: Raw answer (blank answers are rejected by the caller)

        Returns:
            SubmitAnswerResponse with the updated lesson summary

        Raises:
            NotFoundError: Exercise or user missing
            ForbiddenError: Lesson locked and the user cannot bypass locks
        """
        exercise = self._get_exercise(exercise_id)
        self._get_user(user_id)

        lesson = exercise.lesson
        if lesson is not None and lesson.is_locked and not self.can_bypass_locks(user_id):
            logger.warning(f"User {user_id} submitted to exercise {exercise_id} in locked lesson {lesson.id}")
            raise ForbiddenError("Cannot submit answers for a locked lesson")

        is_correct = validate_answer(exercise, answer)
        points_earned = exercise.points if is_correct else 0
        lesson_id = exercise.lesson_id
        explanation = exercise.explanation
        correct_answer = None if is_correct else correct_answer_for(exercise)

        awarded = self._record_submission(user_id, exercise_id, exercise.points, answer, is_correct)
        if awarded:
            logger.info(f"Awarded {points_earned} XP to user {user_id} for exercise {exercise_id}")

        if is_correct:
            self.unlocks.unlock_next_exercise(exercise)

        return SubmitAnswerResponse(
            is_correct=is_correct,
            points_earned=points_earned,
            correct_answer=correct_answer,
            explanation=explanation,
            lesson_progress=self.summarizer.summarize_lesson(user_id, lesson_id),
        )

    def _record_submission(
        self, user_id: int, exercise_id: int, points: int, answer: str, is_correct: bool
    ) -> bool:
        """Upsert the progress row and award XP in one transaction."""
        try:
            awarded = self._upsert_progress(user_id, exercise_id, points, answer, is_correct)
            self.db.commit()
        except IntegrityError:
            # A concurrent submission created the row first; it exists now,
            # so the second pass takes the update path.
            self.db.rollback()
            logger.warning(f"Progress row for user {user_id}, exercise {exercise_id} created concurrently")
            awarded = self._upsert_progress(user_id, exercise_id, points, answer, is_correct)
            self.db.commit()
        return awarded

    def _upsert_progress(
        self, user_id: int, exercise_id: int, points: int, answer: str, is_correct: bool
    ) -> bool:
        """
        Create or update the (user, exercise) row.

        Returns:
            True if this call moved the row to completed, in which case the
            user's cached total was incremented. At most one call per row
            ever returns True.
        """
        now = self.clock()
        progress = (
            self.db.query(UserExerciseProgress)
            .filter(
                UserExerciseProgress.user_id == user_id,
                UserExerciseProgress.exercise_id == exercise_id,
            )
            .with_for_update()
            .populate_existing()
            .first()
        )

        if progress is None:
            progress = UserExerciseProgress(
                user_id=user_id,
                exercise_id=exercise_id,
                is_completed=is_correct,
                points_earned=points if is_correct else 0,
                completed_at=now if is_correct else None,
                attempts_count=1,
                last_answer=answer,
                last_answer_correct=is_correct,
                first_attempt_at=now,
                last_attempt_at=now,
            )
            self.db.add(progress)
            self.db.flush()
            newly_completed = is_correct
        else:
            was_already_completed = bool(progress.is_completed)
            self.db.query(UserExerciseProgress).filter(
                UserExerciseProgress.id == progress.id
            ).update(
                {
                    UserExerciseProgress.attempts_count: UserExerciseProgress.attempts_count + 1,
                    UserExerciseProgress.last_answer: answer,
                    UserExerciseProgress.last_answer_correct: is_correct,
                    UserExerciseProgress.last_attempt_at: now,
                },
                synchronize_session=False,
            )

            newly_completed = False
            if is_correct and not was_already_completed:
                # Compare-and-swap: only one writer can flip the row.
                flipped = self.db.query(UserExerciseProgress).filter(
                    UserExerciseProgress.id == progress.id,
                    UserExerciseProgress.is_completed.is_(False),
                ).update(
                    {
                        UserExerciseProgress.is_completed: True,
                        UserExerciseProgress.points_earned: points,
                        UserExerciseProgress.completed_at: now,
                    },
                    synchronize_session=False,
                )
                newly_completed = flipped == 1

        if newly_completed and points:
            self.db.query(User).filter(User.id == user_id).update(
                {User.total_points_earned: User.total_points_earned + points},
                synchronize_session=False,
            )
        return newly_completed

    # ============= Lessons =============

    def complete_lesson(self, user_id: int, lesson_id: int) -> CompleteLessonResponse:
        """
        Check the completion threshold and unlock the next lesson if met.

        Raises:
            NotFoundError: Lesson missing
        """
        lesson = self._get_lesson(lesson_id)
        summary = self.summarizer.summarize_lesson(user_id, lesson_id)
        meets_threshold = summary.meets_completion_threshold

        was_unlocked = False
        if meets_threshold:
            was_unlocked = self.unlocks.unlock_next_lesson(lesson) is UnlockStatus.UNLOCKED

        next_lesson = self.unlocks.next_lesson(lesson)
        next_info = None
        if next_lesson is not None:
            next_info = NextLessonInfo(
                id=next_lesson.id,
                title=next_lesson.title,
                course_id=next_lesson.course_id,
                was_unlocked=was_unlocked,
                is_locked=bool(next_lesson.is_locked),
            )

        return CompleteLessonResponse(
            current_lesson_id=lesson_id,
            is_completed=meets_threshold,
            earned_xp=summary.earned_xp,
            total_possible_xp=summary.total_possible_xp,
            completion_percentage=summary.completion_percentage,
            required_threshold=COMPLETION_THRESHOLD,
            is_last_in_course=next_lesson is None,
            next_lesson=next_info,
        )

    def get_lesson_progress(self, user_id: int, lesson_id: int) -> LessonProgressResult:
        self._get_lesson(lesson_id)
        rows = self.summarizer.exercise_progress(user_id, lesson_id)
        return LessonProgressResult(
            summary=self.summarizer.summarize_lesson(user_id, lesson_id),
            exercise_progress={
                exercise_id: ExerciseProgress.model_validate(row)
                for exercise_id, row in rows.items()
            },
        )

    def get_lesson_submissions(self, user_id: int, lesson_id: int) -> LessonSubmissions:
        """Last recorded submission for every exercise the user attempted in a lesson."""
        lesson = self._get_lesson(lesson_id)
        rows = self.summarizer.exercise_progress(user_id, lesson_id)

        submissions: List[ExerciseSubmission] = []
        for exercise in lesson.exercises:
            row = rows.get(exercise.id)
            if row is None:
                continue
            last_correct = bool(row.last_answer_correct)
            submissions.append(
                ExerciseSubmission(
                    exercise_id=exercise.id,
                    answer=row.last_answer,
                    is_correct=last_correct,
                    is_completed=bool(row.is_completed),
                    points_earned=row.points_earned,
                    correct_answer=None if last_correct else correct_answer_for(exercise),
                    explanation=exercise.explanation,
                    submitted_at=row.last_attempt_at,
                )
            )
        return LessonSubmissions(lesson_id=lesson_id, submissions=submissions)
