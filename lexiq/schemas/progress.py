"""
Pydantic schemas for answer submission and lesson progress.
"""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SubmitAnswerRequest(BaseModel):
    """Schema for submitting an answer to an exercise."""

    answer: str = Field(
        ..., max_length=1000, description="Option id for multiple choice, free text otherwise"
    )


class LessonProgressSummary(BaseModel):
    """Aggregated progress of one user in one lesson."""

    completed_exercises: int
    total_exercises: int
    earned_xp: int
    total_possible_xp: int
    completion_percentage: float = Field(..., description="earned / possible XP, rounded to 2 decimals")
    meets_completion_threshold: bool


class SubmitAnswerResponse(BaseModel):
    """Schema for a graded submission."""

    is_correct: bool
    points_earned: int
    correct_answer: Optional[str] = Field(None, description="Only revealed for incorrect answers")
    explanation: Optional[str] = None
    lesson_progress: LessonProgressSummary


class NextLessonInfo(BaseModel):
    """Lesson following the completed one in the same course."""

    id: int
    title: str
    course_id: int
    was_unlocked: bool
    is_locked: bool


class CompleteLessonResponse(BaseModel):
    """Schema for a lesson completion attempt."""

    current_lesson_id: int
    is_completed: bool
    earned_xp: int
    total_possible_xp: int
    completion_percentage: float
    required_threshold: float
    is_last_in_course: bool
    next_lesson: Optional[NextLessonInfo] = None


class ExerciseProgress(BaseModel):
    """Schema for one progress row."""
    model_config = ConfigDict(from_attributes=True)

    exercise_id: int
    is_completed: bool
    points_earned: int
    attempts_count: int
    completed_at: Optional[datetime] = None
    last_attempt_at: Optional[datetime] = None


class LessonProgressResult(BaseModel):
    """Lesson summary plus the per exercise progress keyed by exercise id."""

    summary: LessonProgressSummary
    exercise_progress: Dict[int, ExerciseProgress]


class ExerciseSubmission(BaseModel):
    """Last recorded submission for an exercise."""

    exercise_id: int
    answer: Optional[str] = None
    is_correct: bool
    is_completed: bool
    points_earned: int
    correct_answer: Optional[str] = None
    explanation: Optional[str] = None
    submitted_at: Optional[datetime] = None


class LessonSubmissions(BaseModel):
    """Submissions of one user within a lesson."""

    lesson_id: int
    submissions: List[ExerciseSubmission]
