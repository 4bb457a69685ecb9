"""
API endpoints for answering exercises and reading lesson progress.
"""
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from lexiq.core.dependencies import get_current_active_user, get_db
from lexiq.models.user import User
from lexiq.schemas.progress import (
    LessonProgressResult,
    LessonSubmissions,
    SubmitAnswerRequest,
    SubmitAnswerResponse,
)
from lexiq.services.progress_tracker import ProgressTracker

router = APIRouter()


@router.post("/{exercise_id}/submit", response_model=SubmitAnswerResponse)
def submit_answer(
    exercise_id: int,
    request: SubmitAnswerRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Any:
    """
    Submit an answer for an exercise.

    An incorrect answer is a normal response with ``is_correct`` false.
    XP is only awarded the first time the exercise is answered correctly.
    """
    if not request.answer or not request.answer.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Answer cannot be empty",
        )

    tracker = ProgressTracker(db)
    return tracker.submit_answer(current_user.id, exercise_id, request.answer)  # type: ignore


@router.get("/lesson/{lesson_id}/progress", response_model=LessonProgressResult)
def get_lesson_progress(
    lesson_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Any:
    """
    Get the lesson summary and per exercise progress of the current user.
    """
    return ProgressTracker(db).get_lesson_progress(current_user.id, lesson_id)  # type: ignore


@router.get("/lesson/{lesson_id}/submissions", response_model=LessonSubmissions)
def get_lesson_submissions(
    lesson_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Any:
    """
    Get the last submission of the current user for each attempted exercise.
    """
    return ProgressTracker(db).get_lesson_submissions(current_user.id, lesson_id)  # type: ignore
