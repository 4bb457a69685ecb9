"""
API endpoints for lesson completion.
"""
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lexiq.core.dependencies import get_current_active_user, get_db
from lexiq.models.user import User
from lexiq.schemas.progress import CompleteLessonResponse
from lexiq.services.progress_tracker import ProgressTracker

router = APIRouter()


@router.post("/{lesson_id}/complete", response_model=CompleteLessonResponse)
def complete_lesson(
    lesson_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Any:
    """
    Complete a lesson.

    The lesson counts as completed once 70% of its XP has been earned, in
    which case the next lesson of the course is unlocked.
    """
    return ProgressTracker(db).complete_lesson(current_user.id, lesson_id)  # type: ignore
