"""
XP statistics read from a user's progress rows.
"""
from sqlalchemy import func
from sqlalchemy.orm import Session

from lexiq.core.exceptions import NotFoundError
from lexiq.core.helpers.levels import calculate_level
from lexiq.models.progress import UserExerciseProgress
from lexiq.models.user import User
from lexiq.schemas.user import UserXp


def get_user_xp(db: Session, user_id: int) -> UserXp:
    """
    Total XP, completed exercise count and last completion of a user.

    Raises:
        NotFoundError: User missing
    """
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError(f"User with ID {user_id} not found")

    completed, last_activity = (
        db.query(
            func.count(UserExerciseProgress.id),
            func.max(UserExerciseProgress.completed_at),
        )
        .filter(
            UserExerciseProgress.user_id == user_id,
            UserExerciseProgress.is_completed.is_(True),
        )
        .one()
    )

    total_xp = user.total_points_earned or 0
    return UserXp(
        user_id=user_id,
        total_xp=total_xp,
        completed_exercises=completed or 0,
        level=calculate_level(total_xp),
        last_activity_at=last_activity,
    )
