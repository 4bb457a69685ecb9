"""
User XP endpoints.
"""
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lexiq.core.dependencies import get_current_active_user, get_db
from lexiq.models.user import User
from lexiq.schemas.user import UserXp
from lexiq.services.user_xp import get_user_xp

router = APIRouter()


@router.get("/me/xp", response_model=UserXp)
def read_my_xp(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Any:
    """
    Get XP statistics of the current user.
    """
    return get_user_xp(db, current_user.id)  # type: ignore
