"""
API endpoints for leaderboard rankings.
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from lexiq.core.dependencies import get_db, get_optional_user
from lexiq.models.user import User
from lexiq.schemas.leaderboard import LeaderboardResponse, TimeFrame
from lexiq.services.leaderboard import LeaderboardService

router = APIRouter()


@router.get("", response_model=LeaderboardResponse)
def get_leaderboard(
    time_frame: TimeFrame = Query(TimeFrame.ALL_TIME, description="Weekly, Monthly or AllTime"),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
) -> Any:
    """
    Get leaderboard rankings for a time frame.

    Anonymous requests get the top entries only; authenticated users also get
    their own entry.
    """
    current_user_id = current_user.id if current_user else None
    return LeaderboardService(db).get_leaderboard(time_frame, current_user_id)  # type: ignore
