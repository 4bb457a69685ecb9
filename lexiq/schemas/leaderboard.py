"""
Pydantic schemas for the leaderboard.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class TimeFrame(str, Enum):
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    ALL_TIME = "AllTime"


class LeaderboardEntry(BaseModel):
    """One ranked user."""

    rank: int
    user_id: int
    display_name: str
    avatar: Optional[str] = None
    total_xp: int
    current_streak: int
    longest_streak: int
    level: int
    change: int = Field(..., description="previous rank - current rank, 0 for new entries")
    is_current_user: bool


class LeaderboardResponse(BaseModel):
    """Top entries plus the requesting user's own entry."""

    time_frame: TimeFrame
    entries: List[LeaderboardEntry]
    current_user_entry: Optional[LeaderboardEntry] = None
