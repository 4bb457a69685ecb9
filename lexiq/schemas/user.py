"""
Pydantic schemas for user XP.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class UserXp(BaseModel):
    """XP statistics of a user."""

    user_id: int
    total_xp: int
    completed_exercises: int
    level: int
    last_activity_at: Optional[datetime] = None
