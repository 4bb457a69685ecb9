"""API v1 router."""
from fastapi import APIRouter

from lexiq.api.v1 import exercises, leaderboard, lessons, user

api_router = APIRouter()

api_router.include_router(exercises.router, prefix="/exercises", tags=["Exercises"])
api_router.include_router(lessons.router, prefix="/lessons", tags=["Lessons"])
api_router.include_router(leaderboard.router, prefix="/leaderboard", tags=["Leaderboard"])
api_router.include_router(user.router, prefix="/users", tags=["Users"])
