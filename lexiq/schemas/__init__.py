"""Schemas module."""
from lexiq.schemas.leaderboard import LeaderboardEntry, LeaderboardResponse, TimeFrame
from lexiq.schemas.progress import (
    CompleteLessonResponse,
    ExerciseProgress,
    ExerciseSubmission,
    LessonProgressResult,
    LessonProgressSummary,
    LessonSubmissions,
    NextLessonInfo,
    SubmitAnswerRequest,
    SubmitAnswerResponse,
)
from lexiq.schemas.user import UserXp

__all__ = [
    "CompleteLessonResponse",
    "ExerciseProgress",
    "ExerciseSubmission",
    "LeaderboardEntry",
    "LeaderboardResponse",
    "LessonProgressResult",
    "LessonProgressSummary",
    "LessonSubmissions",
    "NextLessonInfo",
    "SubmitAnswerRequest",
    "SubmitAnswerResponse",
    "TimeFrame",
    "UserXp",
]
