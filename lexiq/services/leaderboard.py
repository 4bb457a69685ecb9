"""
Leaderboard rankings with streaks, levels and rank changes.

Read only. Rankings may lag concurrent submissions slightly.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from lexiq.core.config import settings
from lexiq.core.helpers.levels import calculate_level
from lexiq.core.helpers.streaks import calculate_streaks, utc_today
from lexiq.models.progress import UserExerciseProgress
from lexiq.models.user import User
from lexiq.schemas.leaderboard import LeaderboardEntry, LeaderboardResponse, TimeFrame

logger = logging.getLogger(__name__)

# Length of the current window in days; AllTime uses the cached totals.
WINDOW_DAYS = {
    TimeFrame.WEEKLY: 7,
    TimeFrame.MONTHLY: 30,
}

# Comparison window as (from, to) days ago. AllTime has no natural previous
# period and reuses the weekly one as a momentum indicator.
COMPARISON_WINDOWS = {
    TimeFrame.WEEKLY: (14, 7),
    TimeFrame.MONTHLY: (60, 30),
    TimeFrame.ALL_TIME: (14, 7),
}


@dataclass
class RawEntry:
    user_id: int
    display_name: str
    avatar: Optional[str]
    total_xp: int


def competition_ranks(entries: List[RawEntry]) -> List[int]:
    """
    Rank = 1 + number of entries with strictly more XP.

    ``entries`` must be sorted by total_xp descending. Without ties this is
    the 1-based position.
    """
    ranks: List[int] = []
    for position, entry in enumerate(entries, start=1):
        if ranks and entry.total_xp == entries[position - 2].total_xp:
            ranks.append(ranks[-1])
        else:
            ranks.append(position)
    return ranks


class LeaderboardService:
    """Builds ranked leaderboard snapshots per time frame."""

    def __init__(self, db: Session, size: Optional[int] = None):
        self.db = db
        self.size = size or settings.LEADERBOARD_SIZE

    # ============= Windows =============

    @staticmethod
    def _days_ago(today: date, days: int) -> datetime:
        return datetime.combine(today - timedelta(days=days), time.min, tzinfo=timezone.utc)

    def _window_filters(self, since: datetime, until: Optional[datetime] = None) -> list:
        filters = [
            UserExerciseProgress.is_completed.is_(True),
            UserExerciseProgress.completed_at.isnot(None),
            UserExerciseProgress.completed_at >= since,
        ]
        if until is not None:
            filters.append(UserExerciseProgress.completed_at < until)
        return filters

    # ============= Raw rankings =============

    def _all_time_entries(self) -> List[RawEntry]:
        users = (
            self.db.query(User)
            .order_by(User.total_points_earned.desc(), User.id)
            .limit(self.size)
            .all()
        )
        return [
            RawEntry(u.id, u.display_name, u.avatar_url, u.total_points_earned or 0)
            for u in users
        ]

    def _windowed_entries(self, since: datetime, until: Optional[datetime] = None) -> List[RawEntry]:
        total_xp = func.sum(UserExerciseProgress.points_earned).label("total_xp")
        rows = (
            self.db.query(User.id, User.username, User.email, User.avatar_url, total_xp)
            .join(UserExerciseProgress, UserExerciseProgress.user_id == User.id)
            .filter(*self._window_filters(since, until))
            .group_by(User.id, User.username, User.email, User.avatar_url)
            .order_by(total_xp.desc(), User.id)
            .limit(self.size)
            .all()
        )
        return [
            RawEntry(r.id, r.username or r.email or "Unknown", r.avatar_url, int(r.total_xp or 0))
            for r in rows
        ]

    def _current_entries(self, time_frame: TimeFrame, today: date) -> List[RawEntry]:
        if time_frame is TimeFrame.ALL_TIME:
            return self._all_time_entries()
        return self._windowed_entries(self._days_ago(today, WINDOW_DAYS[time_frame]))

    def _previous_ranks(self, time_frame: TimeFrame, today: date) -> Dict[int, int]:
        start, end = COMPARISON_WINDOWS[time_frame]
        entries = self._windowed_entries(self._days_ago(today, start), self._days_ago(today, end))
        return {e.user_id: rank for e, rank in zip(entries, competition_ranks(entries))}

    # ============= Streaks =============

    def _streaks_for(self, user_ids: Iterable[int], today: date) -> Dict[int, Tuple[int, int]]:
        user_ids = list(user_ids)
        if not user_ids:
            return {}

        rows = (
            self.db.query(UserExerciseProgress.user_id, UserExerciseProgress.completed_at)
            .filter(
                UserExerciseProgress.user_id.in_(user_ids),
                UserExerciseProgress.is_completed.is_(True),
                UserExerciseProgress.completed_at.isnot(None),
            )
            .all()
        )
        activity: Dict[int, list] = defaultdict(list)
        for user_id, completed_at in rows:
            activity[user_id].append(completed_at)

        return {uid: calculate_streaks(activity.get(uid, []), today=today) for uid in user_ids}

    def get_streak(self, user_id: int, today: Optional[date] = None) -> Tuple[int, int]:
        """
        Current and longest streak of consecutive UTC days with a completed exercise.

        Returns:
            (current_streak, longest_streak), (0, 0) without any completion
        """
        return self._streaks_for([user_id], today or utc_today())[user_id]

    # ============= Leaderboard =============

    @staticmethod
    def _rank_change(user_id: int, current_rank: int, previous_ranks: Dict[int, int]) -> int:
        # New entries have nothing to compare against.
        if user_id not in previous_ranks:
            return 0
        return previous_ranks[user_id] - current_rank

    def get_leaderboard(
        self,
        time_frame: TimeFrame,
        current_user_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> LeaderboardResponse:
        """
        Ranked snapshot for a time frame.

        Args:
            time_frame: Weekly, Monthly or AllTime
            current_user_id: Requesting user, flagged in the entries and
                returned separately even when outside the top list
            today: Reference UTC day (default: today)

        Returns:
            LeaderboardResponse with up to LEADERBOARD_SIZE entries
        """
        today = today or utc_today()
        current = self._current_entries(time_frame, today)
        previous_ranks = self._previous_ranks(time_frame, today)
        streaks = self._streaks_for([e.user_id for e in current], today)

        entries: List[LeaderboardEntry] = []
        current_user_entry: Optional[LeaderboardEntry] = None
        for raw, rank in zip(current, competition_ranks(current)):
            current_streak, longest_streak = streaks[raw.user_id]
            entry = LeaderboardEntry(
                rank=rank,
                user_id=raw.user_id,
                display_name=raw.display_name,
                avatar=raw.avatar,
                total_xp=raw.total_xp,
                current_streak=current_streak,
                longest_streak=longest_streak,
                level=calculate_level(raw.total_xp),
                change=self._rank_change(raw.user_id, rank, previous_ranks),
                is_current_user=raw.user_id == current_user_id,
            )
            entries.append(entry)
            if entry.is_current_user:
                current_user_entry = entry

        if current_user_id is not None and current_user_entry is None:
            current_user_entry = self._user_entry(current_user_id, time_frame, previous_ranks, today)

        return LeaderboardResponse(
            time_frame=time_frame,
            entries=entries,
            current_user_entry=current_user_entry,
        )

    def _user_entry(
        self,
        user_id: int,
        time_frame: TimeFrame,
        previous_ranks: Dict[int, int],
        today: date,
    ) -> Optional[LeaderboardEntry]:
        """Entry for a user outside the top list, ranked by counting users ahead."""
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            logger.debug(f"Leaderboard requested for unknown user {user_id}")
            return None

        if time_frame is TimeFrame.ALL_TIME:
            total_xp = user.total_points_earned or 0
            ahead = (
                self.db.query(func.count(User.id))
                .filter(User.total_points_earned > total_xp)
                .scalar()
            )
        else:
            filters = self._window_filters(self._days_ago(today, WINDOW_DAYS[time_frame]))
            total_xp = int(
                self.db.query(func.coalesce(func.sum(UserExerciseProgress.points_earned), 0))
                .filter(UserExerciseProgress.user_id == user_id, *filters)
                .scalar()
            )
            per_user = (
                self.db.query(
                    UserExerciseProgress.user_id,
                    func.sum(UserExerciseProgress.points_earned).label("total_xp"),
                )
                .filter(*filters)
                .group_by(UserExerciseProgress.user_id)
                .subquery()
            )
            ahead = (
                self.db.query(func.count())
                .select_from(per_user)
                .filter(per_user.c.total_xp > total_xp)
                .scalar()
            )

        rank = (ahead or 0) + 1
        current_streak, longest_streak = self.get_streak(user_id, today)
        return LeaderboardEntry(
            rank=rank,
            user_id=user.id,
            display_name=user.display_name,
            avatar=user.avatar_url,
            total_xp=total_xp,
            current_streak=current_streak,
            longest_streak=longest_streak,
            level=calculate_level(total_xp),
            change=self._rank_change(user_id, rank, previous_ranks),
            is_current_user=True,
        )
