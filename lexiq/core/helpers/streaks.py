"""
Streak Logic - Pure functions for streak calculation.

No database or model dependencies.
"""
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, List, Optional, Tuple, Union


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def to_utc_date(value: Union[date, datetime]) -> date:
    """
    Calendar day of a timestamp in UTC.

    Naive datetimes are assumed to already be UTC (SQLite drops the offset).
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def calculate_streaks(
    activity: Iterable[Union[date, datetime]],
    today: Optional[date] = None,
) -> Tuple[int, int]:
    """
    Current and longest run of consecutive active days.

    Args:
        activity: Completion timestamps or dates, in any order, duplicates allowed.
        today: Reference day (default: today in UTC).

    Returns:
        (current_streak, longest_streak). The current streak only counts if
        its most recent day is today or yesterday.

    Examples:
        >>> d = date(2024, 1, 3)
        >>> calculate_streaks([d, d - timedelta(days=1), d - timedelta(days=2)], today=d)
        (3, 3)
        >>> calculate_streaks([d, d - timedelta(days=1), d - timedelta(days=2)], today=d + timedelta(days=2))
        (0, 3)
    """
    days: List[date] = sorted({to_utc_date(v) for v in activity if v is not None}, reverse=True)
    if not days:
        return 0, 0

    if today is None:
        today = utc_today()

    is_current = days[0] in (today, today - timedelta(days=1))
    current_streak = 0
    longest_streak = 0
    run = 1

    for newer, older in zip(days, days[1:]):
        if newer.toordinal() - older.toordinal() == 1:
            run += 1
            continue
        if is_current:
            current_streak = run
            is_current = False
        longest_streak = max(longest_streak, run)
        run = 1

    # Last run in the list
    if is_current:
        current_streak = run
    longest_streak = max(longest_streak, run)

    return current_streak, longest_streak
