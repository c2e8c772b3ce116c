"""
Training metrics shared by workout stats, the dashboard and achievements
"""
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from fittrack.models.workout import WorkoutLog
from fittrack.utils.datetime_helper import local_date, today_local

# Rough energy estimate per minute of training
CALORIES_PER_MINUTE = 6.5
STREAK_LOOKBACK_DAYS = 365


def session_volume(log: WorkoutLog) -> float:
    """Sum of weight x reps over every set in the session"""
    return sum(s.volume for ex in log.exercise_logs for s in ex.sets)


def elapsed_minutes(started_at: datetime, completed_at: datetime) -> float:
    return (completed_at - started_at).total_seconds() / 60


def calendar_streak(days: Iterable[date], today: Optional[date] = None) -> int:
    """
    Consecutive days with activity ending today.

    Today may still be empty; the count then starts from yesterday.
    Looks back at most one year.
    """
    active = set(days)
    today = today or today_local()
    streak = 0
    for offset in range(STREAK_LOOKBACK_DAYS):
        day = today - timedelta(days=offset)
        if day in active:
            streak += 1
        elif offset > 0:
            break
    return streak


def recent_streak(days_desc: Sequence[date], today: Optional[date] = None) -> int:
    """
    Run of consecutive days counted from the most recent active day.

    The run only counts when the latest day is today or yesterday.
    ``days_desc`` is newest first and may contain duplicates.
    """
    if not days_desc:
        return 0
    today = today or today_local()
    if (today - days_desc[0]).days > 1:
        return 0

    streak = 1
    for current, previous in zip(days_desc, days_desc[1:]):
        gap = (current - previous).days
        if gap == 1:
            streak += 1
        elif gap > 1:
            break
    return streak


def streak_message(days: int, has_workouts: bool = True) -> str:
    if not has_workouts:
        return "Start your first workout!"
    if days >= 7:
        return "Keep it up! 🔥"
    if days >= 3:
        return "Great progress! 💪"
    return "Keep going! 🎯"


def consistency_score(days: Iterable[date], sessions_per_week: int = 3) -> int:
    """Three points for every ISO week with at least ``sessions_per_week`` sessions"""
    days = list(days)
    if len(days) < sessions_per_week:
        return 0
    weeks = Counter(d.isocalendar()[:2] for d in days)
    return sum(1 for count in weeks.values() if count >= sessions_per_week) * 3


def completed_days(logs: Iterable[WorkoutLog]) -> List[date]:
    """Local completion dates, newest first"""
    stamps = sorted((log.completed_at for log in logs if log.completed_at), reverse=True)
    return [local_date(ts) for ts in stamps]


def estimated_calories(duration_minutes: Optional[int]) -> float:
    return (duration_minutes or 0) * CALORIES_PER_MINUTE
