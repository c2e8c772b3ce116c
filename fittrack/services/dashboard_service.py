"""
Dashboard aggregation
"""
import logging
import uuid
from datetime import timedelta
from typing import Any, Dict

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.models.user import BodyMeasurement
from fittrack.models.workout import WorkoutLog
from fittrack.services.training_metrics import (
    calendar_streak, completed_days, estimated_calories, streak_message,
)
from fittrack.utils.datetime_helper import local_date, start_of_day, subtract_months, now_utc, today_local
from fittrack.utils.numbers import percentage_change, round_half_up, round_to

logger = logging.getLogger(__name__)

RECENT_WORKOUTS = 5


class DashboardService:
    """Per-user dashboard numbers"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _completed_logs(self, user_id: uuid.UUID, since=None):
        stmt = select(WorkoutLog).where(
            WorkoutLog.user_id == user_id, WorkoutLog.completed_at.is_not(None)
        )
        if since is not None:
            stmt = stmt.where(WorkoutLog.completed_at >= since)
        result = await self.db.execute(stmt.order_by(WorkoutLog.completed_at.desc()))
        return list(result.scalars().all())

    async def get_streak(self, user_id: uuid.UUID) -> Dict[str, Any]:
        logs = await self._completed_logs(user_id)
        if not logs:
            return {"days": 0, "message": streak_message(0, has_workouts=False)}
        days = calendar_streak(completed_days(logs))
        return {"days": days, "message": streak_message(days)}

    async def _weight(self, user_id: uuid.UUID) -> Dict[str, Any]:
        base = select(BodyMeasurement.weight).where(
            BodyMeasurement.user_id == user_id, BodyMeasurement.weight.is_not(None)
        )
        latest = (
            await self.db.execute(base.order_by(BodyMeasurement.measured_at.desc()).limit(1))
        ).scalar_one_or_none()

        month_ago = subtract_months(now_utc(), 1)
        previous = (
            await self.db.execute(
                base.where(BodyMeasurement.measured_at < month_ago)
                .order_by(BodyMeasurement.measured_at.desc())
                .limit(1)
            )
        ).scalar_one_or_none()

        change = round_to(latest - previous, 1) if latest and previous else None
        return {"current": latest, "change": change, "unit": "kg"}

    async def get_stats(self, user_id: uuid.UUID) -> Dict[str, Any]:
        """
        Dashboard numbers for a user.

        Workouts compare the last 7 local days with the 7 before them.
        Calories compare today with yesterday.
        Weight compares the latest reading with the latest one older than a month.
        """
        today = today_local()
        yesterday = today - timedelta(days=1)
        week_start = start_of_day(today - timedelta(days=7))
        two_weeks_start = start_of_day(today - timedelta(days=14))

        total = (
            await self.db.execute(
                select(func.count()).select_from(WorkoutLog).where(
                    WorkoutLog.user_id == user_id, WorkoutLog.completed_at.is_not(None)
                )
            )
        ).scalar_one()

        last_week = await self._completed_logs(user_id, since=week_start)
        previous_week = (
            await self.db.execute(
                select(func.count()).select_from(WorkoutLog).where(
                    WorkoutLog.user_id == user_id,
                    WorkoutLog.completed_at >= two_weeks_start,
                    WorkoutLog.completed_at < week_start,
                )
            )
        ).scalar_one()

        calories_today = sum(
            estimated_calories(log.duration) for log in last_week if local_date(log.completed_at) == today
        )
        calories_yesterday = sum(
            estimated_calories(log.duration) for log in last_week if local_date(log.completed_at) == yesterday
        )

        recent = (
            await self.db.execute(
                select(WorkoutLog)
                .where(WorkoutLog.user_id == user_id, WorkoutLog.completed_at.is_not(None))
                .order_by(WorkoutLog.completed_at.desc())
                .limit(RECENT_WORKOUTS)
            )
        ).scalars().all()

        return {
            "workouts": {
                "total": total,
                "change": percentage_change(len(last_week), previous_week),
            },
            "calories": {
                "total": round_half_up(calories_today),
                "change": round_half_up(calories_today - calories_yesterday),
            },
            "weight": await self._weight(user_id),
            "streak": await self.get_streak(user_id),
            "recent_workouts": [
                {
                    "id": log.id,
                    "title": log.title,
                    "duration": log.duration,
                    "started_at": log.started_at,
                }
                for log in recent
            ],
        }
