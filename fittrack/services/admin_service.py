"""
Admin overview and user management
"""
import logging
from typing import Any, Dict

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.models.exercise import Exercise
from fittrack.models.nutrition import Food
from fittrack.models.user import User
from fittrack.models.workout import Workout, WorkoutLog
from fittrack.services.pagination import Page, paginate
from fittrack.utils.datetime_helper import month_start, previous_month_start, start_of_day, today_local
from fittrack.utils.numbers import percentage_change

logger = logging.getLogger(__name__)


class AdminService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, model, *criteria) -> int:
        stmt = select(func.count()).select_from(model)
        if criteria:
            stmt = stmt.where(*criteria)
        return (await self.db.execute(stmt)).scalar_one()

    async def get_stats(self) -> Dict[str, Any]:
        """
        Platform totals and user growth by calendar month.

        Growth compares users created this month with last month; an
        empty last month reports 0.
        """
        today = today_local()
        this_month = start_of_day(month_start(today))
        last_month = start_of_day(previous_month_start(today))

        users_this_month = await self._count(User, User.created_at >= this_month)
        users_last_month = await self._count(
            User, User.created_at >= last_month, User.created_at < this_month
        )

        return {
            "total_users": await self._count(User),
            "users_this_month": users_this_month,
            "user_growth": percentage_change(users_this_month, users_last_month, empty_base=0),
            "total_workouts": await self._count(Workout),
            "total_exercises": await self._count(Exercise),
            "total_foods": await self._count(Food),
            "total_workout_logs": await self._count(WorkoutLog),
        }

    async def list_users(self, page: int = 1, page_size: int = 20) -> Page:
        stmt = select(User).order_by(User.created_at.desc())
        return await paginate(self.db, stmt, page, page_size)
