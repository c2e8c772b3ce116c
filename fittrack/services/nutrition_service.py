"""
Nutrition logs and daily aggregation
"""
from __future__ import annotations

import logging
import uuid
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fittrack.models.nutrition import Food, NutritionLog, MealType
from fittrack.services.errors import NotFoundError
from fittrack.utils.datetime_helper import day_bounds, now_utc, range_bounds, today_local

logger = logging.getLogger(__name__)

MACRO_FIELDS = ("calories", "protein", "carbs", "fats")


def scale_macros(food: Food, quantity: float) -> Dict[str, float]:
    """Macros for ``quantity`` grams of a food whose values are per 100 g"""
    multiplier = quantity / 100
    return {field: getattr(food, field) * multiplier for field in MACRO_FIELDS}


class NutritionService:
    """Nutrition log operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load(self, log_id: uuid.UUID) -> Optional[NutritionLog]:
        result = await self.db.execute(
            select(NutritionLog)
            .options(selectinload(NutritionLog.food))
            .where(NutritionLog.id == log_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_log(
        self,
        user_id: uuid.UUID,
        food_id: uuid.UUID,
        meal_type: MealType,
        quantity: float,
        notes: Optional[str] = None,
        consumed_at: Optional[datetime] = None,
    ) -> NutritionLog:
        """
        Log a portion of a food.

        Raises:
            NotFoundError: unknown food
        """
        food = await self.db.get(Food, food_id)
        if food is None:
            raise NotFoundError("Food not found")

        log = NutritionLog(
            user_id=user_id,
            food_id=food.id,
            meal_type=meal_type,
            quantity=quantity,
            notes=notes,
            consumed_at=consumed_at or now_utc(),
            **scale_macros(food, quantity),
        )
        self.db.add(log)
        await self.db.flush()

        logger.info(f"User {user_id} logged {quantity}g of {food.name} ({log.calories:.0f} kcal)")
        return await self._load(log.id)

    async def update_log(self, log_id: uuid.UUID, user_id: uuid.UUID, changes: Dict[str, Any]) -> NutritionLog:
        """
        Update a log; a new quantity recomputes the macros from the food.

        Raises:
            NotFoundError: missing or owned by someone else
        """
        log = await self._load(log_id)
        if log is None or log.user_id != user_id:
            raise NotFoundError("Nutrition log not found")

        quantity = changes.get("quantity")
        if quantity and quantity != log.quantity:
            log.quantity = quantity
            for field, value in scale_macros(log.food, quantity).items():
                setattr(log, field, value)

        for field in ("meal_type", "notes", "consumed_at"):
            if changes.get(field) is not None:
                setattr(log, field, changes[field])

        await self.db.flush()
        return await self._load(log_id)

    async def delete_log(self, log_id: uuid.UUID, user_id: uuid.UUID) -> None:
        log = await self.db.get(NutritionLog, log_id)
        if log is None or log.user_id != user_id:
            raise NotFoundError("Nutrition log not found")
        await self.db.delete(log)
        await self.db.flush()

    async def get_logs_for_day(self, user_id: uuid.UUID, day: Optional[date] = None) -> List[NutritionLog]:
        start, end = day_bounds(day or today_local())
        result = await self.db.execute(
            select(NutritionLog)
            .options(selectinload(NutritionLog.food))
            .where(
                NutritionLog.user_id == user_id,
                NutritionLog.consumed_at >= start,
                NutritionLog.consumed_at < end,
            )
            .order_by(NutritionLog.consumed_at.asc())
        )
        return list(result.scalars().all())

    async def get_stats(
        self, user_id: uuid.UUID, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> Dict[str, Any]:
        """Macro totals and meal count over an inclusive range of local days"""
        today = today_local()
        start, end = range_bounds(start_date or today, end_date or today)
        result = await self.db.execute(
            select(
                func.coalesce(func.sum(NutritionLog.calories), 0),
                func.coalesce(func.sum(NutritionLog.protein), 0),
                func.coalesce(func.sum(NutritionLog.carbs), 0),
                func.coalesce(func.sum(NutritionLog.fats), 0),
                func.count(NutritionLog.id),
            ).where(
                NutritionLog.user_id == user_id,
                NutritionLog.consumed_at >= start,
                NutritionLog.consumed_at < end,
            )
        )
        calories, protein, carbs, fats, meal_count = result.one()
        return {
            "total_calories": float(calories),
            "total_protein": float(protein),
            "total_carbs": float(carbs),
            "total_fats": float(fats),
            "meal_count": meal_count,
        }
