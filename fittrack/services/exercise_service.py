"""
Exercise catalog
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import String, cast, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.models.exercise import Exercise, Difficulty
from fittrack.models.user import User
from fittrack.services.errors import AccessDeniedError, NotFoundError
from fittrack.services.pagination import Page, paginate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "muscle_groups", "equipment", "difficulty", "is_public")


def json_array_has_any(column, values: List[str]):
    """Match rows whose JSON string array contains any of ``values``"""
    return or_(*[cast(column, String).contains(f'"{value}"') for value in values])


def _enum_values(values) -> List[str]:
    return [v.value if hasattr(v, "value") else str(v) for v in values or []]


class ExerciseService:
    """Exercise catalog; mutation is admin only"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_exercises(
        self,
        page: int = 1,
        page_size: int = 20,
        query: Optional[str] = None,
        muscle_groups: Optional[List[str]] = None,
        equipment: Optional[List[str]] = None,
        difficulty: Optional[Difficulty] = None,
    ) -> Page:
        stmt = select(Exercise)
        if query:
            stmt = stmt.where(Exercise.name.ilike(f"%{query}%"))
        if muscle_groups:
            stmt = stmt.where(json_array_has_any(Exercise.muscle_groups, _enum_values(muscle_groups)))
        if equipment:
            stmt = stmt.where(json_array_has_any(Exercise.equipment, _enum_values(equipment)))
        if difficulty:
            stmt = stmt.where(Exercise.difficulty == difficulty)

        return await paginate(self.db, stmt.order_by(Exercise.name.asc()), page, page_size)

    async def get_exercise(self, exercise_id: uuid.UUID) -> Exercise:
        exercise = await self.db.get(Exercise, exercise_id)
        if exercise is None:
            raise NotFoundError("Exercise not found")
        return exercise

    def _require_admin(self, user: User) -> None:
        if not user.is_admin:
            raise AccessDeniedError("Only admins can manage exercises")

    async def create_exercise(self, user: User, data: Dict[str, Any]) -> Exercise:
        self._require_admin(user)
        data = dict(data)
        data["muscle_groups"] = _enum_values(data.get("muscle_groups"))
        data["equipment"] = _enum_values(data.get("equipment"))
        if data.get("is_public") is None:
            data["is_public"] = True

        exercise = Exercise(created_by=user.id, **data)
        self.db.add(exercise)
        await self.db.flush()

        logger.info(f"Exercise {exercise.id} '{exercise.name}' created by {user.id}")
        return exercise

    async def update_exercise(self, user: User, exercise_id: uuid.UUID, changes: Dict[str, Any]) -> Exercise:
        self._require_admin(user)
        exercise = await self.get_exercise(exercise_id)

        for field, value in changes.items():
            if value is None and field in REQUIRED_FIELDS:
                continue
            if field in ("muscle_groups", "equipment"):
                value = _enum_values(value)
            setattr(exercise, field, value)

        await self.db.flush()
        logger.info(f"Exercise {exercise.id} updated by {user.id}")
        return exercise

    async def delete_exercise(self, user: User, exercise_id: uuid.UUID) -> None:
        self._require_admin(user)
        exercise = await self.get_exercise(exercise_id)
        await self.db.delete(exercise)
        await self.db.flush()
        logger.info(f"Exercise {exercise_id} deleted by {user.id}")
