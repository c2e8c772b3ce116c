"""
Workout plans and admin templates
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fittrack.models.exercise import Exercise, Difficulty
from fittrack.models.user import User
from fittrack.models.workout import Workout, WorkoutExercise
from fittrack.services.errors import BadRequestError, NotFoundError
from fittrack.services.pagination import Page, paginate

logger = logging.getLogger(__name__)

WORKOUT_FIELDS = ("name", "description", "difficulty", "estimated_time", "is_public")


def _workout_query():
    return select(Workout).options(
        selectinload(Workout.exercises).selectinload(WorkoutExercise.exercise),
        selectinload(Workout.creator),
    )


def _normalize_exercises(exercises: List[Dict[str, Any]]) -> List[WorkoutExercise]:
    """Sort by the given order (missing counts as 0); missing orders become the list index"""
    ordered = sorted(exercises, key=lambda ex: ex.get("order") or 0)
    return [
        WorkoutExercise(
            exercise_id=ex["exercise_id"],
            order=ex["order"] if ex.get("order") is not None else index,
            sets=ex["sets"],
            reps=ex.get("reps"),
            duration=ex.get("duration"),
            rest=ex.get("rest"),
            notes=ex.get("notes"),
        )
        for index, ex in enumerate(ordered)
    ]


class WorkoutService:
    """Workout CRUD with ownership and template rules"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _validate_exercise_ids(self, exercises: List[Dict[str, Any]]) -> None:
        requested = list(dict.fromkeys(ex["exercise_id"] for ex in exercises))
        if not requested:
            return
        result = await self.db.execute(select(Exercise.id).where(Exercise.id.in_(requested)))
        found = set(result.scalars().all())
        missing = [str(eid) for eid in requested if eid not in found]
        if missing:
            raise BadRequestError(f"Invalid exercise_id(s): {', '.join(missing)}")

    async def _load(self, workout_id: uuid.UUID) -> Optional[Workout]:
        result = await self.db.execute(
            _workout_query()
            .where(Workout.id == workout_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_workout(self, user: User, data: Dict[str, Any]) -> Workout:
        """
        Create a workout and its exercises in the request transaction.

        Admin-created workouts are templates; nobody else can create one.

        Raises:
            BadRequestError: an exercise id does not exist
        """
        exercises = data.get("exercises") or []
        await self._validate_exercise_ids(exercises)

        workout = Workout(
            name=data["name"],
            description=data.get("description"),
            difficulty=data.get("difficulty") or Difficulty.BEGINNER,
            estimated_time=data.get("estimated_time"),
            is_public=bool(data.get("is_public", False)),
            is_template=user.is_admin,
            created_by=user.id,
            exercises=_normalize_exercises(exercises),
        )
        self.db.add(workout)
        await self.db.flush()

        logger.info(
            f"Workout {workout.id} created by {user.id} "
            f"({len(exercises)} exercises, template={workout.is_template})"
        )
        return await self._load(workout.id)

    async def list_workouts(
        self,
        user: Optional[User] = None,
        page: int = 1,
        page_size: int = 20,
        q: Optional[str] = None,
        difficulty: Optional[Difficulty] = None,
        estimated_time_lte: Optional[int] = None,
        is_template: Optional[bool] = None,
        is_public: Optional[bool] = None,
        mine: bool = False,
    ) -> Page:
        stmt = _workout_query()
        if q:
            stmt = stmt.where(Workout.name.ilike(f"%{q}%"))
        if difficulty:
            stmt = stmt.where(Workout.difficulty == difficulty)
        if estimated_time_lte:
            stmt = stmt.where(Workout.estimated_time <= estimated_time_lte)
        if is_template is not None:
            stmt = stmt.where(Workout.is_template == is_template)
        if is_public is True:
            stmt = stmt.where(Workout.is_public.is_(True))

        # Same visibility as get_workout: admins see everything unless they ask for their own
        if user is None:
            stmt = stmt.where(Workout.is_public.is_(True))
        elif mine or not user.is_admin:
            stmt = stmt.where(or_(Workout.created_by == user.id, Workout.is_public.is_(True)))

        return await paginate(self.db, stmt.order_by(Workout.created_at.desc()), page, page_size)

    async def get_workout(self, workout_id: uuid.UUID, user: Optional[User] = None) -> Workout:
        """Public workouts for everyone; private ones for their owner and admins"""
        workout = await self._load(workout_id)
        if workout is None:
            raise NotFoundError("Workout not found")
        if workout.is_public:
            return workout
        if user is not None and (workout.created_by == user.id or user.is_admin):
            return workout
        raise NotFoundError("Workout not found")

    async def _get_editable(self, workout_id: uuid.UUID, user: User) -> Workout:
        workout = await self._load(workout_id)
        if workout is None:
            raise NotFoundError("Workout not found")
        if workout.is_template and not user.is_admin:
            raise NotFoundError("Workout not found")
        if workout.created_by != user.id and not user.is_admin:
            raise NotFoundError("Workout not found")
        return workout

    async def update_workout(self, workout_id: uuid.UUID, user: User, changes: Dict[str, Any]) -> Workout:
        """
        Partial update; ``exercises`` replaces the full list.

        ``is_template`` is fixed at creation.

        Raises:
            NotFoundError: missing, or not editable by this user
            BadRequestError: an exercise id does not exist
        """
        workout = await self._get_editable(workout_id, user)

        exercises = changes.get("exercises")
        if exercises is not None:
            await self._validate_exercise_ids(exercises)

        for field in WORKOUT_FIELDS:
            if changes.get(field) is not None:
                setattr(workout, field, changes[field])

        if exercises is not None:
            workout.exercises = _normalize_exercises(exercises)

        await self.db.flush()
        logger.info(f"Workout {workout_id} updated by {user.id}")
        return await self._load(workout_id)

    async def delete_workout(self, workout_id: uuid.UUID, user: User) -> None:
        workout = await self._load(workout_id)
        if workout is None or (workout.created_by != user.id and not user.is_admin):
            raise NotFoundError("Workout not found")
        await self.db.delete(workout)
        await self.db.flush()
        logger.info(f"Workout {workout_id} deleted by {user.id}")
