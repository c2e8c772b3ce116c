"""
Workout sessions: start, progress pointer, sets, completion and stats
"""
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fittrack.models.exercise import Exercise
from fittrack.models.user import User
from fittrack.models.workout import Workout, WorkoutExercise, WorkoutLog, ExerciseLog, SetLog
from fittrack.services.errors import BadRequestError, NotFoundError
from fittrack.services.pagination import Page, clamp_page
from fittrack.services.training_metrics import elapsed_minutes, session_volume
from fittrack.utils.datetime_helper import (
    month_start, now_utc, previous_month_start, start_of_day, today_local,
)
from fittrack.utils.numbers import percentage_change, round_half_up

logger = logging.getLogger(__name__)

PROGRESS_FIELDS = ("current_exercise_order", "current_set_number", "rest_until")


def _log_query():
    return select(WorkoutLog).options(
        selectinload(WorkoutLog.workout)
        .selectinload(Workout.exercises)
        .selectinload(WorkoutExercise.exercise),
        selectinload(WorkoutLog.exercise_logs).selectinload(ExerciseLog.exercise),
        selectinload(WorkoutLog.exercise_logs).selectinload(ExerciseLog.sets),
    )


class WorkoutLogService:
    """Workout session logging"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load(self, log_id: uuid.UUID) -> Optional[WorkoutLog]:
        result = await self.db.execute(
            _log_query().where(WorkoutLog.id == log_id).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _get_owned(self, log_id: uuid.UUID, user: User) -> WorkoutLog:
        log = await self._load(log_id)
        if log is None or (log.user_id != user.id and not user.is_admin):
            raise NotFoundError("Workout log not found")
        return log

    async def start_session(
        self, user: User, workout_id: uuid.UUID, title: Optional[str] = None, notes: Optional[str] = None
    ) -> WorkoutLog:
        """
        Start a session for a workout the user may see.

        Raises:
            NotFoundError: workout missing, or private and owned by someone else
        """
        workout = await self.db.get(Workout, workout_id)
        if workout is None or (not workout.is_public and workout.created_by != user.id):
            raise NotFoundError("Workout not found")

        log = WorkoutLog(
            user_id=user.id,
            workout_id=workout.id,
            title=title or workout.name,
            notes=notes,
            started_at=now_utc(),
        )
        self.db.add(log)
        await self.db.flush()

        logger.info(f"User {user.id} started workout log {log.id} for workout {workout.id}")
        return await self._load(log.id)

    async def get_log(self, log_id: uuid.UUID, user: User) -> WorkoutLog:
        return await self._get_owned(log_id, user)

    async def update_progress(self, log_id: uuid.UUID, user: User, changes: Dict[str, Any]) -> WorkoutLog:
        """Move the resumable progress pointer"""
        log = await self._get_owned(log_id, user)
        for field in PROGRESS_FIELDS:
            if field in changes:
                setattr(log, field, changes[field])
        await self.db.flush()
        return await self._load(log_id)

    async def append_set(self, log_id: uuid.UUID, user: User, data: Dict[str, Any]) -> SetLog:
        """
        Record a set, creating the exercise entry for this session on first use.

        Raises:
            NotFoundError: log missing or not the caller's
            BadRequestError: unknown exercise
        """
        log = await self._get_owned(log_id, user)
        exercise_id = data["exercise_id"]
        if await self.db.get(Exercise, exercise_id) is None:
            raise BadRequestError(f"Invalid exercise_id: {exercise_id}")

        exercise_log = next((el for el in log.exercise_logs if el.exercise_id == exercise_id), None)
        if exercise_log is None:
            exercise_log = ExerciseLog(workout_log_id=log.id, exercise_id=exercise_id)
            self.db.add(exercise_log)
            await self.db.flush()

        completed = data.get("completed")
        set_log = SetLog(
            exercise_log_id=exercise_log.id,
            set_number=data["set_number"],
            reps=data.get("reps"),
            weight=data.get("weight"),
            duration=data.get("duration"),
            distance=data.get("distance"),
            completed=True if completed is None else completed,
        )
        self.db.add(set_log)
        await self.db.flush()
        return set_log

    async def complete_session(self, log_id: uuid.UUID, user: User) -> WorkoutLog:
        """Stamp completion and the elapsed whole minutes; already completed logs are returned as is"""
        log = await self._get_owned(log_id, user)
        if log.is_completed:
            return log

        completed_at = now_utc()
        log.completed_at = completed_at
        log.duration = round_half_up(elapsed_minutes(log.started_at, completed_at))
        await self.db.flush()

        logger.info(f"Workout log {log.id} completed after {log.duration} min")
        return log

    async def get_history(self, user_id: uuid.UUID, page: int = 1, page_size: int = 20) -> Page:
        page, page_size = clamp_page(page, page_size)
        total = (
            await self.db.execute(
                select(func.count()).select_from(WorkoutLog).where(WorkoutLog.user_id == user_id)
            )
        ).scalar_one()

        exercise_count = (
            select(func.count(ExerciseLog.id))
            .where(ExerciseLog.workout_log_id == WorkoutLog.id)
            .correlate(WorkoutLog)
            .scalar_subquery()
        )
        result = await self.db.execute(
            select(WorkoutLog, exercise_count)
            .options(selectinload(WorkoutLog.workout))
            .where(WorkoutLog.user_id == user_id)
            .order_by(WorkoutLog.started_at.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        items = []
        for log, count in result.all():
            items.append({"log": log, "exercise_count": count})
        return Page(items=items, total=total, page=page, page_size=page_size)

    async def find_unfinished(self, user_id: uuid.UUID, workout_id: uuid.UUID) -> Optional[WorkoutLog]:
        """Most recent unfinished session of a workout, for the resume prompt"""
        result = await self.db.execute(
            _log_query()
            .where(
                WorkoutLog.user_id == user_id,
                WorkoutLog.workout_id == workout_id,
                WorkoutLog.completed_at.is_(None),
            )
            .order_by(WorkoutLog.started_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_exercise_history(self, user_id: uuid.UUID, exercise_id: uuid.UUID) -> List[Dict[str, Any]]:
        """The user's sets for one exercise, newest session first"""
        result = await self.db.execute(
            select(SetLog, WorkoutLog.id, WorkoutLog.title, WorkoutLog.started_at)
            .join(ExerciseLog, SetLog.exercise_log_id == ExerciseLog.id)
            .join(WorkoutLog, ExerciseLog.workout_log_id == WorkoutLog.id)
            .where(WorkoutLog.user_id == user_id, ExerciseLog.exercise_id == exercise_id)
            .order_by(WorkoutLog.started_at.desc(), SetLog.set_number.asc())
        )
        return [
            {
                "set": set_log,
                "workout_log_id": log_id,
                "title": title,
                "started_at": started_at,
            }
            for set_log, log_id, title, started_at in result.all()
        ]

    async def compute_stats(self, user_id: uuid.UUID) -> Dict[str, Any]:
        """Totals over completed sessions plus this-month vs last-month comparison"""
        result = await self.db.execute(
            select(WorkoutLog)
            .options(selectinload(WorkoutLog.exercise_logs).selectinload(ExerciseLog.sets))
            .where(WorkoutLog.user_id == user_id, WorkoutLog.completed_at.is_not(None))
            .order_by(WorkoutLog.started_at.desc())
        )
        logs = list(result.scalars().all())

        today = today_local()
        this_month_from = start_of_day(month_start(today))
        last_month_from = start_of_day(previous_month_start(today))

        this_month = [log for log in logs if log.completed_at >= this_month_from]
        last_month = [log for log in logs if last_month_from <= log.completed_at < this_month_from]

        total_sessions = len(logs)
        total_duration = sum(log.duration or 0 for log in logs)
        return {
            "total_sessions": total_sessions,
            "total_duration": total_duration,
            "total_volume": sum(session_volume(log) for log in logs),
            "average_session_duration": total_duration / total_sessions if total_sessions else 0,
            "last_workout_date": logs[0].started_at if logs else None,
            "this_month_sessions": len(this_month),
            "this_month_duration": sum(log.duration or 0 for log in this_month),
            "percentage_change": percentage_change(len(this_month), len(last_month)),
        }
