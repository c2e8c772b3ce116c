"""
Achievement progress and unlocking
"""
import logging
import uuid
from collections import defaultdict
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fittrack.models.achievement import Achievement, AchievementTier, AchievementType
from fittrack.models.nutrition import NutritionLog
from fittrack.models.workout import ExerciseLog, SetLog, WorkoutLog
from fittrack.services.achievement_catalog import ACHIEVEMENT_DEFINITIONS, TIER_POINTS
from fittrack.services.training_metrics import (
    completed_days, consistency_score, recent_streak, session_volume,
)
from fittrack.utils.datetime_helper import local_date, now_utc, to_local
from fittrack.utils.numbers import round_half_up

logger = logging.getLogger(__name__)

EARLY_BIRD_BEFORE_HOUR = 7
NIGHT_OWL_FROM_HOUR = 21
WEEKEND_DAYS = (5, 6)  # Saturday, Sunday

TIER_ORDER = {tier: index for index, tier in enumerate(AchievementTier)}


def count_personal_records(sets) -> int:
    """
    Sets heavier than every earlier set of the same exercise.

    ``sets`` is an iterable of (exercise_id, weight) in chronological order.
    The first weighted set of an exercise sets the baseline and does not count.
    """
    best: Dict[uuid.UUID, float] = {}
    records = 0
    for exercise_id, weight in sets:
        if not weight:
            continue
        previous = best.get(exercise_id)
        if previous is not None and weight > previous:
            records += 1
        if previous is None or weight > previous:
            best[exercise_id] = weight
    return records


class AchievementService:
    """Per-user achievements"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def initialize(self, user_id: uuid.UUID) -> None:
        """Create any catalogue entries the user does not have yet"""
        result = await self.db.execute(select(Achievement.code).where(Achievement.user_id == user_id))
        existing = set(result.scalars().all())
        missing = [d for d in ACHIEVEMENT_DEFINITIONS if d.code not in existing]
        if not missing:
            return

        for definition in missing:
            self.db.add(Achievement(
                user_id=user_id,
                code=definition.code,
                type=definition.type,
                tier=definition.tier,
                title=definition.title,
                description=definition.description,
                icon=definition.icon,
                target=definition.target,
                progress=0,
                is_unlocked=False,
            ))
        await self.db.flush()
        logger.info(f"Initialized {len(missing)} achievements for user {user_id}")

    async def update_progress(
        self, user_id: uuid.UUID, kind: AchievementType, value: int
    ) -> List[Achievement]:
        """Set progress on locked achievements of one type and unlock those reached"""
        result = await self.db.execute(
            select(Achievement)
            .where(
                Achievement.user_id == user_id,
                Achievement.type == kind,
                Achievement.is_unlocked.is_(False),
            )
            .order_by(Achievement.target.asc())
        )
        unlocked = []
        for achievement in result.scalars().all():
            if value >= achievement.target:
                achievement.progress = achievement.target
                achievement.is_unlocked = True
                achievement.unlocked_at = now_utc()
                unlocked.append(achievement)
            else:
                achievement.progress = value
        await self.db.flush()
        return unlocked

    async def calculate_user_stats(self, user_id: uuid.UUID) -> Dict[str, int]:
        result = await self.db.execute(
            select(WorkoutLog)
            .options(selectinload(WorkoutLog.exercise_logs).selectinload(ExerciseLog.sets))
            .where(WorkoutLog.user_id == user_id, WorkoutLog.completed_at.is_not(None))
            .order_by(WorkoutLog.completed_at.asc())
        )
        workouts = list(result.scalars().all())
        local_times = [to_local(w.completed_at) for w in workouts]

        set_rows = await self.db.execute(
            select(ExerciseLog.exercise_id, SetLog.weight)
            .join(SetLog, SetLog.exercise_log_id == ExerciseLog.id)
            .join(WorkoutLog, ExerciseLog.workout_log_id == WorkoutLog.id)
            .where(WorkoutLog.user_id == user_id, WorkoutLog.completed_at.is_not(None))
            .order_by(WorkoutLog.completed_at.asc(), SetLog.set_number.asc())
        )

        return {
            "total_workouts": len(workouts),
            "total_volume": round_half_up(sum(session_volume(w) for w in workouts)),
            "total_duration": sum(w.duration or 0 for w in workouts),
            "current_streak": recent_streak(completed_days(workouts)),
            "consistency": consistency_score(t.date() for t in local_times),
            "personal_records": count_personal_records(set_rows.all()),
            "unique_workouts": len({w.workout_id for w in workouts if w.workout_id}),
            "early_bird": sum(1 for t in local_times if t.hour < EARLY_BIRD_BEFORE_HOUR),
            "night_owl": sum(1 for t in local_times if t.hour >= NIGHT_OWL_FROM_HOUR),
            "weekend": sum(1 for t in local_times if t.weekday() in WEEKEND_DAYS),
            "nutrition_streak": await self._nutrition_streak(user_id),
        }

    async def _nutrition_streak(self, user_id: uuid.UUID) -> int:
        result = await self.db.execute(
            select(NutritionLog.consumed_at)
            .where(NutritionLog.user_id == user_id)
            .order_by(NutritionLog.consumed_at.desc())
        )
        days = sorted({local_date(ts) for ts in result.scalars().all()}, reverse=True)
        return recent_streak(days)

    async def check_and_unlock(self, user_id: uuid.UUID) -> List[Achievement]:
        """Recompute every achievement type and return the newly unlocked ones"""
        await self.initialize(user_id)
        stats = await self.calculate_user_stats(user_id)

        progress = {
            AchievementType.WORKOUT_COUNT: stats["total_workouts"],
            AchievementType.STREAK: stats["current_streak"],
            AchievementType.VOLUME: stats["total_volume"],
            AchievementType.DURATION: stats["total_duration"],
            AchievementType.CONSISTENCY: stats["consistency"],
            AchievementType.PERSONAL_RECORD: stats["personal_records"],
            AchievementType.VARIETY: stats["unique_workouts"],
            AchievementType.EARLY_BIRD: stats["early_bird"],
            AchievementType.NIGHT_OWL: stats["night_owl"],
            AchievementType.WEEKEND_WARRIOR: stats["weekend"],
            AchievementType.NUTRITION: stats["nutrition_streak"],
        }

        newly_unlocked = []
        for kind, value in progress.items():
            newly_unlocked.extend(await self.update_progress(user_id, kind, value))

        if newly_unlocked:
            logger.info(f"User {user_id} unlocked {len(newly_unlocked)} achievements")
        return newly_unlocked

    async def list_achievements(
        self,
        user_id: uuid.UUID,
        tier: Optional[AchievementTier] = None,
        kind: Optional[AchievementType] = None,
        unlocked: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """Filtered achievements plus the same rows grouped by type"""
        await self.initialize(user_id)

        stmt = select(Achievement).where(Achievement.user_id == user_id)
        if tier is not None:
            stmt = stmt.where(Achievement.tier == tier)
        if kind is not None:
            stmt = stmt.where(Achievement.type == kind)
        if unlocked is not None:
            stmt = stmt.where(Achievement.is_unlocked.is_(unlocked))
        result = await self.db.execute(stmt)

        achievements = sorted(
            result.scalars().all(),
            key=lambda a: (a.type.value, TIER_ORDER[a.tier], a.target),
        )
        grouped: Dict[str, List[Achievement]] = defaultdict(list)
        for achievement in achievements:
            grouped[achievement.type.value].append(achievement)

        return {"achievements": achievements, "grouped": dict(grouped)}

    async def get_stats(self, user_id: uuid.UUID) -> Dict[str, Any]:
        """Totals, unlock rate, points and per-tier breakdown"""
        result = await self.db.execute(select(Achievement).where(Achievement.user_id == user_id))
        achievements = list(result.scalars().all())

        total = len(achievements)
        unlocked = [a for a in achievements if a.is_unlocked]
        breakdown = {tier.value: {"total": 0, "unlocked": 0} for tier in AchievementTier}
        for achievement in achievements:
            breakdown[achievement.tier.value]["total"] += 1
            if achievement.is_unlocked:
                breakdown[achievement.tier.value]["unlocked"] += 1

        return {
            "total_achievements": total,
            "unlocked_achievements": len(unlocked),
            "unlock_rate": round_half_up(len(unlocked) / total * 100) if total else 0,
            "total_points": sum(TIER_POINTS[a.tier] for a in unlocked),
            "tier_breakdown": breakdown,
        }
