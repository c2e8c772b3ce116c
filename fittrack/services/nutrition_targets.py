"""
Daily nutrition targets from TDEE, body weight and fitness goal
"""
import logging
import uuid
from dataclasses import dataclass, asdict
from typing import Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.config import settings
from fittrack.models.user import FitnessGoal, Profile
from fittrack.services.errors import NotFoundError
from fittrack.utils.numbers import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MacroRatio:
    calorie_adjustment: int
    protein_per_kg: float
    fats_per_kg: float


# Protein and fats in g per kg body weight; carbs fill the remaining calories
MACRO_RATIOS: Dict[FitnessGoal, MacroRatio] = {
    FitnessGoal.LOSE_WEIGHT: MacroRatio(-500, 2.2, 0.9),
    FitnessGoal.GAIN_MUSCLE: MacroRatio(300, 2.0, 1.0),
    FitnessGoal.MAINTAIN_WEIGHT: MacroRatio(0, 1.8, 0.9),
    FitnessGoal.IMPROVE_ENDURANCE: MacroRatio(0, 1.6, 0.8),
    FitnessGoal.GENERAL_FITNESS: MacroRatio(0, 1.8, 0.9),
}

CALORIES_PER_GRAM_PROTEIN = 4
CALORIES_PER_GRAM_CARBS = 4
CALORIES_PER_GRAM_FAT = 9


@dataclass
class NutritionTargets:
    target_calories: int
    target_protein: int
    target_carbs: int
    target_fats: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def calculate_nutrition_targets(
    tdee: float, body_weight: float, fitness_goal: Optional[FitnessGoal]
) -> NutritionTargets:
    """
    Calculate macro targets.

    Args:
        tdee: total daily energy expenditure (kcal)
        body_weight: kg
        fitness_goal: selects the ratio row, unknown goals use GENERAL_FITNESS

    Returns:
        calories and grams of protein, carbs and fats
    """
    ratio = MACRO_RATIOS.get(fitness_goal, MACRO_RATIOS[FitnessGoal.GENERAL_FITNESS])

    calories = round_half_up(tdee + ratio.calorie_adjustment)
    protein = round_half_up(body_weight * ratio.protein_per_kg)
    fats = round_half_up(body_weight * ratio.fats_per_kg)

    remaining = calories - protein * CALORIES_PER_GRAM_PROTEIN - fats * CALORIES_PER_GRAM_FAT
    carbs = max(0, round_half_up(remaining / CALORIES_PER_GRAM_CARBS))

    return NutritionTargets(
        target_calories=calories,
        target_protein=protein,
        target_carbs=carbs,
        target_fats=fats,
    )


def default_targets() -> NutritionTargets:
    calories, protein, carbs, fats = settings.default_nutrition_targets
    return NutritionTargets(calories, protein, carbs, fats)


def targets_for_profile(profile: Profile) -> NutritionTargets:
    """Custom targets when enabled and complete, else calculated, else defaults"""
    custom = (
        profile.target_calories,
        profile.target_protein,
        profile.target_carbs,
        profile.target_fats,
    )
    if profile.use_custom_targets and all(custom):
        return NutritionTargets(*custom)

    if not profile.tdee or not profile.current_weight or not profile.fitness_goal:
        return default_targets()

    return calculate_nutrition_targets(profile.tdee, profile.current_weight, profile.fitness_goal)


class NutritionTargetsService:
    """Nutrition target lookup and storage"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_profile(self, user_id: uuid.UUID) -> Profile:
        result = await self.db.execute(select(Profile).where(Profile.user_id == user_id))
        profile = result.scalar_one_or_none()
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    async def get_targets(self, user_id: uuid.UUID) -> NutritionTargets:
        profile = await self._get_profile(user_id)
        return targets_for_profile(profile)

    async def update_targets(
        self, user_id: uuid.UUID, targets: NutritionTargets, is_custom: bool = True
    ) -> NutritionTargets:
        profile = await self._get_profile(user_id)
        profile.target_calories = targets.target_calories
        profile.target_protein = targets.target_protein
        profile.target_carbs = targets.target_carbs
        profile.target_fats = targets.target_fats
        profile.use_custom_targets = is_custom
        await self.db.flush()

        logger.info(f"User {user_id} updated nutrition targets (custom={is_custom})")
        return targets

    async def reset_to_auto(self, user_id: uuid.UUID) -> Optional[NutritionTargets]:
        """
        Recalculate targets from the profile and store them as non-custom.

        Returns:
            the new targets, or None when tdee, weight or goal is missing
        """
        profile = await self._get_profile(user_id)
        if not profile.tdee or not profile.current_weight or not profile.fitness_goal:
            return None

        targets = calculate_nutrition_targets(profile.tdee, profile.current_weight, profile.fitness_goal)
        return await self.update_targets(user_id, targets, is_custom=False)
