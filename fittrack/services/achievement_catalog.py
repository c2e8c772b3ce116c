"""
Achievement catalogue
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

from fittrack.models.achievement import AchievementTier as Tier, AchievementType as Kind

TIER_POINTS: Dict[Tier, int] = {
    Tier.BRONZE: 1,
    Tier.SILVER: 2,
    Tier.GOLD: 5,
    Tier.PLATINUM: 10,
    Tier.DIAMOND: 20,
}


@dataclass(frozen=True)
class AchievementDefinition:
    code: str
    type: Kind
    tier: Tier
    title: str
    description: str
    icon: str
    target: int


def _define(kind: Kind, tier: Tier, target: int, title: str, description: str, icon: str) -> AchievementDefinition:
    return AchievementDefinition(
        code=f"{kind.value.lower()}_{target}",
        type=kind,
        tier=tier,
        title=title,
        description=description,
        icon=icon,
        target=target,
    )


ACHIEVEMENT_DEFINITIONS: List[AchievementDefinition] = [
    # Completed workouts
    _define(Kind.WORKOUT_COUNT, Tier.BRONZE, 1, "First Step", "Complete your first workout", "🏆"),
    _define(Kind.WORKOUT_COUNT, Tier.BRONZE, 5, "Getting Started", "Complete 5 workouts", "💪"),
    _define(Kind.WORKOUT_COUNT, Tier.SILVER, 10, "Dedicated", "Complete 10 workouts", "🔥"),
    _define(Kind.WORKOUT_COUNT, Tier.GOLD, 25, "Committed", "Complete 25 workouts", "⚡"),
    _define(Kind.WORKOUT_COUNT, Tier.PLATINUM, 50, "Warrior", "Complete 50 workouts", "🌟"),
    _define(Kind.WORKOUT_COUNT, Tier.DIAMOND, 100, "Legend", "Complete 100 workouts", "💎"),

    # Consecutive training days
    _define(Kind.STREAK, Tier.BRONZE, 2, "Two Days Strong", "Workout for 2 consecutive days", "📅"),
    _define(Kind.STREAK, Tier.SILVER, 7, "Week Warrior", "Workout for 7 consecutive days", "🔥"),
    _define(Kind.STREAK, Tier.GOLD, 14, "Two Weeks Champion", "Workout for 14 consecutive days", "⚡"),
    _define(Kind.STREAK, Tier.PLATINUM, 30, "Month Master", "Workout for 30 consecutive days", "🏆"),
    _define(Kind.STREAK, Tier.DIAMOND, 60, "Unstoppable", "Workout for 60 consecutive days", "💎"),

    # Total kg lifted
    _define(Kind.VOLUME, Tier.BRONZE, 1000, "Rookie Lifter", "Lift a total of 1,000 kg", "💪"),
    _define(Kind.VOLUME, Tier.SILVER, 10000, "Strong Lifter", "Lift a total of 10,000 kg", "🏋️"),
    _define(Kind.VOLUME, Tier.GOLD, 50000, "Power Lifter", "Lift a total of 50,000 kg", "⚡"),
    _define(Kind.VOLUME, Tier.PLATINUM, 100000, "Beast Mode", "Lift a total of 100,000 kg", "🦍"),
    _define(Kind.VOLUME, Tier.DIAMOND, 250000, "Titan", "Lift a total of 250,000 kg", "💎"),

    # Total minutes trained
    _define(Kind.DURATION, Tier.BRONZE, 60, "First Hour", "Complete 60 minutes of workouts", "⏱️"),
    _define(Kind.DURATION, Tier.SILVER, 600, "10 Hours Strong", "Complete 600 minutes (10 hours) of workouts", "🕐"),
    _define(Kind.DURATION, Tier.GOLD, 3000, "Marathon", "Complete 3,000 minutes (50 hours) of workouts", "⏳"),
    _define(Kind.DURATION, Tier.PLATINUM, 6000, "Endurance King", "Complete 6,000 minutes (100 hours) of workouts", "🏃"),
    _define(Kind.DURATION, Tier.DIAMOND, 15000, "Time Master", "Complete 15,000 minutes (250 hours) of workouts", "💎"),

    # Three points per week with 3+ workouts
    _define(Kind.CONSISTENCY, Tier.SILVER, 12, "Weekly Regular", "Workout at least 3 times per week for 4 weeks", "📊"),
    _define(Kind.CONSISTENCY, Tier.GOLD, 36, "Monthly Consistent", "Workout at least 3 times per week for 12 weeks", "📈"),
    _define(Kind.CONSISTENCY, Tier.PLATINUM, 78, "Year Round", "Workout at least 3 times per week for 26 weeks", "🎯"),

    # Heavier set than any earlier one of the same exercise
    _define(Kind.PERSONAL_RECORD, Tier.BRONZE, 1, "First PR", "Break your first personal record", "📈"),
    _define(Kind.PERSONAL_RECORD, Tier.SILVER, 5, "PR Breaker", "Break 5 personal records", "🚀"),
    _define(Kind.PERSONAL_RECORD, Tier.GOLD, 15, "Record Setter", "Break 15 personal records", "⚡"),
    _define(Kind.PERSONAL_RECORD, Tier.PLATINUM, 30, "PR King", "Break 30 personal records", "💪"),

    # Distinct workouts completed
    _define(Kind.VARIETY, Tier.SILVER, 5, "Explorer", "Complete 5 different workouts", "🎭"),
    _define(Kind.VARIETY, Tier.GOLD, 15, "Versatile", "Complete 15 different workouts", "🌈"),
    _define(Kind.VARIETY, Tier.PLATINUM, 30, "All-Rounder", "Complete 30 different workouts", "🎪"),

    # Finished before 07:00
    _define(Kind.EARLY_BIRD, Tier.SILVER, 10, "Early Bird", "Complete 10 workouts before 7am", "🌅"),
    _define(Kind.EARLY_BIRD, Tier.GOLD, 25, "Morning Champion", "Complete 25 workouts before 7am", "☀️"),
    _define(Kind.EARLY_BIRD, Tier.PLATINUM, 50, "Sunrise Warrior", "Complete 50 workouts before 7am", "🌄"),

    # Finished from 21:00
    _define(Kind.NIGHT_OWL, Tier.SILVER, 10, "Night Owl", "Complete 10 workouts after 9pm", "🌙"),
    _define(Kind.NIGHT_OWL, Tier.GOLD, 25, "Midnight Warrior", "Complete 25 workouts after 9pm", "🦉"),
    _define(Kind.NIGHT_OWL, Tier.PLATINUM, 50, "Night Champion", "Complete 50 workouts after 9pm", "✨"),

    # Saturday or Sunday
    _define(Kind.WEEKEND_WARRIOR, Tier.SILVER, 10, "Weekend Starter", "Complete 10 weekend workouts", "🏖️"),
    _define(Kind.WEEKEND_WARRIOR, Tier.GOLD, 20, "Weekend Warrior", "Complete 20 weekend workouts", "🎉"),
    _define(Kind.WEEKEND_WARRIOR, Tier.PLATINUM, 40, "Weekend Champion", "Complete 40 weekend workouts", "🏆"),

    # Consecutive days with nutrition logs
    _define(Kind.NUTRITION, Tier.SILVER, 7, "Nutrition Aware", "Track nutrition for 7 consecutive days", "🥗"),
    _define(Kind.NUTRITION, Tier.GOLD, 14, "Macro Master", "Track nutrition for 14 consecutive days", "📊"),
    _define(Kind.NUTRITION, Tier.PLATINUM, 30, "Nutrition Expert", "Track nutrition for 30 consecutive days", "🎯"),
]

DEFINITIONS_BY_CODE: Dict[str, AchievementDefinition] = {d.code: d for d in ACHIEVEMENT_DEFINITIONS}


def get_definition(kind: Kind, tier: Tier) -> Optional[AchievementDefinition]:
    return next((d for d in ACHIEVEMENT_DEFINITIONS if d.type == kind and d.tier == tier), None)


def definitions_by_type(kind: Kind) -> List[AchievementDefinition]:
    return [d for d in ACHIEVEMENT_DEFINITIONS if d.type == kind]
