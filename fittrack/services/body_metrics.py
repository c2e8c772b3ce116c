"""
Body metrics: BMI, BMR (Mifflin-St Jeor) and TDEE
"""
from datetime import date
from typing import Optional

from fittrack.models.user import ActivityLevel, Gender, Profile
from fittrack.utils.datetime_helper import age_on
from fittrack.utils.numbers import round_to

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTRA_ACTIVE: 1.9,
}


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """BMI = kg / m^2, one decimal"""
    height_m = height_cm / 100
    return round_to(weight_kg / (height_m * height_m), 1)


def calculate_bmr(weight_kg: float, height_cm: float, age: int, gender: Optional[Gender]) -> float:
    """
    Mifflin-St Jeor basal metabolic rate.

    Men: 10w + 6.25h - 5a + 5; women: 10w + 6.25h - 5a - 161.
    Other or undisclosed gender uses the midpoint of the two constants.
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == Gender.MALE:
        offset = 5
    elif gender == Gender.FEMALE:
        offset = -161
    else:
        offset = -78
    return round_to(base + offset, 0)


def calculate_tdee(bmr: float, activity_level: ActivityLevel) -> float:
    """BMR scaled by the activity multiplier"""
    return round_to(bmr * ACTIVITY_MULTIPLIERS[activity_level], 0)


def refresh_profile_metrics(profile: Profile, today: Optional[date] = None) -> None:
    """Recompute bmi, bmr and tdee in place from whatever inputs are present"""
    if profile.current_weight and profile.height:
        profile.bmi = calculate_bmi(profile.current_weight, profile.height)

    if profile.current_weight and profile.height and profile.date_of_birth:
        age = age_on(profile.date_of_birth, today)
        profile.bmr = calculate_bmr(profile.current_weight, profile.height, age, profile.gender)
        if profile.activity_level:
            profile.tdee = calculate_tdee(profile.bmr, profile.activity_level)
