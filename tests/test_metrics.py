# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
import uuid
from datetime import date, timedelta

from fittrack.models.user import ActivityLevel, FitnessGoal, Gender, Profile
from fittrack.services.achievement_service import count_personal_records
from fittrack.services.body_metrics import (
    calculate_bmi,
    calculate_bmr,
    calculate_tdee,
    refresh_profile_metrics,
)
from fittrack.services.nutrition_targets import calculate_nutrition_targets, targets_for_profile
from fittrack.services.training_metrics import (
    calendar_streak,
    consistency_score,
    recent_streak,
    streak_message,
)
from fittrack.utils.numbers import percentage_change, round_half_up, round_to


class TestNumbers(unittest.TestCase):
    def test_round_half_up(self) -> None:
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(2.49), 2)
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_to(1.25, 1), 1.3)

    def test_percentage_change(self) -> None:
        self.assertEqual(percentage_change(15, 10), 50)
        self.assertEqual(percentage_change(5, 10), -50)
        self.assertEqual(percentage_change(3, 0), 100)
        self.assertEqual(percentage_change(0, 0), 0)
        self.assertEqual(percentage_change(3, 0, empty_base=0), 0)


class TestBodyMetrics(unittest.TestCase):
    def test_bmi(self) -> None:
        self.assertEqual(calculate_bmi(80, 180), 24.7)

    def test_bmr_by_gender(self) -> None:
        self.assertEqual(calculate_bmr(80, 180, 30, Gender.MALE), 1780)
        self.assertEqual(calculate_bmr(80, 180, 30, Gender.FEMALE), 1614)
        self.assertEqual(calculate_bmr(80, 180, 30, Gender.OTHER), 1697)

    def test_tdee(self) -> None:
        self.assertEqual(calculate_tdee(1780, ActivityLevel.SEDENTARY), 2136)
        self.assertEqual(calculate_tdee(2000, ActivityLevel.MODERATELY_ACTIVE), 3100)

    def test_refresh_profile_skips_missing_inputs(self) -> None:
        profile = Profile(current_weight=80, height=180)
        refresh_profile_metrics(profile, today=date(2024, 6, 1))
        self.assertEqual(profile.bmi, 24.7)
        self.assertIsNone(profile.bmr)
        self.assertIsNone(profile.tdee)

        profile.date_of_birth = date(1994, 6, 1)
        profile.gender = Gender.MALE
        profile.activity_level = ActivityLevel.SEDENTARY
        refresh_profile_metrics(profile, today=date(2024, 6, 1))
        self.assertEqual(profile.bmr, 1780)
        self.assertEqual(profile.tdee, 2136)


class TestNutritionTargets(unittest.TestCase):
    def test_lose_weight(self) -> None:
        targets = calculate_nutrition_targets(2500, 80, FitnessGoal.LOSE_WEIGHT)
        self.assertEqual(targets.target_calories, 2000)
        self.assertEqual(targets.target_protein, 176)
        self.assertEqual(targets.target_fats, 72)
        # (2000 - 176 * 4 - 72 * 9) / 4
        self.assertEqual(targets.target_carbs, 162)

    def test_gain_muscle(self) -> None:
        targets = calculate_nutrition_targets(2500, 70, FitnessGoal.GAIN_MUSCLE)
        self.assertEqual(targets.target_calories, 2800)
        self.assertEqual(targets.target_protein, 140)
        self.assertEqual(targets.target_fats, 70)
        self.assertEqual(targets.target_carbs, 403)

    def test_carbs_never_negative(self) -> None:
        targets = calculate_nutrition_targets(900, 120, FitnessGoal.LOSE_WEIGHT)
        self.assertEqual(targets.target_carbs, 0)

    def test_profile_fallbacks(self) -> None:
        incomplete = Profile(current_weight=80, use_custom_targets=False)
        self.assertEqual(targets_for_profile(incomplete).target_calories, 2000)

        custom = Profile(
            use_custom_targets=True,
            target_calories=1900,
            target_protein=150,
            target_carbs=190,
            target_fats=60,
            tdee=2500,
            current_weight=80,
            fitness_goal=FitnessGoal.LOSE_WEIGHT,
        )
        self.assertEqual(targets_for_profile(custom).target_calories, 1900)

        custom.use_custom_targets = False
        self.assertEqual(targets_for_profile(custom).target_calories, 2000)
        self.assertEqual(targets_for_profile(custom).target_protein, 176)


class TestStreaks(unittest.TestCase):
    today = date(2024, 6, 12)

    def days_ago(self, *offsets: int):
        return [self.today - timedelta(days=o) for o in offsets]

    def test_calendar_streak(self) -> None:
        self.assertEqual(calendar_streak(self.days_ago(0, 1, 2), today=self.today), 3)
        # An empty today does not break the run
        self.assertEqual(calendar_streak(self.days_ago(1, 2), today=self.today), 2)
        self.assertEqual(calendar_streak(self.days_ago(2, 3), today=self.today), 0)
        self.assertEqual(calendar_streak([], today=self.today), 0)

    def test_recent_streak(self) -> None:
        self.assertEqual(recent_streak(self.days_ago(0, 0, 1, 2, 4), today=self.today), 3)
        self.assertEqual(recent_streak(self.days_ago(1, 2), today=self.today), 2)
        self.assertEqual(recent_streak(self.days_ago(2, 3), today=self.today), 0)
        self.assertEqual(recent_streak([], today=self.today), 0)

    def test_streak_message(self) -> None:
        self.assertEqual(streak_message(0, has_workouts=False), "Start your first workout!")
        self.assertEqual(streak_message(7), "Keep it up! 🔥")
        self.assertEqual(streak_message(3), "Great progress! 💪")
        self.assertEqual(streak_message(1), "Keep going! 🎯")

    def test_consistency_score(self) -> None:
        # 2024-06-10 is a Monday
        full_week = [date(2024, 6, 10), date(2024, 6, 12), date(2024, 6, 14)]
        short_week = [date(2024, 6, 17), date(2024, 6, 18)]
        self.assertEqual(consistency_score(full_week + short_week), 3)
        self.assertEqual(consistency_score(short_week), 0)


class TestPersonalRecords(unittest.TestCase):
    def test_first_set_is_baseline(self) -> None:
        bench, squat = uuid.uuid4(), uuid.uuid4()
        sets = [
            (bench, 60),
            (bench, 60),
            (squat, 100),
            (bench, 62.5),
            (bench, None),
            (squat, 95),
            (squat, 110),
            (bench, 65),
        ]
        self.assertEqual(count_personal_records(sets), 3)
        self.assertEqual(count_personal_records([]), 0)
