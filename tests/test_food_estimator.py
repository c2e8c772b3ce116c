# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from unittest import mock

from fittrack.services.food_estimator import EstimatorUnavailable, FoodEstimatorService


class TestFoodEstimateParsing(unittest.TestCase):
    def setUp(self) -> None:
        self.estimator = FoodEstimatorService(provider="google", api_key="test-key")

    def test_fenced_json_with_trailing_prose(self) -> None:
        text = (
            "```json\n"
            '{"name": "Bánh mì", "calories": 265, "protein": 9, "carbs": 49, "fats": 3.2,'
            ' "fiber": 2.7, "confidence": "high"}\n'
            "```\nValues are per 100 g."
        )
        estimate = self.estimator.parse_estimate("banh mi", text)
        self.assertEqual(estimate.name, "Bánh mì")
        self.assertEqual(estimate.calories, 265.0)
        self.assertEqual(estimate.fiber, 2.7)
        self.assertIsNone(estimate.sugar)
        self.assertEqual(estimate.confidence, "high")
        self.assertEqual(estimate.serving_size, 100)

    def test_defaults(self) -> None:
        estimate = self.estimator.parse_estimate(
            "xoi", '{"calories": 180, "protein": 4, "carbs": 38, "fats": 1, "confidence": "certain"}'
        )
        self.assertEqual(estimate.name, "xoi")
        self.assertEqual(estimate.confidence, "medium")

    def test_missing_or_zero_nutrient(self) -> None:
        with self.assertRaises(ValueError):
            self.estimator.parse_estimate("x", '{"calories": 100, "protein": 0, "carbs": 1, "fats": 1}')
        with self.assertRaises(ValueError):
            self.estimator.parse_estimate("x", '{"calories": 100, "carbs": 1, "fats": 1}')
        with self.assertRaises(ValueError):
            self.estimator.parse_estimate("x", "not json at all")


class TestFoodEstimateRetry(unittest.IsolatedAsyncioTestCase):
    async def test_unavailable_without_key(self) -> None:
        estimator = FoodEstimatorService(provider="google", api_key="")
        with self.assertRaises(EstimatorUnavailable):
            await estimator.estimate_with_retry("pho")

    async def test_retries_bad_responses(self) -> None:
        estimator = FoodEstimatorService(provider="openrouter", api_key="test-key")
        responses = mock.AsyncMock(side_effect=[
            "sorry, I cannot help",
            '{"calories": 350, "protein": 15, "carbs": 50, "fats": 8}',
        ])
        with mock.patch.object(estimator, "_call_openrouter_api", responses), \
                mock.patch("fittrack.services.food_estimator.asyncio.sleep", mock.AsyncMock()):
            estimate = await estimator.estimate_with_retry("pho bo")

        self.assertEqual(estimate.calories, 350)
        self.assertEqual(responses.await_count, 2)
