# -*- coding: utf-8 -*-

from __future__ import annotations

import uuid

from tests.helpers import ApiTestCase


class TestFoodsAndNutritionLogs(ApiTestCase):
    @classmethod
    def setUpClass(cls) -> None:
        super().setUpClass()
        cls.food_name = f"Test oats {uuid.uuid4().hex[:6]}"

    def _create_food(self, admin_headers, **overrides) -> dict:
        payload = {
            "name": self.food_name,
            "calories": 100,
            "protein": 10,
            "carbs": 20,
            "fats": 5,
            "serving_size": 100,
            "serving_unit": "g",
        }
        payload.update(overrides)
        resp = self.client.post("/api/v1/foods", headers=admin_headers, json=payload)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def test_only_admins_manage_foods(self) -> None:
        headers = self.new_user()
        resp = self.client.post(
            "/api/v1/foods",
            headers=headers,
            json={"name": "Sneaky", "calories": 1, "protein": 1, "carbs": 1, "fats": 1},
        )
        self.assertEqual(resp.status_code, 403)

    def test_log_scales_macros_by_quantity(self) -> None:
        food = self._create_food(self.new_admin(), name=f"Scaled {uuid.uuid4().hex[:6]}")
        headers = self.new_user()

        resp = self.client.post(
            "/api/v1/nutrition-logs",
            headers=headers,
            json={"food_id": food["id"], "meal_type": "BREAKFAST", "quantity": 150},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        log = resp.json()
        self.assertEqual(log["calories"], 150)
        self.assertEqual(log["protein"], 15)
        self.assertEqual(log["carbs"], 30)
        self.assertEqual(log["fats"], 7.5)

        resp = self.client.get("/api/v1/nutrition-logs", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()["logs"]), 1)

        resp = self.client.get("/api/v1/nutrition-logs/stats", headers=headers)
        self.assertEqual(resp.status_code, 200)
        stats = resp.json()
        self.assertEqual(stats["total_calories"], 150)
        self.assertEqual(stats["meal_count"], 1)

        resp = self.client.put(
            f"/api/v1/nutrition-logs/{log['id']}", headers=headers, json={"quantity": 50}
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["calories"], 50)

        resp = self.client.delete(f"/api/v1/nutrition-logs/{log['id']}", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"success": True})

    def test_other_users_log_is_not_found(self) -> None:
        food = self._create_food(self.new_admin(), name=f"Private {uuid.uuid4().hex[:6]}")
        owner = self.new_user()
        resp = self.client.post(
            "/api/v1/nutrition-logs",
            headers=owner,
            json={"food_id": food["id"], "meal_type": "LUNCH", "quantity": 100},
        )
        log_id = resp.json()["id"]

        resp = self.client.delete(f"/api/v1/nutrition-logs/{log_id}", headers=self.new_user())
        self.assertEqual(resp.status_code, 404)

    def test_unknown_food_is_not_found(self) -> None:
        resp = self.client.post(
            "/api/v1/nutrition-logs",
            headers=self.new_user(),
            json={"food_id": str(uuid.uuid4()), "meal_type": "SNACK", "quantity": 10},
        )
        self.assertEqual(resp.status_code, 404)

    def test_inverted_stats_range(self) -> None:
        resp = self.client.get(
            "/api/v1/nutrition-logs/stats?start_date=2024-02-01&end_date=2024-01-01",
            headers=self.new_user(),
        )
        self.assertEqual(resp.status_code, 400)

    def test_search_by_name_requires_query(self) -> None:
        resp = self.client.get("/api/v1/foods/search-by-name?q=%20")
        self.assertEqual(resp.status_code, 400)

    def test_search_by_name_without_estimator(self) -> None:
        name = f"Jasmine rice {uuid.uuid4().hex[:6]}"
        self._create_food(self.new_admin(), name=name, is_public=True)

        resp = self.client.get("/api/v1/foods/search-by-name", params={"q": name})
        self.assertEqual(resp.status_code, 200)
        results = resp.json()["results"]
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0]["source"], "DATABASE")

        resp = self.client.get(
            "/api/v1/foods/search-by-name", params={"q": "no such food anywhere", "best": "true"}
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "No food found")


class TestNutritionTargets(ApiTestCase):
    def test_defaults_custom_and_reset(self) -> None:
        headers = self.new_user()

        resp = self.client.get("/api/v1/nutrition-targets", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["target_calories"], 2000)

        resp = self.client.post("/api/v1/nutrition-targets/reset", headers=headers)
        self.assertEqual(resp.status_code, 400)

        resp = self.client.put(
            "/api/v1/nutrition-targets", headers=headers, json={"target_calories": 1800}
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "All target values are required")

        custom = {"target_calories": 1800, "target_protein": 140, "target_carbs": 180, "target_fats": 60}
        resp = self.client.put("/api/v1/nutrition-targets", headers=headers, json=custom)
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertTrue(resp.json()["success"])

        resp = self.client.get("/api/v1/nutrition-targets", headers=headers)
        self.assertEqual(resp.json()["target_protein"], 140)

        resp = self.client.put(
            "/api/v1/profile",
            headers=headers,
            json={
                "date_of_birth": "1990-01-01",
                "gender": "MALE",
                "height": 180,
                "current_weight": 80,
                "activity_level": "SEDENTARY",
                "fitness_goal": "LOSE_WEIGHT",
            },
        )
        self.assertEqual(resp.status_code, 200)

        resp = self.client.post("/api/v1/nutrition-targets/reset", headers=headers)
        self.assertEqual(resp.status_code, 200, resp.text)
        targets = resp.json()["targets"]
        self.assertEqual(targets["target_protein"], 176)
        self.assertEqual(targets["target_fats"], 72)
