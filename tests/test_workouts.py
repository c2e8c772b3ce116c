# -*- coding: utf-8 -*-

from __future__ import annotations

import uuid
from datetime import timedelta

from fittrack.utils.datetime_helper import now_utc, previous_month_start, start_of_day, today_local
from tests.helpers import ApiTestCase, add_completed_log, backdate_log


class TestWorkouts(ApiTestCase):
    @classmethod
    def setUpClass(cls) -> None:
        super().setUpClass()
        cls.admin = cls._make_admin()
        resp = cls.client.post(
            "/api/v1/exercises",
            headers=cls.admin,
            json={
                "name": f"Bench Press {uuid.uuid4().hex[:6]}",
                "muscle_groups": ["CHEST", "TRICEPS"],
                "equipment": ["BARBELL"],
                "difficulty": "INTERMEDIATE",
            },
        )
        assert resp.status_code == 201, resp.text
        cls.exercise_id = resp.json()["id"]

    @classmethod
    def _make_admin(cls):
        from tests.helpers import PASSWORD, set_role, unique_email

        email = unique_email("admin")
        cls.client.post("/api/v1/auth/register", json={"email": email, "password": PASSWORD})
        set_role(email, "ADMIN")
        resp = cls.client.post("/api/v1/auth/login", json={"email": email, "password": PASSWORD})
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    def _workout_payload(self, **overrides) -> dict:
        payload = {
            "name": "Push Day",
            "difficulty": "INTERMEDIATE",
            "estimated_time": 45,
            "exercises": [{"exercise_id": self.exercise_id, "sets": 3, "reps": 10, "rest": 90}],
        }
        payload.update(overrides)
        return payload

    def _create_workout(self, headers, **overrides) -> dict:
        resp = self.client.post("/api/v1/workouts", headers=headers, json=self._workout_payload(**overrides))
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def test_create_and_read_workout(self) -> None:
        headers = self.new_user()
        workout = self._create_workout(headers)
        self.assertFalse(workout["is_template"])
        self.assertFalse(workout["is_public"])
        self.assertEqual(workout["exercises"][0]["order"], 0)
        self.assertEqual(workout["exercises"][0]["exercise"]["id"], self.exercise_id)

        resp = self.client.get(f"/api/v1/workouts/{workout['id']}", headers=headers)
        self.assertEqual(resp.status_code, 200)

        # Private workouts are hidden from everyone else
        resp = self.client.get(f"/api/v1/workouts/{workout['id']}")
        self.assertEqual(resp.status_code, 404)

    def test_admin_workouts_are_templates(self) -> None:
        workout = self._create_workout(self.admin, is_public=True)
        self.assertTrue(workout["is_template"])

        resp = self.client.patch(
            f"/api/v1/workouts/{workout['id']}", headers=self.new_user(), json={"name": "Mine now"}
        )
        self.assertEqual(resp.status_code, 404)

    def test_non_owner_cannot_edit(self) -> None:
        workout = self._create_workout(self.new_user(), is_public=True)
        other = self.new_user()

        resp = self.client.patch(
            f"/api/v1/workouts/{workout['id']}", headers=other, json={"name": "Hijacked"}
        )
        self.assertEqual(resp.status_code, 404)

        resp = self.client.delete(f"/api/v1/workouts/{workout['id']}", headers=other)
        self.assertEqual(resp.status_code, 404)

    def test_update_replaces_exercises(self) -> None:
        headers = self.new_user()
        workout = self._create_workout(headers)
        resp = self.client.patch(
            f"/api/v1/workouts/{workout['id']}",
            headers=headers,
            json={
                "name": "Push Day v2",
                "exercises": [{"exercise_id": self.exercise_id, "sets": 5, "reps": 5}],
            },
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body["name"], "Push Day v2")
        self.assertEqual(len(body["exercises"]), 1)
        self.assertEqual(body["exercises"][0]["sets"], 5)

    def test_invalid_workout_payloads(self) -> None:
        headers = self.new_user()

        resp = self.client.post("/api/v1/workouts", headers=headers, json=self._workout_payload(name="Bad!name"))
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post("/api/v1/workouts", headers=headers, json=self._workout_payload(exercises=[]))
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post(
            "/api/v1/workouts",
            headers=headers,
            json=self._workout_payload(exercises=[{"exercise_id": self.exercise_id, "sets": 3}]),
        )
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post(
            "/api/v1/workouts",
            headers=headers,
            json=self._workout_payload(exercises=[{"exercise_id": str(uuid.uuid4()), "sets": 3, "reps": 8}]),
        )
        self.assertEqual(resp.status_code, 400)

    def test_delete_workout(self) -> None:
        headers = self.new_user()
        workout = self._create_workout(headers)
        resp = self.client.delete(f"/api/v1/workouts/{workout['id']}", headers=headers)
        self.assertEqual(resp.status_code, 204)
        resp = self.client.get(f"/api/v1/workouts/{workout['id']}", headers=headers)
        self.assertEqual(resp.status_code, 404)

    def test_session_lifecycle(self) -> None:
        headers = self.new_user()
        workout = self._create_workout(headers)

        resp = self.client.post("/api/v1/workout-logs", headers=headers, json={"workout_id": workout["id"]})
        self.assertEqual(resp.status_code, 201, resp.text)
        log = resp.json()
        self.assertIsNone(log["completed_at"])
        self.assertEqual(log["title"], "Push Day")

        resp = self.client.get(f"/api/v1/workout-logs/check?workout_id={workout['id']}", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["log"]["id"], log["id"])

        resp = self.client.patch(
            f"/api/v1/workout-logs/{log['id']}",
            headers=headers,
            json={"current_exercise_order": 0, "current_set_number": 2},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["current_set_number"], 2)

        for set_number, weight in ((1, 60), (2, 62.5)):
            resp = self.client.post(
                f"/api/v1/workout-logs/{log['id']}/sets",
                headers=headers,
                json={"exercise_id": self.exercise_id, "set_number": set_number, "reps": 10, "weight": weight},
            )
            self.assertEqual(resp.status_code, 201, resp.text)

        resp = self.client.post(f"/api/v1/workout-logs/{log['id']}/complete", headers=headers)
        self.assertEqual(resp.status_code, 200)
        completed = resp.json()
        self.assertIsNotNone(completed["completed_at"])
        self.assertEqual(completed["duration"], 0)
        self.assertEqual(len(completed["exercise_logs"]), 1)
        self.assertEqual(len(completed["exercise_logs"][0]["sets"]), 2)

        # Completing twice keeps the first completion
        resp = self.client.post(f"/api/v1/workout-logs/{log['id']}/complete", headers=headers)
        self.assertEqual(resp.json()["completed_at"], completed["completed_at"])

        resp = self.client.get(f"/api/v1/workout-logs/check?workout_id={workout['id']}", headers=headers)
        self.assertIsNone(resp.json()["log"])

        resp = self.client.get("/api/v1/workout-logs/stats", headers=headers)
        self.assertEqual(resp.status_code, 200)
        stats = resp.json()
        self.assertEqual(stats["total_sessions"], 1)
        self.assertEqual(stats["total_volume"], 1225)

        resp = self.client.get("/api/v1/dashboard", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["streak"]["days"], 1)

    def test_check_requires_workout_id(self) -> None:
        resp = self.client.get("/api/v1/workout-logs/check", headers=self.new_user())
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "workout_id is required")

    def test_foreign_session_is_not_found(self) -> None:
        owner = self.new_user()
        workout = self._create_workout(owner)
        log = self.client.post("/api/v1/workout-logs", headers=owner, json={"workout_id": workout["id"]}).json()

        resp = self.client.get(f"/api/v1/workout-logs/{log['id']}", headers=self.new_user())
        self.assertEqual(resp.status_code, 404)

    def test_exercise_management_requires_admin(self) -> None:
        resp = self.client.post(
            "/api/v1/exercises", headers=self.new_user(), json={"name": "Curl", "difficulty": "BEGINNER"}
        )
        self.assertEqual(resp.status_code, 403)

        resp = self.client.get("/api/v1/exercises")
        self.assertEqual(resp.status_code, 200)
        self.assertGreaterEqual(resp.json()["total"], 1)

    def test_duration_rounds_elapsed_minutes(self) -> None:
        headers = self.new_user()
        workout = self._create_workout(headers)
        log = self.client.post("/api/v1/workout-logs", headers=headers, json={"workout_id": workout["id"]}).json()

        backdate_log(log["id"], 90)
        resp = self.client.post(f"/api/v1/workout-logs/{log['id']}/complete", headers=headers)
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["duration"], 2)

    def test_stats_compare_with_last_month(self) -> None:
        user = self.register()
        headers = self.login(user["email"])
        last_month = start_of_day(previous_month_start(today_local())) + timedelta(days=1, hours=12)
        add_completed_log(user["id"], last_month)
        add_completed_log(user["id"], last_month + timedelta(days=2))
        add_completed_log(user["id"], now_utc())

        resp = self.client.get("/api/v1/workout-logs/stats", headers=headers)
        self.assertEqual(resp.status_code, 200)
        stats = resp.json()
        self.assertEqual(stats["total_sessions"], 3)
        self.assertEqual(stats["total_duration"], 90)
        self.assertEqual(stats["this_month_sessions"], 1)
        self.assertEqual(stats["this_month_duration"], 30)
        self.assertEqual(stats["percentage_change"], -50)

        # Nothing last month counts as full growth
        fresh = self.register()
        add_completed_log(fresh["id"], now_utc())
        stats = self.client.get("/api/v1/workout-logs/stats", headers=self.login(fresh["email"])).json()
        self.assertEqual(stats["percentage_change"], 100)

    def test_dashboard_weekly_and_daily_changes(self) -> None:
        user = self.register()
        headers = self.login(user["email"])
        now = now_utc()
        add_completed_log(user["id"], now, duration=30)
        add_completed_log(user["id"], now - timedelta(days=1), duration=20)
        add_completed_log(user["id"], now - timedelta(days=10), duration=40)

        resp = self.client.get("/api/v1/dashboard", headers=headers)
        self.assertEqual(resp.status_code, 200, resp.text)
        dashboard = resp.json()
        self.assertEqual(dashboard["workouts"]["total"], 3)
        self.assertEqual(dashboard["workouts"]["change"], 100)
        # 6.5 kcal per minute: 195 today against 130 yesterday
        self.assertEqual(dashboard["calories"]["total"], 195)
        self.assertEqual(dashboard["calories"]["change"], 65)
        self.assertEqual(dashboard["streak"]["days"], 2)
        self.assertEqual(len(dashboard["recent_workouts"]), 3)

    def test_dashboard_weight_change_against_last_month(self) -> None:
        headers = self.new_user()
        resp = self.client.get("/api/v1/dashboard", headers=headers)
        self.assertIsNone(resp.json()["weight"]["current"])

        older = (now_utc() - timedelta(days=40)).isoformat()
        resp = self.client.post(
            "/api/v1/profile/measurements", headers=headers, json={"weight": 82, "measured_at": older}
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        resp = self.client.post("/api/v1/profile/measurements", headers=headers, json={"weight": 80})
        self.assertEqual(resp.status_code, 201, resp.text)

        weight = self.client.get("/api/v1/dashboard", headers=headers).json()["weight"]
        self.assertEqual(weight["current"], 80)
        self.assertEqual(weight["change"], -2.0)
        self.assertEqual(weight["unit"], "kg")

    def test_listing_hides_other_users_private_workouts(self) -> None:
        owner = self.new_user()
        name = f"Secret {uuid.uuid4().hex[:8]}"
        self._create_workout(owner, name=name)

        resp = self.client.get("/api/v1/workouts", headers=owner, params={"q": name})
        self.assertEqual(resp.json()["total"], 1)

        other = self.new_user()
        for params in ({"q": name}, {"q": name, "mine": "true"}):
            resp = self.client.get("/api/v1/workouts", headers=other, params=params)
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(resp.json()["total"], 0)

        resp = self.client.get("/api/v1/workouts", params={"q": name})
        self.assertEqual(resp.json()["total"], 0)

        resp = self.client.get("/api/v1/workouts", headers=self.admin, params={"q": name})
        self.assertEqual(resp.json()["total"], 1)
        resp = self.client.get("/api/v1/workouts", headers=self.admin, params={"q": name, "mine": "true"})
        self.assertEqual(resp.json()["total"], 0)
