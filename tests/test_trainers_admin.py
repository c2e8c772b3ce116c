# -*- coding: utf-8 -*-

from __future__ import annotations

from datetime import timedelta

from fittrack.utils.datetime_helper import now_utc, previous_month_start, start_of_day, today_local
from fittrack.utils.numbers import round_half_up
from tests.helpers import ApiTestCase, add_completed_log, add_user


class TestTrainersAndCourses(ApiTestCase):
    def _trainer(self):
        user = self.register(role="TRAINER", name="Coach Minh")
        return user, self.login(user["email"])

    def test_course_enrollment(self) -> None:
        trainer, headers = self._trainer()
        resp = self.client.post(
            "/api/v1/trainers/me/courses",
            headers=headers,
            json={"title": "8 Week Strength", "price": 49, "currency": "usd", "is_published": True},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        course = resp.json()
        self.assertEqual(course["currency"], "USD")

        resp = self.client.get(f"/api/v1/trainers/{trainer['id']}/courses")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()["courses"]), 1)

        student = self.new_user()
        resp = self.client.post(f"/api/v1/courses/{course['id']}/enroll", headers=student)
        self.assertEqual(resp.status_code, 201, resp.text)

        resp = self.client.post(f"/api/v1/courses/{course['id']}/enroll", headers=student)
        self.assertEqual(resp.status_code, 409)

        resp = self.client.get(f"/api/v1/trainers/{trainer['id']}/courses")
        self.assertEqual(resp.json()["courses"][0]["enrollment_count"], 1)

    def test_unpublished_course_cannot_be_joined(self) -> None:
        _, headers = self._trainer()
        course = self.client.post(
            "/api/v1/trainers/me/courses", headers=headers, json={"title": "Draft"}
        ).json()
        resp = self.client.post(f"/api/v1/courses/{course['id']}/enroll", headers=self.new_user())
        self.assertEqual(resp.status_code, 404)

    def test_only_owner_edits_course(self) -> None:
        _, headers = self._trainer()
        course = self.client.post(
            "/api/v1/trainers/me/courses", headers=headers, json={"title": "Mobility"}
        ).json()

        _, other = self._trainer()
        resp = self.client.patch(f"/api/v1/courses/{course['id']}", headers=other, json={"title": "Mine"})
        self.assertEqual(resp.status_code, 404)

        resp = self.client.patch(f"/api/v1/courses/{course['id']}", headers=headers, json={"price": 10})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["price"], 10)

        resp = self.client.delete(f"/api/v1/courses/{course['id']}", headers=headers)
        self.assertEqual(resp.status_code, 204)

    def test_users_cannot_create_courses(self) -> None:
        resp = self.client.post(
            "/api/v1/trainers/me/courses", headers=self.new_user(), json={"title": "Nope"}
        )
        self.assertEqual(resp.status_code, 403)

    def test_only_verified_trainers_are_listed(self) -> None:
        trainer, headers = self._trainer()
        resp = self.client.put(
            "/api/v1/trainers/me/profile",
            headers=headers,
            json={"bio": "Strength coach", "specializations": ["strength"], "years_experience": 6},
        )
        self.assertEqual(resp.status_code, 200, resp.text)

        listed = self.client.get("/api/v1/trainers", params={"search": trainer["email"]}).json()
        self.assertEqual(listed["trainers"], [])

        admin = self.new_admin()
        resp = self.client.patch(
            f"/api/v1/admin/trainers/{trainer['id']}/verify", headers=admin, json={"is_verified": True}
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertTrue(resp.json()["is_verified"])

        listed = self.client.get("/api/v1/trainers", params={"search": trainer["email"]}).json()
        self.assertEqual(len(listed["trainers"]), 1)
        self.assertEqual(listed["trainers"][0]["profile"]["bio"], "Strength coach")
        self.assertEqual(listed["pagination"]["total"], 1)


class TestAdmin(ApiTestCase):
    def test_admin_endpoints_require_admin(self) -> None:
        resp = self.client.get("/api/v1/admin/stats", headers=self.new_user())
        self.assertEqual(resp.status_code, 403)

        resp = self.client.get("/api/v1/admin/stats")
        self.assertEqual(resp.status_code, 401)

    def test_stats_and_user_list(self) -> None:
        admin = self.new_admin()
        resp = self.client.get("/api/v1/admin/stats", headers=admin)
        self.assertEqual(resp.status_code, 200)
        stats = resp.json()
        self.assertGreaterEqual(stats["total_users"], 1)
        self.assertGreaterEqual(stats["users_this_month"], 1)

        resp = self.client.get("/api/v1/admin/users?page=1&page_size=5", headers=admin)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertLessEqual(len(body["users"]), 5)
        self.assertEqual(body["total"], stats["total_users"])

    def test_user_growth_against_last_month(self) -> None:
        admin = self.new_admin()
        stats = self.client.get("/api/v1/admin/stats", headers=admin).json()
        # No sign-ups last month yet
        self.assertEqual(stats["user_growth"], 0)

        last_month = start_of_day(previous_month_start(today_local())) + timedelta(days=1, hours=12)
        add_user(last_month)
        add_user(last_month + timedelta(days=1))

        stats = self.client.get("/api/v1/admin/stats", headers=admin).json()
        expected = round_half_up((stats["users_this_month"] - 2) / 2 * 100)
        self.assertEqual(stats["user_growth"], expected)


class TestAchievementsAndHealth(ApiTestCase):
    def test_achievement_catalogue(self) -> None:
        headers = self.new_user()
        resp = self.client.get("/api/v1/achievements/stats", headers=headers)
        self.assertEqual(resp.status_code, 200)
        stats = resp.json()
        self.assertGreater(stats["total_achievements"], 0)
        self.assertEqual(stats["unlocked_achievements"], 0)
        self.assertEqual(stats["unlock_rate"], 0)

        resp = self.client.post("/api/v1/achievements/check", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["count"], 0)

        resp = self.client.get("/api/v1/achievements?tier=BRONZE", headers=headers)
        self.assertEqual(resp.status_code, 200)
        tiers = {a["tier"] for a in resp.json()["achievements"]}
        self.assertEqual(tiers, {"BRONZE"})

    def test_first_workout_unlocks_achievement_once(self) -> None:
        user = self.register()
        headers = self.login(user["email"])
        add_completed_log(user["id"], now_utc())

        resp = self.client.post("/api/v1/achievements/check", headers=headers)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertGreaterEqual(body["count"], 1)
        unlocked = {a["code"]: a for a in body["new_unlocks"]}
        self.assertIn("workout_count_1", unlocked)
        self.assertTrue(unlocked["workout_count_1"]["is_unlocked"])
        self.assertIsNotNone(unlocked["workout_count_1"]["unlocked_at"])

        resp = self.client.post("/api/v1/achievements/check", headers=headers)
        self.assertEqual(resp.json()["count"], 0)

        stats = self.client.get("/api/v1/achievements/stats", headers=headers).json()
        self.assertEqual(stats["unlocked_achievements"], body["count"])
        self.assertGreaterEqual(stats["total_points"], 1)

    def test_database_health(self) -> None:
        resp = self.client.get("/api/v1/health/db")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["database"], "connected")
