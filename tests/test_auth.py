# -*- coding: utf-8 -*-

from __future__ import annotations

from tests.helpers import PASSWORD, ApiTestCase, unique_email


class TestAuth(ApiTestCase):
    def test_register_and_login(self) -> None:
        email = unique_email()
        resp = self.client.post(
            "/api/v1/auth/register",
            json={"email": email, "password": PASSWORD, "name": "Lan"},
        )
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["message"], "User created successfully")
        self.assertEqual(body["user"]["email"], email)
        self.assertEqual(body["user"]["role"], "USER")
        self.assertNotIn("password_hash", body["user"])

        resp = self.client.post("/api/v1/auth/login", json={"email": email, "password": PASSWORD})
        self.assertEqual(resp.status_code, 200)
        token = resp.json()
        self.assertEqual(token["token_type"], "bearer")
        self.assertEqual(token["user_id"], body["user"]["id"])

        resp = self.client.get(
            "/api/v1/profile", headers={"Authorization": f"Bearer {token['access_token']}"}
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["email"], email)

    def test_duplicate_email_conflicts(self) -> None:
        user = self.register()
        resp = self.client.post(
            "/api/v1/auth/register",
            json={"email": user["email"], "password": PASSWORD},
        )
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["message"], "Email already registered")

    def test_admin_role_not_open_to_registration(self) -> None:
        resp = self.client.post(
            "/api/v1/auth/register",
            json={"email": unique_email(), "password": PASSWORD, "role": "ADMIN"},
        )
        self.assertEqual(resp.status_code, 403)

    def test_wrong_password(self) -> None:
        user = self.register()
        resp = self.client.post(
            "/api/v1/auth/login", json={"email": user["email"], "password": "not-the-password"}
        )
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "Invalid email or password")

    def test_auth_required(self) -> None:
        resp = self.client.get("/api/v1/profile")
        self.assertEqual(resp.status_code, 401)

        resp = self.client.get("/api/v1/profile", headers={"Authorization": "Bearer garbage"})
        self.assertEqual(resp.status_code, 401)

    def test_validation_error_shape(self) -> None:
        resp = self.client.post(
            "/api/v1/auth/register", json={"email": "not-an-email", "password": "short"}
        )
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertEqual(body["message"], "Invalid input data")
        fields = {error["field"] for error in body["errors"]}
        self.assertIn("email", fields)
        self.assertIn("password", fields)

    def test_password_over_bcrypt_limit_rejected(self) -> None:
        resp = self.client.post(
            "/api/v1/auth/register", json={"email": unique_email(), "password": "a" * 100}
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["errors"][0]["field"], "password")

        # multi-byte characters count by their encoded size
        resp = self.client.post(
            "/api/v1/auth/register", json={"email": unique_email(), "password": "é" * 40}
        )
        self.assertEqual(resp.status_code, 400)

    def test_password_at_bcrypt_limit_accepted(self) -> None:
        email = unique_email()
        password = "b" * 72
        resp = self.client.post("/api/v1/auth/register", json={"email": email, "password": password})
        self.assertEqual(resp.status_code, 201, resp.text)
        self.login(email, password)


class TestProfile(ApiTestCase):
    def test_update_profile_derives_metrics(self) -> None:
        headers = self.new_user()
        resp = self.client.put(
            "/api/v1/profile",
            headers=headers,
            json={
                "date_of_birth": "1990-01-01",
                "gender": "MALE",
                "height": 180,
                "current_weight": 80,
                "activity_level": "MODERATELY_ACTIVE",
                "fitness_goal": "LOSE_WEIGHT",
            },
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        profile = resp.json()
        self.assertEqual(profile["bmi"], 24.7)
        self.assertIsNotNone(profile["bmr"])
        self.assertIsNotNone(profile["tdee"])

    def test_future_birth_date_rejected(self) -> None:
        headers = self.new_user()
        resp = self.client.put("/api/v1/profile", headers=headers, json={"date_of_birth": "2999-01-01"})
        self.assertEqual(resp.status_code, 400)

    def test_change_password(self) -> None:
        user = self.register()
        headers = self.login(user["email"])

        resp = self.client.post(
            "/api/v1/profile/change-password",
            headers=headers,
            json={"current_password": "wrong-password", "new_password": "newpassword1"},
        )
        self.assertEqual(resp.status_code, 401)

        resp = self.client.post(
            "/api/v1/profile/change-password",
            headers=headers,
            json={"current_password": PASSWORD, "new_password": "newpassword1"},
        )
        self.assertEqual(resp.status_code, 200)
        self.login(user["email"], "newpassword1")

    def test_change_password_over_bcrypt_limit_rejected(self) -> None:
        user = self.register()
        headers = self.login(user["email"])
        resp = self.client.post(
            "/api/v1/profile/change-password",
            headers=headers,
            json={"current_password": PASSWORD, "new_password": "c" * 100},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Invalid input data")
        self.login(user["email"])

    def test_measurements(self) -> None:
        headers = self.new_user()
        resp = self.client.post(
            "/api/v1/profile/measurements", headers=headers, json={"weight": 72.5, "waist": 80}
        )
        self.assertEqual(resp.status_code, 201, resp.text)

        resp = self.client.get("/api/v1/profile/measurements", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()["measurements"]), 1)

    def test_avatar_must_be_image(self) -> None:
        headers = self.new_user()
        resp = self.client.put(
            "/api/v1/profile/avatar",
            headers=headers,
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "File must be an image")

    def test_delete_account(self) -> None:
        user = self.register()
        headers = self.login(user["email"])
        resp = self.client.delete("/api/v1/profile", headers=headers)
        self.assertEqual(resp.status_code, 204)

        resp = self.client.post("/api/v1/auth/login", json={"email": user["email"], "password": PASSWORD})
        self.assertEqual(resp.status_code, 401)
