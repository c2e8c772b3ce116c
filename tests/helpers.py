# -*- coding: utf-8 -*-

from __future__ import annotations

import asyncio
import unittest
import uuid
from datetime import datetime, timedelta
from typing import Dict, Optional

from fastapi.testclient import TestClient
from sqlalchemy import update

PASSWORD = "password123"


def unique_email(prefix: str = "user") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"


def set_role(email: str, role: str) -> None:
    """Change a role directly in the database; admins cannot self-register."""
    from fittrack.database.session import AsyncSessionLocal
    from fittrack.models.user import User, UserRole

    async def _update() -> None:
        async with AsyncSessionLocal() as db:
            await db.execute(update(User).where(User.email == email).values(role=UserRole(role)))
            await db.commit()

    asyncio.run(_update())


def backdate_log(log_id: str, seconds: int) -> None:
    """Move a session's start back in time."""
    from fittrack.database.session import AsyncSessionLocal
    from fittrack.models.workout import WorkoutLog

    async def _update() -> None:
        async with AsyncSessionLocal() as db:
            log = await db.get(WorkoutLog, uuid.UUID(log_id))
            log.started_at = log.started_at - timedelta(seconds=seconds)
            await db.commit()

    asyncio.run(_update())


def add_completed_log(user_id: str, completed_at: datetime, duration: int = 30) -> None:
    """Insert a finished session with an arbitrary completion time."""
    from fittrack.database.session import AsyncSessionLocal
    from fittrack.models.workout import WorkoutLog

    async def _insert() -> None:
        async with AsyncSessionLocal() as db:
            db.add(WorkoutLog(
                user_id=uuid.UUID(user_id),
                title="Imported session",
                started_at=completed_at - timedelta(minutes=duration),
                completed_at=completed_at,
                duration=duration,
            ))
            await db.commit()

    asyncio.run(_insert())


def add_user(created_at: datetime) -> None:
    """Insert an account with an arbitrary sign-up time."""
    from fittrack.database.session import AsyncSessionLocal
    from fittrack.models.user import User

    async def _insert() -> None:
        async with AsyncSessionLocal() as db:
            db.add(User(email=unique_email("imported"), name="Imported", created_at=created_at))
            await db.commit()

    asyncio.run(_insert())


class ApiTestCase(unittest.TestCase):
    """Shares one running app (lifespan included) per test class."""

    client: TestClient

    @classmethod
    def setUpClass(cls) -> None:
        from fittrack.main import app  # noqa: WPS433 (import after test env is set)

        cls._client = TestClient(app)
        cls.client = cls._client.__enter__()

    @classmethod
    def tearDownClass(cls) -> None:
        cls._client.__exit__(None, None, None)

    def register(self, email: Optional[str] = None, role: str = "USER", name: str = "Tester") -> Dict:
        email = email or unique_email(role.lower())
        resp = self.client.post(
            "/api/v1/auth/register",
            json={"email": email, "password": PASSWORD, "name": name, "role": role},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["user"]

    def login(self, email: str, password: str = PASSWORD) -> Dict[str, str]:
        resp = self.client.post("/api/v1/auth/login", json={"email": email, "password": password})
        self.assertEqual(resp.status_code, 200, resp.text)
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    def new_user(self, role: str = "USER") -> Dict[str, str]:
        user = self.register(role=role)
        return self.login(user["email"])

    def new_admin(self) -> Dict[str, str]:
        user = self.register()
        set_role(user["email"], "ADMIN")
        return self.login(user["email"])
