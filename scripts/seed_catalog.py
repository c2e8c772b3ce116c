"""Seed the exercise and food catalogs plus admin workout templates

Rows are matched by name, so running the script twice adds nothing.

Usage:
    ADMIN_EMAIL=admin@example.com ADMIN_PASSWORD=changeme python scripts/seed_catalog.py
"""
import asyncio
import sys
import os

# Project root on the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pathlib import Path

import yaml
from sqlalchemy import select

from fittrack.database.session import AsyncSessionLocal
from fittrack.models.exercise import Exercise, Difficulty
from fittrack.models.nutrition import Food
from fittrack.models.user import User, UserRole
from fittrack.models.workout import Workout
from fittrack.services.workout_service import WorkoutService
from fittrack.utils.security import hash_password

SEED_FILE = Path(__file__).resolve().parent.parent / "config" / "seeds" / "catalog.yaml"

ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "")
ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "")


async def get_or_create_admin(session) -> User:
    result = await session.execute(select(User).where(User.email == ADMIN_EMAIL.lower()))
    admin = result.scalar_one_or_none()
    if admin:
        if admin.role != UserRole.ADMIN:
            print(f"Error: {ADMIN_EMAIL} exists but is not an admin")
            sys.exit(1)
        return admin

    if not ADMIN_PASSWORD:
        print("Error: ADMIN_PASSWORD is required to create the admin account")
        sys.exit(1)

    admin = User(
        email=ADMIN_EMAIL.lower(),
        name="Admin",
        password_hash=hash_password(ADMIN_PASSWORD),
        role=UserRole.ADMIN,
    )
    session.add(admin)
    await session.flush()
    print(f"Created admin {admin.email}")
    return admin


async def existing_names(session, model) -> set:
    result = await session.execute(select(model.name))
    return set(result.scalars().all())


async def seed():
    if not ADMIN_EMAIL:
        print("Error: ADMIN_EMAIL is not set")
        print("Usage: ADMIN_EMAIL=admin@example.com ADMIN_PASSWORD=changeme python scripts/seed_catalog.py")
        sys.exit(1)

    with open(SEED_FILE, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    async with AsyncSessionLocal() as session:
        admin = await get_or_create_admin(session)

        print("=" * 60)
        print("1. Exercises...")
        print("=" * 60)
        known = await existing_names(session, Exercise)
        added = 0
        for item in data.get("exercises", []):
            if item["name"] in known:
                continue
            session.add(Exercise(
                name=item["name"],
                description=item.get("description"),
                instructions=item.get("instructions"),
                muscle_groups=item["muscle_groups"],
                equipment=item["equipment"],
                difficulty=Difficulty(item["difficulty"]),
                video_url=item.get("video_url"),
                is_public=True,
                created_by=admin.id,
            ))
            added += 1
        await session.flush()
        print(f"Added {added} exercises")

        print("\n" + "=" * 60)
        print("2. Foods...")
        print("=" * 60)
        known = await existing_names(session, Food)
        added = 0
        for item in data.get("foods", []):
            if item["name"] in known:
                continue
            session.add(Food(is_public=True, created_by=admin.id, **item))
            added += 1
        await session.flush()
        print(f"Added {added} foods")

        print("\n" + "=" * 60)
        print("3. Workout templates...")
        print("=" * 60)
        result = await session.execute(select(Exercise.name, Exercise.id))
        exercise_ids = dict(result.all())
        known = await existing_names(session, Workout)
        workout_service = WorkoutService(session)
        added = 0
        for item in data.get("workouts", []):
            if item["name"] in known:
                continue
            exercises = []
            for order, entry in enumerate(item["exercises"]):
                entry = dict(entry)
                exercise_name = entry.pop("exercise")
                if exercise_name not in exercise_ids:
                    print(f"Skipping {item['name']}: unknown exercise {exercise_name}")
                    break
                exercises.append({"exercise_id": exercise_ids[exercise_name], "order": order, **entry})
            else:
                await workout_service.create_workout(admin, {
                    "name": item["name"],
                    "description": item.get("description"),
                    "difficulty": Difficulty(item["difficulty"]),
                    "estimated_time": item.get("estimated_time"),
                    "is_public": True,
                    "exercises": exercises,
                })
                added += 1
        print(f"Added {added} workout templates")

        await session.commit()
        print("\n✅ Done!")


if __name__ == "__main__":
    asyncio.run(seed())
