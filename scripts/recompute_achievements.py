"""Recompute achievements for one user, or for every user

Usage:
    USER_ID=your-user-id python scripts/recompute_achievements.py
    python scripts/recompute_achievements.py        # all users
"""
import asyncio
import sys
import os
import uuid

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select

from fittrack.database.session import AsyncSessionLocal
from fittrack.models.user import User
from fittrack.scheduler.jobs import refresh_achievements

USER_ID = os.environ.get("USER_ID", "")


async def recompute():
    if USER_ID:
        try:
            user_ids = [uuid.UUID(USER_ID)]
        except ValueError:
            print(f"Error: USER_ID is not a valid UUID: {USER_ID}")
            sys.exit(1)
    else:
        async with AsyncSessionLocal() as session:
            result = await session.execute(select(User.id))
            user_ids = list(result.scalars().all())

    print("=" * 60)
    print(f"Recomputing achievements for {len(user_ids)} user(s)...")
    print("=" * 60)
    unlocked = await refresh_achievements(user_ids)
    print(f"Unlocked: {unlocked}")
    print("\n✅ Done!")


if __name__ == "__main__":
    asyncio.run(recompute())
