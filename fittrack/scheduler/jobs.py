"""
Scheduled jobs
"""
import logging
from datetime import timedelta
from typing import List
import uuid

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy import select, union

from fittrack.config import settings
from fittrack.database.health import check_connection, retry_database_operation
from fittrack.database.session import AsyncSessionLocal
from fittrack.models.nutrition import NutritionLog
from fittrack.models.workout import WorkoutLog
from fittrack.services.achievement_service import AchievementService
from fittrack.utils.datetime_helper import now_utc

logger = logging.getLogger(__name__)

ACTIVE_WINDOW_DAYS = 2
KEEP_ALIVE_MINUTES = 5

scheduler = AsyncIOScheduler(timezone=settings.TZ)


async def get_recently_active_users(days: int = ACTIVE_WINDOW_DAYS) -> List[uuid.UUID]:
    """Users who completed a workout or logged a meal in the last ``days`` days"""
    since = now_utc() - timedelta(days=days)
    async with AsyncSessionLocal() as db:
        result = await db.execute(
            union(
                select(WorkoutLog.user_id).where(WorkoutLog.completed_at >= since),
                select(NutritionLog.user_id).where(NutritionLog.consumed_at >= since),
            )
        )
        return list(result.scalars().all())


async def refresh_achievements(user_ids: List[uuid.UUID]) -> int:
    """
    Recompute achievements for each user in its own transaction

    Returns:
        number of achievements unlocked
    """
    unlocked = 0
    for user_id in user_ids:
        try:
            async with AsyncSessionLocal() as db:
                new_unlocks = await AchievementService(db).check_and_unlock(user_id)
                await db.commit()
                unlocked += len(new_unlocks)
        except Exception as e:
            logger.error(f"Achievement refresh failed for user {user_id}: {str(e)}", exc_info=True)
    return unlocked


@scheduler.scheduled_job(CronTrigger(hour=0, minute=15))
async def refresh_achievements_job():
    """
    Nightly achievement refresh

    Streak progress depends on the calendar, so recently active users are
    re-evaluated after midnight.
    """
    logger.info("🏆 Starting job: achievement refresh")

    try:
        user_ids = await get_recently_active_users()
        unlocked = await refresh_achievements(user_ids)
        logger.info(f"✅ Achievement refresh done: users={len(user_ids)}, unlocked={unlocked}")
    except Exception as e:
        logger.error(f"❌ Achievement refresh job failed: {str(e)}")


@scheduler.scheduled_job(IntervalTrigger(minutes=KEEP_ALIVE_MINUTES))
async def database_keep_alive_job():
    """Keep the managed database awake"""
    try:
        await retry_database_operation(check_connection)
        logger.debug("Database keep-alive ping ok")
    except Exception as e:
        logger.error(f"❌ Database keep-alive failed: {str(e)}")


def start_scheduler():
    """Start the scheduler unless disabled"""
    if not settings.SCHEDULER_ENABLED:
        logger.info("⏸️ Scheduler disabled (SCHEDULER_ENABLED=false)")
        return

    try:
        scheduler.start()
        logger.info("⏰ Scheduler started")
        logger.info("📅 Registered jobs:")
        logger.info("  - 00:15 achievement refresh")
        logger.info(f"  - every {KEEP_ALIVE_MINUTES} min database keep-alive")
    except Exception as e:
        logger.error(f"❌ Scheduler failed to start: {str(e)}")


def shutdown_scheduler():
    """Stop the scheduler if it is running"""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("⏰ Scheduler stopped")
