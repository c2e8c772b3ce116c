"""
Achievements API
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.api.dependencies import get_current_user
from fittrack.api.errors import internal_error
from fittrack.database.session import get_db
from fittrack.models.achievement import AchievementTier, AchievementType
from fittrack.models.user import User
from fittrack.schemas.achievement import (
    AchievementCheckResponse,
    AchievementListResponse,
    AchievementResponse,
    AchievementStatsResponse,
)
from fittrack.services.achievement_service import AchievementService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=AchievementListResponse)
async def list_achievements(
    tier: Optional[AchievementTier] = Query(None),
    type: Optional[AchievementType] = Query(None),
    unlocked: Optional[bool] = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    result = await AchievementService(db).list_achievements(
        current_user.id, tier=tier, kind=type, unlocked=unlocked
    )
    return AchievementListResponse(
        achievements=[AchievementResponse.model_validate(a) for a in result["achievements"]],
        grouped={
            key: [AchievementResponse.model_validate(a) for a in items]
            for key, items in result["grouped"].items()
        },
    )


@router.post("/check", response_model=AchievementCheckResponse)
async def check_achievements(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Recompute progress and report newly unlocked achievements"""
    try:
        unlocked = await AchievementService(db).check_and_unlock(current_user.id)
    except Exception as e:
        logger.error(f"Achievement check failed for {current_user.id}: {str(e)}", exc_info=True)
        raise internal_error()

    return AchievementCheckResponse(
        new_unlocks=[AchievementResponse.model_validate(a) for a in unlocked],
        count=len(unlocked),
    )


@router.get("/stats", response_model=AchievementStatsResponse)
async def get_achievement_stats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = AchievementService(db)
    await service.initialize(current_user.id)
    return await service.get_stats(current_user.id)
