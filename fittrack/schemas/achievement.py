"""
Achievement schemas
"""
from datetime import datetime
from typing import Dict, List, Optional
import uuid

from pydantic import BaseModel

from fittrack.models.achievement import AchievementTier, AchievementType


class AchievementResponse(BaseModel):
    id: uuid.UUID
    code: str
    type: AchievementType
    tier: AchievementTier
    title: str
    description: str
    icon: Optional[str]
    target: int
    progress: int
    is_unlocked: bool
    unlocked_at: Optional[datetime]

    class Config:
        from_attributes = True


class AchievementListResponse(BaseModel):
    achievements: List[AchievementResponse]
    grouped: Dict[str, List[AchievementResponse]]


class AchievementCheckResponse(BaseModel):
    success: bool = True
    new_unlocks: List[AchievementResponse]
    count: int


class TierBreakdown(BaseModel):
    total: int
    unlocked: int


class AchievementStatsResponse(BaseModel):
    total_achievements: int
    unlocked_achievements: int
    unlock_rate: int
    total_points: int
    tier_breakdown: Dict[str, TierBreakdown]
