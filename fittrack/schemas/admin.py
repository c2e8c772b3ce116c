"""
Admin schemas
"""
from typing import List

from pydantic import BaseModel, Field

from fittrack.schemas.account import UserResponse
from fittrack.schemas.common import PageResponse


class AdminStatsResponse(BaseModel):
    total_users: int
    users_this_month: int
    user_growth: int = Field(..., description="% vs last calendar month")
    total_workouts: int
    total_exercises: int
    total_foods: int
    total_workout_logs: int


class AdminUserListResponse(PageResponse):
    users: List[UserResponse]
