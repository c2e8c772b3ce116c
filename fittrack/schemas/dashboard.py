"""
Dashboard schemas
"""
from datetime import datetime
from typing import List, Optional
import uuid

from pydantic import BaseModel


class WorkoutCount(BaseModel):
    total: int
    change: int


class CaloriesBurned(BaseModel):
    total: int
    change: int


class WeightSummary(BaseModel):
    current: Optional[float]
    change: Optional[float]
    unit: str = "kg"


class StreakSummary(BaseModel):
    days: int
    message: str


class RecentWorkout(BaseModel):
    id: uuid.UUID
    title: Optional[str]
    duration: Optional[int]
    started_at: datetime


class DashboardResponse(BaseModel):
    workouts: WorkoutCount
    calories: CaloriesBurned
    weight: WeightSummary
    streak: StreakSummary
    recent_workouts: List[RecentWorkout]
