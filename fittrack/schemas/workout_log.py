"""
Workout session schemas
"""
from datetime import datetime
from typing import List, Optional
import uuid

from pydantic import BaseModel, Field

from fittrack.schemas.common import PageResponse
from fittrack.schemas.workout import ExerciseSummary


class WorkoutLogCreate(BaseModel):
    workout_id: uuid.UUID
    title: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = Field(None, max_length=2000)


class WorkoutLogProgress(BaseModel):
    """Resumable position inside a session"""

    current_exercise_order: Optional[int] = Field(None, ge=0)
    current_set_number: Optional[int] = Field(None, ge=1)
    rest_until: Optional[datetime] = None


class SetLogCreate(BaseModel):
    exercise_id: uuid.UUID
    set_number: int = Field(..., ge=1)
    reps: Optional[int] = Field(None, ge=0)
    weight: Optional[float] = Field(None, ge=0, description="kg")
    duration: Optional[int] = Field(None, ge=0, description="Seconds")
    distance: Optional[float] = Field(None, ge=0, description="Metres")
    completed: bool = True


class SetLogResponse(BaseModel):
    id: uuid.UUID
    set_number: int
    reps: Optional[int]
    weight: Optional[float]
    duration: Optional[int]
    distance: Optional[float]
    completed: bool
    created_at: datetime

    class Config:
        from_attributes = True


class ExerciseLogResponse(BaseModel):
    id: uuid.UUID
    exercise_id: uuid.UUID
    notes: Optional[str]
    exercise: ExerciseSummary
    sets: List[SetLogResponse] = []

    class Config:
        from_attributes = True


class WorkoutLogResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    workout_id: Optional[uuid.UUID]
    title: Optional[str]
    notes: Optional[str]
    started_at: datetime
    completed_at: Optional[datetime]
    duration: Optional[int] = Field(None, description="Minutes")
    current_exercise_order: Optional[int]
    current_set_number: Optional[int]
    rest_until: Optional[datetime]
    exercise_logs: List[ExerciseLogResponse] = []

    class Config:
        from_attributes = True


class WorkoutLogSummary(BaseModel):
    """History row"""

    id: uuid.UUID
    workout_id: Optional[uuid.UUID]
    title: Optional[str]
    started_at: datetime
    completed_at: Optional[datetime]
    duration: Optional[int]
    exercise_count: int


class WorkoutLogListResponse(PageResponse):
    logs: List[WorkoutLogSummary]


class UnfinishedLogResponse(BaseModel):
    log: Optional[WorkoutLogResponse]


class WorkoutStatsResponse(BaseModel):
    total_sessions: int
    total_duration: int = Field(..., description="Minutes")
    total_volume: float = Field(..., description="Sum of weight x reps (kg)")
    average_session_duration: float
    last_workout_date: Optional[datetime]
    this_month_sessions: int
    this_month_duration: int
    percentage_change: int = Field(..., description="Sessions this month vs last month (%)")
