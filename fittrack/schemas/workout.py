"""
Workout and workout template schemas
"""
from datetime import datetime
from typing import List, Optional
import uuid

from pydantic import BaseModel, Field, model_validator

from fittrack.models.exercise import Difficulty
from fittrack.schemas.common import PageResponse

WORKOUT_NAME_PATTERN = r"^[A-Za-z0-9 _-]+$"


class WorkoutExerciseIn(BaseModel):
    """Exercise entry of a workout"""

    exercise_id: uuid.UUID
    order: Optional[int] = Field(None, ge=0, description="Position; list index when omitted")
    sets: int = Field(..., ge=1, le=50)
    reps: Optional[int] = Field(None, ge=1, le=1000)
    duration: Optional[int] = Field(None, ge=1, le=3600, description="Seconds")
    rest: Optional[int] = Field(None, ge=0, le=600, description="Seconds between sets")
    notes: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def _reps_or_duration(self):
        if self.reps is None and self.duration is None:
            raise ValueError("Either reps or duration is required")
        return self


class WorkoutCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, pattern=WORKOUT_NAME_PATTERN)
    description: Optional[str] = Field(None, max_length=1000)
    difficulty: Difficulty = Difficulty.BEGINNER
    estimated_time: Optional[int] = Field(None, ge=1, le=300, description="Minutes")
    is_public: bool = False
    exercises: List[WorkoutExerciseIn] = Field(..., min_length=1, max_length=50)


class WorkoutUpdate(BaseModel):
    """Partial update; ``exercises`` replaces the full list"""

    name: Optional[str] = Field(None, min_length=1, max_length=100, pattern=WORKOUT_NAME_PATTERN)
    description: Optional[str] = Field(None, max_length=1000)
    difficulty: Optional[Difficulty] = None
    estimated_time: Optional[int] = Field(None, ge=1, le=300)
    is_public: Optional[bool] = None
    exercises: Optional[List[WorkoutExerciseIn]] = Field(None, min_length=1, max_length=50)


class ExerciseSummary(BaseModel):
    id: uuid.UUID
    name: str
    muscle_groups: List[str]
    equipment: List[str]
    difficulty: Difficulty
    thumbnail_url: Optional[str]

    class Config:
        from_attributes = True


class WorkoutExerciseResponse(BaseModel):
    id: uuid.UUID
    exercise_id: uuid.UUID
    order: int
    sets: int
    reps: Optional[int]
    duration: Optional[int]
    rest: Optional[int]
    notes: Optional[str]
    exercise: ExerciseSummary

    class Config:
        from_attributes = True


class CreatorSummary(BaseModel):
    id: uuid.UUID
    name: Optional[str]

    class Config:
        from_attributes = True


class WorkoutResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str]
    difficulty: Difficulty
    estimated_time: Optional[int]
    is_template: bool
    is_public: bool
    created_by: uuid.UUID
    creator: Optional[CreatorSummary] = None
    exercises: List[WorkoutExerciseResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class WorkoutListResponse(PageResponse):
    workouts: List[WorkoutResponse]
