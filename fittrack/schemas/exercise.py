"""
Exercise catalog schemas
"""
from datetime import datetime
from typing import List, Optional
import uuid

from pydantic import BaseModel, Field, field_validator

from fittrack.models.exercise import Difficulty, Equipment, MuscleGroup
from fittrack.schemas.common import PageResponse, blank_to_none, validate_url


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    instructions: Optional[str] = Field(None, max_length=5000)
    muscle_groups: List[MuscleGroup] = Field(default_factory=list)
    equipment: List[Equipment] = Field(default_factory=list)
    difficulty: Difficulty = Difficulty.BEGINNER
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    is_public: Optional[bool] = None

    @field_validator("video_url", "thumbnail_url", mode="before")
    @classmethod
    def _url(cls, value):
        return validate_url(value)

    @field_validator("description", "instructions", mode="before")
    @classmethod
    def _blank(cls, value):
        return blank_to_none(value)


class ExerciseCreate(ExerciseBase):
    pass


class ExerciseUpdate(ExerciseBase):
    """All fields optional"""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    muscle_groups: Optional[List[MuscleGroup]] = None
    equipment: Optional[List[Equipment]] = None
    difficulty: Optional[Difficulty] = None


class ExerciseResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str]
    instructions: Optional[str]
    muscle_groups: List[str]
    equipment: List[str]
    difficulty: Difficulty
    video_url: Optional[str]
    thumbnail_url: Optional[str]
    is_public: bool
    created_by: Optional[uuid.UUID]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ExerciseListResponse(PageResponse):
    exercises: List[ExerciseResponse]


class ExerciseSetHistory(BaseModel):
    """One logged set of an exercise with its session"""

    id: uuid.UUID
    workout_log_id: uuid.UUID
    title: Optional[str]
    started_at: datetime
    set_number: int
    reps: Optional[int]
    weight: Optional[float]
    duration: Optional[int]
    distance: Optional[float]
    completed: bool
