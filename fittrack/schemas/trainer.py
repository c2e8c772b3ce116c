"""
Trainer and course schemas
"""
from datetime import datetime
from typing import List, Optional
import uuid

from pydantic import BaseModel, Field, field_validator

from fittrack.models.exercise import Difficulty
from fittrack.schemas.common import validate_url


class TrainerProfileUpdate(BaseModel):
    bio: Optional[str] = Field(None, max_length=2000)
    specializations: Optional[List[str]] = Field(None, max_length=20)
    certifications: Optional[List[str]] = Field(None, max_length=20)
    years_experience: Optional[int] = Field(None, ge=0, le=80)
    hourly_rate: Optional[float] = Field(None, ge=0)


class TrainerProfileResponse(BaseModel):
    bio: Optional[str]
    specializations: List[str]
    certifications: List[str]
    years_experience: Optional[int]
    hourly_rate: Optional[float]
    is_verified: bool

    class Config:
        from_attributes = True


class TrainerResponse(BaseModel):
    id: uuid.UUID
    name: Optional[str]
    email: str
    image: Optional[str]
    profile: Optional[TrainerProfileResponse]
    course_count: int


class TrainerPagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class TrainerListResponse(BaseModel):
    trainers: List[TrainerResponse]
    pagination: TrainerPagination


class CourseBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    short_description: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = Field(None, max_length=10000)
    category: Optional[str] = Field(None, max_length=50)
    difficulty: Difficulty = Difficulty.BEGINNER
    price: float = Field(0, ge=0)
    currency: str = Field("USD", min_length=3, max_length=3)
    duration: Optional[int] = Field(None, ge=1, le=104, description="Weeks")
    thumbnail_url: Optional[str] = None
    is_published: bool = False

    @field_validator("thumbnail_url", mode="before")
    @classmethod
    def _url(cls, value):
        return validate_url(value)

    @field_validator("currency")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()


class CourseCreate(CourseBase):
    pass


class CourseUpdate(CourseBase):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    difficulty: Optional[Difficulty] = None
    price: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    is_published: Optional[bool] = None

    @field_validator("currency")
    @classmethod
    def _upper(cls, value: Optional[str]) -> Optional[str]:
        return value.upper() if value else value


class CourseResponse(BaseModel):
    id: uuid.UUID
    trainer_id: uuid.UUID
    title: str
    short_description: Optional[str]
    description: Optional[str]
    category: Optional[str]
    difficulty: Difficulty
    price: float
    currency: str
    duration: Optional[int]
    thumbnail_url: Optional[str]
    is_published: bool
    created_at: datetime
    enrollment_count: int = 0

    class Config:
        from_attributes = True


class CourseListResponse(BaseModel):
    courses: List[CourseResponse]


class EnrollmentResponse(BaseModel):
    id: uuid.UUID
    course_id: uuid.UUID
    user_id: uuid.UUID
    enrolled_at: datetime

    class Config:
        from_attributes = True


class TrainerVerifyRequest(BaseModel):
    is_verified: bool
