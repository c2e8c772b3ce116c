"""
Account, profile and body measurement schemas
"""
from datetime import date, datetime
from typing import List, Optional
import uuid

from pydantic import BaseModel, Field, field_validator

from fittrack.models.user import ActivityLevel, FitnessGoal, Gender, UserRole

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

# bcrypt only hashes the first 72 bytes and rejects longer input
PASSWORD_MAX_BYTES = 72


def check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return value


class RegisterRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=8, max_length=PASSWORD_MAX_BYTES)
    role: UserRole = Field(UserRole.USER, description="USER or TRAINER")

    @field_validator("password")
    @classmethod
    def _password_bytes(cls, value: str) -> str:
        return check_password_bytes(value)


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: uuid.UUID
    email: str
    name: Optional[str]
    phone: Optional[str] = None
    image: Optional[str] = None
    role: UserRole
    created_at: datetime

    class Config:
        from_attributes = True


class RegisterResponse(BaseModel):
    message: str
    user: UserResponse


class TokenResponse(BaseModel):
    """Login response"""
    access_token: str
    token_type: str = "bearer"
    user_id: str
    role: UserRole


class ProfileResponse(UserResponse):
    """Account plus fitness profile"""

    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    height: Optional[float] = Field(None, description="cm")
    current_weight: Optional[float] = Field(None, description="kg")
    target_weight: Optional[float] = Field(None, description="kg")
    activity_level: Optional[ActivityLevel] = None
    fitness_goal: Optional[FitnessGoal] = None
    bmi: Optional[float] = None
    bmr: Optional[float] = None
    tdee: Optional[float] = None


class ProfileUpdate(BaseModel):
    """Partial profile update; omitted fields stay as they are"""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=255, pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(None, max_length=30)
    role: Optional[UserRole] = Field(None, description="Honoured for admins only")

    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    height: Optional[float] = Field(None, gt=0, le=300)
    current_weight: Optional[float] = Field(None, gt=0, le=500)
    target_weight: Optional[float] = Field(None, gt=0, le=500)
    activity_level: Optional[ActivityLevel] = None
    fitness_goal: Optional[FitnessGoal] = None

    bmi: Optional[float] = Field(None, gt=0)
    bmr: Optional[float] = Field(None, gt=0)
    tdee: Optional[float] = Field(None, gt=0)

    @field_validator("date_of_birth")
    @classmethod
    def _not_in_future(cls, value: Optional[date]) -> Optional[date]:
        if value is not None and value > date.today():
            raise ValueError("Date of birth cannot be in the future")
        return value


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=8, max_length=PASSWORD_MAX_BYTES)

    @field_validator("new_password")
    @classmethod
    def _password_bytes(cls, value: str) -> str:
        return check_password_bytes(value)


class AvatarResponse(BaseModel):
    image: Optional[str]


class MeasurementCreate(BaseModel):
    weight: Optional[float] = Field(None, gt=0, le=500, description="kg")
    body_fat: Optional[float] = Field(None, ge=0, le=100, description="%")
    muscle_mass: Optional[float] = Field(None, gt=0, description="kg")
    chest: Optional[float] = Field(None, gt=0, description="cm")
    waist: Optional[float] = Field(None, gt=0, description="cm")
    hips: Optional[float] = Field(None, gt=0, description="cm")
    arms: Optional[float] = Field(None, gt=0, description="cm")
    thighs: Optional[float] = Field(None, gt=0, description="cm")
    notes: Optional[str] = Field(None, max_length=1000)
    measured_at: Optional[datetime] = None


class MeasurementResponse(BaseModel):
    id: uuid.UUID
    weight: Optional[float]
    body_fat: Optional[float]
    muscle_mass: Optional[float]
    chest: Optional[float]
    waist: Optional[float]
    hips: Optional[float]
    arms: Optional[float]
    thighs: Optional[float]
    notes: Optional[str]
    measured_at: datetime

    class Config:
        from_attributes = True


class MeasurementListResponse(BaseModel):
    measurements: List[MeasurementResponse]
