"""
User, fitness profile and body measurement models
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional, List, TYPE_CHECKING
from sqlalchemy import String, Integer, Float, Boolean, Date, Text, ForeignKey, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid
import enum

from fittrack.database.base import Base, UTCDateTime, utcnow

if TYPE_CHECKING:
    from fittrack.models.workout import Workout, WorkoutLog
    from fittrack.models.nutrition import NutritionLog
    from fittrack.models.achievement import Achievement
    from fittrack.models.trainer import TrainerProfile, Course, Enrollment


class UserRole(str, enum.Enum):
    """Account role"""
    ADMIN = "ADMIN"
    TRAINER = "TRAINER"
    USER = "USER"


class Gender(str, enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"
    PREFER_NOT_TO_SAY = "PREFER_NOT_TO_SAY"


class ActivityLevel(str, enum.Enum):
    """Activity level, drives the TDEE multiplier"""
    SEDENTARY = "SEDENTARY"
    LIGHTLY_ACTIVE = "LIGHTLY_ACTIVE"
    MODERATELY_ACTIVE = "MODERATELY_ACTIVE"
    VERY_ACTIVE = "VERY_ACTIVE"
    EXTRA_ACTIVE = "EXTRA_ACTIVE"


class FitnessGoal(str, enum.Enum):
    """Fitness goal, selects the macro ratio row"""
    LOSE_WEIGHT = "LOSE_WEIGHT"
    GAIN_MUSCLE = "GAIN_MUSCLE"
    MAINTAIN_WEIGHT = "MAINTAIN_WEIGHT"
    IMPROVE_ENDURANCE = "IMPROVE_ENDURANCE"
    GENERAL_FITNESS = "GENERAL_FITNESS"


class User(Base):
    """Account table"""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(100))
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), comment="bcrypt hash")
    phone: Mapped[Optional[str]] = mapped_column(String(30))
    image: Mapped[Optional[str]] = mapped_column(String(500), comment="Avatar URL")
    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, native_enum=False), nullable=False, default=UserRole.USER
    )

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    profile: Mapped[Optional["Profile"]] = relationship(
        "Profile", back_populates="user", uselist=False, cascade="all, delete-orphan", passive_deletes=True
    )
    measurements: Mapped[List["BodyMeasurement"]] = relationship(
        "BodyMeasurement", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    workouts: Mapped[List["Workout"]] = relationship(
        "Workout", back_populates="creator", cascade="all, delete-orphan", passive_deletes=True
    )
    workout_logs: Mapped[List["WorkoutLog"]] = relationship(
        "WorkoutLog", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    nutrition_logs: Mapped[List["NutritionLog"]] = relationship(
        "NutritionLog", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    achievements: Mapped[List["Achievement"]] = relationship(
        "Achievement", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    trainer_profile: Mapped[Optional["TrainerProfile"]] = relationship(
        "TrainerProfile", back_populates="user", uselist=False, cascade="all, delete-orphan", passive_deletes=True
    )
    courses: Mapped[List["Course"]] = relationship(
        "Course", back_populates="trainer", cascade="all, delete-orphan", passive_deletes=True
    )
    enrollments: Mapped[List["Enrollment"]] = relationship(
        "Enrollment", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self):
        return f"<User {self.email} ({self.role.value if self.role else None})>"


class Profile(Base):
    """Fitness profile, one per user"""

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    date_of_birth: Mapped[Optional[date]] = mapped_column(Date)
    gender: Mapped[Optional[Gender]] = mapped_column(SQLEnum(Gender, native_enum=False))
    height: Mapped[Optional[float]] = mapped_column(Float, comment="Height (cm)")
    current_weight: Mapped[Optional[float]] = mapped_column(Float, comment="Weight (kg)")
    target_weight: Mapped[Optional[float]] = mapped_column(Float, comment="Target weight (kg)")
    activity_level: Mapped[Optional[ActivityLevel]] = mapped_column(
        SQLEnum(ActivityLevel, native_enum=False)
    )
    fitness_goal: Mapped[Optional[FitnessGoal]] = mapped_column(
        SQLEnum(FitnessGoal, native_enum=False)
    )

    # Derived metrics
    bmi: Mapped[Optional[float]] = mapped_column(Float)
    bmr: Mapped[Optional[float]] = mapped_column(Float, comment="Basal metabolic rate (kcal)")
    tdee: Mapped[Optional[float]] = mapped_column(Float, comment="Total daily energy expenditure (kcal)")

    # Nutrition targets
    target_calories: Mapped[Optional[int]] = mapped_column(Integer)
    target_protein: Mapped[Optional[int]] = mapped_column(Integer)
    target_carbs: Mapped[Optional[int]] = mapped_column(Integer)
    target_fats: Mapped[Optional[int]] = mapped_column(Integer)
    use_custom_targets: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    user: Mapped["User"] = relationship("User", back_populates="profile")

    def __repr__(self):
        return f"<Profile user={self.user_id}>"


class BodyMeasurement(Base):
    """Body measurement snapshot"""

    __tablename__ = "body_measurements"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    weight: Mapped[Optional[float]] = mapped_column(Float, comment="kg")
    body_fat: Mapped[Optional[float]] = mapped_column(Float, comment="%")
    muscle_mass: Mapped[Optional[float]] = mapped_column(Float, comment="kg")
    chest: Mapped[Optional[float]] = mapped_column(Float, comment="cm")
    waist: Mapped[Optional[float]] = mapped_column(Float, comment="cm")
    hips: Mapped[Optional[float]] = mapped_column(Float, comment="cm")
    arms: Mapped[Optional[float]] = mapped_column(Float, comment="cm")
    thighs: Mapped[Optional[float]] = mapped_column(Float, comment="cm")
    notes: Mapped[Optional[str]] = mapped_column(Text)

    measured_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, nullable=False, index=True
    )

    user: Mapped["User"] = relationship("User", back_populates="measurements")

    def __repr__(self):
        return f"<BodyMeasurement user={self.user_id} at {self.measured_at}>"
