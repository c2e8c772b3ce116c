"""
Exercise catalog model
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, List
from sqlalchemy import String, Text, Boolean, JSON, ForeignKey, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
import uuid
import enum

from fittrack.database.base import Base, UTCDateTime, utcnow


class MuscleGroup(str, enum.Enum):
    CHEST = "CHEST"
    BACK = "BACK"
    SHOULDERS = "SHOULDERS"
    BICEPS = "BICEPS"
    TRICEPS = "TRICEPS"
    FOREARMS = "FOREARMS"
    ABS = "ABS"
    OBLIQUES = "OBLIQUES"
    QUADS = "QUADS"
    HAMSTRINGS = "HAMSTRINGS"
    GLUTES = "GLUTES"
    CALVES = "CALVES"
    FULL_BODY = "FULL_BODY"
    CARDIO = "CARDIO"


class Equipment(str, enum.Enum):
    BARBELL = "BARBELL"
    DUMBBELL = "DUMBBELL"
    KETTLEBELL = "KETTLEBELL"
    CABLE = "CABLE"
    MACHINE = "MACHINE"
    BODYWEIGHT = "BODYWEIGHT"
    RESISTANCE_BAND = "RESISTANCE_BAND"
    CARDIO_EQUIPMENT = "CARDIO_EQUIPMENT"
    OTHER = "OTHER"


class Difficulty(str, enum.Enum):
    """Shared by exercises, workouts and courses"""
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


class Exercise(Base):
    """Catalog exercise, maintained by admins"""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    instructions: Mapped[Optional[str]] = mapped_column(Text)

    # Stored as JSON arrays of enum values
    muscle_groups: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    equipment: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)

    difficulty: Mapped[Difficulty] = mapped_column(
        SQLEnum(Difficulty, native_enum=False), nullable=False, default=Difficulty.BEGINNER
    )
    video_url: Mapped[Optional[str]] = mapped_column(String(500))
    thumbnail_url: Mapped[Optional[str]] = mapped_column(String(500))
    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL")
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self):
        return f"<Exercise {self.name}>"
