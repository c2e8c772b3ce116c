"""
Per-user achievement progress
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from sqlalchemy import String, Integer, Boolean, ForeignKey, Uuid, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid
import enum

from fittrack.database.base import Base, UTCDateTime, utcnow

if TYPE_CHECKING:
    from fittrack.models.user import User


class AchievementType(str, enum.Enum):
    WORKOUT_COUNT = "WORKOUT_COUNT"
    STREAK = "STREAK"
    VOLUME = "VOLUME"
    DURATION = "DURATION"
    CONSISTENCY = "CONSISTENCY"
    PERSONAL_RECORD = "PERSONAL_RECORD"
    VARIETY = "VARIETY"
    EARLY_BIRD = "EARLY_BIRD"
    NIGHT_OWL = "NIGHT_OWL"
    WEEKEND_WARRIOR = "WEEKEND_WARRIOR"
    NUTRITION = "NUTRITION"


class AchievementTier(str, enum.Enum):
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    DIAMOND = "DIAMOND"


class Achievement(Base):
    """Achievement row, one per user and catalogue entry"""

    __tablename__ = "achievements"
    __table_args__ = (
        UniqueConstraint("user_id", "code", name="uq_achievement_user_code"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    code: Mapped[str] = mapped_column(String(50), nullable=False, comment="Catalogue key")
    type: Mapped[AchievementType] = mapped_column(
        SQLEnum(AchievementType, native_enum=False), nullable=False
    )
    tier: Mapped[AchievementTier] = mapped_column(
        SQLEnum(AchievementTier, native_enum=False), nullable=False
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    icon: Mapped[Optional[str]] = mapped_column(String(16))
    target: Mapped[int] = mapped_column(Integer, nullable=False)
    progress: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_unlocked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    unlocked_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="achievements")

    def __repr__(self):
        return f"<Achievement {self.code} unlocked={self.is_unlocked}>"
