"""
Food catalog and nutrition log models
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from sqlalchemy import String, Float, Boolean, Text, ForeignKey, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid
import enum

from fittrack.database.base import Base, UTCDateTime, utcnow

if TYPE_CHECKING:
    from fittrack.models.user import User


class MealType(str, enum.Enum):
    """Meal slot"""
    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    DINNER = "DINNER"
    SNACK = "SNACK"


class Food(Base):
    """Catalog food; macros are per 100 g"""

    __tablename__ = "foods"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)

    calories: Mapped[float] = mapped_column(Float, nullable=False, comment="kcal / 100 g")
    protein: Mapped[float] = mapped_column(Float, nullable=False, comment="g / 100 g")
    carbs: Mapped[float] = mapped_column(Float, nullable=False, comment="g / 100 g")
    fats: Mapped[float] = mapped_column(Float, nullable=False, comment="g / 100 g")
    fiber: Mapped[Optional[float]] = mapped_column(Float, comment="g / 100 g")
    sugar: Mapped[Optional[float]] = mapped_column(Float, comment="g / 100 g")
    serving_size: Mapped[Optional[float]] = mapped_column(Float)
    serving_unit: Mapped[Optional[str]] = mapped_column(String(20))

    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL")
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self):
        return f"<Food {self.name}>"


class NutritionLog(Base):
    """Logged portion of a food; macros are for the logged quantity"""

    __tablename__ = "nutrition_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    food_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("foods.id", ondelete="CASCADE"), nullable=False
    )
    meal_type: Mapped[MealType] = mapped_column(SQLEnum(MealType, native_enum=False), nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False, comment="Grams")

    calories: Mapped[float] = mapped_column(Float, nullable=False)
    protein: Mapped[float] = mapped_column(Float, nullable=False)
    carbs: Mapped[float] = mapped_column(Float, nullable=False)
    fats: Mapped[float] = mapped_column(Float, nullable=False)

    notes: Mapped[Optional[str]] = mapped_column(Text)
    consumed_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    user: Mapped["User"] = relationship("User", back_populates="nutrition_logs")
    food: Mapped["Food"] = relationship("Food")

    def __repr__(self):
        return f"<NutritionLog {self.meal_type} {self.quantity}g>"
