"""
Workout plans and workout session logs
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, List, TYPE_CHECKING
from sqlalchemy import (
    String, Integer, Float, Boolean, Text, ForeignKey, Uuid, UniqueConstraint, Enum as SQLEnum
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from fittrack.database.base import Base, UTCDateTime, utcnow
from fittrack.models.exercise import Difficulty, Exercise

if TYPE_CHECKING:
    from fittrack.models.user import User


class Workout(Base):
    """Workout plan; admin-authored workouts are templates"""

    __tablename__ = "workouts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    difficulty: Mapped[Difficulty] = mapped_column(
        SQLEnum(Difficulty, native_enum=False), nullable=False, default=Difficulty.BEGINNER
    )
    estimated_time: Mapped[Optional[int]] = mapped_column(Integer, comment="Minutes")
    is_template: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_by: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    creator: Mapped["User"] = relationship("User", back_populates="workouts")
    exercises: Mapped[List["WorkoutExercise"]] = relationship(
        "WorkoutExercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="WorkoutExercise.order",
    )

    def __repr__(self):
        return f"<Workout {self.name}>"


class WorkoutExercise(Base):
    """Exercise slot inside a workout"""

    __tablename__ = "workout_exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    workout_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False
    )
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sets: Mapped[int] = mapped_column(Integer, nullable=False)
    reps: Mapped[Optional[int]] = mapped_column(Integer)
    duration: Mapped[Optional[int]] = mapped_column(Integer, comment="Seconds")
    rest: Mapped[Optional[int]] = mapped_column(Integer, comment="Seconds between sets")
    notes: Mapped[Optional[str]] = mapped_column(String(500))

    workout: Mapped["Workout"] = relationship("Workout", back_populates="exercises")
    exercise: Mapped["Exercise"] = relationship("Exercise")


class WorkoutLog(Base):
    """One training session, resumable through the progress pointer"""

    __tablename__ = "workout_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    workout_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("workouts.id", ondelete="SET NULL"), index=True
    )
    title: Mapped[Optional[str]] = mapped_column(String(200))
    notes: Mapped[Optional[str]] = mapped_column(Text)

    started_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)
    completed_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, index=True)
    duration: Mapped[Optional[int]] = mapped_column(Integer, comment="Minutes")

    # Progress pointer
    current_exercise_order: Mapped[Optional[int]] = mapped_column(Integer)
    current_set_number: Mapped[Optional[int]] = mapped_column(Integer)
    rest_until: Mapped[Optional[datetime]] = mapped_column(UTCDateTime)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    user: Mapped["User"] = relationship("User", back_populates="workout_logs")
    workout: Mapped[Optional["Workout"]] = relationship("Workout")
    exercise_logs: Mapped[List["ExerciseLog"]] = relationship(
        "ExerciseLog",
        back_populates="workout_log",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ExerciseLog.created_at",
    )

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    def __repr__(self):
        return f"<WorkoutLog {self.id} user={self.user_id}>"


class ExerciseLog(Base):
    """Exercise performed inside a session"""

    __tablename__ = "exercise_logs"
    __table_args__ = (
        UniqueConstraint("workout_log_id", "exercise_id", name="uq_exercise_log_per_session"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    workout_log_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("workout_logs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False, index=True
    )
    notes: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)

    workout_log: Mapped["WorkoutLog"] = relationship("WorkoutLog", back_populates="exercise_logs")
    exercise: Mapped["Exercise"] = relationship("Exercise")
    sets: Mapped[List["SetLog"]] = relationship(
        "SetLog",
        back_populates="exercise_log",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="SetLog.set_number",
    )


class SetLog(Base):
    """Single performed set"""

    __tablename__ = "set_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    exercise_log_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("exercise_logs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    set_number: Mapped[int] = mapped_column(Integer, nullable=False)
    reps: Mapped[Optional[int]] = mapped_column(Integer)
    weight: Mapped[Optional[float]] = mapped_column(Float, comment="kg")
    duration: Mapped[Optional[int]] = mapped_column(Integer, comment="Seconds")
    distance: Mapped[Optional[float]] = mapped_column(Float, comment="Metres")
    completed: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)

    exercise_log: Mapped["ExerciseLog"] = relationship("ExerciseLog", back_populates="sets")

    @property
    def volume(self) -> float:
        if self.weight and self.reps:
            return self.weight * self.reps
        return 0.0
