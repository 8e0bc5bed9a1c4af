"""Workout models."""
import enum
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Enum, String, Integer, ForeignKey, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from fittrack.models.base import Base
from fittrack.services.metrics import calories_burned


class ExerciseType(str, enum.Enum):
    """Exercise types with MET values."""
    RUNNING = "running"
    CYCLING = "cycling"
    SWIMMING = "swimming"
    YOGA = "yoga"
    WEIGHTLIFTING = "weightlifting"
    WALKING = "walking"
    DANCING = "dancing"
    BASKETBALL = "basketball"
    SOCCER = "soccer"
    TENNIS = "tennis"
    HIKING = "hiking"


class Workout(Base):
    """A logged workout session."""

    __tablename__ = "workouts"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("user_profiles.id", ondelete="CASCADE"), index=True
    )

    # Exercise
    exercise_type: Mapped[ExerciseType] = mapped_column(Enum(ExerciseType), index=True)
    intensity: Mapped[str] = mapped_column(String(50))
    duration_min: Mapped[int] = mapped_column(Integer)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)

    # Derived from exercise, intensity, duration and body weight
    calories_burned: Mapped[int] = mapped_column(Integer, default=0)

    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    def recalculate_calories(self, weight_kg: float) -> int:
        """Recalculate calories burned for the given body weight."""
        self.calories_burned = calories_burned(
            self.exercise_type, self.intensity, self.duration_min, weight_kg
        )
        return self.calories_burned
