"""User and profile models."""
import enum
from typing import Optional

from sqlalchemy import Enum, String, Float, Integer, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from fittrack.models.base import Base


class Gender(str, enum.Enum):
    """Gender used to pick the BMR formula."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(str, enum.Enum):
    """Activity level multipliers for daily calorie needs."""
    SEDENTARY = "sedentary"  # Little or no exercise
    LIGHTLY_ACTIVE = "lightly_active"  # Light exercise 1-3 days/week
    MODERATELY_ACTIVE = "moderately_active"  # Moderate exercise 3-5 days/week
    VERY_ACTIVE = "very_active"  # Hard exercise 6-7 days/week
    EXTREMELY_ACTIVE = "extremely_active"  # Very hard exercise, physical job


class GoalType(str, enum.Enum):
    """Body weight goal."""
    LOSE_WEIGHT = "lose_weight"
    MAINTAIN_WEIGHT = "maintain_weight"
    GAIN_WEIGHT = "gain_weight"


class UserProfile(Base):
    """User account with body metrics and goals."""

    __tablename__ = "user_profiles"

    # Authentication
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Profile
    name: Mapped[str] = mapped_column(String(50))

    # Body Metrics
    gender: Mapped[Gender] = mapped_column(Enum(Gender))
    age: Mapped[int] = mapped_column(Integer)
    weight_kg: Mapped[float] = mapped_column(Float)
    height_cm: Mapped[float] = mapped_column(Float)

    # Goals
    activity_level: Mapped[ActivityLevel] = mapped_column(
        Enum(ActivityLevel), default=ActivityLevel.MODERATELY_ACTIVE
    )
    goal: Mapped[GoalType] = mapped_column(
        Enum(GoalType), default=GoalType.MAINTAIN_WEIGHT
    )
    target_weight_kg: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
