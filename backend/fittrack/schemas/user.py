"""User and profile schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict

from fittrack.models.user import Gender, ActivityLevel, GoalType
from fittrack.services.metrics import BMICategory, BodyProfile


class UserUpdate(BaseModel):
    """Schema for updating user profile."""
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    age: Optional[int] = Field(None, ge=13, le=120)
    weight_kg: Optional[float] = Field(None, ge=20, le=300)
    height_cm: Optional[float] = Field(None, ge=100, le=250)
    activity_level: Optional[ActivityLevel] = None
    goal: Optional[GoalType] = None
    target_weight_kg: Optional[float] = Field(None, ge=20, le=300)


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)


class UserResponse(BaseModel):
    """Schema for user response."""
    id: UUID
    email: str
    name: str
    gender: Gender
    age: int
    weight_kg: float
    height_cm: float
    activity_level: ActivityLevel
    goal: GoalType
    target_weight_kg: Optional[float] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserWithMetrics(UserResponse):
    """Profile plus the metrics derived from it."""
    bmi: float
    bmr: int
    daily_calories: int

    @classmethod
    def from_user(cls, user) -> "UserWithMetrics":
        profile = BodyProfile.from_user(user)
        base = UserResponse.model_validate(user)
        return cls(
            **base.model_dump(),
            bmi=profile.bmi,
            bmr=profile.bmr,
            daily_calories=profile.daily_calorie_need,
        )


class UserMetrics(BaseModel):
    """Body metrics for the current profile."""
    bmi: float
    bmi_category: BMICategory
    bmr: int
    daily_calories: int
    weight_kg: float
    height_cm: float
    target_weight_kg: Optional[float] = None
