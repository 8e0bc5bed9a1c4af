"""Workout schemas."""
from datetime import datetime
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict

from fittrack.models.workout import ExerciseType
from fittrack.schemas.stats import BreakdownEntry, WorkoutStats


class WorkoutBase(BaseModel):
    """Base schema for a workout."""
    exercise_type: ExerciseType
    intensity: str = Field(..., min_length=1, max_length=50)
    duration_min: int = Field(..., ge=1, le=480)
    notes: Optional[str] = Field(None, max_length=500)


class WorkoutCreate(WorkoutBase):
    """Schema for logging a workout; date defaults to now."""
    date: Optional[datetime] = None


class WorkoutUpdate(BaseModel):
    """Schema for updating a workout."""
    exercise_type: Optional[ExerciseType] = None
    intensity: Optional[str] = Field(None, min_length=1, max_length=50)
    duration_min: Optional[int] = Field(None, ge=1, le=480)
    date: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)


class WorkoutResponse(WorkoutBase):
    """Schema for workout response."""
    id: UUID
    user_id: UUID
    date: datetime
    calories_burned: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class WorkoutStatsResponse(BaseModel):
    """Workout summary and exercise breakdown over a period."""
    period: str
    summary: WorkoutStats
    exercise_breakdown: List[BreakdownEntry]
