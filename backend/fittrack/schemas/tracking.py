"""Tracking schemas for sleep and body progress."""
from datetime import datetime, date
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict

from fittrack.models.tracking import SleepQuality
from fittrack.schemas.stats import BreakdownEntry, MetricChange, SleepStats
from fittrack.services.metrics import BMICategory


# Sleep

class SleepBase(BaseModel):
    """Base schema for a sleep record."""
    sleep_start: datetime
    sleep_end: datetime
    quality: SleepQuality = SleepQuality.GOOD
    notes: Optional[str] = Field(None, max_length=500)


class SleepCreate(SleepBase):
    """Schema for logging sleep; date defaults to now."""
    date: Optional[datetime] = None


class SleepUpdate(BaseModel):
    sleep_start: Optional[datetime] = None
    sleep_end: Optional[datetime] = None
    date: Optional[datetime] = None
    quality: Optional[SleepQuality] = None
    notes: Optional[str] = Field(None, max_length=500)


class SleepResponse(SleepBase):
    """Schema for sleep response."""
    id: UUID
    user_id: UUID
    date: datetime
    duration_min: int
    is_healthy_duration: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SleepStatsResponse(BaseModel):
    """Sleep summary and quality breakdown over a period."""
    period: str
    summary: SleepStats
    quality_breakdown: List[BreakdownEntry]


class SleepWeeklySummary(BaseModel):
    """Sleep over the seven days starting at week_start."""
    week_start: date
    week_end: date
    sleep_days: int
    total_sleep_time: float
    average_duration: float
    average_quality: float


class SleepTrendPoint(BaseModel):
    date: datetime
    duration_min: int
    quality: SleepQuality
    quality_score: int


# Progress

class ProgressBase(BaseModel):
    """Base schema for a progress entry."""
    weight_kg: float = Field(..., ge=20, le=300)
    body_fat_percent: Optional[float] = Field(None, ge=1, le=50)
    muscle_mass_kg: Optional[float] = Field(None, ge=10, le=100)
    chest: Optional[float] = Field(None, ge=0)
    waist: Optional[float] = Field(None, ge=0)
    hips: Optional[float] = Field(None, ge=0)
    arms: Optional[float] = Field(None, ge=0)
    thighs: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=500)


class ProgressCreate(ProgressBase):
    date: Optional[datetime] = None


class ProgressUpdate(BaseModel):
    date: Optional[datetime] = None
    weight_kg: Optional[float] = Field(None, ge=20, le=300)
    body_fat_percent: Optional[float] = Field(None, ge=1, le=50)
    muscle_mass_kg: Optional[float] = Field(None, ge=10, le=100)
    chest: Optional[float] = Field(None, ge=0)
    waist: Optional[float] = Field(None, ge=0)
    hips: Optional[float] = Field(None, ge=0)
    arms: Optional[float] = Field(None, ge=0)
    thighs: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=500)


class ProgressResponse(ProgressBase):
    """Progress entry; BMI is computed from the owner's height on read."""
    id: UUID
    user_id: UUID
    date: datetime
    bmi: Optional[float] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_entry(cls, entry, height_cm: float) -> "ProgressResponse":
        return cls.model_validate(entry).model_copy(update={"bmi": entry.bmi_for(height_cm)})


class WeightTrendPoint(BaseModel):
    date: datetime
    weight_kg: float
    body_fat_percent: Optional[float] = None
    muscle_mass_kg: Optional[float] = None


class ProgressSummaryResponse(BaseModel):
    """Weight and body composition change over the lookback."""
    days: int
    total_entries: int
    weight: MetricChange
    average_weight: float
    body_fat: MetricChange
    muscle_mass: MetricChange


class MeasurementProgressResponse(BaseModel):
    """Change of each body measurement over the lookback."""
    days: int
    chest: MetricChange
    waist: MetricChange
    hips: MetricChange
    arms: MetricChange
    thighs: MetricChange


class BMIRequest(BaseModel):
    weight_kg: float = Field(..., ge=20, le=300)
    height_cm: float = Field(..., ge=100, le=250)


class BMIResponse(BaseModel):
    bmi: float
    category: BMICategory
    weight_kg: float
    height_cm: float
