"""Dashboard schemas."""
from datetime import date as date_type, datetime
from typing import Optional, List

from pydantic import BaseModel

from fittrack.models.user import GoalType
from fittrack.schemas.nutrition import MealResponse
from fittrack.schemas.stats import (
    BreakdownEntry,
    MealStats,
    ProgressStats,
    SleepStats,
    WorkoutStats,
)
from fittrack.schemas.tracking import ProgressResponse, SleepResponse
from fittrack.schemas.workout import WorkoutResponse
from fittrack.services.metrics import BMICategory


class WorkoutTotals(BaseModel):
    count: int = 0
    total_duration: float = 0
    total_calories: float = 0
    average_duration: int = 0


class MealTotalsSummary(BaseModel):
    count: int = 0
    total_calories: float = 0
    total_protein: float = 0
    total_carbs: float = 0
    total_fat: float = 0


class SleepTotals(BaseModel):
    count: int = 0
    total_duration: float = 0
    average_duration: int = 0
    average_quality: int = 0


class PeriodSummary(BaseModel):
    """Workout, meal and sleep totals for one window."""
    workouts: WorkoutTotals
    meals: MealTotalsSummary
    sleep: SleepTotals


class DashboardUser(BaseModel):
    name: str
    weight: float
    height: float
    bmi: float
    bmi_category: Optional[BMICategory] = None
    daily_calorie_needs: int
    goal: GoalType
    target_weight: Optional[float] = None


class DailyDashboard(BaseModel):
    summary: PeriodSummary
    calorie_balance: float  # intake - burned
    calorie_needs: int
    calorie_deficit: float  # needs - intake
    workouts: List[WorkoutResponse]
    meals: List[MealResponse]
    sleep: List[SleepResponse]


class WeeklyDashboard(BaseModel):
    summary: PeriodSummary
    exercise_breakdown: List[BreakdownEntry]
    meal_type_breakdown: List[BreakdownEntry]


class ProgressDashboard(BaseModel):
    current_weight: float
    weight_change: float
    monthly_entries: int
    recent_entries: List[ProgressResponse]
    current_bmi: float
    goal_progress: float


class WeightPoint(BaseModel):
    date: datetime
    weight: float


class CaloriePoint(BaseModel):
    date: date_type
    intake: float
    burned: float


class DashboardCharts(BaseModel):
    weight_trend: List[WeightPoint]
    weekly_calories: List[CaloriePoint]


class DashboardResponse(BaseModel):
    """Snapshot of a user's day, week and progress."""
    date: date_type
    user: DashboardUser
    daily: DailyDashboard
    weekly: WeeklyDashboard
    progress: ProgressDashboard
    charts: DashboardCharts


class DashboardStats(BaseModel):
    """Totals and averages per record type over a period."""
    period: str
    workouts: WorkoutStats
    meals: MealStats
    sleep: SleepStats
    progress: ProgressStats
