"""Summary and breakdown schemas shared by the stats endpoints and the dashboard."""
from typing import Dict

from pydantic import BaseModel


class BreakdownEntry(BaseModel):
    """Totals for one category (exercise type, meal type, sleep quality)."""
    category: str
    count: int
    totals: Dict[str, float]
    averages: Dict[str, float]


class WorkoutStats(BaseModel):
    total_workouts: int = 0
    total_duration: float = 0
    total_calories_burned: float = 0
    average_duration: float = 0
    average_calories_burned: float = 0


class MealStats(BaseModel):
    total_meals: int = 0
    total_calories: float = 0
    total_protein: float = 0
    total_carbs: float = 0
    total_fat: float = 0
    average_calories: float = 0
    average_protein: float = 0
    average_carbs: float = 0
    average_fat: float = 0


class SleepStats(BaseModel):
    total_sleep_records: int = 0
    total_sleep_time: float = 0
    average_duration: float = 0
    average_quality: float = 0


class MetricChange(BaseModel):
    """First value, last value and their difference over a window."""
    current: float = 0
    starting: float = 0
    change: float = 0


class ProgressStats(BaseModel):
    total_entries: int = 0
    current_weight: float = 0
    starting_weight: float = 0
    weight_change: float = 0
    average_weight: float = 0
