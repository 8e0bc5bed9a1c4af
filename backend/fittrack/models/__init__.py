"""Database models."""
from fittrack.models.base import Base
from fittrack.models.user import UserProfile, Gender, ActivityLevel, GoalType
from fittrack.models.nutrition import Meal, FoodItem, MealType, FoodUnit
from fittrack.models.workout import Workout, ExerciseType
from fittrack.models.tracking import SleepRecord, SleepQuality, ProgressEntry

__all__ = [
    "Base",
    "UserProfile",
    "Gender",
    "ActivityLevel",
    "GoalType",
    "Meal",
    "FoodItem",
    "MealType",
    "FoodUnit",
    "Workout",
    "ExerciseType",
    "SleepRecord",
    "SleepQuality",
    "ProgressEntry",
]
