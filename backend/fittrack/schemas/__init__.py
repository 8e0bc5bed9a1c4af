"""Pydantic schemas for API validation."""
from fittrack.schemas.user import (
    UserUpdate,
    UserResponse,
    UserWithMetrics,
    UserMetrics,
    PasswordChange,
)
from fittrack.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    TokenPayload,
)
from fittrack.schemas.workout import (
    WorkoutCreate,
    WorkoutUpdate,
    WorkoutResponse,
    WorkoutStatsResponse,
)
from fittrack.schemas.nutrition import (
    FoodItemCreate,
    FoodItemResponse,
    MealCreate,
    MealUpdate,
    MealResponse,
    DailyNutritionSummary,
    MealStatsResponse,
)
from fittrack.schemas.tracking import (
    SleepCreate,
    SleepUpdate,
    SleepResponse,
    ProgressCreate,
    ProgressUpdate,
    ProgressResponse,
)
from fittrack.schemas.dashboard import DashboardResponse, DashboardStats

__all__ = [
    # User
    "UserUpdate",
    "UserResponse",
    "UserWithMetrics",
    "UserMetrics",
    "PasswordChange",
    # Auth
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "TokenPayload",
    # Workout
    "WorkoutCreate",
    "WorkoutUpdate",
    "WorkoutResponse",
    "WorkoutStatsResponse",
    # Nutrition
    "FoodItemCreate",
    "FoodItemResponse",
    "MealCreate",
    "MealUpdate",
    "MealResponse",
    "DailyNutritionSummary",
    "MealStatsResponse",
    # Tracking
    "SleepCreate",
    "SleepUpdate",
    "SleepResponse",
    "ProgressCreate",
    "ProgressUpdate",
    "ProgressResponse",
    # Dashboard
    "DashboardResponse",
    "DashboardStats",
]
