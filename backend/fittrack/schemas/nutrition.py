"""Nutrition and meal schemas."""
from datetime import datetime, date
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict

from fittrack.models.nutrition import FoodUnit, MealType
from fittrack.schemas.stats import BreakdownEntry, MealStats


class FoodItemBase(BaseModel):
    """Food item; nutrients are per unit of quantity."""
    name: str = Field(..., min_length=1, max_length=200)
    quantity: float = Field(..., ge=0.1)
    unit: FoodUnit
    calories: float = Field(..., ge=0)
    protein: float = Field(default=0, ge=0)
    carbs: float = Field(default=0, ge=0)
    fat: float = Field(default=0, ge=0)
    fiber: float = Field(default=0, ge=0)
    sugar: float = Field(default=0, ge=0)


class FoodItemCreate(FoodItemBase):
    """Schema for creating a food item."""


class FoodItemResponse(FoodItemBase):
    """Schema for food item response."""
    id: UUID

    model_config = ConfigDict(from_attributes=True)


class MealBase(BaseModel):
    """Base schema for meal."""
    name: str = Field(..., min_length=1, max_length=100)
    meal_type: MealType
    notes: Optional[str] = Field(None, max_length=500)


class MealCreate(MealBase):
    """Schema for creating a meal; at least one food is required."""
    date: Optional[datetime] = None
    foods: List[FoodItemCreate] = Field(..., min_length=1)


class MealUpdate(BaseModel):
    """Schema for updating a meal. Replacing foods recomputes the totals."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    meal_type: Optional[MealType] = None
    date: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)
    foods: Optional[List[FoodItemCreate]] = Field(None, min_length=1)


class MealResponse(MealBase):
    """Schema for meal response."""
    id: UUID
    user_id: UUID
    date: datetime
    foods: List[FoodItemResponse]
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float
    total_fiber: float
    total_sugar: float
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DailyNutritionSummary(BaseModel):
    """Nutrition totals for one day."""
    date: date
    total_calories: float = 0
    total_protein: float = 0
    total_carbs: float = 0
    total_fat: float = 0
    total_fiber: float = 0
    total_sugar: float = 0
    meal_count: int = 0


class MealStatsResponse(BaseModel):
    """Meal summary and meal type breakdown over a period."""
    period: str
    summary: MealStats
    meal_type_breakdown: List[BreakdownEntry]


class CommonFood(BaseModel):
    """Reference food, nutrition per 100 g."""
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    sugar: float
