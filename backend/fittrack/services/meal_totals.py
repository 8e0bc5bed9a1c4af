"""Meal nutrition totals and the common foods reference list."""
from dataclasses import dataclass, asdict
from typing import Iterable

from fittrack.services.metrics import round_half_up

NUTRIENT_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sugar")


@dataclass(frozen=True)
class MealTotals:
    """Summed nutrition for a meal, each value rounded to 2 decimals."""
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


def compute_meal_totals(foods: Iterable) -> MealTotals:
    """
    Sum per-unit nutrients times quantity across food items.

    Args:
        foods: Food items exposing quantity and per-unit nutrient attributes

    Returns:
        MealTotals with every field rounded half-up to 2 decimals
    """
    sums = dict.fromkeys(NUTRIENT_FIELDS, 0.0)

    for food in foods:
        quantity = food.quantity or 0
        for field in NUTRIENT_FIELDS:
            sums[field] += (getattr(food, field, 0) or 0) * quantity

    return MealTotals(**{field: round_half_up(value, 2) for field, value in sums.items()})


# Nutrition per 100 g for quick entry
COMMON_FOODS = (
    # Fruits
    {"name": "Apple", "calories": 52, "protein": 0.3, "carbs": 14, "fat": 0.2, "fiber": 2.4, "sugar": 10.4},
    {"name": "Banana", "calories": 89, "protein": 1.1, "carbs": 23, "fat": 0.3, "fiber": 2.6, "sugar": 12.2},
    {"name": "Orange", "calories": 47, "protein": 0.9, "carbs": 12, "fat": 0.1, "fiber": 2.4, "sugar": 9.4},
    # Vegetables
    {"name": "Broccoli", "calories": 34, "protein": 2.8, "carbs": 7, "fat": 0.4, "fiber": 2.6, "sugar": 1.5},
    {"name": "Carrot", "calories": 41, "protein": 0.9, "carbs": 10, "fat": 0.2, "fiber": 2.8, "sugar": 4.7},
    {"name": "Spinach", "calories": 23, "protein": 2.9, "carbs": 3.6, "fat": 0.4, "fiber": 2.2, "sugar": 0.4},
    # Proteins
    {"name": "Chicken Breast", "calories": 165, "protein": 31, "carbs": 0, "fat": 3.6, "fiber": 0, "sugar": 0},
    {"name": "Salmon", "calories": 208, "protein": 25, "carbs": 0, "fat": 12, "fiber": 0, "sugar": 0},
    {"name": "Eggs", "calories": 155, "protein": 13, "carbs": 1.1, "fat": 11, "fiber": 0, "sugar": 1.1},
    # Grains
    {"name": "Brown Rice", "calories": 111, "protein": 2.6, "carbs": 23, "fat": 0.9, "fiber": 1.8, "sugar": 0.4},
    {"name": "Oats", "calories": 389, "protein": 17, "carbs": 66, "fat": 7, "fiber": 11, "sugar": 1},
    {"name": "Quinoa", "calories": 120, "protein": 4.4, "carbs": 22, "fat": 1.9, "fiber": 2.8, "sugar": 0.9},
    # Dairy
    {"name": "Greek Yogurt", "calories": 59, "protein": 10, "carbs": 3.6, "fat": 0.4, "fiber": 0, "sugar": 3.6},
    {"name": "Milk (2%)", "calories": 50, "protein": 3.3, "carbs": 4.7, "fat": 2, "fiber": 0, "sugar": 4.7},
    {"name": "Cheese (Cheddar)", "calories": 113, "protein": 7, "carbs": 0.4, "fat": 9, "fiber": 0, "sugar": 0.4},
)
