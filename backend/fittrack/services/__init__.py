"""Backend services."""
from fittrack.services.metrics import BodyProfile, BMICategory
from fittrack.services.meal_totals import MealTotals, compute_meal_totals

__all__ = [
    "BodyProfile",
    "BMICategory",
    "MealTotals",
    "compute_meal_totals",
]
