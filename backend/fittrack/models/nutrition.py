"""Nutrition and meal models."""
import enum
import uuid
from datetime import datetime
from typing import Optional, List

from sqlalchemy import Enum, String, Float, Integer, ForeignKey, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fittrack.models.base import Base
from fittrack.services.meal_totals import MealTotals, compute_meal_totals


class MealType(str, enum.Enum):
    """Type of meal."""
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class FoodUnit(str, enum.Enum):
    """Unit a food quantity is measured in."""
    GRAM = "g"
    KILOGRAM = "kg"
    MILLILITER = "ml"
    LITER = "l"
    CUP = "cup"
    TABLESPOON = "tbsp"
    TEASPOON = "tsp"
    PIECE = "piece"
    SLICE = "slice"
    SERVING = "serving"


class Meal(Base):
    """A meal containing one or more food items."""

    __tablename__ = "meals"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("user_profiles.id", ondelete="CASCADE"), index=True
    )

    # Meal info
    name: Mapped[str] = mapped_column(String(100))
    meal_type: Mapped[MealType] = mapped_column(Enum(MealType), index=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)

    # Aggregated totals (denormalized for quick queries)
    total_calories: Mapped[float] = mapped_column(Float, default=0.0)
    total_protein: Mapped[float] = mapped_column(Float, default=0.0)
    total_carbs: Mapped[float] = mapped_column(Float, default=0.0)
    total_fat: Mapped[float] = mapped_column(Float, default=0.0)
    total_fiber: Mapped[float] = mapped_column(Float, default=0.0)
    total_sugar: Mapped[float] = mapped_column(Float, default=0.0)

    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Relationships
    foods: Mapped[List["FoodItem"]] = relationship(
        "FoodItem",
        back_populates="meal",
        cascade="all, delete-orphan",
        order_by="FoodItem.position",
        lazy="selectin",
    )

    def recalculate_totals(self) -> MealTotals:
        """Recalculate nutrition totals from food items."""
        totals = compute_meal_totals(self.foods)
        self.total_calories = totals.calories
        self.total_protein = totals.protein
        self.total_carbs = totals.carbs
        self.total_fat = totals.fat
        self.total_fiber = totals.fiber
        self.total_sugar = totals.sugar
        return totals


class FoodItem(Base):
    """Food item within a meal; nutrients are per unit of quantity."""

    __tablename__ = "food_items"

    meal_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("meals.id", ondelete="CASCADE"), index=True
    )
    position: Mapped[int] = mapped_column(Integer, default=0)

    # Food info
    name: Mapped[str] = mapped_column(String(200))
    quantity: Mapped[float] = mapped_column(Float)
    unit: Mapped[FoodUnit] = mapped_column(Enum(FoodUnit))

    # Per unit
    calories: Mapped[float] = mapped_column(Float)
    protein: Mapped[float] = mapped_column(Float, default=0.0)
    carbs: Mapped[float] = mapped_column(Float, default=0.0)
    fat: Mapped[float] = mapped_column(Float, default=0.0)
    fiber: Mapped[float] = mapped_column(Float, default=0.0)
    sugar: Mapped[float] = mapped_column(Float, default=0.0)

    # Relationships
    meal: Mapped["Meal"] = relationship("Meal", back_populates="foods")
