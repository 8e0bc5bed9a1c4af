"""Meal and nutrition routes."""
import logging
from datetime import date, datetime
from typing import Optional, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.models.base import get_db
from fittrack.models.user import UserProfile
from fittrack.models.nutrition import Meal, FoodItem, MealType
from fittrack.schemas.nutrition import (
    CommonFood,
    DailyNutritionSummary,
    FoodItemCreate,
    MealCreate,
    MealUpdate,
    MealResponse,
    MealStatsResponse,
)
from fittrack.services.aggregator import MEALS, breakdown, day_window, period_label, resolve_period, summarize
from fittrack.services.dashboard import breakdown_entries, meal_stats
from fittrack.services.meal_totals import COMMON_FOODS
from fittrack.services.metrics import round_half_up
from fittrack.services.record_store import fetch_records
from fittrack.utils.auth import get_current_user
from fittrack.utils.clock import ensure_aware, get_now, resolve_timezone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/meals", tags=["Meals"])


def _build_foods(items: List[FoodItemCreate]) -> List[FoodItem]:
    return [FoodItem(position=i, **item.model_dump()) for i, item in enumerate(items)]


async def _get_owned_meal(db: AsyncSession, meal_id: UUID, user_id) -> Meal:
    result = await db.execute(
        select(Meal).where(and_(Meal.id == meal_id, Meal.user_id == user_id))
    )
    meal = result.scalar_one_or_none()

    if not meal:
        raise HTTPException(status_code=404, detail="Meal not found")

    return meal


@router.get("/foods/common", response_model=List[CommonFood])
async def list_common_foods():
    """Reference foods with nutrition per 100 g. Public."""
    return list(COMMON_FOODS)


@router.get("/nutrition/daily", response_model=DailyNutritionSummary)
async def get_daily_nutrition(
    on_date: Optional[date] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """Nutrition totals for one day, today by default."""
    tz = resolve_timezone()
    target_date = on_date or now.astimezone(tz).date()
    window = day_window(target_date, tz)

    meals = await fetch_records(db, Meal, current_user.id, window)
    summary = summarize(MEALS, meals, window)

    return DailyNutritionSummary(
        date=target_date,
        meal_count=summary.count,
        **{f"total_{name}": round_half_up(value, 2) for name, value in summary.sums.items()},
    )


@router.get("/nutrition/stats", response_model=MealStatsResponse)
async def get_nutrition_stats(
    period: str = Query("week"),
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """Totals, averages and meal type breakdown over week, month, year or N days."""
    window = resolve_period(period, now, default="week")
    meals = await fetch_records(db, Meal, current_user.id, window)

    return MealStatsResponse(
        period=period_label(period, default="week"),
        summary=meal_stats(summarize(MEALS, meals, window)),
        meal_type_breakdown=breakdown_entries(breakdown(MEALS, meals, window)),
    )


@router.get("", response_model=List[MealResponse])
async def list_meals(
    on_date: Optional[date] = Query(None, alias="date"),
    meal_type: Optional[MealType] = Query(None),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """List meals, newest first."""
    query = select(Meal).where(Meal.user_id == current_user.id)

    if on_date:
        window = day_window(on_date, resolve_timezone())
        query = query.where(and_(Meal.date >= window.start, Meal.date <= window.end))
    if meal_type:
        query = query.where(Meal.meal_type == meal_type)

    query = query.order_by(Meal.date.desc()).offset(offset).limit(limit)

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{meal_id}", response_model=MealResponse)
async def get_meal(
    meal_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """Get a specific meal by ID."""
    return await _get_owned_meal(db, meal_id, current_user.id)


@router.post("", response_model=MealResponse, status_code=status.HTTP_201_CREATED)
async def create_meal(
    meal_data: MealCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """Create a meal; totals are computed from its foods."""
    meal = Meal(
        user_id=current_user.id,
        name=meal_data.name,
        meal_type=meal_data.meal_type,
        date=ensure_aware(meal_data.date, resolve_timezone(), now),
        notes=meal_data.notes,
        foods=_build_foods(meal_data.foods),
    )

    # Calculate totals
    meal.recalculate_totals()

    db.add(meal)
    await db.flush()
    await db.refresh(meal)

    logger.info(f"Logged meal {meal.id} ({meal.total_calories} kcal) for {current_user.id}")
    return meal


@router.put("/{meal_id}", response_model=MealResponse)
async def update_meal(
    meal_id: UUID,
    updates: MealUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """Update a meal. Sending foods replaces the whole list."""
    meal = await _get_owned_meal(db, meal_id, current_user.id)

    update_data = updates.model_dump(exclude_unset=True, exclude={"foods"})
    if update_data.get("date") is not None:
        update_data["date"] = ensure_aware(update_data["date"], resolve_timezone(), meal.date)
    for field, value in update_data.items():
        if value is not None or field == "notes":
            setattr(meal, field, value)

    if updates.foods is not None:
        meal.foods = _build_foods(updates.foods)

    meal.recalculate_totals()

    await db.flush()
    await db.refresh(meal)

    return meal


@router.delete("/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(
    meal_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """Delete a meal and its foods."""
    meal = await _get_owned_meal(db, meal_id, current_user.id)
    await db.delete(meal)
    logger.info(f"Deleted meal {meal_id}")
