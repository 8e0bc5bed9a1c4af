"""Workout logging routes."""
import logging
from datetime import date, datetime
from typing import Optional, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.exceptions import InvalidExerciseComboError
from fittrack.models.base import get_db
from fittrack.models.user import UserProfile
from fittrack.models.workout import Workout, ExerciseType
from fittrack.schemas.workout import (
    WorkoutCreate,
    WorkoutUpdate,
    WorkoutResponse,
    WorkoutStatsResponse,
)
from fittrack.services.aggregator import WORKOUTS, day_window, period_label, resolve_period, summarize, breakdown
from fittrack.services.dashboard import breakdown_entries, workout_stats
from fittrack.services.metrics import MET_VALUES
from fittrack.services.record_store import fetch_records
from fittrack.utils.auth import get_current_user
from fittrack.utils.clock import ensure_aware, get_now, resolve_timezone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workouts", tags=["Workouts"])


def _recalculate(workout: Workout, weight_kg: float) -> None:
    """Refresh calories burned, turning a bad exercise/intensity pair into a 400."""
    try:
        workout.recalculate_calories(weight_kg)
    except InvalidExerciseComboError as e:
        logger.warning(f"Rejected workout: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(e), "available_intensities": e.available},
        )


async def _get_owned_workout(db: AsyncSession, workout_id: UUID, user_id) -> Workout:
    result = await db.execute(
        select(Workout).where(and_(Workout.id == workout_id, Workout.user_id == user_id))
    )
    workout = result.scalar_one_or_none()

    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")

    return workout


@router.get("/exercise-types")
async def list_exercise_types():
    """Exercise types and the intensities available for each. Public."""
    return {exercise: list(intensities) for exercise, intensities in MET_VALUES.items()}


@router.get("/stats/summary", response_model=WorkoutStatsResponse)
async def get_workout_stats(
    period: str = Query("week"),
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """Totals, averages and exercise breakdown over week, month, year or N days."""
    window = resolve_period(period, now, default="week")
    workouts = await fetch_records(db, Workout, current_user.id, window)

    return WorkoutStatsResponse(
        period=period_label(period, default="week"),
        summary=workout_stats(summarize(WORKOUTS, workouts, window)),
        exercise_breakdown=breakdown_entries(breakdown(WORKOUTS, workouts, window)),
    )


@router.get("", response_model=List[WorkoutResponse])
async def list_workouts(
    on_date: Optional[date] = Query(None, alias="date"),
    exercise_type: Optional[ExerciseType] = Query(None),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """List workouts, newest first."""
    query = select(Workout).where(Workout.user_id == current_user.id)

    if on_date:
        window = day_window(on_date, resolve_timezone())
        query = query.where(and_(Workout.date >= window.start, Workout.date <= window.end))
    if exercise_type:
        query = query.where(Workout.exercise_type == exercise_type)

    query = query.order_by(Workout.date.desc()).offset(offset).limit(limit)

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{workout_id}", response_model=WorkoutResponse)
async def get_workout(
    workout_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """Get a specific workout."""
    return await _get_owned_workout(db, workout_id, current_user.id)


@router.post("", response_model=WorkoutResponse, status_code=status.HTTP_201_CREATED)
async def create_workout(
    data: WorkoutCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """Log a workout; calories burned are derived from the MET table."""
    workout = Workout(
        user_id=current_user.id,
        exercise_type=data.exercise_type,
        intensity=data.intensity,
        duration_min=data.duration_min,
        date=ensure_aware(data.date, resolve_timezone(), now),
        notes=data.notes,
    )
    _recalculate(workout, current_user.weight_kg)

    db.add(workout)
    await db.flush()
    await db.refresh(workout)

    logger.info(f"Logged workout {workout.id} for {current_user.id}")
    return workout


@router.put("/{workout_id}", response_model=WorkoutResponse)
async def update_workout(
    workout_id: UUID,
    updates: WorkoutUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """Update a workout and recompute calories burned."""
    workout = await _get_owned_workout(db, workout_id, current_user.id)

    update_data = updates.model_dump(exclude_unset=True)
    if update_data.get("date") is not None:
        update_data["date"] = ensure_aware(update_data["date"], resolve_timezone(), workout.date)
    for field, value in update_data.items():
        if value is not None or field == "notes":
            setattr(workout, field, value)

    _recalculate(workout, current_user.weight_kg)

    await db.flush()
    await db.refresh(workout)

    return workout


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout(
    workout_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """Delete a workout."""
    workout = await _get_owned_workout(db, workout_id, current_user.id)
    await db.delete(workout)
    logger.info(f"Deleted workout {workout_id}")
