"""Body progress routes."""
import logging
from dataclasses import asdict
from datetime import date, datetime
from typing import Optional, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.models.base import get_db
from fittrack.models.user import UserProfile
from fittrack.models.tracking import ProgressEntry
from fittrack.schemas.stats import MetricChange
from fittrack.schemas.tracking import (
    BMIRequest,
    BMIResponse,
    MeasurementProgressResponse,
    ProgressCreate,
    ProgressUpdate,
    ProgressResponse,
    ProgressSummaryResponse,
    WeightTrendPoint,
)
from fittrack.services.aggregator import (
    day_window,
    in_window,
    lookback_window,
    measurement_progress,
    progress_summary,
)
from fittrack.services.metrics import bmi, bmi_category
from fittrack.services.record_store import fetch_records
from fittrack.utils.auth import get_current_user
from fittrack.utils.clock import ensure_aware, get_now, resolve_timezone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/progress", tags=["Progress"])


async def _get_owned_entry(db: AsyncSession, entry_id: UUID, user_id) -> ProgressEntry:
    result = await db.execute(
        select(ProgressEntry).where(
            and_(ProgressEntry.id == entry_id, ProgressEntry.user_id == user_id)
        )
    )
    entry = result.scalar_one_or_none()

    if not entry:
        raise HTTPException(status_code=404, detail="Progress entry not found")

    return entry


@router.post("/calculate-bmi", response_model=BMIResponse)
async def calculate_bmi(
    request: BMIRequest,
    current_user: UserProfile = Depends(get_current_user),
):
    """BMI and category for any weight and height."""
    value = bmi(request.weight_kg, request.height_cm)
    return BMIResponse(
        bmi=value,
        category=bmi_category(value),
        weight_kg=request.weight_kg,
        height_cm=request.height_cm,
    )


@router.get("/weight/trends", response_model=List[WeightTrendPoint])
async def get_weight_trends(
    days: int = Query(30, ge=1, le=365),
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """Weight and body composition over the last N days, oldest first."""
    window = lookback_window(days, now)
    entries = await fetch_records(db, ProgressEntry, current_user.id, window, newest_first=False)

    return [
        WeightTrendPoint(
            date=e.date,
            weight_kg=e.weight_kg,
            body_fat_percent=e.body_fat_percent,
            muscle_mass_kg=e.muscle_mass_kg,
        )
        for e in in_window(entries, window)
    ]


@router.get("/summary", response_model=ProgressSummaryResponse)
async def get_progress_summary(
    days: int = Query(30, ge=1, le=365),
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """Change in weight, body fat and muscle mass over the last N days."""
    window = lookback_window(days, now)
    entries = await fetch_records(db, ProgressEntry, current_user.id, window)
    summary = progress_summary(entries, window)

    return ProgressSummaryResponse(
        days=days,
        total_entries=summary.total_entries,
        weight=MetricChange(**asdict(summary.weight)),
        average_weight=summary.average_weight,
        body_fat=MetricChange(**asdict(summary.body_fat)),
        muscle_mass=MetricChange(**asdict(summary.muscle_mass)),
    )


@router.get("/measurements", response_model=MeasurementProgressResponse)
async def get_measurement_progress(
    days: int = Query(30, ge=1, le=365),
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """Change of each body measurement over the last N days."""
    window = lookback_window(days, now)
    entries = await fetch_records(db, ProgressEntry, current_user.id, window)
    changes = measurement_progress(entries, window)

    return MeasurementProgressResponse(
        days=days,
        **{name: MetricChange(**asdict(change)) for name, change in changes.items()},
    )


@router.get("", response_model=List[ProgressResponse])
async def list_progress_entries(
    on_date: Optional[date] = Query(None, alias="date"),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """List progress entries, newest first, with BMI for each."""
    query = select(ProgressEntry).where(ProgressEntry.user_id == current_user.id)

    if on_date:
        window = day_window(on_date, resolve_timezone())
        query = query.where(
            and_(ProgressEntry.date >= window.start, ProgressEntry.date <= window.end)
        )

    query = query.order_by(ProgressEntry.date.desc()).offset(offset).limit(limit)

    result = await db.execute(query)
    return [
        ProgressResponse.from_entry(entry, current_user.height_cm)
        for entry in result.scalars().all()
    ]


@router.get("/{entry_id}", response_model=ProgressResponse)
async def get_progress_entry(
    entry_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """Get a specific progress entry."""
    entry = await _get_owned_entry(db, entry_id, current_user.id)
    return ProgressResponse.from_entry(entry, current_user.height_cm)


@router.post("", response_model=ProgressResponse, status_code=status.HTTP_201_CREATED)
async def create_progress_entry(
    data: ProgressCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """Log a weight and body composition check-in."""
    values = data.model_dump(exclude={"date"})
    entry = ProgressEntry(
        user_id=current_user.id,
        date=ensure_aware(data.date, resolve_timezone(), now),
        **values,
    )

    db.add(entry)
    await db.flush()
    await db.refresh(entry)

    logger.info(f"Logged progress {entry.id} ({entry.weight_kg} kg) for {current_user.id}")
    return ProgressResponse.from_entry(entry, current_user.height_cm)


@router.put("/{entry_id}", response_model=ProgressResponse)
async def update_progress_entry(
    entry_id: UUID,
    updates: ProgressUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """Update a progress entry."""
    entry = await _get_owned_entry(db, entry_id, current_user.id)

    update_data = updates.model_dump(exclude_unset=True)
    if update_data.get("date") is not None:
        update_data["date"] = ensure_aware(update_data["date"], resolve_timezone(), entry.date)
    if update_data.get("weight_kg") is None:
        update_data.pop("weight_kg", None)

    for field, value in update_data.items():
        setattr(entry, field, value)

    await db.flush()
    await db.refresh(entry)

    return ProgressResponse.from_entry(entry, current_user.height_cm)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_progress_entry(
    entry_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """Delete a progress entry."""
    entry = await _get_owned_entry(db, entry_id, current_user.id)
    await db.delete(entry)
    logger.info(f"Deleted progress entry {entry_id}")
