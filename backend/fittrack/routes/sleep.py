"""Sleep tracking routes."""
import logging
from datetime import date, datetime, timedelta
from typing import Optional, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.exceptions import InvalidInputError
from fittrack.models.base import get_db
from fittrack.models.user import UserProfile
from fittrack.models.tracking import SleepRecord
from fittrack.schemas.tracking import (
    SleepCreate,
    SleepUpdate,
    SleepResponse,
    SleepStatsResponse,
    SleepTrendPoint,
    SleepWeeklySummary,
)
from fittrack.services.aggregator import (
    SLEEP,
    Window,
    breakdown,
    day_window,
    in_window,
    lookback_window,
    period_label,
    resolve_period,
    summarize,
    week_start,
)
from fittrack.services.dashboard import breakdown_entries, sleep_stats
from fittrack.services.record_store import fetch_records
from fittrack.utils.auth import get_current_user
from fittrack.utils.clock import ensure_aware, get_now, resolve_timezone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sleep", tags=["Sleep"])


def _recalculate(record: SleepRecord) -> None:
    if record.sleep_end <= record.sleep_start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Sleep end time must be after sleep start time",
        )
    try:
        record.recalculate_duration()
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


async def _get_owned_record(db: AsyncSession, record_id: UUID, user_id) -> SleepRecord:
    result = await db.execute(
        select(SleepRecord).where(and_(SleepRecord.id == record_id, SleepRecord.user_id == user_id))
    )
    record = result.scalar_one_or_none()

    if not record:
        raise HTTPException(status_code=404, detail="Sleep record not found")

    return record


@router.get("/stats/summary", response_model=SleepStatsResponse)
async def get_sleep_stats(
    period: str = Query("week"),
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """Totals, averages and quality breakdown over week, month, year or N days."""
    window = resolve_period(period, now, default="week")
    records = await fetch_records(db, SleepRecord, current_user.id, window)

    return SleepStatsResponse(
        period=period_label(period, default="week"),
        summary=sleep_stats(summarize(SLEEP, records, window)),
        quality_breakdown=breakdown_entries(breakdown(SLEEP, records, window)),
    )


@router.get("/stats/weekly", response_model=SleepWeeklySummary)
async def get_weekly_sleep(
    start_date: Optional[date] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """Sleep over seven days from start_date, this week's Sunday by default."""
    tz = resolve_timezone()
    first = start_date or week_start(now.astimezone(tz).date())
    last = first + timedelta(days=6)
    window = Window(start=day_window(first, tz).start, end=day_window(last, tz).end)

    records = await fetch_records(db, SleepRecord, current_user.id, window)
    summary = summarize(SLEEP, records, window)

    return SleepWeeklySummary(
        week_start=first,
        week_end=last,
        sleep_days=summary.count,
        total_sleep_time=summary.total("duration"),
        average_duration=summary.average("duration"),
        average_quality=summary.average("quality"),
    )


@router.get("/trends", response_model=List[SleepTrendPoint])
async def get_sleep_trends(
    days: int = Query(30, ge=1, le=365),
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """Nightly duration and quality over the last N days, oldest first."""
    window = lookback_window(days, now)
    records = await fetch_records(db, SleepRecord, current_user.id, window, newest_first=False)

    return [
        SleepTrendPoint(
            date=r.date,
            duration_min=r.duration_min,
            quality=r.quality,
            quality_score=r.quality_score,
        )
        for r in in_window(records, window)
    ]


@router.get("", response_model=List[SleepResponse])
async def list_sleep_records(
    on_date: Optional[date] = Query(None, alias="date"),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """List sleep records, newest first."""
    query = select(SleepRecord).where(SleepRecord.user_id == current_user.id)

    if on_date:
        window = day_window(on_date, resolve_timezone())
        query = query.where(and_(SleepRecord.date >= window.start, SleepRecord.date <= window.end))

    query = query.order_by(SleepRecord.date.desc()).offset(offset).limit(limit)

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{record_id}", response_model=SleepResponse)
async def get_sleep_record(
    record_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """Get a specific sleep record."""
    return await _get_owned_record(db, record_id, current_user.id)


@router.post("", response_model=SleepResponse, status_code=status.HTTP_201_CREATED)
async def create_sleep_record(
    data: SleepCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """Log a night of sleep; duration is derived from start and end."""
    tz = resolve_timezone()
    record = SleepRecord(
        user_id=current_user.id,
        sleep_start=ensure_aware(data.sleep_start, tz, now),
        sleep_end=ensure_aware(data.sleep_end, tz, now),
        date=ensure_aware(data.date, tz, now),
        quality=data.quality,
        notes=data.notes,
    )
    _recalculate(record)

    db.add(record)
    await db.flush()
    await db.refresh(record)

    logger.info(f"Logged sleep {record.id} ({record.duration_min} min) for {current_user.id}")
    return record


@router.put("/{record_id}", response_model=SleepResponse)
async def update_sleep_record(
    record_id: UUID,
    updates: SleepUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """Update a sleep record and recompute its duration."""
    record = await _get_owned_record(db, record_id, current_user.id)
    tz = resolve_timezone()

    for field, value in updates.model_dump(exclude_unset=True).items():
        if value is None and field != "notes":
            continue
        if isinstance(value, datetime):
            value = ensure_aware(value, tz, value)
        setattr(record, field, value)

    _recalculate(record)

    await db.flush()
    await db.refresh(record)

    return record


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sleep_record(
    record_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """Delete a sleep record."""
    record = await _get_owned_record(db, record_id, current_user.id)
    await db.delete(record)
    logger.info(f"Deleted sleep record {record_id}")
