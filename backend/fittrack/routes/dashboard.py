"""Dashboard routes."""
import logging
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fittrack.config import get_settings
from fittrack.models.base import get_db, get_session_factory
from fittrack.models.nutrition import Meal
from fittrack.models.tracking import ProgressEntry, SleepRecord
from fittrack.models.user import UserProfile
from fittrack.models.workout import Workout
from fittrack.schemas.dashboard import DashboardResponse, DashboardStats
from fittrack.services.aggregator import period_label, resolve_period
from fittrack.services.dashboard import DashboardWindows, compose_dashboard, compose_stats
from fittrack.services.metrics import BodyProfile
from fittrack.services.record_store import fetch_dashboard_records, fetch_records
from fittrack.utils.auth import get_current_user
from fittrack.utils.clock import get_now, resolve_timezone

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    on_date: Optional[date] = Query(None, alias="date"),
    tz: Optional[str] = Query(None, description="IANA timezone, e.g. Europe/Berlin"),
    session_factory: async_sessionmaker = Depends(get_session_factory),
    current_user: UserProfile = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """
    Daily and weekly summaries, progress and chart series for one date.

    The record sets are fetched concurrently and combined in memory.
    """
    zone = resolve_timezone(tz)
    target_date = on_date or now.astimezone(zone).date()
    windows = DashboardWindows.for_date(
        target_date, zone, now, lookback_days=settings.progress_lookback_days
    )

    records = await fetch_dashboard_records(session_factory, current_user.id, windows)

    return compose_dashboard(
        BodyProfile.from_user(current_user),
        records,
        windows,
        recent_limit=settings.recent_progress_entries,
    )


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    period: str = Query("month"),
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """Totals and averages of every record type over week, month, year or N days."""
    window = resolve_period(period, now, default="month")

    workouts = await fetch_records(db, Workout, current_user.id, window)
    meals = await fetch_records(db, Meal, current_user.id, window)
    sleep = await fetch_records(db, SleepRecord, current_user.id, window)
    progress = await fetch_records(db, ProgressEntry, current_user.id, window)

    return compose_stats(
        period_label(period, default="month"),
        workouts,
        meals,
        sleep,
        progress,
        window,
    )
