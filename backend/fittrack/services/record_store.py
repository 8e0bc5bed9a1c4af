"""Date-ranged record queries."""
import asyncio
import logging
from typing import Any, Optional, Type

from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fittrack.models.base import Base
from fittrack.models.nutrition import Meal
from fittrack.models.tracking import ProgressEntry, SleepRecord
from fittrack.models.workout import Workout
from fittrack.services.aggregator import Window
from fittrack.services.dashboard import DashboardRecords, DashboardWindows

logger = logging.getLogger(__name__)


async def fetch_records(
    db: AsyncSession,
    model: Type[Base],
    user_id: Any,
    window: Optional[Window] = None,
    newest_first: bool = True,
) -> list:
    """
    Load a user's records of one model, optionally limited to a window.

    Args:
        db: Database session
        model: Record model with user_id and date columns
        user_id: Owner of the records
        window: Inclusive date range, all records when None
        newest_first: Sort order on the date column

    Returns:
        List of model instances
    """
    conditions = [model.user_id == user_id]
    if window is not None:
        conditions.append(model.date >= window.start)
        conditions.append(model.date <= window.end)

    order = model.date.desc() if newest_first else model.date.asc()
    result = await db.execute(select(model).where(and_(*conditions)).order_by(order))
    return list(result.scalars().all())


async def fetch_in_session(
    session_factory: async_sessionmaker,
    model: Type[Base],
    user_id: Any,
    window: Window,
) -> list:
    """Run fetch_records in a session of its own."""
    async with session_factory() as session:
        return await fetch_records(session, model, user_id, window)


async def fetch_dashboard_records(
    session_factory: async_sessionmaker,
    user_id: Any,
    windows: DashboardWindows,
) -> DashboardRecords:
    """Fetch every dashboard record set concurrently, one session per query."""
    (
        daily_workouts,
        daily_meals,
        daily_sleep,
        weekly_workouts,
        weekly_meals,
        weekly_sleep,
        monthly_progress,
        recent_progress,
    ) = await asyncio.gather(
        fetch_in_session(session_factory, Workout, user_id, windows.day),
        fetch_in_session(session_factory, Meal, user_id, windows.day),
        fetch_in_session(session_factory, SleepRecord, user_id, windows.day),
        fetch_in_session(session_factory, Workout, user_id, windows.week),
        fetch_in_session(session_factory, Meal, user_id, windows.week),
        fetch_in_session(session_factory, SleepRecord, user_id, windows.week),
        fetch_in_session(session_factory, ProgressEntry, user_id, windows.month),
        fetch_in_session(session_factory, ProgressEntry, user_id, windows.lookback),
    )

    logger.debug(
        f"Dashboard records for {user_id}: {len(daily_workouts)} workouts, "
        f"{len(daily_meals)} meals today, {len(recent_progress)} recent progress entries"
    )

    return DashboardRecords(
        daily_workouts=daily_workouts,
        daily_meals=daily_meals,
        daily_sleep=daily_sleep,
        weekly_workouts=weekly_workouts,
        weekly_meals=weekly_meals,
        weekly_sleep=weekly_sleep,
        monthly_progress=monthly_progress,
        recent_progress=recent_progress,
    )
