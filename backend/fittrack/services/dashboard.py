"""Dashboard composition from pre-fetched record sets.

Everything here is synchronous and pure: the caller fetches the records for
each window, and identical inputs always produce an identical response.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Sequence

from fittrack.exceptions import DivisionByZeroError, InvalidInputError
from fittrack.services.aggregator import (
    MEALS,
    PROGRESS,
    SLEEP,
    WORKOUTS,
    CategoryBucket,
    Window,
    WindowSummary,
    breakdown,
    chronological,
    day_window,
    lookback_window,
    month_window,
    progress_summary,
    select,
    summarize,
    week_start,
    week_window,
)
from fittrack.services.metrics import (
    BodyProfile,
    bmi,
    bmi_category,
    goal_progress,
    round_half_up,
)
from fittrack.schemas.dashboard import (
    CaloriePoint,
    DailyDashboard,
    DashboardCharts,
    DashboardResponse,
    DashboardStats,
    DashboardUser,
    MealTotalsSummary,
    PeriodSummary,
    ProgressDashboard,
    SleepTotals,
    WeeklyDashboard,
    WeightPoint,
    WorkoutTotals,
)
from fittrack.schemas.nutrition import MealResponse
from fittrack.schemas.stats import (
    BreakdownEntry,
    MealStats,
    ProgressStats,
    SleepStats,
    WorkoutStats,
)
from fittrack.schemas.tracking import ProgressResponse, SleepResponse
from fittrack.schemas.workout import WorkoutResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardWindows:
    """The windows one dashboard request reads from."""
    target_date: date
    day: Window
    week: Window
    month: Window
    lookback: Window

    @classmethod
    def for_date(
        cls,
        target_date: date,
        tz: tzinfo,
        now: datetime,
        lookback_days: int = 30,
    ) -> "DashboardWindows":
        return cls(
            target_date=target_date,
            day=day_window(target_date, tz),
            week=week_window(target_date, tz),
            month=month_window(target_date, tz),
            lookback=lookback_window(lookback_days, now),
        )


@dataclass(frozen=True)
class DashboardRecords:
    """Record sets fetched for each dashboard window."""
    daily_workouts: Sequence = ()
    daily_meals: Sequence = ()
    daily_sleep: Sequence = ()
    weekly_workouts: Sequence = ()
    weekly_meals: Sequence = ()
    weekly_sleep: Sequence = ()
    monthly_progress: Sequence = ()
    recent_progress: Sequence = ()


def compose_dashboard(
    profile: BodyProfile,
    records: DashboardRecords,
    windows: DashboardWindows,
    recent_limit: int = 5,
) -> DashboardResponse:
    """
    Build the dashboard snapshot.

    Args:
        profile: Body metrics of the requesting user
        records: Record sets fetched for each window
        windows: The day, week, month and lookback windows
        recent_limit: How many recent progress entries to include

    Returns:
        DashboardResponse
    """
    daily = _period_summary(
        records.daily_workouts, records.daily_meals, records.daily_sleep, windows.day
    )
    weekly = _period_summary(
        records.weekly_workouts, records.weekly_meals, records.weekly_sleep, windows.week
    )

    calorie_needs = _safe_calorie_need(profile)
    intake = daily.meals.total_calories
    burned = daily.workouts.total_calories

    recent = chronological(PROGRESS, records.recent_progress, windows.lookback)
    current_weight = recent[-1].weight_kg if recent else profile.weight_kg
    weight_change = recent[-1].weight_kg - recent[0].weight_kg if len(recent) >= 2 else 0

    return DashboardResponse(
        date=windows.target_date,
        user=_dashboard_user(profile, calorie_needs),
        daily=DailyDashboard(
            summary=daily,
            calorie_balance=round_half_up(intake - burned, 2),
            calorie_needs=calorie_needs,
            calorie_deficit=round_half_up(calorie_needs - intake, 2),
            workouts=[
                WorkoutResponse.model_validate(w)
                for w in _newest_first(WORKOUTS, records.daily_workouts, windows.day)
            ],
            meals=[
                MealResponse.model_validate(m)
                for m in _newest_first(MEALS, records.daily_meals, windows.day)
            ],
            sleep=[
                SleepResponse.model_validate(s)
                for s in _newest_first(SLEEP, records.daily_sleep, windows.day)
            ],
        ),
        weekly=WeeklyDashboard(
            summary=weekly,
            exercise_breakdown=breakdown_entries(
                breakdown(WORKOUTS, records.weekly_workouts, windows.week)
            ),
            meal_type_breakdown=breakdown_entries(
                breakdown(MEALS, records.weekly_meals, windows.week)
            ),
        ),
        progress=ProgressDashboard(
            current_weight=current_weight,
            weight_change=round_half_up(weight_change, 2),
            monthly_entries=len(select(PROGRESS, records.monthly_progress, windows.month)),
            recent_entries=[
                ProgressResponse.from_entry(entry, profile.height_cm)
                for entry in reversed(recent[-recent_limit:])
            ] if recent_limit > 0 else [],
            current_bmi=_safe_bmi(current_weight, profile.height_cm),
            goal_progress=_safe_goal_progress(profile, current_weight),
        ),
        charts=DashboardCharts(
            weight_trend=[WeightPoint(date=e.date, weight=e.weight_kg) for e in recent],
            weekly_calories=weekly_calories(
                records.weekly_meals, records.weekly_workouts, windows.week
            ),
        ),
    )


def weekly_calories(meals: Sequence, workouts: Sequence, week: Window) -> list[CaloriePoint]:
    """Seven points, Sunday to Saturday, of calories eaten and burned."""
    first = week_start(week.start.date())
    points = []
    for offset in range(7):
        day = first + timedelta(days=offset)
        window = day_window(day, week.tz)
        points.append(
            CaloriePoint(
                date=day,
                intake=round_half_up(summarize(MEALS, meals, window).total("calories"), 2),
                burned=round_half_up(summarize(WORKOUTS, workouts, window).total("calories"), 2),
            )
        )
    return points


def compose_stats(
    period: str,
    workouts: Sequence,
    meals: Sequence,
    sleep: Sequence,
    progress: Sequence,
    window: Window,
) -> DashboardStats:
    """Totals and averages of every record type inside one period window."""
    return DashboardStats(
        period=period,
        workouts=workout_stats(summarize(WORKOUTS, workouts, window)),
        meals=meal_stats(summarize(MEALS, meals, window)),
        sleep=sleep_stats(summarize(SLEEP, sleep, window)),
        progress=progress_stats(progress, window),
    )


def workout_stats(summary: WindowSummary) -> WorkoutStats:
    return WorkoutStats(
        total_workouts=summary.count,
        total_duration=summary.total("duration"),
        total_calories_burned=summary.total("calories"),
        average_duration=summary.average("duration"),
        average_calories_burned=summary.average("calories"),
    )


def meal_stats(summary: WindowSummary) -> MealStats:
    return MealStats(
        total_meals=summary.count,
        total_calories=round_half_up(summary.total("calories"), 2),
        total_protein=round_half_up(summary.total("protein"), 2),
        total_carbs=round_half_up(summary.total("carbs"), 2),
        total_fat=round_half_up(summary.total("fat"), 2),
        average_calories=summary.average("calories"),
        average_protein=summary.average("protein"),
        average_carbs=summary.average("carbs"),
        average_fat=summary.average("fat"),
    )


def sleep_stats(summary: WindowSummary) -> SleepStats:
    return SleepStats(
        total_sleep_records=summary.count,
        total_sleep_time=summary.total("duration"),
        average_duration=summary.average("duration"),
        average_quality=summary.average("quality"),
    )


def progress_stats(records: Sequence, window: Optional[Window] = None) -> ProgressStats:
    summary = progress_summary(records, window)
    return ProgressStats(
        total_entries=summary.total_entries,
        current_weight=summary.weight.current,
        starting_weight=summary.weight.starting,
        weight_change=round_half_up(summary.weight.change, 2),
        average_weight=summary.average_weight,
    )


def breakdown_entries(buckets: Sequence[CategoryBucket]) -> list[BreakdownEntry]:
    return [
        BreakdownEntry(
            category=bucket.category,
            count=bucket.count,
            totals=dict(bucket.sums),
            averages=dict(bucket.averages),
        )
        for bucket in buckets
    ]


def _period_summary(workouts, meals, sleep, window: Window) -> PeriodSummary:
    w = summarize(WORKOUTS, workouts, window)
    m = summarize(MEALS, meals, window)
    s = summarize(SLEEP, sleep, window)
    return PeriodSummary(
        workouts=WorkoutTotals(
            count=w.count,
            total_duration=w.total("duration"),
            total_calories=w.total("calories"),
            average_duration=int(round_half_up(w.average("duration"))),
        ),
        meals=MealTotalsSummary(
            count=m.count,
            total_calories=round_half_up(m.total("calories"), 2),
            total_protein=round_half_up(m.total("protein"), 2),
            total_carbs=round_half_up(m.total("carbs"), 2),
            total_fat=round_half_up(m.total("fat"), 2),
        ),
        sleep=SleepTotals(
            count=s.count,
            total_duration=s.total("duration"),
            average_duration=int(round_half_up(s.average("duration"))),
            average_quality=int(round_half_up(s.average("quality"))),
        ),
    )


def _dashboard_user(profile: BodyProfile, calorie_needs: int) -> DashboardUser:
    value = _safe_bmi(profile.weight_kg, profile.height_cm)
    return DashboardUser(
        name=profile.name,
        weight=profile.weight_kg,
        height=profile.height_cm,
        bmi=value,
        bmi_category=bmi_category(value) if value else None,
        daily_calorie_needs=calorie_needs,
        goal=profile.goal,
        target_weight=profile.target_weight_kg,
    )


def _newest_first(kind, records, window: Window) -> list:
    return list(reversed(chronological(kind, records, window)))


def _safe_bmi(weight_kg: float, height_cm: float) -> float:
    try:
        return bmi(weight_kg, height_cm)
    except InvalidInputError:
        logger.warning(f"Cannot compute BMI for height {height_cm}")
        return 0.0


def _safe_calorie_need(profile: BodyProfile) -> int:
    try:
        return profile.daily_calorie_need
    except InvalidInputError as e:
        logger.warning(f"Cannot compute daily calorie need: {e}")
        return 0


def _safe_goal_progress(profile: BodyProfile, current_weight: float) -> float:
    target = profile.target_weight_kg
    if not target:
        return 0.0
    try:
        return round_half_up(goal_progress(profile.weight_kg, current_weight, target), 1)
    except DivisionByZeroError:
        return 0.0
