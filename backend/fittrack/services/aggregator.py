"""Time-windowed aggregation over logged records.

Records are any objects exposing the attributes named by a ``RecordKind``;
ORM rows and plain objects both work. Every reduction is in memory, so the
same code backs the stats endpoints and the dashboard.
"""
import calendar
import enum
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from operator import attrgetter
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from fittrack.exceptions import InvalidInputError
from fittrack.models.tracking import MEASUREMENT_FIELDS
from fittrack.services.metrics import sleep_quality_score

END_OF_DAY = time(23, 59, 59, 999000)
PERIODS = ("week", "month", "year")

_DAYS_TOKEN = re.compile(r"^(\d+)\s*d?$")

Extractor = Callable[[Any], Optional[float]]


@dataclass(frozen=True)
class Window:
    """Inclusive time range [start, end]."""
    start: datetime
    end: datetime

    @property
    def tz(self) -> tzinfo:
        return self.start.tzinfo or timezone.utc

    def contains(self, moment: datetime) -> bool:
        return self.start <= _aware(moment, self.tz) <= self.end


@dataclass(frozen=True)
class RecordKind:
    """How to read dates, numeric fields and the category of one record type."""
    name: str
    fields: Mapping[str, Extractor]
    category: Optional[str] = None
    date_attr: str = "date"

    def moment(self, record) -> datetime:
        return getattr(record, self.date_attr)

    def category_of(self, record) -> str:
        value = getattr(record, self.category)
        return value.value if isinstance(value, enum.Enum) else str(value)


WORKOUTS = RecordKind(
    name="workouts",
    fields={
        "duration": attrgetter("duration_min"),
        "calories": attrgetter("calories_burned"),
    },
    category="exercise_type",
)

MEALS = RecordKind(
    name="meals",
    fields={
        "calories": attrgetter("total_calories"),
        "protein": attrgetter("total_protein"),
        "carbs": attrgetter("total_carbs"),
        "fat": attrgetter("total_fat"),
        "fiber": attrgetter("total_fiber"),
        "sugar": attrgetter("total_sugar"),
    },
    category="meal_type",
)

SLEEP = RecordKind(
    name="sleep",
    fields={
        "duration": attrgetter("duration_min"),
        "quality": lambda record: sleep_quality_score(record.quality),
    },
    category="quality",
)

PROGRESS = RecordKind(
    name="progress",
    fields={"weight": attrgetter("weight_kg")},
)


@dataclass(frozen=True)
class WindowSummary:
    """Count plus per-field sums and averages. Empty input gives zeros."""
    count: int
    sums: Mapping[str, float]
    averages: Mapping[str, float]

    def total(self, name: str) -> float:
        return self.sums.get(name, 0)

    def average(self, name: str) -> float:
        return self.averages.get(name, 0)


@dataclass(frozen=True)
class CategoryBucket:
    """Summary of the records sharing one category value."""
    category: str
    count: int
    sums: Mapping[str, float]
    averages: Mapping[str, float]


@dataclass(frozen=True)
class Aggregate:
    summary: WindowSummary
    breakdown: list[CategoryBucket]


@dataclass(frozen=True)
class Change:
    """First and last value of a series and their difference."""
    current: float = 0
    starting: float = 0
    change: float = 0


@dataclass(frozen=True)
class ProgressSummary:
    total_entries: int
    weight: Change
    average_weight: float
    body_fat: Change
    muscle_mass: Change


# Windows

def day_window(day: date, tz: tzinfo = timezone.utc) -> Window:
    """Midnight to 23:59:59.999 of a calendar day in the given timezone."""
    return Window(
        start=datetime.combine(day, time.min, tzinfo=tz),
        end=datetime.combine(day, END_OF_DAY, tzinfo=tz),
    )


def week_start(day: date) -> date:
    """The Sunday on or before the given day."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def week_window(day: date, tz: tzinfo = timezone.utc) -> Window:
    """Sunday 00:00 through Saturday 23:59:59.999 of the week containing day."""
    start = week_start(day)
    return Window(
        start=datetime.combine(start, time.min, tzinfo=tz),
        end=datetime.combine(start + timedelta(days=6), END_OF_DAY, tzinfo=tz),
    )


def month_window(day: date, tz: tzinfo = timezone.utc) -> Window:
    """First to last day of the calendar month containing day."""
    last = calendar.monthrange(day.year, day.month)[1]
    return Window(
        start=datetime.combine(day.replace(day=1), time.min, tzinfo=tz),
        end=datetime.combine(day.replace(day=last), END_OF_DAY, tzinfo=tz),
    )


def lookback_window(days: int, now: datetime) -> Window:
    """The last N days up to and including now."""
    if days <= 0:
        raise InvalidInputError(f"Lookback must be a positive number of days, got {days}")
    try:
        start = now - timedelta(days=days)
    except OverflowError:
        raise InvalidInputError(f"Lookback of {days} days is out of range") from None
    return Window(start=start, end=now)


def shift_months(moment: datetime, months: int) -> datetime:
    """Move by whole calendar months, clamping the day to the target month."""
    index = moment.month - 1 + months
    year = moment.year + index // 12
    month = index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def resolve_period(
    period: Union[str, int, None],
    now: datetime,
    default: str = "week",
) -> Window:
    """
    Turn a period token into a window ending now.

    Args:
        period: "week", "month", "year", a day count (int, "14" or "14d")
        now: End of the window
        default: Period used when the token is missing or not recognised

    Returns:
        Window from the period start to now

    Raises:
        InvalidInputError: If a day count is not positive
    """
    if isinstance(period, int) and not isinstance(period, bool):
        return lookback_window(period, now)

    token = str(period).strip().lower() if period is not None else default

    if token == "week":
        return Window(start=now - timedelta(days=7), end=now)
    if token == "month":
        return Window(start=shift_months(now, -1), end=now)
    if token == "year":
        return Window(start=shift_months(now, -12), end=now)

    match = _DAYS_TOKEN.match(token)
    if match:
        return lookback_window(int(match.group(1)), now)

    if token == default:
        raise InvalidInputError(f"Unknown period: {period}")
    return resolve_period(default, now, default=default)


def period_label(period: Union[str, int, None], default: str = "week") -> str:
    """Normalised name of the period actually applied by resolve_period."""
    if isinstance(period, int) and not isinstance(period, bool):
        return f"{period}d"
    token = str(period).strip().lower() if period is not None else default
    if token in PERIODS:
        return token
    match = _DAYS_TOKEN.match(token)
    if match:
        return f"{int(match.group(1))}d"
    return default


# Reductions

def select(
    kind: RecordKind,
    records: Iterable,
    window: Optional[Window] = None,
    user_id: Any = None,
) -> list:
    """Records owned by user_id (when given) that fall inside the window."""
    return [
        record for record in records
        if _owned(record, user_id)
        and (window is None or window.contains(kind.moment(record)))
    ]


def chronological(
    kind: RecordKind,
    records: Iterable,
    window: Optional[Window] = None,
    user_id: Any = None,
) -> list:
    """Selected records in ascending date order; equal dates keep input order."""
    tz = window.tz if window else timezone.utc
    return sorted(
        select(kind, records, window, user_id),
        key=lambda record: _aware(kind.moment(record), tz),
    )


def in_window(
    records: Iterable,
    window: Window,
    attr: str = "date",
    user_id: Any = None,
) -> list:
    """Records whose ``attr`` falls inside the window, oldest first."""
    kind = RecordKind(name=attr, fields={}, date_attr=attr)
    return chronological(kind, records, window, user_id)


def summarize(
    kind: RecordKind,
    records: Iterable,
    window: Optional[Window] = None,
    user_id: Any = None,
) -> WindowSummary:
    """Count, sum and average every numeric field of the matching records."""
    return _reduce(kind, select(kind, records, window, user_id))


def breakdown(
    kind: RecordKind,
    records: Iterable,
    window: Optional[Window] = None,
    user_id: Any = None,
) -> list[CategoryBucket]:
    """
    Group matching records by the kind's category field.

    Buckets are ordered by count, highest first. Ties keep the order in which
    each category was first seen.
    """
    if kind.category is None:
        return []

    groups: dict[str, list] = {}
    for record in select(kind, records, window, user_id):
        groups.setdefault(kind.category_of(record), []).append(record)

    buckets = []
    for category, members in groups.items():
        summary = _reduce(kind, members)
        buckets.append(
            CategoryBucket(
                category=category,
                count=summary.count,
                sums=summary.sums,
                averages=summary.averages,
            )
        )

    # sorted() is stable, so equal counts stay in first-seen order
    return sorted(buckets, key=lambda bucket: -bucket.count)


def aggregate(
    kind: RecordKind,
    records: Iterable,
    window: Optional[Window] = None,
    user_id: Any = None,
) -> Aggregate:
    matched = select(kind, records, window, user_id)
    return Aggregate(summary=_reduce(kind, matched), breakdown=breakdown(kind, matched))


def progress_summary(
    records: Iterable,
    window: Optional[Window] = None,
    user_id: Any = None,
) -> ProgressSummary:
    """First/last weight, body fat and muscle mass over the window."""
    entries = chronological(PROGRESS, records, window, user_id)
    summary = _reduce(PROGRESS, entries)
    return ProgressSummary(
        total_entries=summary.count,
        weight=_change(entries, "weight_kg"),
        average_weight=summary.average("weight"),
        body_fat=_change(entries, "body_fat_percent"),
        muscle_mass=_change(entries, "muscle_mass_kg"),
    )


def measurement_progress(
    records: Iterable,
    window: Optional[Window] = None,
    user_id: Any = None,
) -> dict[str, Change]:
    """Change of each body measurement across entries that record the chest."""
    entries = [
        entry for entry in chronological(PROGRESS, records, window, user_id)
        if entry.chest is not None
    ]
    return {name: _change(entries, name) for name in MEASUREMENT_FIELDS}


def _reduce(kind: RecordKind, records: list) -> WindowSummary:
    sums = dict.fromkeys(kind.fields, 0)
    for record in records:
        for name, extract in kind.fields.items():
            sums[name] += extract(record) or 0

    count = len(records)
    averages = {name: (total / count if count else 0) for name, total in sums.items()}
    return WindowSummary(count=count, sums=sums, averages=averages)


def _change(entries: list, attr: str) -> Change:
    values = [getattr(entry, attr) for entry in entries if getattr(entry, attr) is not None]
    if not values:
        return Change()
    return Change(current=values[-1], starting=values[0], change=values[-1] - values[0])


def _owned(record, user_id) -> bool:
    return user_id is None or getattr(record, "user_id", user_id) == user_id


def _aware(moment: datetime, tz: tzinfo) -> datetime:
    """Read naive datetimes in the given timezone."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment
