"""Tests for windows and windowed aggregation."""
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from fittrack.exceptions import InvalidInputError
from fittrack.models.nutrition import MealType
from fittrack.models.tracking import SleepQuality
from fittrack.models.workout import ExerciseType
from fittrack.services.aggregator import (
    MEALS,
    SLEEP,
    WORKOUTS,
    Window,
    aggregate,
    breakdown,
    day_window,
    in_window,
    lookback_window,
    measurement_progress,
    month_window,
    period_label,
    progress_summary,
    resolve_period,
    summarize,
    week_window,
)

from conftest import OTHER_USER_ID, USER_ID, at, make_meal, make_progress, make_sleep, make_workout

NOW = at(2024, 3, 13, 20)


class TestWindows:
    """Tests for calendar and lookback windows."""

    def test_day_window_bounds(self):
        window = day_window(date(2024, 3, 13))

        assert window.start == datetime(2024, 3, 13, tzinfo=timezone.utc)
        assert window.end == datetime(2024, 3, 13, 23, 59, 59, 999000, tzinfo=timezone.utc)

    def test_day_window_in_timezone(self):
        berlin = ZoneInfo("Europe/Berlin")
        window = day_window(date(2024, 3, 13), berlin)

        # Midnight in Berlin is 23:00 UTC the previous day in winter
        assert window.contains(datetime(2024, 3, 12, 23, 30, tzinfo=timezone.utc))
        assert not window.contains(datetime(2024, 3, 13, 23, 30, tzinfo=timezone.utc))

    def test_week_starts_on_sunday(self):
        window = week_window(date(2024, 3, 13))  # Wednesday

        assert window.start.date() == date(2024, 3, 10)
        assert window.end.date() == date(2024, 3, 16)
        assert window.end.time().microsecond == 999000

    def test_week_of_a_sunday_starts_that_day(self):
        assert week_window(date(2024, 3, 10)).start.date() == date(2024, 3, 10)

    def test_week_of_a_saturday(self):
        assert week_window(date(2024, 3, 16)).start.date() == date(2024, 3, 10)

    def test_month_window_leap_february(self):
        window = month_window(date(2024, 2, 10))

        assert window.start.date() == date(2024, 2, 1)
        assert window.end.date() == date(2024, 2, 29)

    def test_window_is_inclusive(self):
        window = Window(start=at(2024, 3, 1, 0), end=at(2024, 3, 2, 0))

        assert window.contains(at(2024, 3, 1, 0))
        assert window.contains(at(2024, 3, 2, 0))
        assert not window.contains(at(2024, 3, 2, 0) + timedelta(microseconds=1))

    def test_lookback_rejects_non_positive(self):
        with pytest.raises(InvalidInputError):
            lookback_window(0, NOW)


class TestResolvePeriod:
    """Tests for period tokens."""

    def test_week(self):
        assert resolve_period("week", NOW) == Window(start=NOW - timedelta(days=7), end=NOW)

    def test_month_clamps_day(self):
        now = at(2024, 3, 31)
        assert resolve_period("month", now).start == at(2024, 2, 29)

    def test_year_from_leap_day(self):
        now = at(2024, 2, 29)
        assert resolve_period("year", now).start == at(2023, 2, 28)

    @pytest.mark.parametrize("token", [14, "14", "14d", " 14D "])
    def test_day_counts(self, token):
        assert resolve_period(token, NOW).start == NOW - timedelta(days=14)

    def test_unknown_token_falls_back_to_default(self):
        assert resolve_period("fortnight", NOW, default="month") == resolve_period("month", NOW)

    def test_missing_token_uses_default(self):
        assert resolve_period(None, NOW) == resolve_period("week", NOW)

    @pytest.mark.parametrize("token", [0, "0", "0d"])
    def test_zero_days_rejected(self, token):
        with pytest.raises(InvalidInputError):
            resolve_period(token, NOW)

    @pytest.mark.parametrize("token", ["1000000", "99999999999d", 10**12])
    def test_out_of_range_days_rejected(self, token):
        with pytest.raises(InvalidInputError):
            resolve_period(token, NOW)

    def test_negative_days_rejected(self):
        with pytest.raises(InvalidInputError):
            resolve_period(-3, NOW)

    def test_labels(self):
        assert period_label("YEAR") == "year"
        assert period_label("30") == "30d"
        assert period_label("fortnight", default="month") == "month"


class TestSummarize:
    """Tests for count, sum and average reductions."""

    def test_empty_window_is_zeroed(self):
        summary = summarize(WORKOUTS, [], resolve_period("week", NOW))

        assert summary.count == 0
        assert summary.total("duration") == 0
        assert summary.average("calories") == 0

    def test_sums_and_averages(self):
        workouts = [
            make_workout(at(2024, 3, 12), duration_min=30, calories_burned=300),
            make_workout(at(2024, 3, 13), duration_min=60, calories_burned=500),
        ]

        summary = summarize(WORKOUTS, workouts, resolve_period("week", NOW))

        assert summary.count == 2
        assert summary.total("duration") == 90
        assert summary.total("calories") == 800
        assert summary.average("duration") == 45

    def test_records_outside_window_ignored(self):
        workouts = [make_workout(at(2024, 3, 1)), make_workout(at(2024, 3, 12))]
        assert summarize(WORKOUTS, workouts, resolve_period("week", NOW)).count == 1

    def test_other_users_ignored(self):
        workouts = [
            make_workout(at(2024, 3, 12)),
            make_workout(at(2024, 3, 12), user_id=OTHER_USER_ID),
        ]

        assert summarize(WORKOUTS, workouts, resolve_period("week", NOW), user_id=USER_ID).count == 1
        assert summarize(WORKOUTS, workouts, resolve_period("week", NOW)).count == 2

    def test_naive_dates_read_in_window_timezone(self):
        tokyo = ZoneInfo("Asia/Tokyo")
        window = day_window(date(2024, 3, 13), tokyo)
        workout = make_workout(datetime(2024, 3, 13, 1, 0))

        assert summarize(WORKOUTS, [workout], window).count == 1

    def test_sleep_quality_average(self):
        records = [
            make_sleep(at(2024, 3, 11, 23), at(2024, 3, 12, 7), quality=SleepQuality.POOR),
            make_sleep(at(2024, 3, 12, 23), at(2024, 3, 13, 7), quality=SleepQuality.EXCELLENT),
        ]

        summary = summarize(SLEEP, records, resolve_period("week", NOW))

        assert summary.average("quality") == 62.5
        assert summary.total("duration") == 960

    def test_meal_nutrients(self):
        meals = [make_meal(at(2024, 3, 12), calories=400, protein=20), make_meal(at(2024, 3, 13), calories=600, protein=40)]

        summary = summarize(MEALS, meals, resolve_period("week", NOW))

        assert summary.total("calories") == 1000
        assert summary.average("protein") == 30


class TestBreakdown:
    """Tests for category breakdowns."""

    def test_sorted_by_count_ties_keep_first_seen_order(self):
        workouts = [
            make_workout(at(2024, 3, 8), exercise_type=ExerciseType.YOGA, intensity="hatha"),
            make_workout(at(2024, 3, 9), exercise_type=ExerciseType.RUNNING),
            make_workout(at(2024, 3, 10), exercise_type=ExerciseType.CYCLING, intensity="moderate"),
            make_workout(at(2024, 3, 11), exercise_type=ExerciseType.RUNNING),
            make_workout(at(2024, 3, 12), exercise_type=ExerciseType.CYCLING, intensity="moderate"),
        ]

        buckets = breakdown(WORKOUTS, workouts, resolve_period("week", NOW))

        assert [b.category for b in buckets] == ["running", "cycling", "yoga"]
        assert [b.count for b in buckets] == [2, 2, 1]

    def test_bucket_totals(self):
        meals = [
            make_meal(at(2024, 3, 12), calories=300, meal_type=MealType.BREAKFAST),
            make_meal(at(2024, 3, 13), calories=500, meal_type=MealType.BREAKFAST),
            make_meal(at(2024, 3, 13), calories=800, meal_type=MealType.DINNER),
        ]

        buckets = breakdown(MEALS, meals, resolve_period("week", NOW))

        assert buckets[0].category == "breakfast"
        assert buckets[0].sums["calories"] == 800
        assert buckets[0].averages["calories"] == 400

    def test_empty(self):
        assert breakdown(WORKOUTS, [], resolve_period("week", NOW)) == []

    def test_aggregate_returns_both(self):
        workouts = [make_workout(at(2024, 3, 12))]

        result = aggregate(WORKOUTS, workouts, resolve_period("week", NOW))

        assert result.summary.count == 1
        assert result.breakdown[0].category == "running"


class TestProgress:
    """Tests for weight and measurement progress."""

    def test_summary_uses_first_and_last(self):
        entries = [
            make_progress(at(2024, 3, 10), 78.0, body_fat_percent=20.0),
            make_progress(at(2024, 3, 1), 80.0, body_fat_percent=22.0),
            make_progress(at(2024, 3, 5), 79.0),
        ]

        summary = progress_summary(entries, lookback_window(30, NOW))

        assert summary.total_entries == 3
        assert summary.weight.starting == 80.0
        assert summary.weight.current == 78.0
        assert summary.weight.change == -2.0
        assert summary.average_weight == 79.0
        assert summary.body_fat.change == -2.0
        assert summary.muscle_mass.current == 0

    def test_empty_summary(self):
        summary = progress_summary([], lookback_window(30, NOW))

        assert summary.total_entries == 0
        assert summary.weight.current == 0

    def test_measurements_only_from_entries_with_chest(self):
        entries = [
            make_progress(at(2024, 3, 1), 80.0, chest=100.0, waist=90.0),
            make_progress(at(2024, 3, 5), 79.0),
            make_progress(at(2024, 3, 10), 78.0, chest=98.0, waist=86.5),
        ]

        changes = measurement_progress(entries, lookback_window(30, NOW))

        assert changes["chest"].change == -2.0
        assert changes["waist"].change == -3.5
        assert changes["hips"].current == 0

    def test_in_window_is_chronological(self):
        entries = [make_progress(at(2024, 3, 10), 78.0), make_progress(at(2024, 3, 1), 80.0)]

        ordered = in_window(entries, lookback_window(30, NOW))

        assert [e.weight_kg for e in ordered] == [80.0, 78.0]
