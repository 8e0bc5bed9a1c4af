"""Tests for the body and activity metric formulas."""
from datetime import datetime

import pytest

from fittrack.exceptions import (
    DivisionByZeroError,
    InvalidExerciseComboError,
    InvalidInputError,
    MetricError,
)
from fittrack.models.user import ActivityLevel, Gender
from fittrack.services.metrics import (
    ACTIVITY_MULTIPLIERS,
    MET_VALUES,
    BMICategory,
    BodyProfile,
    bmi,
    bmi_category,
    bmr,
    calories_burned,
    daily_calorie_need,
    goal_progress,
    intensities_for,
    is_healthy_sleep,
    round_half_up,
    sleep_duration,
    sleep_quality_score,
)


class TestBMI:
    """Tests for Body Mass Index."""

    def test_bmi_rounds_to_one_decimal(self):
        # 70 / 1.75^2 = 22.857...
        assert bmi(70, 175) == 22.9

    def test_bmi_profile(self):
        # 80 / 1.8^2 = 24.69...
        assert bmi(80, 180) == 24.7

    def test_zero_height_rejected(self):
        with pytest.raises(InvalidInputError):
            bmi(70, 0)

    def test_negative_height_rejected(self):
        with pytest.raises(MetricError):
            bmi(70, -170)

    @pytest.mark.parametrize(
        "value,expected",
        [
            (18.4, BMICategory.UNDERWEIGHT),
            (18.5, BMICategory.NORMAL),
            (24.9, BMICategory.NORMAL),
            (25, BMICategory.OVERWEIGHT),
            (29.9, BMICategory.OVERWEIGHT),
            (30, BMICategory.OBESE),
        ],
    )
    def test_category_boundaries(self, value, expected):
        """Boundary values belong to the upper category."""
        assert bmi_category(value) == expected

    @pytest.mark.parametrize("height_cm", [150, 175, 200])
    def test_category_never_drops_as_weight_rises(self, height_cm):
        order = list(BMICategory)
        previous = 0
        for tenths in range(200, 3001):  # 20.0 .. 300.0 kg
            category = bmi_category(bmi(tenths / 10, height_cm))
            rank = order.index(category)
            assert rank >= previous, f"{tenths / 10} kg at {height_cm} cm"
            previous = rank

    def test_category_labels(self):
        assert bmi_category(22.9).value == "Normal weight"


class TestBMRCalculation:
    """Tests for BMR calculation using the Harris-Benedict equation."""

    def test_bmr_male(self):
        # 88.362 + 13.397*80 + 4.799*180 - 5.677*30 = 1853.632
        assert bmr(Gender.MALE, 80, 180, 30) == 1854

    def test_bmr_female(self):
        # 447.593 + 9.247*65 + 3.098*165 - 4.330*28 = 1438.578
        assert bmr(Gender.FEMALE, 65, 165, 28) == 1439

    def test_other_uses_female_formula(self):
        assert bmr(Gender.OTHER, 65, 165, 28) == bmr(Gender.FEMALE, 65, 165, 28)

    def test_plain_strings_accepted(self):
        assert bmr("male", 80, 180, 30) == 1854


class TestDailyCalorieNeed:
    """Tests for activity-scaled calorie needs."""

    def test_multipliers(self):
        for level, multiplier in ACTIVITY_MULTIPLIERS.items():
            assert daily_calorie_need(1800, level) == round_half_up(1800 * multiplier), level

    def test_sedentary(self):
        assert daily_calorie_need(1800, ActivityLevel.SEDENTARY) == 2160  # 1800 * 1.2

    def test_moderately_active(self):
        assert daily_calorie_need(1854, ActivityLevel.MODERATELY_ACTIVE) == 2874  # 2873.7

    def test_unknown_level(self):
        with pytest.raises(InvalidInputError):
            daily_calorie_need(1800, "couch_potato")

    def test_body_profile_snapshot(self, profile):
        assert profile.bmi == 24.7
        assert profile.bmr == 1854
        assert profile.daily_calorie_need == 2874

    def test_body_profile_other_gender_uses_female_formula(self):
        profile = BodyProfile(
            name="Sam",
            gender=Gender.OTHER,
            age=30,
            weight_kg=60,
            height_cm=165,
            activity_level=ActivityLevel.SEDENTARY,
            goal="maintain_weight",
        )
        assert profile.bmr == bmr(Gender.FEMALE, 60, 165, 30)

    def test_body_profile_is_immutable(self, profile):
        with pytest.raises(AttributeError):
            profile.weight_kg = 90


class TestCaloriesBurned:
    """Tests for MET-based workout calories."""

    def test_running(self):
        # 9.8 * 80 * 0.5
        assert calories_burned("running", "6 mph", 30, 80) == 392

    def test_half_rounds_up(self):
        # 3.5 * 60 * 0.25 = 52.5
        assert calories_burned("walking", "moderate", 15, 60) == 53

    def test_invalid_intensity_lists_available(self):
        with pytest.raises(InvalidExerciseComboError) as exc_info:
            calories_burned("yoga", "extreme", 30, 70)

        assert exc_info.value.available == ["hatha", "power", "vinyasa"]
        assert "Available intensities: hatha, power, vinyasa" in str(exc_info.value)

    def test_unknown_exercise(self):
        with pytest.raises(InvalidExerciseComboError) as exc_info:
            calories_burned("curling", "moderate", 30, 70)

        assert exc_info.value.available == []

    def test_met_table_is_read_only(self):
        with pytest.raises(TypeError):
            MET_VALUES["running"]["5 mph"] = 1.0

    def test_intensities_for(self):
        assert intensities_for("tennis") == ["singles", "doubles"]
        assert intensities_for("curling") == []


class TestSleep:
    """Tests for sleep duration and quality."""

    def test_overnight_duration(self):
        assert sleep_duration(datetime(2024, 3, 1, 22, 0), datetime(2024, 3, 2, 6, 0)) == 480

    def test_end_before_start_wraps_to_next_day(self):
        # 23:00 -> 06:00 logged on the same calendar day
        assert sleep_duration(datetime(2024, 3, 1, 23, 0), datetime(2024, 3, 1, 6, 0)) == 420

    def test_end_more_than_a_day_early(self):
        with pytest.raises(InvalidInputError):
            sleep_duration(datetime(2024, 3, 3, 23, 0), datetime(2024, 3, 1, 6, 0))

    def test_quality_scores(self):
        assert [sleep_quality_score(q) for q in ("poor", "fair", "good", "excellent")] == [25, 50, 75, 100]

    def test_unknown_quality_scores_as_good(self):
        assert sleep_quality_score("restless") == 75

    @pytest.mark.parametrize("minutes,healthy", [(419, False), (420, True), (540, True), (541, False)])
    def test_healthy_duration(self, minutes, healthy):
        assert is_healthy_sleep(minutes) is healthy


class TestGoalProgress:
    """Tests for goal progress percentage."""

    def test_partway(self):
        assert goal_progress(80, 78, 75) == pytest.approx(60.0)

    def test_not_started(self):
        assert goal_progress(80, 80, 75) == pytest.approx(100.0)

    def test_starting_equals_target(self):
        with pytest.raises(DivisionByZeroError):
            goal_progress(75, 74, 75)

    def test_division_error_is_zero_division(self):
        with pytest.raises(ZeroDivisionError):
            goal_progress(75, 74, 75)


class TestRounding:
    """Tests for half-up rounding."""

    def test_half_goes_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.125, 2) == 0.13

    def test_negative_half_goes_away_from_zero(self):
        assert round_half_up(-2.5) == -3
