"""Body and activity metric formulas.

BMR uses the revised Harris-Benedict equation:
- Male:          88.362 + (13.397 × weight_kg) + (4.799 × height_cm) - (5.677 × age)
- Female/other: 447.593 + (9.247 × weight_kg) + (3.098 × height_cm) - (4.330 × age)

Workout calories use MET values: calories = MET × weight_kg × hours.
"""
import enum
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from types import MappingProxyType
from typing import Mapping, Optional

from fittrack.exceptions import (
    DivisionByZeroError,
    InvalidExerciseComboError,
    InvalidInputError,
)


# MET values per exercise type and intensity (Metabolic Equivalent of Task)
MET_VALUES: Mapping[str, Mapping[str, float]] = MappingProxyType({
    "running": MappingProxyType({
        "5 mph": 8.3, "6 mph": 9.8, "7 mph": 11.0, "8 mph": 11.8, "9 mph": 12.8, "10 mph": 14.5,
    }),
    "cycling": MappingProxyType({"leisurely": 3.5, "moderate": 6.8, "vigorous": 10.0, "racing": 15.8}),
    "swimming": MappingProxyType({"leisurely": 5.8, "moderate": 7.0, "vigorous": 9.8}),
    "yoga": MappingProxyType({"hatha": 2.5, "power": 4.0, "vinyasa": 3.0}),
    "weightlifting": MappingProxyType({"light": 3.0, "moderate": 5.0, "vigorous": 6.0}),
    "walking": MappingProxyType({"slow": 2.0, "moderate": 3.5, "brisk": 4.3, "very_brisk": 5.0}),
    "dancing": MappingProxyType({"slow": 3.0, "moderate": 4.8, "fast": 5.5}),
    "basketball": MappingProxyType({"casual": 6.0, "competitive": 8.0}),
    "soccer": MappingProxyType({"casual": 7.0, "competitive": 10.0}),
    "tennis": MappingProxyType({"singles": 8.0, "doubles": 5.0}),
    "hiking": MappingProxyType({"easy": 4.0, "moderate": 6.0, "strenuous": 8.0}),
})

# Activity level multipliers for daily calorie needs
ACTIVITY_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    "sedentary": 1.2,          # Little or no exercise
    "lightly_active": 1.375,   # Light exercise 1-3 days/week
    "moderately_active": 1.55, # Moderate exercise 3-5 days/week
    "very_active": 1.725,      # Hard exercise 6-7 days/week
    "extremely_active": 1.9,   # Very hard exercise, physical job
})

# (base, weight, height, age) coefficients; "other" shares the female formula
_MALE_BMR = (88.362, 13.397, 4.799, 5.677)
_FEMALE_BMR = (447.593, 9.247, 3.098, 4.330)
BMR_COEFFICIENTS: Mapping[str, tuple[float, float, float, float]] = MappingProxyType({
    "male": _MALE_BMR,
    "female": _FEMALE_BMR,
    "other": _FEMALE_BMR,
})

SLEEP_QUALITY_SCORES: Mapping[str, int] = MappingProxyType({
    "poor": 25,
    "fair": 50,
    "good": 75,
    "excellent": 100,
})
DEFAULT_SLEEP_QUALITY_SCORE = 75

# Recommended nightly sleep, in hours
HEALTHY_SLEEP_HOURS = (7, 9)


class BMICategory(str, enum.Enum):
    """WHO adult BMI categories."""
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal weight"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


@dataclass(frozen=True)
class BodyProfile:
    """Immutable snapshot of the profile values the formulas need."""
    name: str
    gender: str
    age: int
    weight_kg: float
    height_cm: float
    activity_level: str
    goal: str
    target_weight_kg: Optional[float] = None

    @classmethod
    def from_user(cls, user) -> "BodyProfile":
        """Copy the metric fields off a user profile."""
        return cls(
            name=user.name,
            gender=user.gender,
            age=user.age,
            weight_kg=user.weight_kg,
            height_cm=user.height_cm,
            activity_level=user.activity_level,
            goal=user.goal,
            target_weight_kg=user.target_weight_kg,
        )

    @property
    def bmi(self) -> float:
        return bmi(self.weight_kg, self.height_cm)

    @property
    def bmr(self) -> int:
        return bmr(self.gender, self.weight_kg, self.height_cm, self.age)

    @property
    def daily_calorie_need(self) -> int:
        return daily_calorie_need(self.bmr, self.activity_level)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with halves away from zero instead of to even."""
    exponent = Decimal(1).scaleb(-ndigits)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def bmi(weight_kg: float, height_cm: float) -> float:
    """
    Calculate Body Mass Index.

    Args:
        weight_kg: Body weight in kilograms
        height_cm: Height in centimeters

    Returns:
        BMI rounded to one decimal

    Raises:
        InvalidInputError: If height is not positive
    """
    if height_cm is None or height_cm <= 0:
        raise InvalidInputError(f"Height must be positive, got {height_cm}")

    height_m = height_cm / 100
    return round_half_up(weight_kg / (height_m * height_m), 1)


def bmi_category(value: float) -> BMICategory:
    """Classify a BMI value. Boundary values belong to the upper category."""
    if value < 18.5:
        return BMICategory.UNDERWEIGHT
    if value < 25:
        return BMICategory.NORMAL
    if value < 30:
        return BMICategory.OVERWEIGHT
    return BMICategory.OBESE


def bmr(gender: str, weight_kg: float, height_cm: float, age: int) -> int:
    """
    Calculate Basal Metabolic Rate with the Harris-Benedict equation.

    Args:
        gender: Gender (male uses the male formula, anything else the female one)
        weight_kg: Body weight in kilograms
        height_cm: Height in centimeters
        age: Age in years

    Returns:
        BMR in calories per day
    """
    base, per_kg, per_cm, per_year = BMR_COEFFICIENTS.get(gender, _FEMALE_BMR)
    value = base + (per_kg * weight_kg) + (per_cm * height_cm) - (per_year * age)
    return int(round_half_up(value))


def daily_calorie_need(bmr_value: int, activity_level: str) -> int:
    """Scale BMR by the activity multiplier."""
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_level)
    if multiplier is None:
        raise InvalidInputError(f"Unknown activity level: {activity_level}")
    return int(round_half_up(bmr_value * multiplier))


def intensities_for(exercise_type: str) -> list[str]:
    """Intensities available for an exercise type, empty if unknown."""
    return list(MET_VALUES.get(_key(exercise_type), {}))


def met_value(exercise_type: str, intensity: str) -> float:
    """Look up the MET value for an exercise type and intensity."""
    try:
        return MET_VALUES[_key(exercise_type)][intensity]
    except KeyError:
        raise InvalidExerciseComboError(
            _key(exercise_type), intensity, intensities_for(exercise_type)
        ) from None


def calories_burned(
    exercise_type: str,
    intensity: str,
    duration_min: float,
    weight_kg: float,
) -> int:
    """
    Estimate calories burned during a workout.

    Args:
        exercise_type: Key of the MET table (e.g. "running")
        intensity: Intensity under that exercise type (e.g. "6 mph")
        duration_min: Workout duration in minutes
        weight_kg: Body weight in kilograms

    Returns:
        Calories burned, rounded to the nearest integer

    Raises:
        InvalidExerciseComboError: If the pair is not in the MET table
    """
    met = met_value(exercise_type, intensity)
    return int(round_half_up(met * weight_kg * (duration_min / 60)))


def sleep_duration(start: datetime, end: datetime) -> int:
    """
    Minutes slept between start and end.

    An end earlier than the start is read as the next morning.
    """
    if end < start:
        end = end + timedelta(days=1)

    minutes = (end - start).total_seconds() / 60
    if minutes < 0:
        raise InvalidInputError("Sleep end is more than a day before sleep start")
    return int(round_half_up(minutes))


def sleep_quality_score(quality) -> int:
    """Numeric score for a sleep quality label; unknown labels score as good."""
    return SLEEP_QUALITY_SCORES.get(_key(quality), DEFAULT_SLEEP_QUALITY_SCORE)


def is_healthy_sleep(duration_min: float) -> bool:
    low, high = HEALTHY_SLEEP_HOURS
    return low <= duration_min / 60 <= high


def goal_progress(starting_weight: float, current_weight: float, target_weight: float) -> float:
    """
    Remaining distance to the target as a percentage of the starting distance.

    Raises:
        DivisionByZeroError: If the starting weight already equals the target
    """
    distance = starting_weight - target_weight
    if distance == 0:
        raise DivisionByZeroError("Starting weight equals target weight")
    return abs((target_weight - current_weight) / distance) * 100


def _key(value) -> str:
    """Plain string value of an enum member or string."""
    return value.value if isinstance(value, enum.Enum) else value
