"""Shared fixtures and record factories."""
import uuid
from datetime import datetime, timezone

import pytest

from fittrack.models.nutrition import Meal, FoodItem, MealType, FoodUnit
from fittrack.models.tracking import SleepRecord, SleepQuality, ProgressEntry
from fittrack.models.user import UserProfile, Gender, ActivityLevel, GoalType
from fittrack.models.workout import Workout, ExerciseType
from fittrack.services.metrics import BodyProfile

USER_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")
OTHER_USER_ID = uuid.UUID("22222222-2222-2222-2222-222222222222")
CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)


def at(year, month, day, hour=12, minute=0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def make_user(**overrides) -> UserProfile:
    values = dict(
        id=USER_ID,
        email="alex@example.com",
        password_hash="x",
        is_active=True,
        name="Alex",
        gender=Gender.MALE,
        age=30,
        weight_kg=80.0,
        height_cm=180.0,
        activity_level=ActivityLevel.MODERATELY_ACTIVE,
        goal=GoalType.LOSE_WEIGHT,
        target_weight_kg=75.0,
        created_at=CREATED,
        updated_at=CREATED,
    )
    values.update(overrides)
    return UserProfile(**values)


def make_workout(date, exercise_type=ExerciseType.RUNNING, intensity="6 mph",
                 duration_min=30, calories_burned=392, user_id=USER_ID) -> Workout:
    return Workout(
        id=uuid.uuid4(),
        user_id=user_id,
        exercise_type=exercise_type,
        intensity=intensity,
        duration_min=duration_min,
        date=date,
        calories_burned=calories_burned,
        created_at=CREATED,
    )


def make_food(name="Rice", quantity=1.0, calories=100.0, protein=0.0, carbs=0.0,
              fat=0.0, fiber=0.0, sugar=0.0, position=0) -> FoodItem:
    return FoodItem(
        id=uuid.uuid4(),
        position=position,
        name=name,
        quantity=quantity,
        unit=FoodUnit.SERVING,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        fiber=fiber,
        sugar=sugar,
    )


def make_meal(date, calories=500.0, meal_type=MealType.LUNCH, protein=30.0,
              carbs=50.0, fat=20.0, user_id=USER_ID) -> Meal:
    meal = Meal(
        id=uuid.uuid4(),
        user_id=user_id,
        name="Meal",
        meal_type=meal_type,
        date=date,
        foods=[make_food(calories=calories, protein=protein, carbs=carbs, fat=fat)],
        created_at=CREATED,
    )
    meal.recalculate_totals()
    return meal


def make_sleep(start, end, quality=SleepQuality.GOOD, date=None, user_id=USER_ID) -> SleepRecord:
    record = SleepRecord(
        id=uuid.uuid4(),
        user_id=user_id,
        sleep_start=start,
        sleep_end=end,
        date=date or end,
        quality=quality,
        created_at=CREATED,
    )
    record.recalculate_duration()
    return record


def make_progress(date, weight_kg, user_id=USER_ID, **measurements) -> ProgressEntry:
    return ProgressEntry(
        id=uuid.uuid4(),
        user_id=user_id,
        date=date,
        weight_kg=weight_kg,
        created_at=CREATED,
        **measurements,
    )


@pytest.fixture
def user():
    return make_user()


@pytest.fixture
def profile(user):
    return BodyProfile.from_user(user)
