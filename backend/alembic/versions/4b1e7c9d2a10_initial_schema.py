"""initial schema

Revision ID: 4b1e7c9d2a10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "4b1e7c9d2a10"
down_revision = None
branch_labels = None
depends_on = None

gender = sa.Enum("MALE", "FEMALE", "OTHER", name="gender")
activity_level = sa.Enum(
    "SEDENTARY", "LIGHTLY_ACTIVE", "MODERATELY_ACTIVE", "VERY_ACTIVE", "EXTREMELY_ACTIVE",
    name="activitylevel",
)
goal_type = sa.Enum("LOSE_WEIGHT", "MAINTAIN_WEIGHT", "GAIN_WEIGHT", name="goaltype")
exercise_type = sa.Enum(
    "RUNNING", "CYCLING", "SWIMMING", "YOGA", "WEIGHTLIFTING", "WALKING",
    "DANCING", "BASKETBALL", "SOCCER", "TENNIS", "HIKING",
    name="exercisetype",
)
meal_type = sa.Enum("BREAKFAST", "LUNCH", "DINNER", "SNACK", name="mealtype")
food_unit = sa.Enum(
    "GRAM", "KILOGRAM", "MILLILITER", "LITER", "CUP", "TABLESPOON", "TEASPOON",
    "PIECE", "SLICE", "SERVING",
    name="foodunit",
)
sleep_quality = sa.Enum("POOR", "FAIR", "GOOD", "EXCELLENT", name="sleepquality")


def _base_columns() -> list:
    return [
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def _owner_column() -> sa.Column:
    return sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False)


def _owner_fk(table: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        ["user_id"], ["user_profiles.id"],
        name=f"fk_{table}_user_id_user_profiles", ondelete="CASCADE",
    )


def upgrade() -> None:
    op.create_table(
        "user_profiles",
        *_base_columns(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("gender", gender, nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("weight_kg", sa.Float(), nullable=False),
        sa.Column("height_cm", sa.Float(), nullable=False),
        sa.Column("activity_level", activity_level, nullable=False),
        sa.Column("goal", goal_type, nullable=False),
        sa.Column("target_weight_kg", sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_user_profiles"),
    )
    op.create_index("ix_user_profiles_email", "user_profiles", ["email"], unique=True)

    op.create_table(
        "workouts",
        *_base_columns(),
        _owner_column(),
        sa.Column("exercise_type", exercise_type, nullable=False),
        sa.Column("intensity", sa.String(length=50), nullable=False),
        sa.Column("duration_min", sa.Integer(), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("calories_burned", sa.Integer(), nullable=False),
        sa.Column("notes", sa.String(length=500), nullable=True),
        _owner_fk("workouts"),
        sa.PrimaryKeyConstraint("id", name="pk_workouts"),
    )
    op.create_index("ix_workouts_user_id", "workouts", ["user_id"])
    op.create_index("ix_workouts_exercise_type", "workouts", ["exercise_type"])
    op.create_index("ix_workouts_date", "workouts", ["date"])

    op.create_table(
        "meals",
        *_base_columns(),
        _owner_column(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("meal_type", meal_type, nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("total_calories", sa.Float(), nullable=False),
        sa.Column("total_protein", sa.Float(), nullable=False),
        sa.Column("total_carbs", sa.Float(), nullable=False),
        sa.Column("total_fat", sa.Float(), nullable=False),
        sa.Column("total_fiber", sa.Float(), nullable=False),
        sa.Column("total_sugar", sa.Float(), nullable=False),
        sa.Column("notes", sa.String(length=500), nullable=True),
        _owner_fk("meals"),
        sa.PrimaryKeyConstraint("id", name="pk_meals"),
    )
    op.create_index("ix_meals_user_id", "meals", ["user_id"])
    op.create_index("ix_meals_meal_type", "meals", ["meal_type"])
    op.create_index("ix_meals_date", "meals", ["date"])

    op.create_table(
        "food_items",
        *_base_columns(),
        sa.Column("meal_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("unit", food_unit, nullable=False),
        sa.Column("calories", sa.Float(), nullable=False),
        sa.Column("protein", sa.Float(), nullable=False),
        sa.Column("carbs", sa.Float(), nullable=False),
        sa.Column("fat", sa.Float(), nullable=False),
        sa.Column("fiber", sa.Float(), nullable=False),
        sa.Column("sugar", sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(
            ["meal_id"], ["meals.id"],
            name="fk_food_items_meal_id_meals", ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_food_items"),
    )
    op.create_index("ix_food_items_meal_id", "food_items", ["meal_id"])

    op.create_table(
        "sleep_records",
        *_base_columns(),
        _owner_column(),
        sa.Column("sleep_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("sleep_end", sa.DateTime(timezone=True), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("duration_min", sa.Integer(), nullable=False),
        sa.Column("quality", sleep_quality, nullable=False),
        sa.Column("notes", sa.String(length=500), nullable=True),
        _owner_fk("sleep_records"),
        sa.PrimaryKeyConstraint("id", name="pk_sleep_records"),
    )
    op.create_index("ix_sleep_records_user_id", "sleep_records", ["user_id"])
    op.create_index("ix_sleep_records_date", "sleep_records", ["date"])

    op.create_table(
        "progress_entries",
        *_base_columns(),
        _owner_column(),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("weight_kg", sa.Float(), nullable=False),
        sa.Column("body_fat_percent", sa.Float(), nullable=True),
        sa.Column("muscle_mass_kg", sa.Float(), nullable=True),
        sa.Column("chest", sa.Float(), nullable=True),
        sa.Column("waist", sa.Float(), nullable=True),
        sa.Column("hips", sa.Float(), nullable=True),
        sa.Column("arms", sa.Float(), nullable=True),
        sa.Column("thighs", sa.Float(), nullable=True),
        sa.Column("notes", sa.String(length=500), nullable=True),
        _owner_fk("progress_entries"),
        sa.PrimaryKeyConstraint("id", name="pk_progress_entries"),
    )
    op.create_index("ix_progress_entries_user_id", "progress_entries", ["user_id"])
    op.create_index("ix_progress_entries_date", "progress_entries", ["date"])


def downgrade() -> None:
    for table in ("progress_entries", "sleep_records", "food_items", "meals", "workouts", "user_profiles"):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_type in (sleep_quality, food_unit, meal_type, exercise_type, goal_type, activity_level, gender):
        enum_type.drop(bind, checkfirst=True)
