"""Sleep and body progress tracking models."""
import enum
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Enum, String, Float, Integer, ForeignKey, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from fittrack.models.base import Base
from fittrack.services.metrics import bmi, is_healthy_sleep, sleep_duration, sleep_quality_score

MEASUREMENT_FIELDS = ("chest", "waist", "hips", "arms", "thighs")


class SleepQuality(str, enum.Enum):
    """Self-reported sleep quality."""
    POOR = "poor"
    FAIR = "fair"
    GOOD = "good"
    EXCELLENT = "excellent"


class SleepRecord(Base):
    """A night of sleep."""

    __tablename__ = "sleep_records"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("user_profiles.id", ondelete="CASCADE"), index=True
    )

    sleep_start: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    sleep_end: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)

    # Derived from sleep_start and sleep_end
    duration_min: Mapped[int] = mapped_column(Integer, default=0)

    quality: Mapped[SleepQuality] = mapped_column(Enum(SleepQuality), default=SleepQuality.GOOD)
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    def recalculate_duration(self) -> int:
        """Recalculate minutes slept from start and end times."""
        self.duration_min = sleep_duration(self.sleep_start, self.sleep_end)
        return self.duration_min

    @property
    def quality_score(self) -> int:
        return sleep_quality_score(self.quality)

    @property
    def is_healthy_duration(self) -> bool:
        return is_healthy_sleep(self.duration_min or 0)


class ProgressEntry(Base):
    """Body weight and composition check-in."""

    __tablename__ = "progress_entries"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("user_profiles.id", ondelete="CASCADE"), index=True
    )

    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)

    # Body composition
    weight_kg: Mapped[float] = mapped_column(Float)
    body_fat_percent: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    muscle_mass_kg: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # Measurements in cm
    chest: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    waist: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    hips: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    arms: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    thighs: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    def bmi_for(self, height_cm: float) -> float:
        """BMI of this entry's weight at the given height. Never stored."""
        return bmi(self.weight_kg, height_cm)
