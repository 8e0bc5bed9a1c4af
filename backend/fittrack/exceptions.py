"""Errors raised by the metrics and aggregation layer."""
from typing import Sequence


class MetricError(ValueError):
    """Base class for formula and aggregation failures."""


class InvalidInputError(MetricError):
    """A numeric input is outside the domain of a formula."""


class InvalidExerciseComboError(InvalidInputError):
    """The exercise type / intensity pair is not in the MET table."""

    def __init__(self, exercise_type: str, intensity: str, available: Sequence[str]):
        self.exercise_type = exercise_type
        self.intensity = intensity
        self.available = list(available)
        if self.available:
            message = (
                f"Invalid intensity for {exercise_type}. "
                f"Available intensities: {', '.join(self.available)}"
            )
        else:
            message = f"Unknown exercise type: {exercise_type}"
        super().__init__(message)


class DivisionByZeroError(MetricError, ZeroDivisionError):
    """A ratio is undefined because its denominator is zero."""
