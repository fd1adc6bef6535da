"""
Validation of raw workout form input.
"""
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import InvalidInput
from ..storage.data_models import WorkoutType

INVALID_INPUT_MESSAGE = "Inputs have to be positive numbers"


@dataclass
class FormInput:
    """Raw string values as emitted by the form."""
    workout_type: str
    distance: Optional[str] = ""
    duration: Optional[str] = ""
    cadence: Optional[str] = ""
    elevation: Optional[str] = ""


@dataclass
class ValidatedWorkout:
    workout_type: WorkoutType
    distance: float
    duration: float
    extra: float  # cadence or elevation gain


def parse_number(raw) -> float:
    """
    Convert a raw form value to a float like a browser numeric field would.

    Blank input becomes 0.0 and unparsable text becomes NaN, so both are
    rejected later by the finite/positive checks rather than here.
    """
    if raw is None:
        return 0.0
    if isinstance(raw, (int, float)):
        return float(raw)
    text = str(raw).strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return math.nan


def _all_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def _all_positive(*values: float) -> bool:
    return all(v > 0 for v in values)


def validate(workout_type, distance: float, duration: float, extra: float) -> Tuple[float, float, float]:
    """
    Check numeric workout input against the rules of its type.

    Running needs distance, duration and cadence finite and positive. Cycling
    needs distance and duration finite and positive and an elevation gain
    that is merely finite.

    Raises:
        InvalidInput: if any rule fails or the type is unknown
    """
    try:
        workout_type = WorkoutType(workout_type)
    except ValueError:
        raise InvalidInput(f"Unknown workout type: {workout_type!r}")

    if workout_type is WorkoutType.RUNNING:
        ok = _all_finite(distance, duration, extra) and _all_positive(distance, duration, extra)
    elif workout_type is WorkoutType.CYCLING:
        # Elevation gain may be negative
        ok = _all_finite(distance, duration, extra) and _all_positive(distance, duration)
    else:
        raise InvalidInput(f"Unknown workout type: {workout_type!r}")

    if not ok:
        raise InvalidInput(INVALID_INPUT_MESSAGE)
    return distance, duration, extra


def validate_form(form: FormInput) -> ValidatedWorkout:
    """Parse and validate a raw form, picking cadence or elevation by type."""
    try:
        workout_type = WorkoutType(form.workout_type)
    except ValueError:
        raise InvalidInput(f"Unknown workout type: {form.workout_type!r}")

    extra_raw = form.cadence if workout_type is WorkoutType.RUNNING else form.elevation
    distance, duration, extra = validate(
        workout_type,
        parse_number(form.distance),
        parse_number(form.duration),
        parse_number(extra_raw),
    )
    return ValidatedWorkout(workout_type, distance, duration, extra)
