"""
View Projection
===============

Pure functions turning a workout into what the map and the workout list show.

Both functions read only stored fields (including the stored pace/speed), so
a workout that was just created and one rebuilt from a snapshot render the
same way.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Tuple

from ..storage.data_models import Coordinates, Cycling, Running, Workout, WorkoutType

WORKOUT_ICONS = {
    WorkoutType.RUNNING: "🏃‍♂️",
    WorkoutType.CYCLING: "🚴‍♂️",
}

DURATION_ICON = "⏱"
METRIC_ICON = "⚡️"
CADENCE_ICON = "🦶🏼"
ELEVATION_ICON = "⛰"


@dataclass(frozen=True)
class MarkerContent:
    coordinates: Coordinates
    icon: str
    popup_text: str
    css_class: str


@dataclass(frozen=True)
class DetailField:
    icon: str
    value: float
    unit: str


@dataclass(frozen=True)
class ListEntry:
    """Everything one row of the workout list displays."""
    workout_type: WorkoutType
    workout_id: int
    description: str
    icon: str
    distance: float
    duration: float
    details: Tuple[DetailField, ...] = field(default_factory=tuple)

    @property
    def fields(self) -> List[DetailField]:
        """Distance, duration and the type specific fields, in display order."""
        return [
            DetailField(self.icon, self.distance, "km"),
            DetailField(DURATION_ICON, self.duration, "min"),
            *self.details,
        ]


def round_half_up(value: float, digits: int = 1) -> float:
    """Round to ``digits`` decimals with exact halves going up (6.25 -> 6.3)."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def workout_icon(workout_type: WorkoutType) -> str:
    try:
        return WORKOUT_ICONS[WorkoutType(workout_type)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown workout type: {workout_type!r}")


def marker_content(workout: Workout) -> MarkerContent:
    icon = workout_icon(workout.type)
    return MarkerContent(
        coordinates=tuple(workout.coordinates),
        icon=icon,
        popup_text=f"{icon} {workout.description}",
        css_class=f"{workout.type.value}-popup",
    )


def list_entry_content(workout: Workout) -> ListEntry:
    if workout.type is WorkoutType.RUNNING:
        details = _running_details(workout)
    elif workout.type is WorkoutType.CYCLING:
        details = _cycling_details(workout)
    else:
        raise ValueError(f"Unknown workout type: {workout.type!r}")

    return ListEntry(
        workout_type=workout.type,
        workout_id=workout.id,
        description=workout.description,
        icon=workout_icon(workout.type),
        distance=workout.distance,
        duration=workout.duration,
        details=details,
    )


def _running_details(workout: Running) -> Tuple[DetailField, ...]:
    return (
        DetailField(METRIC_ICON, round_half_up(workout.pace), "min/km"),
        DetailField(CADENCE_ICON, workout.cadence, "spm"),
    )


def _cycling_details(workout: Cycling) -> Tuple[DetailField, ...]:
    return (
        DetailField(METRIC_ICON, round_half_up(workout.speed), "km/h"),
        DetailField(ELEVATION_ICON, workout.elevation_gain, "m"),
    )
