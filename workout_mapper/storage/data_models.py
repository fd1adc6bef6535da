"""
Data models for the workout mapper.
Defines the running and cycling workout records and their snapshot format.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Optional, Tuple, Type

MONTHS = [
    'January', 'February', 'March', 'April', 'May', 'June', 'July',
    'August', 'September', 'October', 'November', 'December',
]


class WorkoutType(str, Enum):
    RUNNING = "running"
    CYCLING = "cycling"

    @property
    def label(self) -> str:
        return self.value.capitalize()


Coordinates = Tuple[float, float]


def describe(workout_type: WorkoutType, timestamp: datetime) -> str:
    """Build the "<Type> on <Month> <day>" label for a workout."""
    return f"{workout_type.label} on {MONTHS[timestamp.month - 1]} {timestamp.day}"


class WorkoutIdClock:
    """
    Millisecond timestamp ids that strictly increase.

    Two workouts created within the same millisecond get consecutive ids
    instead of colliding.
    """

    def __init__(self, now_ms: Optional[Callable[[], int]] = None):
        self._now_ms = now_ms or (lambda: time.time_ns() // 1_000_000)
        self._last = 0

    def next_id(self) -> int:
        self._last = max(self._now_ms(), self._last + 1)
        return self._last

    def advance_past(self, workout_id: int) -> None:
        """Make sure future ids are greater than ``workout_id``."""
        self._last = max(self._last, workout_id)


@dataclass(frozen=True)
class Workout:
    """
    Fields shared by every workout variant.

    Records are frozen once built, derived pace/speed included.
    ``click()`` is the only mutation.
    """
    id: int
    timestamp: datetime
    coordinates: Coordinates
    distance: float  # km
    duration: float  # min
    description: str
    interaction_count: int

    type: ClassVar[WorkoutType]

    def click(self) -> None:
        object.__setattr__(self, "interaction_count", self.interaction_count + 1)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the structural snapshot stored in the key-value store."""
        return {
            'id': self.id,
            'timestamp': self.timestamp.isoformat(),
            'coordinates': list(self.coordinates),
            'distance': self.distance,
            'duration': self.duration,
            'type': self.type.value,
            'description': self.description,
            'interactionCount': self.interaction_count,
        }

    @staticmethod
    def _base_kwargs(data: Dict[str, Any]) -> Dict[str, Any]:
        lat, lng = data['coordinates']
        return {
            'id': int(data['id']),
            'timestamp': datetime.fromisoformat(data['timestamp']),
            'coordinates': (float(lat), float(lng)),
            'distance': float(data['distance']),
            'duration': float(data['duration']),
            'description': str(data['description']),
            'interaction_count': int(data.get('interactionCount', 0)),
        }


@dataclass(frozen=True)
class Running(Workout):
    cadence: float  # steps/min
    pace: float  # min/km

    type: ClassVar[WorkoutType] = WorkoutType.RUNNING

    @classmethod
    def new(cls, workout_id: int, timestamp: datetime, coordinates: Coordinates,
            distance: float, duration: float, cadence: float) -> Running:
        return cls(
            id=workout_id,
            timestamp=timestamp,
            coordinates=tuple(coordinates),
            distance=distance,
            duration=duration,
            description=describe(cls.type, timestamp),
            interaction_count=0,
            cadence=cadence,
            pace=duration / distance,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['cadence'] = self.cadence
        data['pace'] = self.pace
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Running:
        return cls(
            cadence=float(data['cadence']),
            pace=float(data['pace']),
            **cls._base_kwargs(data),
        )


@dataclass(frozen=True)
class Cycling(Workout):
    elevation_gain: float  # m, may be negative
    speed: float  # km/h

    type: ClassVar[WorkoutType] = WorkoutType.CYCLING

    @classmethod
    def new(cls, workout_id: int, timestamp: datetime, coordinates: Coordinates,
            distance: float, duration: float, elevation_gain: float) -> Cycling:
        return cls(
            id=workout_id,
            timestamp=timestamp,
            coordinates=tuple(coordinates),
            distance=distance,
            duration=duration,
            description=describe(cls.type, timestamp),
            interaction_count=0,
            elevation_gain=elevation_gain,
            speed=distance / (duration / 60),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['elevationGain'] = self.elevation_gain
        data['speed'] = self.speed
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Cycling:
        return cls(
            elevation_gain=float(data['elevationGain']),
            speed=float(data['speed']),
            **cls._base_kwargs(data),
        )


WORKOUT_CLASSES: Dict[WorkoutType, Type[Workout]] = {
    WorkoutType.RUNNING: Running,
    WorkoutType.CYCLING: Cycling,
}


def workout_from_dict(data: Dict[str, Any]) -> Workout:
    """Rebuild a workout from its snapshot, keeping the stored derived values."""
    workout_type = WorkoutType(data['type'])
    return WORKOUT_CLASSES[workout_type].from_dict(data)
