"""
Workout store for the workout mapper.
Owns the ordered workout collection and its persisted snapshot.
"""
import json
import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple

import pandas as pd

from .data_models import (
    Coordinates,
    Cycling,
    Running,
    Workout,
    WorkoutIdClock,
    WorkoutType,
    workout_from_dict,
)
from .kv_store import KeyValueStore
from ..errors import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_KEY = "workouts"


class WorkoutStore:
    """
    Ordered collection of workouts backed by a key-value snapshot.

    Collection order is creation order; the connecting path on the map is
    drawn in this order too.
    """

    def __init__(self, kv_store: KeyValueStore, key: str = DEFAULT_SNAPSHOT_KEY,
                 clock: Optional[WorkoutIdClock] = None,
                 now: Optional[Callable[[], datetime]] = None):
        self.kv_store = kv_store
        self.key = key
        self.clock = clock or WorkoutIdClock()
        self._now = now or datetime.now
        self._workouts: List[Workout] = []

    def create(self, workout_type: WorkoutType, coordinates: Coordinates,
               distance: float, duration: float, extra: float) -> Workout:
        """
        Build and append a workout from already validated input.

        Args:
            workout_type: Running or cycling
            coordinates: (latitude, longitude) of the workout
            distance: Distance in km
            duration: Duration in minutes
            extra: Cadence for running, elevation gain for cycling

        Returns:
            The new workout, already appended to the collection
        """
        workout_type = WorkoutType(workout_type)
        workout_id = self.clock.next_id()
        timestamp = self._now()

        if workout_type is WorkoutType.RUNNING:
            workout: Workout = Running.new(workout_id, timestamp, coordinates, distance, duration, cadence=extra)
        elif workout_type is WorkoutType.CYCLING:
            workout = Cycling.new(workout_id, timestamp, coordinates, distance, duration, elevation_gain=extra)
        else:
            raise ValueError(f"Unknown workout type: {workout_type}")

        self._workouts.append(workout)
        logger.info("Created %s workout %d (%d total)", workout_type.value, workout.id, len(self._workouts))
        return workout

    def serialize(self) -> str:
        """Snapshot of the whole collection as a JSON array."""
        return json.dumps([workout.to_dict() for workout in self._workouts])

    def rehydrate(self, blob: Optional[str]) -> None:
        """
        Replace the collection with the workouts stored in ``blob``.

        A missing snapshot leaves the collection empty. A malformed one also
        leaves it empty and raises PersistenceError.
        """
        self._workouts = []
        if not blob:
            logger.info("No stored workouts found")
            return

        try:
            rows = json.loads(blob)
            if not isinstance(rows, list):
                raise ValueError("snapshot is not a list")
            workouts = [workout_from_dict(row) for row in rows]
        except (ValueError, KeyError, TypeError) as e:
            raise PersistenceError(f"Stored workouts could not be read: {e}") from e

        for workout in workouts:
            self.clock.advance_past(workout.id)
        self._workouts = workouts
        logger.info("Loaded %d stored workouts", len(workouts))

    def load(self) -> None:
        """Rehydrate from the key-value store."""
        self.rehydrate(self.kv_store.get(self.key))

    def persist(self) -> None:
        """Write the current snapshot to the key-value store."""
        blob = self.serialize()
        try:
            self.kv_store.set(self.key, blob)
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Could not save workouts: {e}") from e

    def reset(self) -> None:
        """Drop every workout and remove the stored snapshot."""
        self._workouts = []
        try:
            self.kv_store.remove(self.key)
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Could not remove stored workouts: {e}") from e
        logger.info("Workout store reset")

    def size(self) -> int:
        return len(self._workouts)

    def __len__(self) -> int:
        return len(self._workouts)

    def all(self) -> Tuple[Workout, ...]:
        return tuple(self._workouts)

    def find_by_id(self, workout_id: int) -> Optional[Workout]:
        for workout in self._workouts:
            if workout.id == workout_id:
                return workout
        return None

    def to_dataframe(self) -> pd.DataFrame:
        """Tabular view of the snapshot, one row per workout in store order."""
        rows = []
        for workout in self._workouts:
            row = workout.to_dict()
            lat, lng = row.pop('coordinates')
            row['latitude'] = lat
            row['longitude'] = lng
            rows.append(row)
        df = pd.DataFrame(rows)
        if not df.empty:
            df['timestamp'] = pd.to_datetime(df['timestamp'])
        return df
