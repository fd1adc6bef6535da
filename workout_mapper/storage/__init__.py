"""Workout records, the workout store and snapshot persistence."""

from .data_models import (
    WorkoutType,
    Workout,
    Running,
    Cycling,
    WorkoutIdClock,
    workout_from_dict
)
from .kv_store import KeyValueStore, MemoryStore, JsonFileStore
from .workout_store import WorkoutStore
from .export import export_workouts_csv, summarize_by_type

__all__ = [
    # Data models
    "WorkoutType",
    "Workout",
    "Running",
    "Cycling",
    "WorkoutIdClock",
    "workout_from_dict",

    # Key-value stores
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",

    # Collection and export
    "WorkoutStore",
    "export_workouts_csv",
    "summarize_by_type"
]
