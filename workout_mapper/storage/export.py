from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
import pandas as pd

from .workout_store import WorkoutStore

EXPORT_COLUMNS = [
    "id",
    "timestamp",
    "type",
    "description",
    "latitude",
    "longitude",
    "distance",
    "duration",
    "cadence",
    "pace",
    "elevationGain",
    "speed",
    "interactionCount",
]


def export_workouts_csv(store: WorkoutStore, path: Union[str, Path]) -> int:
    """Write every workout to ``path`` in store order and return the row count."""
    df = store.to_dataframe()
    df = df.reindex(columns=EXPORT_COLUMNS)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return len(df)


def summarize_by_type(store: WorkoutStore) -> pd.DataFrame:
    """Totals per workout type with overall pace (running) and speed (cycling)."""
    columns = ["type", "workouts", "total_distance_km", "total_duration_min", "overall_pace_min_km", "overall_speed_kmh"]
    df = store.to_dataframe()
    if df.empty:
        return pd.DataFrame(columns=columns)

    grouped = df.groupby("type", sort=False).agg(
        workouts=("id", "count"),
        total_distance_km=("distance", "sum"),
        total_duration_min=("duration", "sum"),
    ).reset_index()

    distance = grouped["total_distance_km"].to_numpy(dtype=float)
    duration = grouped["total_duration_min"].to_numpy(dtype=float)
    is_running = (grouped["type"] == "running").to_numpy()
    is_cycling = (grouped["type"] == "cycling").to_numpy()
    grouped["overall_pace_min_km"] = np.where(is_running, duration / distance, np.nan)
    grouped["overall_speed_kmh"] = np.where(is_cycling, distance / (duration / 60), np.nan)
    return grouped[columns]
