"""
Workout Mapper - log running and cycling workouts on a map.

Workouts are validated from raw form input, kept in creation order, drawn as
markers joined by a single path, and persisted as a JSON snapshot.
"""

from .core.controller import InteractionController, ControllerState
from .core.location import StaticLocationProvider, BrowserLocationProvider
from .core.validator import FormInput, validate, validate_form
from .errors import (
    WorkoutMapperError,
    InvalidInput,
    LocationUnavailable,
    PersistenceError
)
from .frontend.map_display import FigureMapDisplay
from .frontend.view_projection import marker_content, list_entry_content
from .storage.data_models import WorkoutType, Workout, Running, Cycling
from .storage.kv_store import MemoryStore, JsonFileStore
from .storage.workout_store import WorkoutStore
from .utils.config import get_config, reset_config

__version__ = "1.0.0"

__all__ = [
    # Orchestration
    "InteractionController",
    "ControllerState",
    "StaticLocationProvider",
    "BrowserLocationProvider",

    # Validation
    "FormInput",
    "validate",
    "validate_form",

    # Errors
    "WorkoutMapperError",
    "InvalidInput",
    "LocationUnavailable",
    "PersistenceError",

    # Views
    "FigureMapDisplay",
    "marker_content",
    "list_entry_content",

    # Data management
    "WorkoutType",
    "Workout",
    "Running",
    "Cycling",
    "MemoryStore",
    "JsonFileStore",
    "WorkoutStore",

    # Configuration
    "get_config",
    "reset_config"
]
