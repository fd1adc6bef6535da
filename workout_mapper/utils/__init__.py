"""Utility modules for configuration."""

from .config import (
    WorkoutMapperConfig,
    MapSettings,
    StorageSettings,
    ServerSettings,
    get_config,
    reset_config
)

__all__ = [
    "WorkoutMapperConfig",
    "MapSettings",
    "StorageSettings",
    "ServerSettings",
    "get_config",
    "reset_config"
]
