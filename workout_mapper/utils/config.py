"""
Configuration module for the workout mapper.
Provides settings groups with environment overrides instead of hardcoded values.
"""
from dataclasses import dataclass
from typing import Dict, Any
import os

DATA_DIR_ENV = "WORKOUT_MAPPER_DATA_DIR"
PORT_ENV = "WORKOUT_MAPPER_PORT"


@dataclass
class MapSettings:
    """Map view configuration."""
    zoom: int = 13  # Zoom used for the initial viewpoint and recentering
    map_style: str = "open-street-map"  # Tile style for the plotly map
    path_color: str = "red"
    path_width: float = 3.0
    path_opacity: float = 0.5
    click_grid_size: int = 60  # Points per side of the invisible click grid
    click_grid_span_deg: float = 0.1  # Degrees covered by the click grid at the base zoom


@dataclass
class StorageSettings:
    """Snapshot storage configuration."""
    data_dir: str = "workout_data"  # Directory for the JSON key-value file
    snapshot_file: str = "storage.json"  # Key-value document inside data_dir
    snapshot_key: str = "workouts"  # Key holding the workout snapshot


@dataclass
class ServerSettings:
    """Dash server configuration."""
    host: str = "127.0.0.1"
    port: int = 8050
    debug: bool = False


class WorkoutMapperConfig:
    """Main configuration class for the workout mapper."""

    def __init__(self):
        self.map = MapSettings()
        self.storage = StorageSettings()
        self.server = ServerSettings()
        self._user_inputs: Dict[str, Any] = {}
        self._apply_environment()

    def _apply_environment(self):
        data_dir = os.environ.get(DATA_DIR_ENV)
        if data_dir:
            self.storage.data_dir = data_dir
            self._user_inputs['storage_data_dir'] = data_dir

        port = os.environ.get(PORT_ENV)
        if port:
            try:
                self.server.port = int(port)
            except ValueError:
                raise ValueError(f"{PORT_ENV} must be an integer, got {port!r}")
            self._user_inputs['server_port'] = self.server.port

    def _update(self, group: str, settings: Any, **kwargs):
        for key, value in kwargs.items():
            if hasattr(settings, key):
                setattr(settings, key, value)
                self._user_inputs[f'{group}_{key}'] = value
            else:
                raise ValueError(f"Unknown {group} setting: {key}")

    def update_map_settings(self, **kwargs):
        """Update map settings dynamically."""
        self._update('map', self.map, **kwargs)

    def update_storage_settings(self, **kwargs):
        """Update storage settings dynamically."""
        self._update('storage', self.storage, **kwargs)

    def update_server_settings(self, **kwargs):
        """Update server settings dynamically."""
        self._update('server', self.server, **kwargs)

    @property
    def snapshot_path(self) -> str:
        return os.path.join(self.storage.data_dir, self.storage.snapshot_file)

    def get_summary(self) -> Dict[str, Any]:
        """Get configuration summary."""
        return {
            'map': {
                'zoom': self.map.zoom,
                'map_style': self.map.map_style,
            },
            'storage': {
                'snapshot_path': self.snapshot_path,
                'snapshot_key': self.storage.snapshot_key,
            },
            'server': {
                'host': self.server.host,
                'port': self.server.port,
            },
            'user_inputs': self._user_inputs
        }

    def validate_configuration(self) -> bool:
        """Validate that required configuration is set."""
        errors = []

        if self.map.zoom < 0:
            errors.append("Map zoom must be non-negative")

        if self.map.click_grid_size < 2:
            errors.append("Click grid needs at least 2 points per side")

        if not self.storage.snapshot_key:
            errors.append("Snapshot key must not be empty")

        if errors:
            raise ValueError(f"Configuration errors: {'; '.join(errors)}")

        return True


# Global configuration instance
config = WorkoutMapperConfig()


def get_config() -> WorkoutMapperConfig:
    """Get the global configuration instance."""
    return config


def reset_config() -> WorkoutMapperConfig:
    """Reset configuration to defaults."""
    global config
    config = WorkoutMapperConfig()
    return config
