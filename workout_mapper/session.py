"""
Single-user session wiring for the Dash app.
Builds the controller with its collaborators and rebuilds everything on reset.
"""
import logging
import threading
from typing import Callable, List, Optional

from .core.controller import InteractionController
from .core.location import BrowserLocationProvider
from .frontend.map_display import FigureMapDisplay
from .storage.kv_store import JsonFileStore, KeyValueStore
from .storage.workout_store import WorkoutStore
from .utils.config import WorkoutMapperConfig, get_config

logger = logging.getLogger(__name__)


class MapperSession:
    """One controller plus the collaborators it was built with."""

    def __init__(self, kv_store: KeyValueStore, config: Optional[WorkoutMapperConfig] = None):
        config = config or get_config()
        self.messages: List[str] = []
        self.reload_requested = False
        self.map_display = FigureMapDisplay(config.map)
        self.location = BrowserLocationProvider()
        self.store = WorkoutStore(kv_store, key=config.storage.snapshot_key)
        self.controller = InteractionController(
            self.store,
            self.map_display,
            self.location,
            notify=self.messages.append,
            reload=self._request_reload,
            zoom=config.map.zoom,
        )

    def _request_reload(self) -> None:
        self.reload_requested = True

    def drain_messages(self) -> List[str]:
        messages = list(self.messages)
        self.messages.clear()
        return messages


class SessionManager:
    """
    Holds the current session and serialises event handling.

    Dash may run callbacks on several threads; the controller expects one
    event at a time, so every dispatch goes through ``lock``.
    """

    def __init__(self, factory: Callable[[], MapperSession]):
        self._factory = factory
        self.lock = threading.Lock()
        self.session = factory()

    def restart(self) -> MapperSession:
        logger.info("Restarting workout mapper session")
        self.session = self._factory()
        return self.session


def default_session_factory(config: Optional[WorkoutMapperConfig] = None) -> Callable[[], MapperSession]:
    config = config or get_config()
    kv_store = JsonFileStore(config.snapshot_path)
    return lambda: MapperSession(kv_store, config)
