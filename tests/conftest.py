from datetime import datetime

import pytest

from workout_mapper.core.controller import InteractionController
from workout_mapper.core.location import StaticLocationProvider
from workout_mapper.storage.data_models import WorkoutIdClock
from workout_mapper.storage.kv_store import MemoryStore
from workout_mapper.storage.workout_store import WorkoutStore
from workout_mapper.utils.config import DATA_DIR_ENV, PORT_ENV, reset_config

HOME = (51.5074, -0.1278)
CREATED_AT = datetime(2024, 3, 7, 8, 30)


class FakeMapDisplay:
    """Records every call the controller makes to the map."""

    def __init__(self):
        self.viewpoints = []
        self.markers = {}
        self.paths = {}
        self.recenters = []
        self.click_callbacks = []
        self.removed_paths = []
        self.clears = 0
        self._next = 1

    def _handle(self):
        handle = self._next
        self._next += 1
        return handle

    def set_viewpoint(self, coordinates, zoom):
        self.viewpoints.append((coordinates, zoom))

    def add_marker(self, coordinates, popup):
        handle = self._handle()
        self.markers[handle] = (coordinates, popup)
        return handle

    def recenter(self, coordinates, zoom, animate=True):
        self.recenters.append((coordinates, zoom, animate))

    def draw_path(self, coordinates):
        handle = self._handle()
        self.paths[handle] = list(coordinates)
        return handle

    def remove_path(self, handle):
        self.removed_paths.append(handle)
        self.paths.pop(handle, None)

    def on_click(self, callback):
        self.click_callbacks.append(callback)

    def click(self, coordinates):
        for callback in self.click_callbacks:
            callback(coordinates)

    def clear(self):
        self.clears += 1
        self.markers.clear()
        self.paths.clear()
        self.click_callbacks.clear()


class FailingStore(MemoryStore):
    def set(self, key, value):
        raise OSError("disk full")


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    monkeypatch.delenv(PORT_ENV, raising=False)
    yield reset_config()
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    monkeypatch.delenv(PORT_ENV, raising=False)
    reset_config()


@pytest.fixture
def kv():
    return MemoryStore()


@pytest.fixture
def clock():
    # Frozen wall clock: every id comes from the collision path
    return WorkoutIdClock(now_ms=lambda: 1_700_000_000_000)


@pytest.fixture
def store(kv, clock):
    return WorkoutStore(kv, clock=clock, now=lambda: CREATED_AT)


@pytest.fixture
def map_display():
    return FakeMapDisplay()


@pytest.fixture
def notices():
    return []


@pytest.fixture
def make_controller(store, map_display, notices):
    def _make(location=HOME, **kwargs):
        return InteractionController(
            store,
            map_display,
            StaticLocationProvider(location),
            notify=notices.append,
            zoom=13,
            **kwargs,
        )
    return _make


@pytest.fixture
def ready_controller(make_controller):
    controller = make_controller()
    controller.start()
    return controller
