"""
Interaction controller for the workout mapper.
Reacts to location, map, form, list and reset events and keeps the workout
store, the map overlay and the persisted snapshot consistent.
"""
import logging
from enum import Enum
from typing import Callable, List, Optional

from .location import LocationProvider
from .validator import FormInput, validate_form
from ..errors import InvalidInput, LocationUnavailable, PersistenceError, WorkoutMapperError
from ..frontend.map_display import MapDisplay
from ..frontend.view_projection import ListEntry, list_entry_content, marker_content
from ..storage.data_models import Coordinates, Workout
from ..storage.workout_store import WorkoutStore
from ..utils.config import get_config

logger = logging.getLogger(__name__)

CURRENT_POSITION_POPUP = "current position"
NO_PENDING_LOCATION_MESSAGE = "Click on the map to choose where the workout happened"


class ControllerState(Enum):
    UNINITIALIZED = "uninitialized"
    AWAITING_LOCATION = "awaiting_location"
    READY = "ready"
    PENDING_SUBMISSION = "pending_submission"
    MAP_UNAVAILABLE = "map_unavailable"


class InteractionController:
    """
    Orchestrates the workout store, the map display and the location provider.

    Collaborators are injected; ``notify`` receives user-visible error
    messages and ``reload`` is called after a reset so the view layer can be
    rebuilt from scratch.
    """

    def __init__(self, store: WorkoutStore, map_display: MapDisplay,
                 location_provider: LocationProvider,
                 notify: Optional[Callable[[str], None]] = None,
                 reload: Optional[Callable[[], None]] = None,
                 zoom: Optional[int] = None):
        self.store = store
        self.map_display = map_display
        self.location_provider = location_provider
        self._notify = notify
        self._reload = reload
        self.zoom = zoom if zoom is not None else get_config().map.zoom

        self.state = ControllerState.UNINITIALIZED
        self.pending_coordinates: Optional[Coordinates] = None
        self.last_error: Optional[WorkoutMapperError] = None
        self._list_entries: List[ListEntry] = []
        self._path_handle: Optional[int] = None

    # Startup

    def start(self) -> None:
        """Ask the location provider for the current position, once."""
        if self.state is not ControllerState.UNINITIALIZED:
            logger.debug("start() ignored in state %s", self.state.value)
            return
        self.state = ControllerState.AWAITING_LOCATION
        logger.info("Requesting current position")
        self.location_provider.request_position(self.on_position, self.on_position_error)

    def on_position(self, coordinates: Coordinates) -> None:
        if self.state is not ControllerState.AWAITING_LOCATION:
            logger.warning("Unexpected position in state %s", self.state.value)
            return

        coordinates = tuple(coordinates)
        self.map_display.set_viewpoint(coordinates, self.zoom)
        self.map_display.add_marker(coordinates, CURRENT_POSITION_POPUP)
        self.map_display.on_click(self.capture_location)
        self.state = ControllerState.READY
        logger.info("Map ready at %s", coordinates)

        try:
            self.store.load()
        except PersistenceError as e:
            self._surface(e)

        for workout in self.store.all():
            self._render(workout)
        self._redraw_path()

    def on_position_error(self, error: Exception) -> None:
        if not isinstance(error, LocationUnavailable):
            error = LocationUnavailable(f"Could not get your location: {error}")
        self.state = ControllerState.MAP_UNAVAILABLE
        self._surface(error)

    # Map and form events

    @property
    def map_available(self) -> bool:
        return self.state in (ControllerState.READY, ControllerState.PENDING_SUBMISSION)

    def _require_map(self) -> bool:
        if self.map_available:
            return True
        if self.state is ControllerState.MAP_UNAVAILABLE:
            self._surface(LocationUnavailable("The map is unavailable because your location could not be determined"))
        else:
            logger.debug("Map not ready in state %s", self.state.value)
        return False

    def capture_location(self, coordinates: Coordinates) -> None:
        """Remember the clicked spot for the next submission, replacing any earlier click."""
        if not self._require_map():
            return
        self.pending_coordinates = tuple(coordinates)
        self.state = ControllerState.PENDING_SUBMISSION
        logger.debug("Pending workout location %s", self.pending_coordinates)

    def submit(self, form: FormInput) -> Optional[Workout]:
        """
        Create a workout at the pending location from raw form input.

        Returns:
            The new workout, or None when nothing was created. Validation
            failures keep the pending location so the form can be resubmitted.
        """
        if not self._require_map():
            return None
        if self.pending_coordinates is None:
            self._surface(InvalidInput(NO_PENDING_LOCATION_MESSAGE))
            return None

        try:
            validated = validate_form(form)
        except InvalidInput as e:
            self._surface(e)
            return None

        workout = self.store.create(
            validated.workout_type,
            self.pending_coordinates,
            validated.distance,
            validated.duration,
            validated.extra,
        )
        self._render(workout)
        self._redraw_path()

        self.pending_coordinates = None
        self.state = ControllerState.READY
        self.last_error = None

        try:
            self.store.persist()
        except PersistenceError as e:
            self._surface(e)
        return workout

    def select_workout(self, workout_id: int) -> Optional[Workout]:
        """Recenter the map on a workout picked from the list."""
        workout = self.store.find_by_id(workout_id)
        if workout is None:
            logger.debug("Ignoring list click on workout %s, no longer stored", workout_id)
            return None
        if not self._require_map():
            return None
        workout.click()
        self.map_display.recenter(workout.coordinates, self.zoom, animate=True)
        return workout

    def reset(self) -> None:
        """Drop every workout and the snapshot, then reload the view layer."""
        try:
            self.store.reset()
        except PersistenceError as e:
            self._surface(e)
        self.pending_coordinates = None
        if self._path_handle is not None:
            self.map_display.remove_path(self._path_handle)
            self._path_handle = None
        self.map_display.clear()
        self._list_entries = []
        self.state = ControllerState.UNINITIALIZED
        logger.info("Workouts reset, reloading view")
        if self._reload is not None:
            self._reload()

    # Rendering

    def list_entries(self) -> List[ListEntry]:
        """List entries in store order."""
        return list(self._list_entries)

    def _render(self, workout: Workout) -> None:
        marker = marker_content(workout)
        self.map_display.add_marker(marker.coordinates, marker.popup_text)
        self._list_entries.append(list_entry_content(workout))

    def _redraw_path(self) -> None:
        if self.store.size() < 2:
            return
        if self._path_handle is not None:
            self.map_display.remove_path(self._path_handle)
        self._path_handle = self.map_display.draw_path([w.coordinates for w in self.store.all()])

    def _surface(self, error: WorkoutMapperError) -> None:
        self.last_error = error
        logger.warning("%s: %s", type(error).__name__, error)
        if self._notify is not None:
            self._notify(str(error))
