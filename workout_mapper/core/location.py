"""
Location providers supplying the starting map position.

A provider is asked exactly once for the current position and answers through
one of the two callbacks it was given.
"""
import logging
from typing import Any, Callable, Optional, Protocol

from ..errors import LocationUnavailable
from ..storage.data_models import Coordinates

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[Coordinates], None]
FailureCallback = Callable[[Exception], None]


class LocationProvider(Protocol):
    def request_position(self, on_success: SuccessCallback, on_failure: FailureCallback) -> None: ...


class StaticLocationProvider:
    """Answers immediately with fixed coordinates, or fails when there are none."""

    def __init__(self, coordinates: Optional[Coordinates] = None):
        self.coordinates = coordinates

    def request_position(self, on_success: SuccessCallback, on_failure: FailureCallback) -> None:
        if self.coordinates is None:
            on_failure(LocationUnavailable("No location configured"))
            return
        on_success(tuple(self.coordinates))


class BrowserLocationProvider:
    """
    Bridges the browser geolocation component to the controller.

    ``request_position`` only records the callbacks; the Dash callback that
    receives ``dcc.Geolocation`` output calls ``resolve`` or ``reject`` later.
    Only the first answer is delivered.
    """

    def __init__(self):
        self._on_success: Optional[SuccessCallback] = None
        self._on_failure: Optional[FailureCallback] = None
        self._answered = False

    @property
    def pending(self) -> bool:
        return self._on_success is not None and not self._answered

    def request_position(self, on_success: SuccessCallback, on_failure: FailureCallback) -> None:
        self._on_success = on_success
        self._on_failure = on_failure
        self._answered = False

    def resolve(self, position: Any) -> bool:
        """Deliver a ``dcc.Geolocation`` position dict. Returns False if nobody is waiting."""
        if not self.pending:
            return False
        try:
            coordinates = (float(position['lat']), float(position['lon']))
        except (KeyError, TypeError, ValueError) as e:
            return self.reject(f"Malformed position {position!r}: {e}")
        self._answered = True
        self._on_success(coordinates)
        return True

    def reject(self, error: Any) -> bool:
        """Deliver a geolocation failure. Returns False if nobody is waiting."""
        if not self.pending:
            return False
        self._answered = True
        message = error.get('message') if isinstance(error, dict) else error
        logger.warning("Browser geolocation failed: %s", message)
        self._on_failure(LocationUnavailable(f"Could not get your location: {message}"))
        return True
