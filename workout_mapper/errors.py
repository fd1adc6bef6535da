"""Error types raised by the workout mapper core."""


class WorkoutMapperError(Exception):
    """Base class for all recoverable workout mapper errors."""


class InvalidInput(WorkoutMapperError, ValueError):
    """Form input failed validation; no workout was created."""


class LocationUnavailable(WorkoutMapperError):
    """The location provider could not supply a position."""


class PersistenceError(WorkoutMapperError):
    """Reading or writing the workout snapshot failed."""