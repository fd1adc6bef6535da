"""Core modules for validation, location lookup and event orchestration."""

from .validator import FormInput, ValidatedWorkout, parse_number, validate, validate_form
from .location import LocationProvider, StaticLocationProvider, BrowserLocationProvider
from .controller import InteractionController, ControllerState

__all__ = [
    "FormInput",
    "ValidatedWorkout",
    "parse_number",
    "validate",
    "validate_form",
    "LocationProvider",
    "StaticLocationProvider",
    "BrowserLocationProvider",
    "InteractionController",
    "ControllerState"
]
