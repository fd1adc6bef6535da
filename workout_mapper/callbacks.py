"""Callbacks registration for the Workout Mapper app."""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from dash import ALL, Dash, Input, Output, State, ctx, no_update

from .core.controller import ControllerState
from .core.validator import FormInput
from .frontend.map_display import CLICK_GRID_CURVE
from .frontend.workout_list import render_workout_list
from .layout import HIDDEN, VISIBLE
from .session import SessionManager
from .storage.data_models import Coordinates, WorkoutType

logger = logging.getLogger(__name__)


@dataclass
class ViewUpdate:
    """What one handled event changes in the page."""
    figure: Any
    workout_list: List[Any]
    messages: List[str] = field(default_factory=list)
    show_form: bool = False
    clear_form: bool = False
    reload: bool = False


def point_from_click(click_data) -> Optional[Coordinates]:
    """Coordinates of a click on the map's click grid, ignoring clicks on markers and paths."""
    if not click_data:
        return None
    for point in click_data.get("points", []):
        if point.get("curveNumber") == CLICK_GRID_CURVE and "lat" in point and "lon" in point:
            return float(point["lat"]), float(point["lon"])
    return None


def view_from_relayout(relayout_data) -> Optional[Tuple[Coordinates, float]]:
    """Center and zoom after the user panned or zoomed the map."""
    if not relayout_data:
        return None
    center = relayout_data.get("map.center")
    zoom = relayout_data.get("map.zoom")
    if not center or zoom is None:
        return None
    return (float(center["lat"]), float(center["lon"])), float(zoom)


def handle_event(manager: SessionManager, trigger_id, prop: Optional[str], value, form: FormInput) -> ViewUpdate:
    """
    Route one Dash event to the controller and describe the resulting view.

    ``trigger_id``/``prop`` identify the component property that fired;
    ``None`` means the initial page load.
    """
    with manager.lock:
        session = manager.session
        controller = session.controller
        clear_form = False

        if controller.state is ControllerState.UNINITIALIZED:
            controller.start()

        if trigger_id == "geolocation" and prop == "position":
            session.location.resolve(value)
        elif trigger_id == "geolocation" and prop == "position_error":
            session.location.reject(value)
        elif trigger_id == "workout-map" and prop == "clickData":
            coordinates = point_from_click(value)
            if coordinates is not None:
                session.map_display.click(coordinates)
        elif trigger_id == "workout-map" and prop == "relayoutData":
            view = view_from_relayout(value)
            if view is not None:
                session.map_display.follow_view(*view)
        elif trigger_id == "workout-form-submit":
            clear_form = controller.submit(form) is not None
        elif trigger_id == "reset-button":
            controller.reset()
        elif isinstance(trigger_id, dict) and trigger_id.get("type") == "workout-item":
            # Freshly rendered items fire with n_clicks=0
            if value:
                controller.select_workout(trigger_id["index"])

        messages = session.drain_messages()
        if session.reload_requested:
            manager.restart()
            return ViewUpdate(figure=no_update, workout_list=[], messages=messages, reload=True)

        return ViewUpdate(
            figure=session.map_display.figure(),
            workout_list=render_workout_list(controller.list_entries()),
            messages=messages,
            show_form=controller.state is ControllerState.PENDING_SUBMISSION,
            clear_form=clear_form,
        )


def register_callbacks(app: Dash, manager: SessionManager) -> None:
    """Register all application callbacks."""

    @app.callback(
        Output("row-cadence", "style"),
        Output("row-elevation", "style"),
        Input("input-type", "value"),
    )
    def toggle_elevation_fields(workout_type):
        if workout_type == WorkoutType.CYCLING.value:
            return HIDDEN, VISIBLE
        return VISIBLE, HIDDEN

    @app.callback(
        Output("workout-map", "figure"),
        Output("workout-list", "children"),
        Output("status", "children"),
        Output("status", "is_open"),
        Output("workout-form", "style"),
        Output("input-distance", "value"),
        Output("input-duration", "value"),
        Output("input-cadence", "value"),
        Output("input-elevation", "value"),
        Output("url", "href"),
        Input("geolocation", "position"),
        Input("geolocation", "position_error"),
        Input("workout-map", "clickData"),
        Input("workout-map", "relayoutData"),
        Input("workout-form-submit", "n_clicks"),
        Input("reset-button", "n_clicks"),
        Input({"type": "workout-item", "index": ALL}, "n_clicks"),
        State("input-type", "value"),
        State("input-distance", "value"),
        State("input-duration", "value"),
        State("input-cadence", "value"),
        State("input-elevation", "value"),
    )
    def dispatch(_position, _position_error, _click, _relayout, _submit, _reset, _items,
                 workout_type, distance, duration, cadence, elevation):
        trigger_id = ctx.triggered_id
        prop = None
        value = None
        if trigger_id is not None and ctx.triggered:
            prop = ctx.triggered[0]["prop_id"].rsplit(".", 1)[-1]
            value = ctx.triggered[0]["value"]

        form = FormInput(workout_type, distance, duration, cadence, elevation)
        update = handle_event(manager, trigger_id, prop, value, form)

        cleared = ("",) * 4 if update.clear_form else (no_update,) * 4
        status = " ".join(update.messages)
        return (
            update.figure,
            update.workout_list,
            status,
            bool(update.messages),
            VISIBLE if update.show_form else HIDDEN,
            *cleared,
            "/" if update.reload else no_update,
        )
