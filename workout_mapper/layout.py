"""UI layout for the Workout Mapper Dash app."""

from dash import dcc, html
import dash_bootstrap_components as dbc

from .storage.data_models import WorkoutType

HIDDEN = {"display": "none"}
VISIBLE = {}


def _form_row(label: str, input_id: str, placeholder: str, row_id: str = None, style=None):
    extra = {"id": row_id} if row_id else {}
    return dbc.Row(
        [
            dbc.Label(label, html_for=input_id, width=4),
            dbc.Col(dbc.Input(id=input_id, type="number", placeholder=placeholder), width=8),
        ],
        className="mb-2",
        style=style if style is not None else VISIBLE,
        **extra,
    )


def build_workout_form():
    """Workout form, hidden until the map is clicked."""
    return html.Div(
        id="workout-form",
        style=HIDDEN,
        children=dbc.Card(dbc.CardBody([
            dbc.Row(
                [
                    dbc.Label("Type", html_for="input-type", width=4),
                    dbc.Col(dcc.Dropdown(
                        id="input-type",
                        options=[{"label": t.label, "value": t.value} for t in WorkoutType],
                        value=WorkoutType.RUNNING.value,
                        clearable=False,
                    ), width=8),
                ],
                className="mb-2",
            ),
            _form_row("Distance", "input-distance", "km"),
            _form_row("Duration", "input-duration", "min"),
            _form_row("Cadence", "input-cadence", "step/min", row_id="row-cadence"),
            _form_row("Elev Gain", "input-elevation", "meters", row_id="row-elevation", style=HIDDEN),
            dbc.Button("OK", id="workout-form-submit", color="success", n_clicks=0, className="mt-2"),
        ])),
        className="mb-3",
    )


def build_layout():
    """Construct the application layout: sidebar with form and list, map on the right."""
    return dbc.Container(
        fluid=True,
        children=[
            dcc.Location(id="url", refresh=True),
            dcc.Geolocation(id="geolocation"),

            dbc.Row([
                dbc.Col(
                    width=4,
                    className="pt-3",
                    children=[
                        html.H1("Workout Mapper", className="h3"),
                        html.P("Click on the map to log a workout at that spot.", className="text-muted"),
                        dbc.Alert(id="status", color="danger", is_open=False, dismissable=True),
                        build_workout_form(),
                        html.Ul(id="workout-list", className="workouts list-unstyled"),
                        dbc.Button("Reset workouts", id="reset-button", color="secondary", outline=True,
                                   n_clicks=0, className="mt-3"),
                    ],
                ),
                dbc.Col(
                    width=8,
                    children=dcc.Graph(
                        id="workout-map",
                        figure={},
                        style={"height": "100vh"},
                        config={"displayModeBar": False, "scrollZoom": True},
                    ),
                ),
            ]),
        ],
    )
