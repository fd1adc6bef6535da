"""Workout list rendering for the sidebar."""

from dash import html

from .view_projection import ListEntry


def format_value(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def render_workout_item(entry: ListEntry) -> html.Li:
    """Render one list entry; the id dict lets a click identify its workout."""
    return html.Li(
        id={"type": "workout-item", "index": entry.workout_id},
        className=f"workout workout--{entry.workout_type.value}",
        n_clicks=0,
        children=[
            html.H2(entry.description, className="workout__title"),
            *[
                html.Div(className="workout__details", children=[
                    html.Span(detail.icon, className="workout__icon"),
                    html.Span(format_value(detail.value), className="workout__value"),
                    html.Span(detail.unit, className="workout__unit"),
                ])
                for detail in entry.fields
            ],
        ],
    )


def render_workout_list(entries):
    """Newest workout first, like the list grows under the form."""
    return [render_workout_item(entry) for entry in reversed(list(entries))]
