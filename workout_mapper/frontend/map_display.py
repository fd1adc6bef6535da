"""
Map Display
===========

Map collaborator used by the interaction controller, plus a plotly
implementation rendered through a ``dcc.Graph``.

Plotly maps only report clicks that land on a trace point, so the figure
carries an invisible grid of points around the current view. Clicking
anywhere on the map hits the nearest grid point and reports its coordinates.
"""

import logging
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Tuple

import numpy as np
import plotly.graph_objects as go

from ..storage.data_models import Coordinates
from ..utils.config import MapSettings, get_config

logger = logging.getLogger(__name__)

ClickCallback = Callable[[Coordinates], None]

# Trace index of the click grid inside the figure
CLICK_GRID_CURVE = 0


class MapDisplay(Protocol):
    def set_viewpoint(self, coordinates: Coordinates, zoom: int) -> None: ...

    def add_marker(self, coordinates: Coordinates, popup: str) -> int: ...

    def recenter(self, coordinates: Coordinates, zoom: int, animate: bool = True) -> None: ...

    def draw_path(self, coordinates: Sequence[Coordinates]) -> int: ...

    def remove_path(self, handle: int) -> None: ...

    def on_click(self, callback: ClickCallback) -> None: ...

    def clear(self) -> None: ...


class FigureMapDisplay:
    """
    Keeps markers, paths and the viewpoint, and renders them as a plotly figure.

    Handles returned by ``add_marker`` and ``draw_path`` are plain integers
    unique within one display instance.
    """

    def __init__(self, settings: Optional[MapSettings] = None):
        self.settings = settings or get_config().map
        self.center: Optional[Coordinates] = None
        self.zoom: float = self.settings.zoom
        self.animate = False
        self._markers: Dict[int, Tuple[Coordinates, str]] = {}
        self._paths: Dict[int, List[Coordinates]] = {}
        self._click_callbacks: List[ClickCallback] = []
        self._next_handle = 1
        self._view_revision = 0

    def _handle(self) -> int:
        handle = self._next_handle
        self._next_handle += 1
        return handle

    @property
    def has_viewpoint(self) -> bool:
        return self.center is not None

    @property
    def marker_count(self) -> int:
        return len(self._markers)

    @property
    def path_count(self) -> int:
        return len(self._paths)

    def set_viewpoint(self, coordinates: Coordinates, zoom: int) -> None:
        self.center = tuple(coordinates)
        self.zoom = zoom
        self.animate = False
        self._view_revision += 1

    def recenter(self, coordinates: Coordinates, zoom: int, animate: bool = True) -> None:
        self.center = tuple(coordinates)
        self.zoom = zoom
        self.animate = animate
        self._view_revision += 1

    def follow_view(self, coordinates: Coordinates, zoom: float) -> None:
        """Track a pan/zoom made by the user without forcing the view."""
        self.center = tuple(coordinates)
        self.zoom = zoom
        self.animate = False

    def add_marker(self, coordinates: Coordinates, popup: str) -> int:
        handle = self._handle()
        self._markers[handle] = (tuple(coordinates), popup)
        return handle

    def draw_path(self, coordinates: Sequence[Coordinates]) -> int:
        handle = self._handle()
        self._paths[handle] = [tuple(c) for c in coordinates]
        logger.debug("Drew path %d through %d points", handle, len(coordinates))
        return handle

    def remove_path(self, handle: int) -> None:
        self._paths.pop(handle, None)

    def on_click(self, callback: ClickCallback) -> None:
        self._click_callbacks.append(callback)

    def clear(self) -> None:
        """Drop markers, paths, click handlers and the viewpoint."""
        self._markers.clear()
        self._paths.clear()
        self._click_callbacks.clear()
        self.center = None
        self.zoom = self.settings.zoom
        self.animate = False
        self._view_revision += 1

    def click(self, coordinates: Coordinates) -> None:
        """Dispatch a map click to every registered handler."""
        for callback in self._click_callbacks:
            callback(tuple(coordinates))

    def click_grid(self) -> Tuple[np.ndarray, np.ndarray]:
        """Latitude/longitude arrays of the invisible click grid around the view."""
        if self.center is None:
            return np.array([]), np.array([])
        lat, lng = self.center
        span = self.settings.click_grid_span_deg * 2.0 ** (self.settings.zoom - self.zoom)
        n = self.settings.click_grid_size
        lats = np.clip(np.linspace(lat - span, lat + span, n), -85.0, 85.0)
        lngs = np.linspace(lng - 2 * span, lng + 2 * span, n)
        grid_lat, grid_lng = np.meshgrid(lats, lngs)
        return grid_lat.ravel(), grid_lng.ravel()

    def figure(self) -> go.Figure:
        fig = go.Figure()

        grid_lat, grid_lng = self.click_grid()
        fig.add_trace(go.Scattermap(
            lat=grid_lat,
            lon=grid_lng,
            mode="markers",
            marker=dict(size=14, opacity=0),
            hoverinfo="none",
            showlegend=False,
            name="click-grid",
        ))

        for handle, points in self._paths.items():
            fig.add_trace(go.Scattermap(
                lat=[p[0] for p in points],
                lon=[p[1] for p in points],
                mode="lines",
                line=dict(color=self.settings.path_color, width=self.settings.path_width),
                opacity=self.settings.path_opacity,
                hoverinfo="skip",
                showlegend=False,
                name=f"path-{handle}",
            ))

        if self._markers:
            markers = list(self._markers.values())
            fig.add_trace(go.Scattermap(
                lat=[m[0][0] for m in markers],
                lon=[m[0][1] for m in markers],
                text=[m[1] for m in markers],
                mode="markers+text",
                textposition="top center",
                marker=dict(size=12, color="#00c46a"),
                hoverinfo="text",
                showlegend=False,
                name="workouts",
            ))

        center = self.center or (0.0, 0.0)
        fig.update_layout(
            map=dict(
                style=self.settings.map_style,
                center=dict(lat=center[0], lon=center[1]),
                zoom=self.zoom if self.center else 1,
            ),
            margin=dict(l=0, r=0, t=0, b=0),
            uirevision=self._view_revision,
            clickmode="event",
        )
        if self.animate:
            fig.update_layout(transition=dict(duration=1000, easing="cubic-in-out"))
        return fig
