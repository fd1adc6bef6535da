"""
Frontend module for the Workout Mapper
======================================

Everything the map and the workout list display:

- view_projection: pure record -> marker / list entry functions
- map_display: plotly map implementation of the map collaborator
- workout_list: Dash rendering of list entries
"""

from .view_projection import MarkerContent, ListEntry, DetailField, marker_content, list_entry_content
from .map_display import MapDisplay, FigureMapDisplay, CLICK_GRID_CURVE
from .workout_list import render_workout_item, render_workout_list

__all__ = [
    'MarkerContent',
    'ListEntry',
    'DetailField',
    'marker_content',
    'list_entry_content',
    'MapDisplay',
    'FigureMapDisplay',
    'CLICK_GRID_CURVE',
    'render_workout_item',
    'render_workout_list',
]
