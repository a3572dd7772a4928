"""Geometry utilities for home planning.

This module provides the pure geometric transforms applied to rooms:
dragging and resizing, opening synthesis between adjacent rooms and the
placement of room-local shapes on the floor.
"""

from .openings import openings_coincide, synthesize_opening
from .placement import feature_endpoints, feature_segment, room_footprint, to_floor
from .transform import (
    Direction,
    ResizeHandle,
    draw_room,
    fit_features,
    move_room,
    nudge_room,
    resize_room,
    rotate_room,
)

__all__ = [
    "Direction",
    "ResizeHandle",
    "draw_room",
    "feature_endpoints",
    "feature_segment",
    "fit_features",
    "move_room",
    "nudge_room",
    "openings_coincide",
    "resize_room",
    "room_footprint",
    "rotate_room",
    "synthesize_opening",
    "to_floor",
]
