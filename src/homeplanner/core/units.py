"""Unit conversion and grid snapping.

Room sizes are stored in feet while positions live in blueprint pixels.
These helpers convert between the two and quantize pixel values to the
editor grid.
"""

from __future__ import annotations

import math
from typing import Tuple

from ..config import GRID_SNAP_FEET, PIXELS_PER_FOOT
from .model import Feature, Room


def round_half_up(value: float) -> int:
    """Round to the nearest integer, resolving ties towards +infinity."""
    return math.floor(value + 0.5)


def feet_to_px(feet: float, ppf: float = PIXELS_PER_FOOT) -> float:
    return feet * ppf


def px_to_feet(px: float, ppf: float = PIXELS_PER_FOOT) -> float:
    return px / ppf


def grid_step_px(ppf: float = PIXELS_PER_FOOT, snap_feet: float = GRID_SNAP_FEET) -> float:
    """Size of one grid cell in pixels."""
    return ppf * snap_feet


def snap_px(px: float, ppf: float = PIXELS_PER_FOOT, snap_feet: float = GRID_SNAP_FEET) -> float:
    """Snap a pixel value to the nearest grid line.

    Args:
        px: Pixel value to snap.
        ppf: Pixels per foot.
        snap_feet: Grid quantum in feet.

    Returns:
        The nearest multiple of ``ppf * snap_feet``.
    """
    step = grid_step_px(ppf, snap_feet)
    return round_half_up(px / step) * step


def snap_feet(feet: float, snap_feet: float = GRID_SNAP_FEET) -> float:
    """Snap a length in feet to the grid quantum."""
    return round_half_up(feet / snap_feet) * snap_feet


def room_bounds(room: Room, ppf: float = PIXELS_PER_FOOT) -> Tuple[float, float, float, float]:
    """Axis-aligned bounding box of a room in pixels.

    Returns:
        Tuple ``(left, top, right, bottom)``.
    """
    left = room.position.x
    top = room.position.y
    return (
        left,
        top,
        left + feet_to_px(room.dimensions.width, ppf),
        top + feet_to_px(room.dimensions.length, ppf),
    )


def feature_span(room: Room, feature: Feature) -> Tuple[float, float]:
    """Start and end of a feature along its wall, in feet from the wall start."""
    center = room.wall_length(feature.wall) * feature.offset / 100
    return center - feature.size / 2, center + feature.size / 2
