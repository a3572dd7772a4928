"""Placement of room-local geometry on the floor.

Room-local coordinates are pixels measured from the room's top-left corner
before rotation. A room is rotated about its center and then translated by
its position, matching how the blueprint draws it.
"""

from __future__ import annotations

from typing import Tuple

from shapely import affinity
from shapely.geometry import LineString, Polygon, box
from shapely.geometry.base import BaseGeometry

from ..config import PIXELS_PER_FOOT
from ..core.model import Feature, Room, Wall
from ..core.units import feet_to_px

PointXY = Tuple[float, float]


def room_size_px(room: Room, ppf: float = PIXELS_PER_FOOT) -> PointXY:
    return feet_to_px(room.dimensions.width, ppf), feet_to_px(room.dimensions.length, ppf)


def feature_endpoints(room: Room, feature: Feature, ppf: float = PIXELS_PER_FOOT) -> Tuple[PointXY, PointXY]:
    """Endpoints of a feature in room-local pixels.

    The first endpoint is the one closer to the wall start.
    """
    width_px, length_px = room_size_px(room, ppf)
    half = feet_to_px(feature.size, ppf) / 2
    wall = Wall(feature.wall)

    if wall.is_horizontal:
        center = width_px * feature.offset / 100
        y = 0.0 if wall == Wall.TOP else length_px
        return (center - half, y), (center + half, y)

    center = length_px * feature.offset / 100
    x = 0.0 if wall == Wall.LEFT else width_px
    return (x, center - half), (x, center + half)


def to_floor(room: Room, geometry: BaseGeometry, ppf: float = PIXELS_PER_FOOT) -> BaseGeometry:
    """Move room-local geometry into floor coordinates (rotation, then position)."""
    width_px, length_px = room_size_px(room, ppf)
    placed = geometry
    if room.rotation % 360:
        placed = affinity.rotate(placed, room.rotation, origin=(width_px / 2, length_px / 2))
    return affinity.translate(placed, room.position.x, room.position.y)


def feature_segment(room: Room, feature: Feature, ppf: float = PIXELS_PER_FOOT) -> LineString:
    """Feature extent along its wall as a line in floor pixels."""
    return to_floor(room, LineString(feature_endpoints(room, feature, ppf)), ppf)


def room_footprint(room: Room, ppf: float = PIXELS_PER_FOOT) -> Polygon:
    """Footprint of a room on the floor, rotation included."""
    width_px, length_px = room_size_px(room, ppf)
    return to_floor(room, box(0, 0, width_px, length_px), ppf)
