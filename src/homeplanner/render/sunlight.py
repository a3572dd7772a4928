"""Sunlight exposure for windows.

For a given sun azimuth, each window whose wall faces along the sun
direction emits a light wedge: the quadrilateral swept by the window when
projected a long distance along the sun vector. Rooms do not occlude each
other; the wedges are a visual aid, not a shadow computation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from shapely.geometry import LineString, Polygon

from ..config import LIGHT_RAY_LENGTH_PX, PIXELS_PER_FOOT
from ..core.model import Feature, FeatureType, Room, Wall
from ..geom.placement import feature_endpoints, to_floor

PointXY = Tuple[float, float]

# Outward unit normals in screen space (y grows downwards)
WALL_NORMALS = {
    Wall.TOP: (0.0, -1.0),
    Wall.BOTTOM: (0.0, 1.0),
    Wall.LEFT: (-1.0, 0.0),
    Wall.RIGHT: (1.0, 0.0),
}


@dataclass(frozen=True)
class LightWedge:
    """Light cast through one window.

    Attributes:
        room_id: Room owning the window.
        feature_id: The window feature.
        points: Corners in floor pixels: both window endpoints followed by
            their projections, in drawing order.
    """

    room_id: str
    feature_id: str
    points: Tuple[PointXY, PointXY, PointXY, PointXY]

    @property
    def polygon(self) -> Polygon:
        return Polygon(self.points)


def sun_vector(azimuth_deg: float) -> PointXY:
    """Unit vector pointing away from the sun, in screen space."""
    azimuth = math.radians(azimuth_deg)
    return math.sin(azimuth), -math.cos(azimuth)


def rotated_normal(wall: Wall, rotation_deg: float) -> PointXY:
    """Outward normal of a wall after rotating the room."""
    nx, ny = WALL_NORMALS[Wall(wall)]
    angle = math.radians(rotation_deg)
    return (
        nx * math.cos(angle) - ny * math.sin(angle),
        nx * math.sin(angle) + ny * math.cos(angle),
    )


def window_wedge(
    room: Room,
    feature: Feature,
    azimuth_deg: float,
    ray_length: float = LIGHT_RAY_LENGTH_PX,
    ppf: float = PIXELS_PER_FOOT,
) -> LightWedge | None:
    """Light wedge for a single window, or None if its wall faces away.

    The wedge is swept in room-local pixels and then placed on the floor
    with the room, so it turns together with a rotated room.
    """
    sx, sy = sun_vector(azimuth_deg)
    nx, ny = rotated_normal(feature.wall, room.rotation)
    if sx * nx + sy * ny <= 0:
        return None

    (x1, y1), (x2, y2) = feature_endpoints(room, feature, ppf)
    dx, dy = sx * ray_length, sy * ray_length
    local = LineString([(x1, y1), (x2, y2), (x2 + dx, y2 + dy), (x1 + dx, y1 + dy)])

    p1, p2, p3, p4 = to_floor(room, local, ppf).coords
    return LightWedge(room_id=room.id, feature_id=feature.id, points=(p1, p2, p3, p4))


def cast_sunlight(
    azimuth_deg: float,
    rooms: Iterable[Room],
    ray_length: float = LIGHT_RAY_LENGTH_PX,
    ppf: float = PIXELS_PER_FOOT,
) -> List[LightWedge]:
    """Compute the light wedges of every lit window.

    Args:
        azimuth_deg: Sun azimuth in degrees (0 to 360).
        rooms: Visible rooms, usually those of the current floor.
        ray_length: Throw distance of each wedge in pixels.
        ppf: Pixels per foot.

    Returns:
        One wedge per window whose rotated outward normal has a positive
        dot product with the sun vector.
    """
    wedges: List[LightWedge] = []
    for room in rooms:
        for feature in room.features:
            if feature.type != FeatureType.WINDOW:
                continue
            wedge = window_wedge(room, feature, azimuth_deg, ray_length, ppf)
            if wedge is not None:
                wedges.append(wedge)
    return wedges
