"""Opening synthesis between adjacent rooms.

An opening is a doorless gap in the wall two rooms share. It is persisted
as a pair of ``opening`` features, one on each room, that describe the same
physical stretch of wall.
"""

from __future__ import annotations

from typing import Callable, Tuple

from shapely.geometry import Point as ShapelyPoint

from ..config import PIXELS_PER_FOOT, SNAP_THRESHOLD_PX
from ..core.model import Feature, FeatureType, Room, new_id
from ..core.topology import Adjacency
from ..core.units import px_to_feet
from .placement import feature_segment


def _axis_origin(room: Room, horizontal: bool) -> float:
    return room.position.x if horizontal else room.position.y


def synthesize_opening(
    adjacency: Adjacency,
    id_factory: Callable[[str], str] = new_id,
    ppf: float = PIXELS_PER_FOOT,
) -> Tuple[Room, Room]:
    """Turn an adjacency into a linked pair of opening features.

    The opening spans the whole shared segment. Its offset on each room is
    the segment midpoint as a percentage of that room's wall length; the
    neighbor's offset is derived from the neighbor's own position.

    Args:
        adjacency: The shared wall to open.
        id_factory: Generates feature ids from a prefix.
        ppf: Pixels per foot.

    Returns:
        Tuple ``(target, neighbor)`` of updated rooms, each with one new
        opening appended. Both must be written together.
    """
    target, neighbor = adjacency.target, adjacency.neighbor
    seg_start, seg_end = adjacency.segment
    size = seg_end - seg_start
    horizontal = adjacency.wall_on_target.is_horizontal

    target_offset = (seg_start + size / 2) / target.wall_length(adjacency.wall_on_target) * 100

    # Start of the segment on the floor, re-expressed from the neighbor's origin
    global_start = _axis_origin(target, horizontal) + seg_start * ppf
    neighbor_start = px_to_feet(global_start - _axis_origin(neighbor, horizontal), ppf)
    neighbor_offset = (neighbor_start + size / 2) / neighbor.wall_length(adjacency.wall_on_neighbor) * 100

    target_feature = Feature(
        id=id_factory("feature"),
        type=FeatureType.OPENING,
        wall=adjacency.wall_on_target,
        offset=target_offset,
        size=size,
    )
    neighbor_feature = Feature(
        id=id_factory("feature"),
        type=FeatureType.OPENING,
        wall=adjacency.wall_on_neighbor,
        offset=neighbor_offset,
        size=size,
    )

    return target.with_features(target_feature), neighbor.with_features(neighbor_feature)


def openings_coincide(
    room_a: Room,
    feature_a: Feature,
    room_b: Room,
    feature_b: Feature,
    tolerance: float = SNAP_THRESHOLD_PX,
    ppf: float = PIXELS_PER_FOOT,
) -> bool:
    """Check that two features describe the same stretch of wall on the floor.

    Both features are placed in floor pixels and their endpoints compared
    pairwise, in either order.
    """
    a_start, a_end = (ShapelyPoint(c) for c in feature_segment(room_a, feature_a, ppf).coords)
    b_start, b_end = (ShapelyPoint(c) for c in feature_segment(room_b, feature_b, ppf).coords)

    same_order = a_start.distance(b_start) < tolerance and a_end.distance(b_end) < tolerance
    reversed_order = a_start.distance(b_end) < tolerance and a_end.distance(b_start) < tolerance
    return same_order or reversed_order
