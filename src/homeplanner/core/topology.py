"""Topology analysis for home floor plans.

This module finds which rooms share a wall, builds a connectivity graph
of the rooms on a floor and provides the simple overlap test used when
rooms are placed. Nothing computed here is stored on the rooms: adjacency
is always derived from the current geometry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import networkx as nx
from shapely.geometry import Polygon, box

from ..config import PIXELS_PER_FOOT, SNAP_THRESHOLD_PX
from .model import FeatureType, Project, Room, Wall
from .units import feature_span, px_to_feet, room_bounds

# Minimum shared area (square pixels) for two rooms to count as overlapping
MIN_OVERLAP_AREA = 1e-6


@dataclass(frozen=True)
class Adjacency:
    """A wall shared between two rooms.

    Attributes:
        target: The room the search started from.
        neighbor: The room touching it.
        wall_on_target: Wall of the target that touches the neighbor.
        wall_on_neighbor: Wall of the neighbor that touches the target.
        segment: Shared stretch in feet, measured from the start of the
            target's wall.
    """

    target: Room
    neighbor: Room
    wall_on_target: Wall
    wall_on_neighbor: Wall
    segment: Tuple[float, float]

    @property
    def length(self) -> float:
        """Length of the shared segment in feet."""
        return self.segment[1] - self.segment[0]


# (wall on target, wall on neighbor) in detection order
_WALL_PAIRS = (
    (Wall.RIGHT, Wall.LEFT),
    (Wall.LEFT, Wall.RIGHT),
    (Wall.BOTTOM, Wall.TOP),
    (Wall.TOP, Wall.BOTTOM),
)


def _wall_coordinate(bounds: Tuple[float, float, float, float], wall: Wall) -> float:
    left, top, right, bottom = bounds
    return {Wall.LEFT: left, Wall.RIGHT: right, Wall.TOP: top, Wall.BOTTOM: bottom}[wall]


def find_adjacent(
    target: Room,
    rooms: Iterable[Room],
    tolerance: float = SNAP_THRESHOLD_PX,
    ppf: float = PIXELS_PER_FOOT,
) -> List[Adjacency]:
    """Find every room sharing a wall with the target room.

    Only rooms on the same floor are considered. A wall pair matches when
    the two wall coordinates are closer than ``tolerance`` pixels and the
    rooms' perpendicular extents overlap by a positive length. One wall may
    border several neighbors; all matches are returned.

    Args:
        target: Room whose neighbors are searched.
        rooms: All rooms of the project (the target itself is skipped).
        tolerance: Maximum distance in pixels between touching walls.
        ppf: Pixels per foot.

    Returns:
        List of adjacency records, in room order then wall-pair order.
    """
    target_floor = target.floor or 1
    t_bounds = room_bounds(target, ppf)
    t_left, t_top, t_right, t_bottom = t_bounds
    adjacencies: List[Adjacency] = []

    for other in rooms:
        if other.id == target.id or (other.floor or 1) != target_floor:
            continue

        o_bounds = room_bounds(other, ppf)
        o_left, o_top, o_right, o_bottom = o_bounds

        for wall_on_target, wall_on_neighbor in _WALL_PAIRS:
            gap = _wall_coordinate(t_bounds, wall_on_target) - _wall_coordinate(o_bounds, wall_on_neighbor)
            if abs(gap) >= tolerance:
                continue

            # Overlap runs along the shared wall, measured from the target's wall origin
            if wall_on_target.is_horizontal:
                start, end, origin = max(t_left, o_left), min(t_right, o_right), t_left
            else:
                start, end, origin = max(t_top, o_top), min(t_bottom, o_bottom), t_top

            if end <= start:
                continue

            adjacencies.append(
                Adjacency(
                    target=target,
                    neighbor=other,
                    wall_on_target=wall_on_target,
                    wall_on_neighbor=wall_on_neighbor,
                    segment=(px_to_feet(start - origin, ppf), px_to_feet(end - origin, ppf)),
                )
            )

    return adjacencies


def has_opening_on_segment(room: Room, wall: Wall, segment: Tuple[float, float]) -> bool:
    """Check whether an opening on ``wall`` overlaps the given segment (feet)."""
    for feature in room.features:
        if feature.type != FeatureType.OPENING or feature.wall != wall:
            continue
        start, end = feature_span(room, feature)
        if min(end, segment[1]) > max(start, segment[0]):
            return True
    return False


def build_room_graph(project: Project, floor: Optional[int] = None) -> nx.Graph:
    """Build a graph representing which rooms share walls.

    Creates a NetworkX graph where nodes are rooms and edges represent
    adjacencies. Each edge records the walls involved, the shared segment
    and whether an opening already connects the two rooms there.

    Args:
        project: Project containing the rooms.
        floor: Restrict the graph to one floor. All floors when None.

    Returns:
        NetworkX Graph with room connectivity.
    """
    rooms = project.rooms if floor is None else project.rooms_on_floor(floor)
    G = nx.Graph()

    for room in rooms:
        G.add_node(room.id, name=room.name, floor=room.floor or 1)

    for room in rooms:
        for adj in find_adjacent(room, rooms):
            if G.has_edge(room.id, adj.neighbor.id):
                continue
            G.add_edge(
                room.id,
                adj.neighbor.id,
                walls=(adj.wall_on_target.value, adj.wall_on_neighbor.value),
                segment=adj.segment,
                has_opening=has_opening_on_segment(room, adj.wall_on_target, adj.segment),
            )

    return G


def room_outline(room: Room, ppf: float = PIXELS_PER_FOOT) -> Polygon:
    """Axis-aligned footprint of a room as a Shapely polygon (pixels)."""
    return box(*room_bounds(room, ppf))


def rooms_overlap(a: Room, b: Room, ppf: float = PIXELS_PER_FOOT) -> bool:
    """Return True if two rooms on the same floor share interior area.

    Rooms that only touch along a wall are not considered overlapping.
    """
    if (a.floor or 1) != (b.floor or 1):
        return False
    return room_outline(a, ppf).intersection(room_outline(b, ppf)).area > MIN_OVERLAP_AREA
