"""ASCII schematic of a home project.

Rooms are rasterized into a character grid: borders drawn with ``+``,
``-`` and ``|``, doors, windows and openings marked on their walls and the
room name and size written in the middle. The text is stored alongside
saved projects and embedded in reports.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import Dict, Iterable, List, Sequence, Tuple

from ..config import DIAGRAM_PADDING, DIAGRAM_SCALE_X, DIAGRAM_SCALE_Y, PIXELS_PER_FOOT
from ..core.model import FeatureType, Room, Wall
from ..core.units import px_to_feet, round_half_up

LOGGER = logging.getLogger(__name__)

EMPTY_FLOOR_TEXT = "No rooms on this floor."
EMPTY_PROJECT_TEXT = "This project is empty."

FEATURE_GLYPHS = {
    FeatureType.DOOR: "D",
    FeatureType.WINDOW: "W",
    FeatureType.OPENING: "=",
}
WALL_GLYPHS = {"-", "|"}

Grid = List[List[str]]


class DiagramBoundsError(IndexError):
    """Raised in strict mode when a glyph falls outside the diagram grid."""


def format_feet(value: float) -> str:
    """Format a length in its shortest exact form, without a trailing ``.0``."""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _room_cells(
    room: Room, offset_x: float, offset_y: float, scale_x: float, scale_y: float, ppf: float
) -> Tuple[int, int, int, int]:
    x = round_half_up(px_to_feet(room.position.x, ppf) * scale_x + offset_x)
    y = round_half_up(px_to_feet(room.position.y, ppf) * scale_y + offset_y)
    w = round_half_up(room.dimensions.width * scale_x)
    h = round_half_up(room.dimensions.length * scale_y)
    return x, y, w, h


def _in_grid(grid: Grid, row: int, col: int) -> bool:
    return 0 <= row < len(grid) and 0 <= col < len(grid[0])


def _draw_border(grid: Grid, x: int, y: int, w: int, h: int) -> None:
    for j in range(y, y + h):
        for i in range(x, x + w):
            if not _in_grid(grid, j, i):
                continue

            is_top, is_bottom = j == y, j == y + h - 1
            is_left, is_right = i == x, i == x + w - 1

            if (is_top or is_bottom) and (is_left or is_right):
                char = "+"
            elif is_top or is_bottom:
                char = "-"
            elif is_left or is_right:
                char = "|"
            else:
                continue

            existing = grid[j][i]
            if existing == " ":
                grid[j][i] = char
            elif existing != char and existing in WALL_GLYPHS:
                # Two rooms share this cell
                grid[j][i] = "+"


def _draw_features(grid: Grid, room: Room, x: int, y: int, w: int, h: int, strict: bool) -> None:
    for feature in room.features:
        glyph = FEATURE_GLYPHS.get(FeatureType(feature.type))
        if glyph is None:
            continue

        offset = feature.offset / 100
        wall = Wall(feature.wall)
        if wall.is_horizontal:
            row = y if wall == Wall.TOP else y + h - 1
            col = x + round_half_up(w * offset)
            wall_glyph = "-"
        else:
            row = y + round_half_up(h * offset)
            col = x if wall == Wall.LEFT else x + w - 1
            wall_glyph = "|"

        if not _in_grid(grid, row, col):
            if strict:
                raise DiagramBoundsError(
                    f"Feature '{feature.id}' of room '{room.id}' maps to cell ({row}, {col}) "
                    f"outside a {len(grid)}x{len(grid[0])} grid"
                )
            LOGGER.debug("Skipping feature %s of room %s: cell (%d, %d) out of bounds", feature.id, room.id, row, col)
            continue

        if grid[row][col] == wall_glyph:
            grid[row][col] = glyph


def _write_label(grid: Grid, row: int, center_x: int, text: str) -> None:
    start = center_x - len(text) // 2
    for i, char in enumerate(text):
        if _in_grid(grid, row, start + i) and grid[row][start + i] == " ":
            grid[row][start + i] = char


def render_floor(
    rooms: Sequence[Room],
    scale_x: float = DIAGRAM_SCALE_X,
    scale_y: float = DIAGRAM_SCALE_Y,
    padding: int = DIAGRAM_PADDING,
    strict: bool = False,
    ppf: float = PIXELS_PER_FOOT,
) -> str:
    """Render the rooms of one floor as text.

    Args:
        rooms: Rooms of a single floor.
        scale_x: Characters per foot horizontally.
        scale_y: Characters per foot vertically.
        padding: Blank cells around the drawing.
        strict: Raise DiagramBoundsError instead of skipping glyphs that
            fall outside the grid.
        ppf: Pixels per foot.

    Returns:
        The diagram with trailing spaces and blank rows removed.
    """
    if not rooms:
        return EMPTY_FLOOR_TEXT

    min_x = min(px_to_feet(r.position.x, ppf) for r in rooms)
    min_y = min(px_to_feet(r.position.y, ppf) for r in rooms)
    max_x = max(px_to_feet(r.position.x, ppf) + r.dimensions.width for r in rooms)
    max_y = max(px_to_feet(r.position.y, ppf) + r.dimensions.length for r in rooms)

    grid_width = math.ceil((max_x - min_x) * scale_x)
    grid_height = math.ceil((max_y - min_y) * scale_y)
    grid: Grid = [[" "] * (grid_width + padding * 2) for _ in range(grid_height + padding * 2)]

    offset_x = -min_x * scale_x + padding
    offset_y = -min_y * scale_y + padding
    cells = [(room, _room_cells(room, offset_x, offset_y, scale_x, scale_y, ppf)) for room in rooms]

    for _, (x, y, w, h) in cells:
        _draw_border(grid, x, y, w, h)

    for room, (x, y, w, h) in cells:
        _draw_features(grid, room, x, y, w, h, strict)

    for room, (x, y, w, h) in cells:
        name = room.name
        size = f"{format_feet(room.dimensions.width)}'x{format_feet(room.dimensions.length)}'"
        center_x, center_y = x + w // 2, y + h // 2
        if h > 2 and w > len(name):
            _write_label(grid, center_y - 1, center_x, name)
        if h > 2 and w > len(size):
            _write_label(grid, center_y, center_x, size)

    lines = ("".join(row).rstrip() for row in grid)
    return "\n".join(line for line in lines if line.strip())


def group_by_floor(rooms: Iterable[Room]) -> Dict[int, List[Room]]:
    floors: Dict[int, List[Room]] = defaultdict(list)
    for room in rooms:
        floors[room.floor or 1].append(room)
    return dict(floors)


def render_project(rooms: Iterable[Room], **kwargs) -> str:
    """Render every floor, in ascending order, each under its own header.

    Keyword arguments are passed to :func:`render_floor`.
    """
    floors = group_by_floor(rooms)
    if not floors:
        return EMPTY_PROJECT_TEXT

    parts = []
    for floor in sorted(floors):
        parts.append(f"--- Floor {floor} Diagram ---\n\n{render_floor(floors[floor], **kwargs)}\n\n")
    return "".join(parts).strip()
