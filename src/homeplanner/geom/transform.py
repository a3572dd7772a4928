"""Move and resize transforms for rooms.

Every function here is pure: it takes a room and a pointer delta and
returns a new room. Callers fire the preview variant continuously while
the pointer moves and the commit variant once on release; only the commit
variant snaps to the grid.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import Optional

from ..config import MIN_SIZE_FEET, PIXELS_PER_FOOT
from ..core.model import Dimension, Room, RoomType, Vector2, Wall, new_id
from ..core.units import feet_to_px, grid_step_px, px_to_feet, room_bounds, round_half_up, snap_px


class ResizeHandle(str, Enum):
    """The eight grab points around a selected room."""

    TOP_LEFT = "top-left"
    TOP = "top"
    TOP_RIGHT = "top-right"
    LEFT = "left"
    RIGHT = "right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM = "bottom"
    BOTTOM_RIGHT = "bottom-right"

    @property
    def horizontal(self) -> Optional[Wall]:
        """Horizontal edge moved by this handle (left/right), if any."""
        if "left" in self.value:
            return Wall.LEFT
        if "right" in self.value:
            return Wall.RIGHT
        return None

    @property
    def vertical(self) -> Optional[Wall]:
        """Vertical edge moved by this handle (top/bottom), if any."""
        if "top" in self.value:
            return Wall.TOP
        if "bottom" in self.value:
            return Wall.BOTTOM
        return None


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


def move_room(
    room: Room,
    dx: float,
    dy: float,
    commit: bool = False,
    snap: bool = True,
    ppf: float = PIXELS_PER_FOOT,
) -> Room:
    """Translate a room by a pixel delta.

    Args:
        room: Room being dragged.
        dx: Horizontal pointer delta since the drag started, in pixels.
        dy: Vertical pointer delta since the drag started, in pixels.
        commit: False while dragging, True on release.
        snap: Snap both axes to the grid on release.
        ppf: Pixels per foot.

    Returns:
        A new Room. On release the position is snapped (when enabled),
        rounded to whole pixels and kept non-negative.
    """
    x = room.position.x + dx
    y = room.position.y + dy

    if commit:
        if snap:
            x = snap_px(x, ppf)
            y = snap_px(y, ppf)
        x = max(0, round_half_up(x))
        y = max(0, round_half_up(y))

    return replace(room, position=Vector2(x, y))


def nudge_room(room: Room, direction: Direction, amount_feet: float, ppf: float = PIXELS_PER_FOOT) -> Room:
    """Shift a room by a fixed number of feet in one direction."""
    step = feet_to_px(amount_feet, ppf)
    dx, dy = {
        Direction.UP: (0.0, -step),
        Direction.DOWN: (0.0, step),
        Direction.LEFT: (-step, 0.0),
        Direction.RIGHT: (step, 0.0),
    }[Direction(direction)]
    position = Vector2(max(0.0, room.position.x + dx), max(0.0, room.position.y + dy))
    return replace(room, position=position)


def rotate_room(room: Room) -> Room:
    """Rotate a room by a quarter turn clockwise."""
    return replace(room, rotation=(room.rotation + 90) % 360)


def fit_features(room: Room) -> Room:
    """Narrow every feature that no longer fits on its wall to the wall length."""
    if all(f.size <= room.wall_length(f.wall) for f in room.features):
        return room
    features = tuple(replace(f, size=min(f.size, room.wall_length(f.wall))) for f in room.features)
    return replace(room, features=features)


def _resize_axis(
    start: float,
    end: float,
    delta: float,
    moves_start: bool,
    commit: bool,
    snap: bool,
    min_px: float,
    ppf: float,
) -> tuple[float, float]:
    """Resize one axis, keeping the edge opposite the handle fixed."""
    if moves_start:
        start = max(0.0, start + delta)
        if commit and snap:
            start = snap_px(start, ppf)
        if end - start < min_px:
            start = end - min_px
    else:
        end = end + delta
        if commit and snap:
            end = start + snap_px(end - start, ppf)
        if end - start < min_px:
            end = start + min_px
    return start, end


def resize_room(
    room: Room,
    handle: ResizeHandle,
    dx: float,
    dy: float,
    commit: bool = False,
    snap: bool = True,
    min_size_feet: float = MIN_SIZE_FEET,
    ppf: float = PIXELS_PER_FOOT,
) -> Room:
    """Resize a room by dragging one of its eight handles.

    A left or top component moves the room's position together with the
    edge, since the anchor is the opposite corner; a right or bottom
    component only changes the size. Sizes below ``min_size_feet`` are
    clamped so that the fixed corner never moves.

    Args:
        room: Room as it was when the drag started.
        handle: Handle being dragged.
        dx: Horizontal pointer delta in pixels.
        dy: Vertical pointer delta in pixels.
        commit: False while dragging, True on release.
        snap: Snap the moved edges to the grid on release.
        min_size_feet: Smallest allowed width and length.
        ppf: Pixels per foot.

    Returns:
        A new Room with updated position and dimensions. Features wider
        than their shortened wall are narrowed to the wall length.
    """
    handle = ResizeHandle(handle)
    left, top, right, bottom = room_bounds(room, ppf)
    min_px = feet_to_px(min_size_feet, ppf)

    if handle.horizontal is not None:
        left, right = _resize_axis(
            left, right, dx, handle.horizontal == Wall.LEFT, commit, snap, min_px, ppf
        )
    if handle.vertical is not None:
        top, bottom = _resize_axis(
            top, bottom, dy, handle.vertical == Wall.TOP, commit, snap, min_px, ppf
        )

    resized = replace(
        room,
        position=Vector2(left, top),
        dimensions=Dimension(px_to_feet(right - left, ppf), px_to_feet(bottom - top, ppf)),
    )
    return fit_features(resized)


def draw_room(
    start: Vector2,
    end: Vector2,
    commit: bool = False,
    name: str = "Hallway",
    room_type: RoomType = RoomType.HALLWAY,
    floor: int = 1,
    ppf: float = PIXELS_PER_FOOT,
) -> Optional[Room]:
    """Build a room from a rubber-band rectangle drawn between two points.

    While drawing the rectangle follows the pointer exactly. On release the
    position and size are snapped; a rectangle that collapses to less than
    half a grid step on either side is discarded.

    Returns:
        The drawn room, or None when the released rectangle is too small.
    """
    x, y = min(start.x, end.x), min(start.y, end.y)
    width_px, length_px = abs(end.x - start.x), abs(end.y - start.y)

    if commit:
        x, y = snap_px(x, ppf), snap_px(y, ppf)
        width_px, length_px = snap_px(width_px, ppf), snap_px(length_px, ppf)
        half_step = grid_step_px(ppf) / 2
        if width_px <= half_step or length_px <= half_step:
            return None

    return Room(
        id=new_id("room") if commit else "draw-preview",
        name=name,
        type=room_type,
        dimensions=Dimension(px_to_feet(width_px, ppf), px_to_feet(length_px, ppf)),
        position=Vector2(x, y),
        floor=floor,
    )
