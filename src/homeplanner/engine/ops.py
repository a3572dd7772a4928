"""Operations engine for home planning.

This module provides the edits that can be applied to a project: dragging,
resizing and rotating rooms, adding and removing rooms and wall features,
editing furniture and pets, and opening the wall between two adjacent
rooms.

Every operation receives a ``commit`` flag. While a gesture is in progress
the engine calls operations with ``commit=False`` and they must return the
unsnapped preview; the final call uses ``commit=True``.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Protocol, Sequence

from ..config import (
    DEFAULT_FEATURE_SIZES,
    DEFAULT_ROOM_POSITION_PX,
    DEFAULT_ROOM_SIZE_FEET,
    DEFAULT_WALL_COLOR,
    MIN_SIZE_FEET,
    ROOM_COLORS,
)
from ..core.model import (
    ROTATIONS,
    Dimension,
    Feature,
    FeatureType,
    Furniture,
    Pet,
    PetType,
    Project,
    Room,
    RoomType,
    Vector2,
    Wall,
    new_id,
)
from ..core.topology import find_adjacent, has_opening_on_segment
from ..core.units import snap_feet
from ..geom.openings import synthesize_opening
from ..geom.transform import (
    Direction,
    ResizeHandle,
    draw_room,
    fit_features,
    move_room,
    nudge_room,
    resize_room,
    rotate_room,
)
from .validators import InvalidOperation


class Operation(Protocol):
    """Protocol for home planning operations.

    All operations must implement this interface to be compatible
    with the operation registry and execution engine.
    """

    def precheck(self, project: Project, **kwargs: Any) -> bool:
        """Validate that the operation can be applied to the project.

        Args:
            project: The project to validate against.
            **kwargs: Operation-specific parameters.

        Returns:
            True if the operation can be applied.

        Raises:
            InvalidOperation: If validation fails with a specific reason.
        """
        ...

    def apply(self, project: Project, **kwargs: Any) -> Project:
        """Apply the operation to the project.

        Args:
            project: The project to modify.
            **kwargs: Operation-specific parameters.

        Returns:
            A new Project with the operation applied.
        """
        ...


def _require_room(project: Project, room: str) -> Room:
    try:
        return project.room(room)
    except KeyError:
        raise InvalidOperation(f"Room '{room}' does not exist") from None


def _require_feature(room: Room, feature: str) -> Feature:
    for item in room.features:
        if item.id == feature:
            return item
    raise InvalidOperation(f"Feature '{feature}' does not exist in room '{room.id}'")


def _require_furniture(room: Room, furniture: str) -> Furniture:
    for item in room.furniture:
        if item.id == furniture:
            return item
    raise InvalidOperation(f"Furniture '{furniture}' does not exist in room '{room.id}'")


def _point(value: Sequence[float]) -> Vector2:
    x, y = value
    return Vector2(float(x), float(y))


class _RoomOp:
    """Base for operations targeting one existing room."""

    def precheck(self, project: Project, room: str, **kwargs: Any) -> bool:
        _require_room(project, room)
        return True


class MoveRoomOp(_RoomOp):
    """Drag a room by a pixel delta measured from the start of the gesture."""

    def apply(
        self, project: Project, room: str, dx: float, dy: float, commit: bool = True, snap: bool = True, **kwargs: Any
    ) -> Project:
        moved = move_room(_require_room(project, room), float(dx), float(dy), commit=commit, snap=snap)
        return project.replace_rooms([moved])


class ResizeRoomOp(_RoomOp):
    """Drag one of the eight resize handles of a room."""

    def precheck(self, project: Project, room: str, handle: str = "", **kwargs: Any) -> bool:
        _require_room(project, room)
        try:
            ResizeHandle(handle)
        except ValueError:
            raise InvalidOperation(f"Unknown resize handle '{handle}'") from None
        return True

    def apply(
        self,
        project: Project,
        room: str,
        handle: str,
        dx: float,
        dy: float,
        commit: bool = True,
        snap: bool = True,
        **kwargs: Any,
    ) -> Project:
        resized = resize_room(
            _require_room(project, room), ResizeHandle(handle), float(dx), float(dy), commit=commit, snap=snap
        )
        return project.replace_rooms([resized])


class NudgeRoomOp(_RoomOp):
    """Shift a room by a number of feet, as the arrow keys do."""

    def precheck(self, project: Project, room: str, direction: str = "", **kwargs: Any) -> bool:
        _require_room(project, room)
        try:
            Direction(direction)
        except ValueError:
            raise InvalidOperation(f"Unknown direction '{direction}'") from None
        return True

    def apply(self, project: Project, room: str, direction: str, amount: float = 1.0, **kwargs: Any) -> Project:
        nudged = nudge_room(_require_room(project, room), Direction(direction), float(amount))
        return project.replace_rooms([nudged])


class RotateRoomOp(_RoomOp):
    """Rotate a room a quarter turn."""

    def apply(self, project: Project, room: str, **kwargs: Any) -> Project:
        return project.replace_rooms([rotate_room(_require_room(project, room))])


class UpdateRoomOp(_RoomOp):
    """Edit the properties of a room typed in by the user.

    Typed dimensions are snapped to the grid and kept above the minimum
    room size. Features are narrowed to fit a shortened wall.
    """

    def apply(
        self,
        project: Project,
        room: str,
        name: Optional[str] = None,
        room_type: Optional[str] = None,
        width: Optional[float] = None,
        length: Optional[float] = None,
        floor: Optional[int] = None,
        color: Optional[str] = None,
        wall_color: Optional[str] = None,
        **kwargs: Any,
    ) -> Project:
        current = _require_room(project, room)
        changes: Dict[str, Any] = {}

        if name is not None:
            changes["name"] = name
        if room_type is not None:
            changes["type"] = RoomType(room_type)
        if width is not None or length is not None:
            changes["dimensions"] = Dimension(
                max(MIN_SIZE_FEET, snap_feet(float(width))) if width is not None else current.dimensions.width,
                max(MIN_SIZE_FEET, snap_feet(float(length))) if length is not None else current.dimensions.length,
            )
        if floor is not None:
            changes["floor"] = int(floor)
        if color is not None:
            changes["color"] = color
        if wall_color is not None:
            changes["wall_color"] = wall_color

        return project.replace_rooms([fit_features(replace(current, **changes))])


class CreateOpeningOp:
    """Open the wall a room shares with one of its neighbors.

    Both rooms receive a matching ``opening`` feature and are replaced in a
    single step. Without ``neighbor`` and ``wall`` the first shared wall
    that is still closed is used.
    """

    def _select(self, project: Project, room: str, neighbor: Optional[str], wall: Optional[str]):
        target = _require_room(project, room)
        if neighbor is not None:
            _require_room(project, neighbor)

        matches = [
            adjacency
            for adjacency in find_adjacent(target, project.rooms)
            if (neighbor is None or adjacency.neighbor.id == neighbor)
            and (wall is None or adjacency.wall_on_target == Wall(wall))
        ]
        if not matches:
            raise InvalidOperation(f"Room '{room}' shares no matching wall with another room")

        for adjacency in matches:
            if not has_opening_on_segment(target, adjacency.wall_on_target, adjacency.segment):
                return adjacency
        # Every candidate is open already; precheck reports it
        return matches[0]

    def precheck(
        self, project: Project, room: str, neighbor: Optional[str] = None, wall: Optional[str] = None, **kwargs: Any
    ) -> bool:
        adjacency = self._select(project, room, neighbor, wall)
        if has_opening_on_segment(adjacency.target, adjacency.wall_on_target, adjacency.segment):
            raise InvalidOperation(
                f"Rooms '{adjacency.target.id}' and '{adjacency.neighbor.id}' are already connected"
            )
        return True

    def apply(
        self, project: Project, room: str, neighbor: Optional[str] = None, wall: Optional[str] = None, **kwargs: Any
    ) -> Project:
        adjacency = self._select(project, room, neighbor, wall)
        target, other = synthesize_opening(adjacency)
        return project.replace_rooms([target, other])


class AddRoomOp:
    """Add a new room, filled in with editor defaults."""

    def precheck(self, project: Project, room_id: Optional[str] = None, **kwargs: Any) -> bool:
        if room_id is not None and room_id in project.rooms_by_id:
            raise InvalidOperation(f"Room '{room_id}' already exists")
        return True

    def apply(
        self,
        project: Project,
        name: str = "New Room",
        room_type: str = RoomType.CUSTOM.value,
        width: float = DEFAULT_ROOM_SIZE_FEET[0],
        length: float = DEFAULT_ROOM_SIZE_FEET[1],
        x: float = DEFAULT_ROOM_POSITION_PX[0],
        y: float = DEFAULT_ROOM_POSITION_PX[1],
        floor: int = 1,
        room_id: Optional[str] = None,
        **kwargs: Any,
    ) -> Project:
        kind = RoomType(room_type)
        room = Room(
            id=room_id or new_id("room"),
            name=name,
            type=kind,
            dimensions=Dimension(float(width), float(length)),
            position=Vector2(float(x), float(y)),
            floor=int(floor),
            color=ROOM_COLORS[kind.value],
            wall_color=DEFAULT_WALL_COLOR,
        )
        return project.add_room(room)


class DeleteRoomOp(_RoomOp):
    def apply(self, project: Project, room: str, **kwargs: Any) -> Project:
        return project.remove_room(room)


class DrawRoomOp:
    """Add a room drawn as a rubber band between two points (the hallway tool)."""

    def precheck(self, project: Project, start: Sequence[float] = (), end: Sequence[float] = (), **kwargs: Any) -> bool:
        if len(start) != 2 or len(end) != 2:
            raise InvalidOperation("Drawing a room needs 'start' and 'end' points")
        return True

    def apply(
        self,
        project: Project,
        start: Sequence[float],
        end: Sequence[float],
        name: str = RoomType.HALLWAY.value,
        room_type: str = RoomType.HALLWAY.value,
        floor: int = 1,
        commit: bool = True,
        **kwargs: Any,
    ) -> Project:
        kind = RoomType(room_type)
        room = draw_room(_point(start), _point(end), commit=commit, name=name, room_type=kind, floor=int(floor))
        if room is None:
            raise InvalidOperation("Drawn room is too small")
        return project.add_room(replace(room, color=ROOM_COLORS[kind.value], wall_color=DEFAULT_WALL_COLOR))


class AddFeatureOp(_RoomOp):
    """Mount a door, window or other feature on a wall of a room."""

    def precheck(
        self,
        project: Project,
        room: str,
        feature_type: str = "",
        wall: str = "",
        size: Optional[float] = None,
        **kwargs: Any,
    ) -> bool:
        target = _require_room(project, room)
        try:
            kind, side = FeatureType(feature_type), Wall(wall)
        except ValueError as e:
            raise InvalidOperation(str(e)) from None

        width = DEFAULT_FEATURE_SIZES[kind.value] if size is None else float(size)
        if width > target.wall_length(side):
            raise InvalidOperation(
                f"A {width:g} ft {kind.value} does not fit on the {side.value} wall of '{target.name}'"
            )
        return True

    def apply(
        self,
        project: Project,
        room: str,
        feature_type: str,
        wall: str,
        offset: float = 50.0,
        size: Optional[float] = None,
        feature_id: Optional[str] = None,
        **kwargs: Any,
    ) -> Project:
        kind = FeatureType(feature_type)
        feature = Feature(
            id=feature_id or new_id("feature"),
            type=kind,
            wall=Wall(wall),
            offset=float(offset),
            size=DEFAULT_FEATURE_SIZES[kind.value] if size is None else float(size),
        )
        return project.replace_rooms([_require_room(project, room).with_features(feature)])


class UpdateFeatureOp:
    """Change the type, wall, offset or size of an existing feature."""

    def precheck(
        self,
        project: Project,
        room: str,
        feature: str,
        wall: Optional[str] = None,
        size: Optional[float] = None,
        **kwargs: Any,
    ) -> bool:
        target = _require_room(project, room)
        current = _require_feature(target, feature)
        try:
            side = Wall(wall) if wall is not None else current.wall
        except ValueError as e:
            raise InvalidOperation(str(e)) from None

        width = current.size if size is None else float(size)
        if width > target.wall_length(side):
            raise InvalidOperation(
                f"A {width:g} ft {current.type.value} does not fit on the {side.value} wall of '{target.name}'"
            )
        return True

    def apply(
        self,
        project: Project,
        room: str,
        feature: str,
        feature_type: Optional[str] = None,
        wall: Optional[str] = None,
        offset: Optional[float] = None,
        size: Optional[float] = None,
        **kwargs: Any,
    ) -> Project:
        target = _require_room(project, room)
        current = _require_feature(target, feature)
        changes: Dict[str, Any] = {}

        if feature_type is not None:
            changes["type"] = FeatureType(feature_type)
        if wall is not None:
            changes["wall"] = Wall(wall)
        if offset is not None:
            changes["offset"] = float(offset)
        if size is not None:
            changes["size"] = float(size)

        updated = replace(current, **changes)
        features = tuple(updated if f.id == feature else f for f in target.features)
        return project.replace_rooms([replace(target, features=features)])


class RemoveFeatureOp:
    def precheck(self, project: Project, room: str, feature: str, **kwargs: Any) -> bool:
        _require_feature(_require_room(project, room), feature)
        return True

    def apply(self, project: Project, room: str, feature: str, **kwargs: Any) -> Project:
        target = _require_room(project, room)
        features = tuple(f for f in target.features if f.id != feature)
        return project.replace_rooms([replace(target, features=features)])


class UpdateFurnitureOp:
    """Edit a furniture item of a room.

    ``rotate`` turns the item a further quarter turn, as the rotate button
    next to each item does; ``rotation`` sets the angle directly.
    """

    def precheck(
        self, project: Project, room: str, furniture: str, rotation: Optional[int] = None, **kwargs: Any
    ) -> bool:
        _require_furniture(_require_room(project, room), furniture)
        if rotation is not None and rotation not in ROTATIONS:
            raise InvalidOperation(f"Unsupported furniture rotation {rotation}")
        return True

    def apply(
        self,
        project: Project,
        room: str,
        furniture: str,
        name: Optional[str] = None,
        width: Optional[float] = None,
        length: Optional[float] = None,
        x: Optional[float] = None,
        y: Optional[float] = None,
        rotation: Optional[int] = None,
        rotate: bool = False,
        color: Optional[str] = None,
        **kwargs: Any,
    ) -> Project:
        target = _require_room(project, room)
        current = _require_furniture(target, furniture)
        changes: Dict[str, Any] = {}

        if name is not None:
            changes["name"] = name
        if width is not None or length is not None:
            changes["dimensions"] = Dimension(
                float(width) if width is not None else current.dimensions.width,
                float(length) if length is not None else current.dimensions.length,
            )
        if x is not None or y is not None:
            changes["position"] = Vector2(
                float(x) if x is not None else current.position.x,
                float(y) if y is not None else current.position.y,
            )
        angle = current.rotation if rotation is None else int(rotation)
        if rotate:
            angle = (angle + 90) % 360
        changes["rotation"] = angle
        if color is not None:
            changes["color"] = color

        updated = replace(current, **changes)
        items = tuple(updated if item.id == furniture else item for item in target.furniture)
        return project.replace_rooms([replace(target, furniture=items)])


class RemoveFurnitureOp:
    def precheck(self, project: Project, room: str, furniture: str, **kwargs: Any) -> bool:
        _require_furniture(_require_room(project, room), furniture)
        return True

    def apply(self, project: Project, room: str, furniture: str, **kwargs: Any) -> Project:
        target = _require_room(project, room)
        items = tuple(item for item in target.furniture if item.id != furniture)
        return project.replace_rooms([replace(target, furniture=items)])


class AddPetOp(_RoomOp):
    """Add a named pet to a room, placed at the room center."""

    def precheck(
        self, project: Project, room: str, name: str = "", pet_type: str = PetType.DOG.value, **kwargs: Any
    ) -> bool:
        _require_room(project, room)
        if not name.strip():
            raise InvalidOperation("A pet needs a name")
        try:
            PetType(pet_type)
        except ValueError as e:
            raise InvalidOperation(str(e)) from None
        return True

    def apply(
        self,
        project: Project,
        room: str,
        name: str,
        pet_type: str = PetType.DOG.value,
        pet_id: Optional[str] = None,
        **kwargs: Any,
    ) -> Project:
        target = _require_room(project, room)
        pet = Pet(
            id=pet_id or new_id("pet"),
            name=name,
            type=PetType(pet_type),
            position=Vector2(target.dimensions.width / 2, target.dimensions.length / 2),
        )
        return project.replace_rooms([replace(target, pets=target.pets + (pet,))])


class RemovePetOp:
    def precheck(self, project: Project, room: str, pet: str, **kwargs: Any) -> bool:
        target = _require_room(project, room)
        if all(p.id != pet for p in target.pets):
            raise InvalidOperation(f"Pet '{pet}' does not exist in room '{room}'")
        return True

    def apply(self, project: Project, room: str, pet: str, **kwargs: Any) -> Project:
        target = _require_room(project, room)
        return project.replace_rooms([replace(target, pets=tuple(p for p in target.pets if p.id != pet))])



_OPERATIONS: Dict[str, Operation] = {
    "move_room": MoveRoomOp(),
    "resize_room": ResizeRoomOp(),
    "nudge_room": NudgeRoomOp(),
    "rotate_room": RotateRoomOp(),
    "update_room": UpdateRoomOp(),
    "create_opening": CreateOpeningOp(),
    "add_room": AddRoomOp(),
    "delete_room": DeleteRoomOp(),
    "draw_room": DrawRoomOp(),
    "add_feature": AddFeatureOp(),
    "update_feature": UpdateFeatureOp(),
    "remove_feature": RemoveFeatureOp(),
    "update_furniture": UpdateFurnitureOp(),
    "remove_furniture": RemoveFurnitureOp(),
    "add_pet": AddPetOp(),
    "remove_pet": RemovePetOp(),
}


def register_operation(name: str, operation: Operation) -> None:
    """Register a new operation in the registry.

    Args:
        name: Name of the operation.
        operation: Operation instance to register.
    """
    _OPERATIONS[name] = operation


def get_operation(name: str) -> Operation:
    """Get an operation by name.

    Args:
        name: Name of the operation.

    Returns:
        The operation instance.

    Raises:
        KeyError: If the operation is not registered.
    """
    if name not in _OPERATIONS:
        raise KeyError(f"Operation '{name}' is not registered")
    return _OPERATIONS[name]


def list_operations() -> list[str]:
    """List all registered operations.

    Returns:
        List of operation names.
    """
    return list(_OPERATIONS.keys())
