"""Core data models for home planning.

This module defines the fundamental data structures used to represent
a home project, including rooms, their wall features, furniture and pets.
Every model is immutable: edits produce new values through
``dataclasses.replace``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from enum import Enum
from itertools import count
from typing import Dict, Iterable, List, Tuple

from ..config import FULL_OPENING_RATIO

_ID_COUNTER = count()


def new_id(prefix: str) -> str:
    """Generate a time-based identifier such as ``room-1700000000000-0``."""
    return f"{prefix}-{time.time_ns() // 1_000_000}-{next(_ID_COUNTER)}"


class Wall(str, Enum):
    """One of the four axis-aligned edges of a room, named before rotation."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"

    @property
    def is_horizontal(self) -> bool:
        """True for walls running along the room width."""
        return self in (Wall.TOP, Wall.BOTTOM)


class FeatureType(str, Enum):
    DOOR = "door"
    WINDOW = "window"
    OUTLET = "outlet"
    OPENING = "opening"
    SLIDING_DOOR = "sliding_door"
    FRENCH_DOOR = "french_door"
    GARAGE_DOOR = "garage_door"


class RoomType(str, Enum):
    LIVING_ROOM = "Living Room"
    BEDROOM = "Bedroom"
    KITCHEN = "Kitchen"
    BATHROOM = "Bathroom"
    DINING_ROOM = "Dining Room"
    OFFICE = "Office"
    GARAGE = "Garage"
    STAIRS = "Stairs"
    HALLWAY = "Hallway"
    CUSTOM = "Custom"


class PetType(str, Enum):
    DOG = "Dog"
    CAT = "Cat"
    BIRD = "Bird"
    FISH = "Fish"
    SMALL_ANIMAL = "Small Animal"


ROTATIONS = (0, 90, 180, 270)


@dataclass(frozen=True)
class Vector2:
    """Represents a 2D point or offset.

    Attributes:
        x: The x-coordinate.
        y: The y-coordinate.
    """

    x: float
    y: float


@dataclass(frozen=True)
class Dimension:
    """Size of a room or furniture item in feet.

    Attributes:
        width: Extent along the x axis.
        length: Extent along the y axis.
    """

    width: float
    length: float

    @property
    def area(self) -> float:
        return self.width * self.length


@dataclass(frozen=True)
class Feature:
    """Represents a wall-mounted feature such as a door or window.

    Attributes:
        id: Unique identifier for the feature.
        type: Kind of feature.
        wall: Wall the feature is mounted on.
        offset: Percent distance of the feature center from the wall start.
        size: Extent of the feature along the wall, in feet.
    """

    id: str
    type: FeatureType
    wall: Wall
    offset: float
    size: float


@dataclass(frozen=True)
class Furniture:
    """Represents a furniture item placed inside a room.

    Attributes:
        id: Unique identifier for the item.
        name: Human-readable name (underscores are shown as spaces).
        position: Top-left corner in feet, relative to the room.
        dimensions: Footprint of the item in feet.
        rotation: Rotation in degrees, one of 0, 90, 180, 270.
        color: Optional display color.
    """

    id: str
    name: str
    position: Vector2
    dimensions: Dimension
    rotation: int = 0
    color: str | None = None


@dataclass(frozen=True)
class Pet:
    """Represents a pet living in a room.

    Attributes:
        id: Unique identifier for the pet.
        name: Name of the pet.
        type: Kind of animal.
        position: Location in feet, relative to the room.
    """

    id: str
    name: str
    type: PetType
    position: Vector2


@dataclass(frozen=True)
class CostEstimates:
    """Per-square-foot renovation costs returned by the cost assistant."""

    flooring: float
    paint: float
    labor: float


@dataclass(frozen=True)
class Room:
    """Represents a rectangular room on a floor.

    Attributes:
        id: Unique identifier for the room, across the whole project.
        name: Human-readable name of the room.
        type: Category of the room.
        dimensions: Width and length in feet.
        position: Top-left corner in pixels, relative to the floor.
        rotation: Rotation in degrees, one of 0, 90, 180, 270.
        features: Wall features (doors, windows, openings, outlets).
        furniture: Furniture placed in the room.
        pets: Pets living in the room.
        floor: Floor number, starting at 1.
        color: Floor color.
        wall_color: Wall color.
        description: Optional free-text description.
        cost_estimates: Optional renovation cost figures.
    """

    id: str
    name: str
    type: RoomType
    dimensions: Dimension
    position: Vector2
    rotation: int = 0
    features: Tuple[Feature, ...] = ()
    furniture: Tuple[Furniture, ...] = ()
    pets: Tuple[Pet, ...] = ()
    floor: int = 1
    color: str | None = None
    wall_color: str | None = None
    description: str | None = None
    cost_estimates: CostEstimates | None = None

    def wall_length(self, wall: Wall) -> float:
        """Length of a wall in feet (width for top/bottom, length for left/right)."""
        return self.dimensions.width if Wall(wall).is_horizontal else self.dimensions.length

    def with_features(self, *features: Feature) -> Room:
        """Return a copy of the room with extra features appended."""
        return replace(self, features=self.features + tuple(features))


def has_full_opening(room: Room, wall: Wall) -> bool:
    """Check whether a wall carries an opening wide enough to drop its panel.

    Args:
        room: Room owning the wall.
        wall: Wall to inspect.

    Returns:
        True if an opening on the wall covers more than the full-opening ratio.
    """
    limit = room.wall_length(wall) * FULL_OPENING_RATIO
    return any(
        f.wall == wall and f.type == FeatureType.OPENING and f.size > limit
        for f in room.features
    )


@dataclass(frozen=True)
class Property:
    """Name and address of the property being planned."""

    name: str
    address: str = ""


@dataclass(frozen=True)
class Project:
    """Represents a complete home project.

    Rooms are kept in a flat tuple; floors are derived from ``Room.floor``.

    Attributes:
        property: The property the project belongs to.
        rooms: All rooms of every floor.
    """

    property: Property
    rooms: Tuple[Room, ...] = field(default_factory=tuple)

    @property
    def rooms_by_id(self) -> Dict[str, Room]:
        return {room.id: room for room in self.rooms}

    def room(self, room_id: str) -> Room:
        """Look up a room by id.

        Raises:
            KeyError: If no room has this id.
        """
        for room in self.rooms:
            if room.id == room_id:
                return room
        raise KeyError(room_id)

    def floors(self) -> List[int]:
        """Sorted list of floor numbers that hold at least one room."""
        return sorted({room.floor or 1 for room in self.rooms})

    def rooms_on_floor(self, floor: int) -> List[Room]:
        return [room for room in self.rooms if (room.floor or 1) == floor]

    def replace_rooms(self, updated: Iterable[Room]) -> Project:
        """Return a new project with several rooms replaced in one step.

        Rooms are matched by id; ids that are not part of the project are
        ignored.
        """
        by_id = {room.id: room for room in updated}
        return replace(self, rooms=tuple(by_id.get(room.id, room) for room in self.rooms))

    def add_room(self, room: Room) -> Project:
        return replace(self, rooms=self.rooms + (room,))

    def remove_room(self, room_id: str) -> Project:
        return replace(self, rooms=tuple(r for r in self.rooms if r.id != room_id))
