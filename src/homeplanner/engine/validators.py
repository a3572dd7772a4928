"""Post-apply validation for home planning operations.

These checks run after an operation is committed to make sure the project
still describes a drawable plan. Previews are not validated: a room may
legitimately sit at a negative position while it is being dragged.
"""

from __future__ import annotations

from ..core.model import ROTATIONS, Project, Room

# Float slack when comparing feature sizes derived from pixel spans
SIZE_TOLERANCE_FEET = 1e-9


class InvalidOperation(Exception):
    """Raised when an operation cannot be applied or breaks project invariants."""

    pass


def validate_room(room: Room) -> bool:
    """Validate the shape of a single room.

    This validator ensures that:
    - Width and length are positive
    - The position is not negative
    - The rotation is a quarter turn
    - The floor number starts at 1
    - Every feature offset is a percentage and every feature fits its wall
    - Furniture is turned by quarter turns

    Args:
        room: The room to validate.

    Returns:
        True if the room is valid.

    Raises:
        InvalidOperation: With the first problem found.
    """
    if room.dimensions.width <= 0 or room.dimensions.length <= 0:
        raise InvalidOperation(f"Room '{room.id}' has a non-positive size")

    if room.position.x < 0 or room.position.y < 0:
        raise InvalidOperation(f"Room '{room.id}' is placed at a negative position")

    if room.rotation not in ROTATIONS:
        raise InvalidOperation(f"Room '{room.id}' has unsupported rotation {room.rotation}")

    if room.floor < 1:
        raise InvalidOperation(f"Room '{room.id}' is on floor {room.floor}")

    for feature in room.features:
        if not 0 <= feature.offset <= 100:
            raise InvalidOperation(
                f"Feature '{feature.id}' of room '{room.id}' has offset {feature.offset} outside 0-100"
            )
        if feature.size > room.wall_length(feature.wall) + SIZE_TOLERANCE_FEET:
            raise InvalidOperation(
                f"Feature '{feature.id}' of room '{room.id}' is wider than its {feature.wall.value} wall"
            )

    for item in room.furniture:
        if item.rotation not in ROTATIONS:
            raise InvalidOperation(
                f"Furniture '{item.id}' of room '{room.id}' has unsupported rotation {item.rotation}"
            )

    return True


def validate_all(project: Project) -> bool:
    """Run all validators on the project.

    Args:
        project: The project to validate.

    Returns:
        True if all validations pass.

    Raises:
        InvalidOperation: If any validation fails with details about the failure.
    """
    for room in project.rooms:
        validate_room(room)
    return True
