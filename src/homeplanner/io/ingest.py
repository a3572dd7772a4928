"""Ingestion of AI assistant responses.

The planner assistant is an external language model that proposes room
layouts, furniture arrangements, descriptions, measurements and cost
figures. It answers with JSON text, sometimes wrapped in a Markdown code
fence. The parsers in this module turn those answers into model objects and
reject anything that cannot be trusted; the ``merge_*`` helpers apply a
result to a room.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, replace
from typing import Any, List, Optional, Protocol

from ..config import DEFAULT_FURNITURE_COLOR, PIXELS_PER_FOOT
from ..core.model import ROTATIONS, CostEstimates, Dimension, Furniture, Property, Room, Vector2, new_id
from ..core.units import feet_to_px
from .parser import room_from_dict

LOGGER = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(\w*)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)


class IngestionError(ValueError):
    """Raised when an assistant response cannot be turned into plan data."""


@dataclass(frozen=True)
class GenerateOptions:
    """Brief for generating a whole blueprint."""

    sqft: int = 2000
    floors: int = 1
    bedrooms: int = 3
    bathrooms: int = 2


class PlannerAssistant(Protocol):
    """The AI collaborator. Each call returns the raw model text."""

    async def research_address(self, address: str) -> str:
        ...

    async def generate_blueprint_layout(self, options: GenerateOptions, research: Optional[str] = None) -> str:
        ...

    async def generate_furniture_layout(self, room: Room) -> str:
        ...

    async def generate_room_description(self, room: Room) -> str:
        ...

    async def generate_dimensions_from_image(self, image_base64: str) -> str:
        ...

    async def get_regional_costs(self, property: Property) -> str:
        ...


def strip_code_fence(text: str) -> str:
    """Remove a surrounding Markdown code fence (with optional language tag)."""
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    if match and match.group(2):
        return match.group(2).strip()
    return stripped


def _load_json(text: str) -> Any:
    try:
        return json.loads(strip_code_fence(text))
    except json.JSONDecodeError as e:
        raise IngestionError(f"Assistant response is not valid JSON: {e}") from e


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_blueprint_layout(text: str, ppf: float = PIXELS_PER_FOOT) -> List[Room]:
    """Parse a generated blueprint.

    Positions come back in feet and are converted to pixels. Rooms without
    an id get a generated one and rooms without a floor go on floor 1. Pets
    are never taken from the assistant.

    Raises:
        IngestionError: If the text is not a JSON array of rooms.
    """
    layout = _load_json(text)
    if not isinstance(layout, list):
        raise IngestionError("Assistant response was not a JSON array.")

    rooms: List[Room] = []
    for index, item in enumerate(layout):
        if not isinstance(item, dict):
            raise IngestionError(f"Room {index} is not a JSON object")

        position = item.get("position") or {}
        x, y = (position.get("x") or 0, position.get("y") or 0) if isinstance(position, dict) else (None, None)
        if not _is_number(x) or not _is_number(y):
            raise IngestionError(f"Room {index} has an invalid position: {position!r}")

        data = {
            **item,
            "id": item.get("id") or f"{new_id('room')}-{index}",
            "floor": item.get("floor") or 1,
            "position": {"x": feet_to_px(x, ppf), "y": feet_to_px(y, ppf)},
            "pets": [],
        }
        try:
            rooms.append(room_from_dict(data))
        except (KeyError, TypeError, ValueError) as e:
            raise IngestionError(f"Room {index} is malformed: {e}") from e

    LOGGER.info("Ingested blueprint with %d rooms", len(rooms))
    return rooms


def _valid_furniture(item: Any) -> bool:
    if not isinstance(item, dict) or not item.get("id") or not item.get("name"):
        return False
    position, dimensions = item.get("position"), item.get("dimensions")
    return (
        isinstance(position, dict)
        and _is_number(position.get("x"))
        and _is_number(position.get("y"))
        and isinstance(dimensions, dict)
        and _is_number(dimensions.get("width"))
        and _is_number(dimensions.get("length"))
        and item.get("rotation") in ROTATIONS
    )


def parse_furniture_layout(text: str) -> List[Furniture]:
    """Parse a furniture layout, dropping malformed items.

    Every kept item is painted with the default furniture color.

    Raises:
        IngestionError: If the text is not a JSON array.
    """
    data = _load_json(text)
    if not isinstance(data, list):
        raise IngestionError("Assistant response is not an array.")

    furniture = [
        Furniture(
            id=str(item["id"]),
            name=str(item["name"]),
            position=Vector2(float(item["position"]["x"]), float(item["position"]["y"])),
            dimensions=Dimension(float(item["dimensions"]["width"]), float(item["dimensions"]["length"])),
            rotation=int(item["rotation"]),
            color=DEFAULT_FURNITURE_COLOR,
        )
        for item in data
        if _valid_furniture(item)
    ]

    dropped = len(data) - len(furniture)
    if dropped:
        LOGGER.warning("Dropped %d malformed furniture items", dropped)
    return furniture


def parse_description(text: str) -> str:
    description = text.strip()
    if not description:
        raise IngestionError("Assistant returned an empty description.")
    return description


def parse_dimensions(text: str) -> Dimension:
    """Parse a measured room size ``{"width": ..., "length": ...}`` in feet."""
    data = _load_json(text)
    if not isinstance(data, dict) or not _is_number(data.get("width")) or not _is_number(data.get("length")):
        raise IngestionError("Assistant returned invalid data format for dimensions.")
    return Dimension(float(data["width"]), float(data["length"]))


def parse_cost_estimates(text: str) -> CostEstimates:
    """Parse per-square-foot costs ``{"flooring", "paint", "labor"}``."""
    data = _load_json(text)
    if not isinstance(data, dict) or not all(_is_number(data.get(k)) for k in ("flooring", "paint", "labor")):
        raise IngestionError("Assistant returned invalid data format for costs.")
    return CostEstimates(flooring=float(data["flooring"]), paint=float(data["paint"]), labor=float(data["labor"]))


def merge_furniture(room: Room, furniture: List[Furniture]) -> Room:
    """Replace the furniture of a room with a generated layout."""
    return replace(room, furniture=tuple(furniture))


def merge_description(room: Room, description: str) -> Room:
    return replace(room, description=description)


def merge_dimensions(room: Room, dimensions: Dimension) -> Room:
    return replace(room, dimensions=dimensions)


def merge_cost_estimates(room: Room, costs: CostEstimates) -> Room:
    return replace(room, cost_estimates=costs)


def estimate_room_costs(room: Room) -> CostEstimates:
    """Total flooring, paint and labor costs of a room.

    Each per-square-foot rate is applied to the floor area. Missing rates
    count as zero.
    """
    costs = room.cost_estimates or CostEstimates(0.0, 0.0, 0.0)
    area = room.dimensions.area
    return CostEstimates(flooring=costs.flooring * area, paint=costs.paint * area, labor=costs.labor * area)
