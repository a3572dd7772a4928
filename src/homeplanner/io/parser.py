"""Reading and writing home project files.

A project file is the JSON document the editor saves: the property, a flat
list of rooms with camelCase keys and, for humans, the ASCII diagram of the
plan. The diagram is regenerated on every save and ignored on load.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from typing_extensions import TypedDict

from ..core.model import (
    CostEstimates,
    Dimension,
    Feature,
    FeatureType,
    Furniture,
    Pet,
    PetType,
    Project,
    Property,
    Room,
    RoomType,
    Vector2,
    Wall,
)
from ..render.diagram import render_project

LOGGER = logging.getLogger(__name__)

INVALID_FORMAT = "Invalid project file format."
DEFAULT_FILE_STEM = "home-plan"


class Vector2Data(TypedDict):
    x: float
    y: float


class DimensionData(TypedDict):
    width: float
    length: float


class FeatureData(TypedDict):
    id: str
    type: str
    wall: str
    offset: float
    size: float


class FurnitureData(TypedDict, total=False):
    id: str
    name: str
    position: Vector2Data
    dimensions: DimensionData
    rotation: int
    color: str


class PetData(TypedDict):
    id: str
    name: str
    type: str
    position: Vector2Data


class CostEstimatesData(TypedDict):
    flooring: float
    paint: float
    labor: float


class RoomData(TypedDict, total=False):
    id: str
    name: str
    type: str
    dimensions: DimensionData
    position: Vector2Data
    rotation: int
    features: List[FeatureData]
    furniture: List[FurnitureData]
    pets: List[PetData]
    floor: int
    color: str
    wallColor: str
    description: str
    costEstimates: CostEstimatesData


class PropertyData(TypedDict):
    name: str
    address: str


class ProjectData(TypedDict, total=False):
    property: PropertyData
    rooms: List[RoomData]
    diagram: str


def _vector(data: Vector2Data) -> Vector2:
    return Vector2(float(data["x"]), float(data["y"]))


def _dimension(data: DimensionData) -> Dimension:
    return Dimension(float(data["width"]), float(data["length"]))


def feature_from_dict(data: FeatureData) -> Feature:
    return Feature(
        id=data["id"],
        type=FeatureType(data["type"]),
        wall=Wall(data["wall"]),
        offset=float(data["offset"]),
        size=float(data["size"]),
    )


def furniture_from_dict(data: FurnitureData) -> Furniture:
    return Furniture(
        id=data["id"],
        name=data["name"],
        position=_vector(data["position"]),
        dimensions=_dimension(data["dimensions"]),
        rotation=int(data.get("rotation", 0)),
        color=data.get("color"),
    )


def pet_from_dict(data: PetData) -> Pet:
    return Pet(id=data["id"], name=data["name"], type=PetType(data["type"]), position=_vector(data["position"]))


def room_from_dict(data: RoomData) -> Room:
    """Convert a room from its JSON shape.

    Args:
        data: Room dictionary with camelCase keys.

    Returns:
        The corresponding Room. Missing optional lists default to empty and
        a missing floor to 1.

    Raises:
        KeyError: If a required key is missing.
        ValueError: If an enum value or number is invalid.
    """
    costs = data.get("costEstimates")
    return Room(
        id=data["id"],
        name=data["name"],
        type=RoomType(data["type"]),
        dimensions=_dimension(data["dimensions"]),
        position=_vector(data["position"]),
        rotation=int(data.get("rotation", 0)),
        features=tuple(feature_from_dict(f) for f in data.get("features", [])),
        furniture=tuple(furniture_from_dict(f) for f in data.get("furniture", [])),
        pets=tuple(pet_from_dict(p) for p in data.get("pets") or []),
        floor=int(data.get("floor") or 1),
        color=data.get("color"),
        wall_color=data.get("wallColor"),
        description=data.get("description"),
        cost_estimates=CostEstimates(**{k: float(costs[k]) for k in ("flooring", "paint", "labor")}) if costs else None,
    )


def room_to_dict(room: Room) -> RoomData:
    """Convert a room to its JSON shape, omitting unset optional fields."""
    data: RoomData = {
        "id": room.id,
        "name": room.name,
        "type": RoomType(room.type).value,
        "dimensions": {"width": room.dimensions.width, "length": room.dimensions.length},
        "position": {"x": room.position.x, "y": room.position.y},
        "rotation": room.rotation,
        "features": [
            {"id": f.id, "type": FeatureType(f.type).value, "wall": Wall(f.wall).value, "offset": f.offset, "size": f.size}
            for f in room.features
        ],
        "furniture": [],
        "pets": [
            {"id": p.id, "name": p.name, "type": PetType(p.type).value, "position": {"x": p.position.x, "y": p.position.y}}
            for p in room.pets
        ],
        "floor": room.floor,
    }

    for item in room.furniture:
        entry: FurnitureData = {
            "id": item.id,
            "name": item.name,
            "position": {"x": item.position.x, "y": item.position.y},
            "dimensions": {"width": item.dimensions.width, "length": item.dimensions.length},
            "rotation": item.rotation,
        }
        if item.color is not None:
            entry["color"] = item.color
        data["furniture"].append(entry)

    if room.color is not None:
        data["color"] = room.color
    if room.wall_color is not None:
        data["wallColor"] = room.wall_color
    if room.description is not None:
        data["description"] = room.description
    if room.cost_estimates is not None:
        costs = room.cost_estimates
        data["costEstimates"] = {"flooring": costs.flooring, "paint": costs.paint, "labor": costs.labor}

    return data


def project_from_dict(data: Dict[str, Any]) -> Project:
    """Convert a project from its JSON shape.

    Raises:
        ValueError: If the document is not a project or a room is malformed.
    """
    if not isinstance(data, dict) or not isinstance(data.get("property"), dict) or not isinstance(data.get("rooms"), list):
        raise ValueError(INVALID_FORMAT)

    prop = data["property"]
    rooms = []
    for index, room_data in enumerate(data["rooms"]):
        try:
            rooms.append(room_from_dict(room_data))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid room data at index {index}: {e}") from e

    return Project(
        property=Property(name=prop.get("name", ""), address=prop.get("address", "")),
        rooms=tuple(rooms),
    )


def project_to_dict(project: Project) -> ProjectData:
    """Convert a project to the saved JSON shape, with a fresh diagram."""
    return {
        "property": {"name": project.property.name, "address": project.property.address},
        "rooms": [room_to_dict(room) for room in project.rooms],
        "diagram": render_project(project.rooms),
    }


def load_project(path: Union[str, Path]) -> Project:
    """Load a home project from a JSON file.

    Args:
        path: Path to the JSON file containing the project.

    Returns:
        Project read from the file. A stored diagram is ignored.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the JSON data is invalid or malformed.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(file_path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Could not parse {file_path.name}: {e}") from e

    project = project_from_dict(data)
    LOGGER.debug("Loaded %d rooms from %s", len(project.rooms), file_path)
    return project


def project_file_name(project: Project, suffix: str = ".json") -> str:
    """Default file name for a project: its name with spaces as underscores."""
    stem = project.property.name.replace(" ", "_") or DEFAULT_FILE_STEM
    return f"{stem}{suffix}"


def save_project(project: Project, path: Union[str, Path]) -> Path:
    """Write a project to a JSON file, regenerating its diagram.

    Args:
        project: Project to save.
        path: Target file, or a directory in which the default file name
            is used.

    Returns:
        The path written.
    """
    file_path = Path(path)
    if file_path.is_dir():
        file_path = file_path / project_file_name(project)

    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(project_to_dict(project), f, indent=2)

    LOGGER.info("Saved %s", file_path)
    return file_path
