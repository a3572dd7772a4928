"""Core data models for home planning."""

from .model import (
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
    has_full_opening,
    new_id,
)
from .topology import Adjacency, build_room_graph, find_adjacent, rooms_overlap

__all__ = [
    "Adjacency",
    "CostEstimates",
    "Dimension",
    "Feature",
    "FeatureType",
    "Furniture",
    "Pet",
    "PetType",
    "Project",
    "Property",
    "Room",
    "RoomType",
    "Vector2",
    "Wall",
    "build_room_graph",
    "find_adjacent",
    "has_full_opening",
    "new_id",
    "rooms_overlap",
]
