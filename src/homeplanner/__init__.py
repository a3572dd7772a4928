"""Home Planner - A Python library for editing and analyzing home floor plans."""

__version__ = "0.1.0"

from .core.model import Feature, Project, Property, Room, Vector2, Wall

__all__ = ["Feature", "Project", "Property", "Room", "Vector2", "Wall"]
