"""Derived views of a project: sunlight wedges and ASCII diagrams."""

from .diagram import DiagramBoundsError, render_floor, render_project
from .sunlight import LightWedge, cast_sunlight

__all__ = ["DiagramBoundsError", "LightWedge", "cast_sunlight", "render_floor", "render_project"]
