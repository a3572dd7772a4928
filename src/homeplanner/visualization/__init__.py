"""Visualization module for home planning.

This module provides functionality to generate PNG images of a project's
floors, optionally with sunlight.
"""

from .generator import RenderContext, generate_project_image

__all__ = ["RenderContext", "generate_project_image"]
