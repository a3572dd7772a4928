"""Image generation for home planning visualization.

This module renders a floor of a project to PNG: room footprints filled with
their floor color, wall features drawn on the walls and, optionally, the
sunlight wedges cast through the windows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from ..config import ROOM_COLORS  # noqa: E402
from ..core.model import FeatureType, Project, RoomType  # noqa: E402
from ..geom.placement import feature_segment, room_footprint  # noqa: E402
from ..render.sunlight import cast_sunlight  # noqa: E402

LOGGER = logging.getLogger(__name__)

FEATURE_COLORS = {
    FeatureType.DOOR: "#8B4513",
    FeatureType.WINDOW: "#38BDF8",
    FeatureType.OUTLET: "#F59E0B",
    FeatureType.OPENING: "#FFFFFF",
    FeatureType.SLIDING_DOOR: "#A16207",
    FeatureType.FRENCH_DOOR: "#92400E",
    FeatureType.GARAGE_DOOR: "#4B5563",
}
FEATURE_WIDTH = 4
WALL_WIDTH = 1.5
LIGHT_COLOR = "#FDE047"


@dataclass(frozen=True)
class RenderContext:
    """Display settings of a rendering, passed explicitly to the renderer."""

    dark_mode: bool = False

    @property
    def background(self) -> str:
        return "#0F172A" if self.dark_mode else "#FFFFFF"

    @property
    def text_color(self) -> str:
        return "#E2E8F0" if self.dark_mode else "#1E293B"

    @property
    def wall_color(self) -> str:
        return "#94A3B8" if self.dark_mode else "#334155"


def generate_project_image(
    project: Project,
    output_path: Path,
    floor: int = 1,
    context: Optional[RenderContext] = None,
    sun_azimuth: Optional[float] = None,
) -> bool:
    """Generate a PNG image of one floor of a project.

    Args:
        project: The project to visualize.
        output_path: Path where to save the PNG image.
        floor: Floor to draw.
        context: Display settings. Light mode when omitted.
        sun_azimuth: Draw sunlight wedges for this azimuth, in degrees.

    Returns:
        True if the image was generated successfully, False otherwise.
    """
    context = context or RenderContext()
    rooms = project.rooms_on_floor(floor)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        fig = plt.figure(figsize=(12, 12), facecolor=context.background)
        ax = fig.gca()
        ax.set_facecolor(context.background)

        if sun_azimuth is not None:
            for wedge in cast_sunlight(sun_azimuth, rooms):
                x, y = wedge.polygon.exterior.xy
                ax.fill(x, y, color=LIGHT_COLOR, alpha=0.25, linewidth=0)

        for room in rooms:
            footprint = room_footprint(room)
            x, y = footprint.exterior.xy
            color = room.color or ROOM_COLORS[RoomType(room.type).value]
            ax.fill(x, y, color=color, alpha=0.7, linewidth=0)
            ax.plot(x, y, color=room.wall_color or context.wall_color, linewidth=WALL_WIDTH)

            c = footprint.centroid
            ax.text(
                c.x, c.y, f"{room.name}\n{room.dimensions.area:.2f} sq ft",
                ha="center", va="center", fontsize=9, fontweight="bold", color=context.text_color,
            )

            for feature in room.features:
                fx, fy = feature_segment(room, feature).xy
                ax.plot(fx, fy, color=FEATURE_COLORS[FeatureType(feature.type)], linewidth=FEATURE_WIDTH)

        # Blueprint y grows downwards
        ax.invert_yaxis()
        ax.set_aspect("equal", adjustable="box")
        ax.axis("off")
        fig.tight_layout()
        fig.savefig(output_path, dpi=140, facecolor=context.background)
        plt.close(fig)

        LOGGER.info("Rendered floor %d to %s", floor, output_path)
        return True

    except (OSError, ValueError) as e:
        LOGGER.error("Error in image generation: %s", e)
        plt.close("all")
        return False
