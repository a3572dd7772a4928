"""Plain-text project report.

The report lists the property, the full ASCII diagram and, room by room,
the figures a contractor or buyer would ask for.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

from ..core.model import FeatureType, PetType, Project
from ..core.units import round_half_up
from ..render.diagram import format_feet, render_project
from .parser import project_file_name

RULE = "-" * 60


def _feature_label(feature_type: FeatureType) -> str:
    name = FeatureType(feature_type).value.replace("_", " ")
    return name[:1].upper() + name[1:]


def build_report(project: Project) -> str:
    """Build the text report of a project.

    Rooms are sorted by floor, then by name.
    """
    lines: List[str] = [
        "Project Report",
        "====================",
        "",
        f"Project Name: {project.property.name}",
    ]
    if project.property.address:
        lines.append(f"Address: {project.property.address}")
    lines += [
        "",
        "Full Layout Diagram",
        "-------------------",
        render_project(project.rooms),
        "",
        "Room Details",
        "============",
        "",
    ]

    rooms = sorted(project.rooms, key=lambda r: (r.floor or 1, r.name.casefold()))
    for room in rooms:
        width, length = room.dimensions.width, room.dimensions.length
        lines += [
            RULE,
            f"ROOM: {room.name}",
            RULE,
            f"- Type: {room.type.value}",
            f"- Floor: {room.floor or 1}",
            f"- Dimensions: {format_feet(width)} ft (Width) x {format_feet(length)} ft (Length)",
            f"- Area: {width * length:.2f} sq. ft.",
        ]

        if room.description:
            description = room.description.replace("\n", "\n  ")
            lines += ["", "- AI Description:", f"  {description}"]

        if room.features:
            lines += ["", "- Features:"]
            for feature in room.features:
                lines.append(
                    f"  - {_feature_label(feature.type)}: on {feature.wall.value} wall, "
                    f"{format_feet(feature.size)} ft wide, offset at {round_half_up(feature.offset)}%."
                )

        if room.furniture:
            lines += ["", "- Furniture Layout:"]
            for item in room.furniture:
                name = item.name.replace("_", " ")
                lines.append(
                    f"  - {name} ({format_feet(item.dimensions.width)}' x {format_feet(item.dimensions.length)}')"
                )

        if room.pets:
            lines += ["", "- Pets in this room:"]
            for pet in room.pets:
                lines.append(f"  - {pet.name} (the {PetType(pet.type).value})")

        lines.append("")

    return "\n".join(lines) + "\n"


def report_file_name(project: Project) -> str:
    return project_file_name(project, suffix="_Report.txt")


def export_report(project: Project, path: Union[str, Path]) -> Path:
    """Write the report to ``path``, or into it under the default name if it is a directory."""
    file_path = Path(path)
    if file_path.is_dir():
        file_path = file_path / report_file_name(project)
    file_path.write_text(build_report(project), encoding="utf-8")
    return file_path
