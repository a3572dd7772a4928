"""Command Line Interface for Home Planner.

This module provides a CLI to inspect project files, derive diagrams,
reports and sunlight, and apply editing operations to rooms.
"""

import json
import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core.model import Project
from .core.topology import find_adjacent
from .engine.api import commit, commit_all
from .engine.validators import InvalidOperation
from .io.parser import load_project, save_project
from .io.report import build_report, export_report
from .render.diagram import DiagramBoundsError, render_floor, render_project
from .render.sunlight import cast_sunlight
from .visualization.generator import RenderContext, generate_project_image

app = typer.Typer(
    name="home-planner",
    help="A CLI tool for home floor plan editing and analysis",
    no_args_is_help=True,
)
console = Console()

CLI_ERRORS = (FileNotFoundError, ValueError, InvalidOperation, DiagramBoundsError)


def _fail(error: Exception) -> NoReturn:
    if isinstance(error, FileNotFoundError):
        console.print(f"[red]Error: File not found - {error}[/red]")
    else:
        console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(1)


def _save(project: Project, source: Path, output: Optional[Path]) -> None:
    target = save_project(project, output or source)
    console.print(f"[green]✓[/green] Project saved to {target}")


@app.callback()
def configure(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")):
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def info(project: Path = typer.Argument(..., help="Path to project JSON file")):
    """List the rooms of a project."""
    try:
        project_obj = load_project(project)
    except CLI_ERRORS as e:
        _fail(e)

    console.print(f"[bold]{project_obj.property.name}[/bold] {project_obj.property.address}")

    table = Table(title="Rooms")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Floor", justify="right")
    table.add_column("Size (ft)", justify="right")
    table.add_column("Position (px)", justify="right")
    table.add_column("Features", justify="right")

    for room in sorted(project_obj.rooms, key=lambda r: (r.floor, r.name)):
        table.add_row(
            room.id,
            room.name,
            room.type.value,
            str(room.floor),
            f"{room.dimensions.width:g} x {room.dimensions.length:g}",
            f"({room.position.x:g}, {room.position.y:g})",
            str(len(room.features)),
        )

    console.print(table)


@app.command()
def diagram(
    project: Path = typer.Argument(..., help="Path to project JSON file"),
    floor: Optional[int] = typer.Option(None, "--floor", "-f", help="Only draw this floor"),
    strict: bool = typer.Option(False, "--strict", help="Fail on glyphs outside the drawing"),
):
    """Print the ASCII diagram of a project."""
    try:
        project_obj = load_project(project)
        if floor is None:
            text = render_project(project_obj.rooms, strict=strict)
        else:
            text = render_floor(project_obj.rooms_on_floor(floor), strict=strict)
    except CLI_ERRORS as e:
        _fail(e)

    # Diagrams contain brackets rich would read as markup
    console.print(text, markup=False, highlight=False)


@app.command()
def report(
    project: Path = typer.Argument(..., help="Path to project JSON file"),
    output: Optional[Path] = typer.Option(None, "--out", "-o", help="Write the report to this file or directory"),
):
    """Print or export the text report of a project."""
    try:
        project_obj = load_project(project)
        if output is None:
            console.print(build_report(project_obj), markup=False, highlight=False)
            return
        target = export_report(project_obj, output)
    except CLI_ERRORS as e:
        _fail(e)

    console.print(f"[green]✓[/green] Report written to {target}")


@app.command()
def adjacency(
    project: Path = typer.Argument(..., help="Path to project JSON file"),
    room: str = typer.Argument(..., help="Room ID"),
):
    """Show the rooms sharing a wall with a room."""
    try:
        project_obj = load_project(project)
        target = project_obj.room(room)
    except KeyError:
        _fail(InvalidOperation(f"Room '{room}' does not exist"))
    except CLI_ERRORS as e:
        _fail(e)

    adjacencies = find_adjacent(target, project_obj.rooms)
    if not adjacencies:
        console.print(f"[yellow]{target.name} shares no wall with another room[/yellow]")
        return

    table = Table(title=f"Walls shared by {target.name}")
    table.add_column("Neighbor", style="cyan")
    table.add_column("Wall")
    table.add_column("Neighbor wall")
    table.add_column("Segment (ft)", justify="right")
    table.add_column("Length (ft)", justify="right")

    for adj in adjacencies:
        start, end = adj.segment
        table.add_row(
            f"{adj.neighbor.name} ({adj.neighbor.id})",
            adj.wall_on_target.value,
            adj.wall_on_neighbor.value,
            f"{start:g} - {end:g}",
            f"{adj.length:g}",
        )

    console.print(table)


@app.command("open")
def open_wall(
    project: Path = typer.Argument(..., help="Path to project JSON file"),
    room: str = typer.Argument(..., help="Room ID"),
    neighbor: Optional[str] = typer.Option(None, "--neighbor", "-n", help="Neighbor room ID"),
    wall: Optional[str] = typer.Option(None, "--wall", "-w", help="Wall of the room to open"),
    output: Optional[Path] = typer.Option(None, "--out", "-o", help="Save to this file instead"),
):
    """Open the wall between a room and an adjacent room."""
    operation = {"op": "create_opening", "room": room, "neighbor": neighbor, "wall": wall}
    try:
        project_obj = commit(load_project(project), operation)
        _save(project_obj, project, output)
    except CLI_ERRORS as e:
        _fail(e)


@app.command()
def sunlight(
    project: Path = typer.Argument(..., help="Path to project JSON file"),
    azimuth: float = typer.Argument(..., help="Sun azimuth in degrees"),
    floor: int = typer.Option(1, "--floor", "-f", help="Floor to light"),
):
    """List the windows lit by the sun at an azimuth."""
    try:
        project_obj = load_project(project)
    except CLI_ERRORS as e:
        _fail(e)

    wedges = cast_sunlight(azimuth, project_obj.rooms_on_floor(floor))
    if not wedges:
        console.print(f"[yellow]No window faces the sun at {azimuth:g}°[/yellow]")
        return

    rooms = project_obj.rooms_by_id
    table = Table(title=f"Sunlight at {azimuth:g}°")
    table.add_column("Room", style="cyan")
    table.add_column("Window")
    table.add_column("Lit area (sq px)", justify="right")

    for wedge in wedges:
        table.add_row(rooms[wedge.room_id].name, wedge.feature_id, f"{wedge.polygon.area:.0f}")

    console.print(table)


@app.command()
def render(
    project: Path = typer.Argument(..., help="Path to project JSON file"),
    output: Path = typer.Argument(..., help="Path of the PNG image"),
    floor: int = typer.Option(1, "--floor", "-f", help="Floor to draw"),
    dark: bool = typer.Option(False, "--dark", help="Render in dark mode"),
    sun: Optional[float] = typer.Option(None, "--sun", help="Draw sunlight at this azimuth"),
):
    """Render one floor of a project to PNG."""
    try:
        project_obj = load_project(project)
    except CLI_ERRORS as e:
        _fail(e)

    if not generate_project_image(project_obj, output, floor, RenderContext(dark_mode=dark), sun):
        console.print("[red]Error: image generation failed[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] Image saved to {output}")


@app.command()
def move(
    project: Path = typer.Argument(..., help="Path to project JSON file"),
    room: str = typer.Argument(..., help="Room ID"),
    dx: float = typer.Option(0.0, "--dx", help="Horizontal move in pixels"),
    dy: float = typer.Option(0.0, "--dy", help="Vertical move in pixels"),
    snap: bool = typer.Option(True, "--snap/--no-snap", help="Snap to the grid"),
    output: Optional[Path] = typer.Option(None, "--out", "-o", help="Save to this file instead"),
):
    """Move a room by a pixel offset."""
    operation = {"op": "move_room", "room": room, "dx": dx, "dy": dy, "snap": snap}
    try:
        project_obj = commit(load_project(project), operation)
        _save(project_obj, project, output)
    except CLI_ERRORS as e:
        _fail(e)


@app.command()
def resize(
    project: Path = typer.Argument(..., help="Path to project JSON file"),
    room: str = typer.Argument(..., help="Room ID"),
    handle: str = typer.Argument(..., help="Handle: top-left, top, top-right, left, right, bottom-left, bottom, bottom-right"),
    dx: float = typer.Option(0.0, "--dx", help="Horizontal drag in pixels"),
    dy: float = typer.Option(0.0, "--dy", help="Vertical drag in pixels"),
    snap: bool = typer.Option(True, "--snap/--no-snap", help="Snap to the grid"),
    output: Optional[Path] = typer.Option(None, "--out", "-o", help="Save to this file instead"),
):
    """Resize a room by dragging one of its handles."""
    operation = {"op": "resize_room", "room": room, "handle": handle, "dx": dx, "dy": dy, "snap": snap}
    try:
        project_obj = commit(load_project(project), operation)
        _save(project_obj, project, output)
    except CLI_ERRORS as e:
        _fail(e)


@app.command()
def apply(
    project: Path = typer.Argument(..., help="Path to project JSON file"),
    operation: Path = typer.Option(..., "--op", help="Path to operation JSON file (one operation or a list)"),
    output: Optional[Path] = typer.Option(None, "--out", "-o", help="Save to this file instead"),
):
    """Apply operations from a JSON file and save the result."""
    try:
        project_obj = load_project(project)
        with open(operation, encoding="utf-8") as f:
            operation_data = json.load(f)
        operations = operation_data if isinstance(operation_data, list) else [operation_data]
        project_obj = commit_all(project_obj, operations)
        console.print(f"[green]✓[/green] Applied {len(operations)} operations")
        _save(project_obj, project, output)
    except CLI_ERRORS as e:
        _fail(e)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
