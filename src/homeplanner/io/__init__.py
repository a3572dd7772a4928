"""Project files, text reports and AI response ingestion."""

from .ingest import IngestionError, parse_blueprint_layout, parse_furniture_layout
from .parser import load_project, project_file_name, save_project
from .report import build_report, export_report

__all__ = [
    "IngestionError",
    "build_report",
    "export_report",
    "load_project",
    "parse_blueprint_layout",
    "parse_furniture_layout",
    "project_file_name",
    "save_project",
]
