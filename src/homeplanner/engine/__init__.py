"""Engine module for home planning operations.

This module provides the operation registry, the preview/commit API and the
drag gesture state machine.
"""

from .api import HistorySink, commit, commit_all, preview
from .drag import DragSession, DragState
from .ops import get_operation, list_operations, register_operation
from .validators import InvalidOperation

__all__ = [
    "DragSession",
    "DragState",
    "HistorySink",
    "InvalidOperation",
    "commit",
    "commit_all",
    "get_operation",
    "list_operations",
    "preview",
    "register_operation",
]
