"""Pointer drag gestures on rooms.

A ``DragSession`` turns the pointer events of one gesture into engine
calls: ``update`` previews the room at the current pointer delta and
``release`` commits it. Deltas are always measured from where the gesture
started, so every preview is computed from the same starting project.

    IDLE -> DRAGGING -> COMMITTED
                     -> CANCELLED
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Optional

from ..core.model import Project
from ..geom.transform import ResizeHandle
from .api import HistorySink, commit, preview
from .validators import InvalidOperation

LOGGER = logging.getLogger(__name__)


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


class DragSession:
    """One move or resize gesture on a single room.

    Args:
        history: Receives the committed project on release.
        snap: Snap to the grid on release.
    """

    def __init__(self, history: Optional[HistorySink] = None, snap: bool = True):
        self.history = history
        self.snap = snap
        self.state = DragState.IDLE
        self.start_project: Optional[Project] = None
        self.room_id: Optional[str] = None
        self.handle: Optional[ResizeHandle] = None

    def _require(self, state: DragState, action: str) -> None:
        if self.state != state:
            raise InvalidOperation(f"Cannot {action} a drag that is {self.state.value}")

    def _operation(self, dx: float, dy: float) -> Dict[str, Any]:
        operation: Dict[str, Any] = {"room": self.room_id, "dx": dx, "dy": dy, "snap": self.snap}
        if self.handle is None:
            operation["op"] = "move_room"
        else:
            operation["op"] = "resize_room"
            operation["handle"] = self.handle.value
        return operation

    def begin(self, project: Project, room_id: str, handle: Optional[str] = None) -> None:
        """Start dragging a room, or one of its resize handles when given."""
        self._require(DragState.IDLE, "begin")
        try:
            project.room(room_id)
        except KeyError:
            raise InvalidOperation(f"Room '{room_id}' does not exist") from None
        try:
            self.handle = ResizeHandle(handle) if handle is not None else None
        except ValueError:
            raise InvalidOperation(f"Unknown resize handle '{handle}'") from None

        self.start_project = project
        self.room_id = room_id
        self.state = DragState.DRAGGING
        LOGGER.debug("Drag started on %s (%s)", room_id, self.handle.value if self.handle else "move")

    def update(self, dx: float, dy: float) -> Project:
        """Preview the room at the current pointer delta."""
        self._require(DragState.DRAGGING, "update")
        return preview(self.start_project, self._operation(dx, dy))

    def release(self, dx: float, dy: float) -> Project:
        """Commit the gesture at the final pointer delta."""
        self._require(DragState.DRAGGING, "release")
        result = commit(self.start_project, self._operation(dx, dy), self.history)
        self.state = DragState.COMMITTED
        return result

    def cancel(self) -> Project:
        """Abandon the gesture and return the project as it was before it."""
        self._require(DragState.DRAGGING, "cancel")
        self.state = DragState.CANCELLED
        LOGGER.debug("Drag on %s cancelled", self.room_id)
        return self.start_project
