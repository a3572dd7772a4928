"""Core API for home planning operations.

This module provides the two entry points used by the editor: ``preview``,
called continuously while a gesture is in progress, and ``commit``, called
once when it ends. Only a commit is validated and handed to the history.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Protocol, Tuple

from ..core.model import Project
from .ops import Operation, get_operation
from .validators import InvalidOperation, validate_all

LOGGER = logging.getLogger(__name__)


class HistorySink(Protocol):
    """Receives every committed project snapshot (undo/redo storage)."""

    def record(self, project: Project) -> None:
        ...


def _resolve(operation: Dict[str, Any]) -> Tuple[str, Operation, Dict[str, Any]]:
    operation_type = operation.get("op") or operation.get("type")

    if operation_type is None:
        raise InvalidOperation("Operation must have an 'op' or 'type' field")

    try:
        op = get_operation(operation_type)
    except KeyError:
        raise InvalidOperation(f"Unknown operation type: {operation_type}") from None

    # Extract operation parameters (exclude 'op' and 'type' fields)
    params = {k: v for k, v in operation.items() if k not in ["op", "type", "commit"]}
    return operation_type, op, params


def _run(project: Project, operation: Dict[str, Any], commit: bool) -> Project:
    operation_type, op, params = _resolve(operation)
    try:
        op.precheck(project, **params)
        return op.apply(project, commit=commit, **params)
    except (TypeError, ValueError) as e:
        raise InvalidOperation(f"Invalid parameters for '{operation_type}': {e}") from e


def preview(project: Project, operation: Dict[str, Any]) -> Project:
    """Apply an operation without snapping, validation or history.

    Args:
        project: The project being edited.
        operation: Dictionary describing the operation, with its name under
            ``op`` (or ``type``) and its parameters as the other keys.

    Returns:
        The project as it should be drawn during the gesture.

    Raises:
        InvalidOperation: If the operation is unknown or its parameters are
            invalid.
    """
    return _run(project, operation, commit=False)


def commit(project: Project, operation: Dict[str, Any], history: Optional[HistorySink] = None) -> Project:
    """Apply an operation for good.

    The result is snapped, validated and, when a history sink is given,
    recorded as one undo step.

    Args:
        project: The project being edited.
        operation: Dictionary describing the operation.
        history: Optional receiver of the committed snapshot.

    Returns:
        A new Project with the operation applied.

    Raises:
        InvalidOperation: If the operation is unknown, its parameters are
            invalid or the result violates project invariants.
    """
    new_project = _run(project, operation, commit=True)

    try:
        validate_all(new_project)
    except InvalidOperation as e:
        raise InvalidOperation(f"Operation failed validation: {e}") from e

    LOGGER.info("Committed %s", operation.get("op") or operation.get("type"))
    if history is not None:
        history.record(new_project)
    return new_project


def commit_all(
    project: Project, operations: Iterable[Dict[str, Any]], history: Optional[HistorySink] = None
) -> Project:
    """Commit several operations in sequence, each building on the previous.

    Each committed operation is one history step. The first failure aborts
    the sequence.
    """
    current = project
    for operation in operations:
        current = commit(current, operation, history)
    return current
