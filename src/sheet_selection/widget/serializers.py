"""Serializers: convert selection and command objects to JSON-ready payloads."""

from __future__ import annotations

import json
from typing import Any, Iterable

from ..command.models import CommandRequest
from ..core.cell import Cell
from ..transform.range_compressor import format_ranges


def serialize_cells(cells: Iterable[Cell]) -> list[dict[str, Any]]:
    """Cells as [{row, col, value}, ...] in their stored order."""
    return [cell.to_dict() for cell in cells]


def serialize_ranges(cells: Iterable[Cell]) -> list[str]:
    """A1 range labels of a selection, e.g. ["A1:C5", "E2"]."""
    return format_ranges(cells)


def build_command_payload(request: CommandRequest) -> dict[str, Any]:
    """Body of the backend execute call.

    ``sheetContext`` is only present when the request carries one.
    """
    payload: dict[str, Any] = {
        "command": request.command,
        "selectedCells": serialize_cells(request.selected_cells),
        "selectedRanges": list(request.selected_ranges),
    }
    if request.sheet_context is not None:
        payload["sheetContext"] = list(request.sheet_context)
    return payload


def serialize_command_request(request: CommandRequest) -> str:
    """Serialize a command request as a JSON string."""
    return json.dumps(build_command_payload(request))
