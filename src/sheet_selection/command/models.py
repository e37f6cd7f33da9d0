"""Request/response types for the AI command backend."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..core.cell import Cell
from ..core.validation import coerce_index


@dataclass(frozen=True)
class CommandRequest:
    """Payload sent to the backend for one command."""

    command: str
    selected_cells: tuple[Cell, ...]
    selected_ranges: tuple[str, ...] = ()
    sheet_context: tuple[dict[str, Any], ...] | None = None

    def __post_init__(self) -> None:
        if not self.command.strip():
            raise ValueError("Command text must not be empty.")


@dataclass(frozen=True)
class ColumnResult:
    """A formula the backend wants written under one column of the selection."""

    col: int
    formula: str


@dataclass(frozen=True)
class CommandResponse:
    """Parsed backend response."""

    success: bool
    result: str | None = None
    formula: str | None = None
    column_results: tuple[ColumnResult, ...] = ()
    error: str | None = None
    target_cell: tuple[int, int] | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def output(self) -> str | None:
        """What to write into the target cell: the formula if any, else the result."""
        if self.formula:
            return self.formula
        return self.result


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def parse_command_response(data: Any) -> CommandResponse:
    """Build a CommandResponse from decoded JSON.

    Unknown keys are kept in ``raw``. Column results or a target cell with
    malformed coordinates are dropped.
    """
    if not isinstance(data, dict):
        raise TypeError(f"Expected a JSON object, got {type(data).__name__}.")

    column_results = []
    for item in data.get("columnResults") or []:
        if not isinstance(item, dict):
            continue
        col = coerce_index(item.get("col"))
        formula = item.get("formula")
        if col is None or formula is None:
            continue
        column_results.append(ColumnResult(col=col, formula=str(formula)))

    target_cell = None
    target = data.get("targetCell")
    if isinstance(target, dict):
        row, col = coerce_index(target.get("row")), coerce_index(target.get("col"))
        if row is not None and col is not None:
            target_cell = (row, col)

    return CommandResponse(
        success=bool(data.get("success", False)),
        result=_optional_str(data.get("result")),
        formula=_optional_str(data.get("formula")),
        column_results=tuple(column_results),
        error=_optional_str(data.get("error")),
        target_cell=target_cell,
        raw=data,
    )
