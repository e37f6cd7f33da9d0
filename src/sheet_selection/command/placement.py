"""Result placement: write a command's output back next to the selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from loguru import logger

from ..core.cell import Cell, CellRange
from ..widget.selection import SelectionStore
from .models import CommandResponse


@dataclass(frozen=True)
class Placement:
    """Where a response was written."""

    target: tuple[int, int] | None
    column_cells: tuple[tuple[int, int], ...] = ()


def result_target(
    cells: Sequence[Cell], n_rows: int, n_cols: int
) -> tuple[int, int] | None:
    """Cell for a single result: right of the last selected cell.

    Falls back to the cell below when the right neighbour is outside the
    grid, and to None when both are.
    """
    if not cells:
        return None
    last = cells[-1]
    if last.col + 1 < n_cols:
        return (last.row, last.col + 1)
    if last.row + 1 < n_rows:
        return (last.row + 1, last.col)
    return None


def column_result_row(cells: Sequence[Cell]) -> int | None:
    """Row directly under the selection, where per-column formulas go."""
    if not cells:
        return None
    return CellRange.bounding(cell.key for cell in cells).end_row + 1


def apply_response(
    store: SelectionStore,
    cells: Sequence[Cell],
    response: CommandResponse,
    n_rows: int,
    n_cols: int,
) -> Placement:
    """Write ``response`` into the grid through ``store``.

    ``cells`` is the selection the command was issued for. Failed responses
    and a missing grid write nothing.
    """
    if not response.success or store.grid_handle is None:
        return Placement(target=None)

    target = None
    output = response.output
    if output is not None:
        target = response.target_cell or result_target(cells, n_rows, n_cols)
        if target is not None and not (0 <= target[0] < n_rows and 0 <= target[1] < n_cols):
            logger.warning("Result target {} is outside the grid; skipping", target)
            target = None
        if target is not None:
            store.write_cell(target[0], target[1], output)

    column_cells = []
    row = column_result_row(cells)
    if response.column_results and row is not None and row < n_rows:
        for item in response.column_results:
            if item.col >= n_cols:
                logger.warning("Column result for col {} is outside the grid", item.col)
                continue
            store.write_cell(row, item.col, item.formula)
            column_cells.append((row, item.col))

    if target is not None:
        store.select_cell(*target)
    return Placement(target=target, column_cells=tuple(column_cells))
