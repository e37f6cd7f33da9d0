"""SelectionStore: authoritative selection state synced with a grid widget."""

from __future__ import annotations

from typing import Any, Callable, Sequence

from loguru import logger

from ..core.cell import Cell, CellRange
from ..core.validation import cell_value_to_str, coerce_bounds, coerce_index
from ..transform.range_compressor import RangeCompressor, join_ranges
from .grid_handle import GridHandle, read_snapshot
from .restore import RestoreGuard, RunningLoopScheduler, Scheduler

SelectionCallback = Callable[[tuple[Cell, ...]], Any]


class SelectionStore:
    """Holds the current selection and keeps it consistent with a grid.

    The selection is an ordered tuple of :class:`Cell` (row-major over the
    selected rectangle). It is replaced, never mutated, and only when the
    new content differs, so an identical update keeps the same object and
    notifies nobody.

    The store holds at most one grid handle. It does not own it: it neither
    creates nor destroys the widget, and an absent handle turns every
    operation into a no-op (or a clear). Other components write to the grid
    through :meth:`write_cell` / :meth:`select_cell` rather than keeping their
    own reference.
    """

    def __init__(
        self,
        grid_handle: GridHandle | None = None,
        scheduler: Scheduler | None = None,
        restore_guard: RestoreGuard | None = None,
    ) -> None:
        self._selected: tuple[Cell, ...] = ()
        self._grid_handle = grid_handle
        self._is_processing = False
        self._scheduler = scheduler if scheduler is not None else RunningLoopScheduler()
        self._restore_guard = restore_guard if restore_guard is not None else RestoreGuard()
        self._callbacks: list[SelectionCallback] = []

    # --- State ---

    @property
    def selected_cells(self) -> tuple[Cell, ...]:
        return self._selected

    @property
    def value(self) -> list[dict[str, Any]]:
        """Current selection as a list of {row, col, value} dicts."""
        return [cell.to_dict() for cell in self._selected]

    @property
    def grid_handle(self) -> GridHandle | None:
        return self._grid_handle

    @property
    def is_processing(self) -> bool:
        return self._is_processing

    @property
    def restore_guard(self) -> RestoreGuard:
        return self._restore_guard

    @property
    def selected_ranges(self) -> list[CellRange]:
        return RangeCompressor.compress(self._selected)

    @property
    def range_labels(self) -> list[str]:
        return RangeCompressor.format_ranges(self._selected)

    @property
    def range_text(self) -> str:
        """Human-readable ranges, e.g. "A1:C5, E2"."""
        return join_ranges(self.range_labels)

    def on_change(self, callback: SelectionCallback) -> None:
        """Register a callback: fn(selected_cells), called on real changes only."""
        self._callbacks.append(callback)

    # --- Grid handle ---

    def set_grid_handle(self, handle: GridHandle | None) -> None:
        """Replace the held handle. The selection is left untouched."""
        self._grid_handle = handle

    def attach(self, handle: GridHandle) -> None:
        """Hold ``handle`` and subscribe to its selection hooks."""
        self.set_grid_handle(handle)
        handle.on_selection_changed(self._on_grid_selection)
        handle.on_deselected(self.handle_deselect)

    def detach(self) -> None:
        self._grid_handle = None

    def _on_grid_selection(self, r1: Any, c1: Any, r2: Any, c2: Any) -> None:
        # The selection is frozen while a command runs on it
        if self._is_processing:
            return
        self.update_from_coordinates(self._grid_handle, r1, c1, r2, c2)

    # --- Updates ---

    def update_from_query(self, handle: GridHandle | None) -> bool:
        """Re-read the selection from ``handle``.

        Only the first reported range is used. Returns True if the stored
        selection was replaced.
        """
        if handle is None:
            return self._replace(())
        selected = handle.get_selected()
        if not selected:
            return self._replace(())
        first = selected[0]
        if not isinstance(first, (list, tuple)) or len(first) != 4:
            logger.debug("Ignoring malformed selection bounds {!r}", first)
            return False
        return self.update_from_coordinates(handle, *first)

    def update_from_coordinates(
        self, handle: GridHandle | None, r1: Any, c1: Any, r2: Any, c2: Any
    ) -> bool:
        """Store the rectangle (r1, c1)-(r2, c2) delivered by a selection event.

        Returns True if the stored selection was replaced. Negative or
        otherwise malformed coordinates leave the state as it is.
        """
        if handle is None:
            return self._replace(())
        bounds = coerce_bounds(r1, c1, r2, c2)
        if bounds is None:
            logger.debug("Ignoring malformed selection ({}, {})-({}, {})", r1, c1, r2, c2)
            return False
        rng = CellRange.from_corners(*bounds)
        return self._replace(self._read_cells(handle, rng))

    @staticmethod
    def _read_cells(handle: GridHandle, rng: CellRange) -> tuple[Cell, ...]:
        snapshot = read_snapshot(handle)
        cells = []
        for row, col in rng.cells():
            if snapshot is not None:
                row_data = snapshot[row] if row < len(snapshot) else ()
                value = row_data[col] if col < len(row_data) else None
            else:
                value = handle.get_data_at_cell(row, col)
            cells.append(Cell(row, col, cell_value_to_str(value)))
        return tuple(cells)

    def _replace(self, cells: Sequence[Cell]) -> bool:
        cells = tuple(cells)
        if cells == self._selected:
            return False
        self._selected = cells
        logger.debug("Selection updated: {} cell(s)", len(cells))
        for cb in self._callbacks:
            cb(self._selected)
        return True

    def clear(self) -> None:
        """Empty the selection unconditionally."""
        self._selected = ()
        for cb in self._callbacks:
            cb(self._selected)

    def set_processing(self, flag: bool) -> None:
        """Toggle the processing flag.

        While it is set, the grid hooks registered by :meth:`attach` neither
        replace the selection nor restore it. Direct calls are left to the
        caller to refuse.
        """
        self._is_processing = bool(flag)

    # --- Restore ---

    def restore_selection(self) -> bool:
        """Re-select the bounding rectangle of the stored selection on the grid.

        Holds the restore guard for the call plus the settle window so the
        widget's own deselect/select events cannot re-enter. Returns True if
        the grid was asked to select.
        """
        handle = self._grid_handle
        if handle is None or not self._selected:
            return False
        generation = self._restore_guard.acquire()
        if generation is None:
            return False
        # Release is scheduled first so a failing widget call cannot leak the guard.
        self._restore_guard.schedule_release(self._scheduler, generation)
        rng = CellRange.bounding(cell.key for cell in self._selected)
        logger.debug("Restoring selection {}", rng.to_list())
        handle.select_cells([rng.to_list()], scroll_to_selection=False, fire_events=False)
        return True

    def handle_deselect(self) -> None:
        """Deselect hook: restore on the next tick if the grid lost its selection."""
        if self._is_processing or self._restore_guard.is_set:
            return
        self._scheduler.call_soon(self._restore_if_deselected)

    def _restore_if_deselected(self) -> None:
        handle = self._grid_handle
        if handle is None or self._is_processing or self._restore_guard.is_set:
            return
        if handle.get_selected():
            return
        self.restore_selection()

    # --- Grid writes ---

    def write_cell(self, row: int, col: int, value: Any) -> bool:
        """Write ``value`` to the grid. False if no handle or bad coordinates."""
        handle = self._grid_handle
        r, c = coerce_index(row), coerce_index(col)
        if handle is None or r is None or c is None:
            return False
        handle.set_data_at_cell(r, c, value)
        return True

    def select_cell(self, row: int, col: int) -> bool:
        """Move the grid selection to a single cell."""
        handle = self._grid_handle
        r, c = coerce_index(row), coerce_index(col)
        if handle is None or r is None or c is None:
            return False
        handle.select_cell(r, c)
        return True

    def __repr__(self) -> str:
        return (
            f"SelectionStore(cells={len(self._selected)}, "
            f"processing={self._is_processing})"
        )
