"""TraitletsGrid: in-memory grid widget implementing the GridHandle interface.

Selection lives in an observed ``selection`` trait, the same way a
frontend-synced widget receives selection updates from JS. Changes to the
trait drive the selection-changed and deselected hooks.
"""

from __future__ import annotations

import contextlib
import copy
from typing import Any, Iterator

import traitlets

from .grid_handle import DeselectedCallback, SelectionBounds, SelectionChangedCallback


class TraitletsGrid(traitlets.HasTraits):
    """A rows x cols grid of values with a single active selection.

    Traits:
    - n_rows / n_cols: grid dimensions
    - data: row-major list of row lists
    - selection: list of [r1, c1, r2, c2] ranges; empty means no selection

    With ``deselect_before_select`` set, programmatic selection first clears
    the selection (emitting a deselect) and then applies the new one, which
    is how several real grid widgets behave.
    """

    n_rows = traitlets.Int(100)
    n_cols = traitlets.Int(26)
    data = traitlets.List()
    selection = traitlets.List()
    deselect_before_select = traitlets.Bool(False)

    def __init__(self, n_rows: int = 100, n_cols: int = 26, **kwargs: Any) -> None:
        if n_rows <= 0 or n_cols <= 0:
            raise ValueError(f"Grid must have at least one cell, got {n_rows}x{n_cols}.")
        data = kwargs.pop("data", None)
        if data is None:
            data = [["" for _ in range(n_cols)] for _ in range(n_rows)]
        super().__init__(n_rows=n_rows, n_cols=n_cols, data=data, **kwargs)
        self._selection_callbacks: list[SelectionChangedCallback] = []
        self._deselect_callbacks: list[DeselectedCallback] = []
        self._fire_events = True
        self.observe(self._on_selection_trait, names=["selection"])

    @classmethod
    def from_rows(cls, rows: list[list[Any]], **kwargs: Any) -> TraitletsGrid:
        """Build a grid from row lists; short rows are padded with ""."""
        if not rows:
            raise ValueError("Cannot build a grid from no rows.")
        n_cols = max(len(r) for r in rows) or 1
        data = [list(r) + [""] * (n_cols - len(r)) for r in rows]
        return cls(n_rows=len(data), n_cols=n_cols, data=data, **kwargs)

    # --- GridHandle: reads ---

    def get_selected(self) -> list[list[int]] | None:
        if not self.selection:
            return None
        return [list(r) for r in self.selection]

    def get_data_at_cell(self, row: int, col: int) -> Any:
        if not self._in_bounds(row, col):
            return None
        return self.data[row][col]

    def get_data(self) -> list[list[Any]]:
        return copy.deepcopy(self.data)

    # --- GridHandle: writes ---

    def set_data_at_cell(self, row: int, col: int, value: Any) -> None:
        self._check_bounds(row, col)
        self.data[row][col] = value

    def select_cells(
        self,
        ranges: list[SelectionBounds],
        scroll_to_selection: bool = True,
        fire_events: bool = True,
    ) -> None:
        normalized = []
        for bounds in ranges:
            r1, c1, r2, c2 = (int(v) for v in bounds)
            self._check_bounds(r1, c1)
            self._check_bounds(r2, c2)
            normalized.append([r1, c1, r2, c2])
        if self.deselect_before_select and self.selection:
            # Some widgets drop focus first; that deselect always fires.
            self.selection = []
        with self._events(fire_events):
            self.selection = normalized

    def select_cell(
        self,
        row: int,
        col: int,
        end_row: int | None = None,
        end_col: int | None = None,
        scroll: bool = True,
        fire_events: bool = True,
    ) -> None:
        end_row = row if end_row is None else end_row
        end_col = col if end_col is None else end_col
        self.select_cells([[row, col, end_row, end_col]], scroll, fire_events)

    def deselect_cell(self) -> None:
        """Drop the selection, as when the grid loses focus."""
        self.selection = []

    # --- GridHandle: hooks ---

    def on_selection_changed(self, callback: SelectionChangedCallback) -> None:
        self._selection_callbacks.append(callback)

    def on_deselected(self, callback: DeselectedCallback) -> None:
        self._deselect_callbacks.append(callback)

    # --- Internals ---

    @contextlib.contextmanager
    def _events(self, enabled: bool) -> Iterator[None]:
        previous = self._fire_events
        self._fire_events = enabled
        try:
            yield
        finally:
            self._fire_events = previous

    def _on_selection_trait(self, change: dict) -> None:
        if not self._fire_events:
            return
        new = change["new"]
        if new:
            r1, c1, r2, c2 = new[0]
            for cb in list(self._selection_callbacks):
                cb(r1, c1, r2, c2)
        else:
            for cb in list(self._deselect_callbacks):
                cb()

    def _in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.n_rows and 0 <= col < self.n_cols

    def _check_bounds(self, row: int, col: int) -> None:
        if not self._in_bounds(row, col):
            raise IndexError(
                f"Cell ({row}, {col}) is outside the {self.n_rows}x{self.n_cols} grid."
            )

    def __repr__(self) -> str:
        return f"TraitletsGrid({self.n_rows}x{self.n_cols}, selection={self.selection})"
