"""Shared test fixtures for sheet-selection."""

from __future__ import annotations

from typing import Any

import pytest

from sheet_selection.widget.grid_model import TraitletsGrid
from sheet_selection.widget.restore import RestoreGuard
from sheet_selection.widget.selection import SelectionStore


class ManualScheduler:
    """Deterministic stand-in for an asyncio loop's call_soon/call_later.

    ``now`` doubles as the clock of any RestoreGuard built by the fixtures.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._soon: list[tuple[Any, tuple]] = []
        self._later: list[tuple[float, int, Any, tuple]] = []
        self._seq = 0

    def clock(self) -> float:
        return self.now

    def call_soon(self, callback, *args):
        self._soon.append((callback, args))
        return callback

    def call_later(self, delay, callback, *args):
        self._seq += 1
        self._later.append((self.now + delay, self._seq, callback, args))
        return self._seq

    @property
    def pending_soon(self) -> int:
        return len(self._soon)

    @property
    def pending_later(self) -> int:
        return len(self._later)

    def run_soon(self) -> None:
        """Run queued call_soon callbacks, including ones they queue."""
        while self._soon:
            callback, args = self._soon.pop(0)
            callback(*args)

    def advance(self, seconds: float) -> None:
        """Move the clock forward and run call_later callbacks now due."""
        self.now += seconds
        due = sorted(item for item in self._later if item[0] <= self.now)
        self._later = [item for item in self._later if item[0] > self.now]
        for _, _, callback, args in due:
            callback(*args)
        self.run_soon()


class FakeGridHandle:
    """Minimal GridHandle double backed by a dict, with no get_data fast path."""

    def __init__(self, values: dict[tuple[int, int], Any] | None = None) -> None:
        self.values: dict[tuple[int, int], Any] = dict(values or {})
        self.selected: list[list[int]] | None = None
        self.select_cells_calls: list[tuple] = []
        self.select_cell_calls: list[tuple] = []
        self.data_reads = 0
        self._selection_callbacks: list = []
        self._deselect_callbacks: list = []

    def get_selected(self):
        return self.selected

    def get_data_at_cell(self, row, col):
        self.data_reads += 1
        return self.values.get((row, col))

    def set_data_at_cell(self, row, col, value):
        self.values[(row, col)] = value

    def select_cells(self, ranges, scroll_to_selection=True, fire_events=True):
        self.select_cells_calls.append((ranges, scroll_to_selection, fire_events))
        self.selected = [list(r) for r in ranges]

    def select_cell(self, row, col, end_row=None, end_col=None, scroll=True, fire_events=True):
        self.select_cell_calls.append((row, col))
        self.selected = [[row, col, row if end_row is None else end_row, col if end_col is None else end_col]]

    def on_selection_changed(self, callback):
        self._selection_callbacks.append(callback)

    def on_deselected(self, callback):
        self._deselect_callbacks.append(callback)

    # --- Test helpers ---

    def user_select(self, r1, c1, r2, c2):
        self.selected = [[r1, c1, r2, c2]]
        for cb in self._selection_callbacks:
            cb(r1, c1, r2, c2)

    def lose_selection(self):
        self.selected = None
        for cb in self._deselect_callbacks:
            cb()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def guard(scheduler):
    return RestoreGuard(settle=0.1, timeout=1.0, clock=scheduler.clock)


@pytest.fixture
def fake_grid():
    """3x3 block of values starting at A1."""
    values = {(r, c): f"r{r}c{c}" for r in range(3) for c in range(3)}
    return FakeGridHandle(values)


@pytest.fixture
def store(scheduler, guard):
    return SelectionStore(scheduler=scheduler, restore_guard=guard)


@pytest.fixture
def small_grid():
    """4x3 grid with a header row."""
    return TraitletsGrid.from_rows([
        ["name", "q1", "q2"],
        ["north", 10, 20],
        ["south", 30, 40],
        ["east", 50, 60],
    ])
