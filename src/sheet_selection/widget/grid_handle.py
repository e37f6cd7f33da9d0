"""GridHandle: the capability interface of an external grid widget.

The selection store never depends on a concrete widget. Anything exposing
these methods and hooks can be held, including test doubles.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Sequence, runtime_checkable

# [start_row, start_col, end_row, end_col], inclusive; corners may be inverted
# when the user drags up or left.
SelectionBounds = Sequence[int]

SelectionChangedCallback = Callable[[int, int, int, int], Any]
DeselectedCallback = Callable[[], Any]


@runtime_checkable
class GridHandle(Protocol):
    """Read/write/selection operations on a spreadsheet widget."""

    def get_selected(self) -> Optional[list[SelectionBounds]]:
        """Current selection ranges; the first element is the primary one."""
        ...

    def get_data_at_cell(self, row: int, col: int) -> Any:
        ...

    def set_data_at_cell(self, row: int, col: int, value: Any) -> None:
        ...

    def select_cells(
        self,
        ranges: list[SelectionBounds],
        scroll_to_selection: bool = True,
        fire_events: bool = True,
    ) -> None:
        ...

    def select_cell(
        self,
        row: int,
        col: int,
        end_row: int | None = None,
        end_col: int | None = None,
        scroll: bool = True,
        fire_events: bool = True,
    ) -> None:
        ...

    def on_selection_changed(self, callback: SelectionChangedCallback) -> None:
        """Register fn(r1, c1, r2, c2) for user-driven selection changes."""
        ...

    def on_deselected(self, callback: DeselectedCallback) -> None:
        """Register fn() called when the widget loses its selection."""
        ...


def read_snapshot(handle: Any) -> list[list[Any]] | None:
    """Full 2D data snapshot via the optional ``get_data`` fast path.

    Returns None when the handle does not offer it.
    """
    get_data = getattr(handle, "get_data", None)
    if not callable(get_data):
        return None
    return get_data()
