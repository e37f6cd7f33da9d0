"""RangeCompressor: turn a set of selected cells into rectangular ranges.

The algorithm is a greedy, row-major maximal-rectangle sweep:

1. Sort cells by (row, col).
2. For each cell not yet covered, grow a horizontal run to the right, then
   grow that run downward while the *whole* column span of the next row is
   selected.
3. Emit the rectangle and mark its cells covered.

Only uncovered cells take part in growth, so the emitted ranges are
pairwise disjoint and their union is exactly the input. The output order is
deterministic for a given input set.

The result is not guaranteed to use the fewest possible ranges: an "L" or
a checkerboard can split into more rectangles than an exact cover would
need. Exact minimum rectangle cover is an NP-hard set-cover variant; the
greedy sweep runs in O(n * k) (k = rectangle size) and its output is only
used for display and as an advisory annotation in command payloads.
"""

from __future__ import annotations

from typing import Any, Iterable

from ..core.cell import CellRange
from ..core.column_label import range_label
from ..core.validation import sanitize_cells


class RangeCompressor:
    """Greedy maximal-rectangle compression of a cell set."""

    @staticmethod
    def compress(cells: Iterable[Any]) -> list[CellRange]:
        """Compress ``cells`` into an ordered list of disjoint ranges.

        ``cells`` may hold :class:`Cell` objects, (row, col) tuples, or
        {row, col} dicts. Malformed coordinates are dropped.
        """
        keys = sorted(c.key for c in sanitize_cells(cells))
        selected = set(keys)
        processed: set[tuple[int, int]] = set()
        ranges: list[CellRange] = []

        def available(r: int, c: int) -> bool:
            return (r, c) in selected and (r, c) not in processed

        for row, col in keys:
            if (row, col) in processed:
                continue

            end_col = col
            while available(row, end_col + 1):
                end_col += 1

            end_row = row
            while all(available(end_row + 1, c) for c in range(col, end_col + 1)):
                end_row += 1

            rng = CellRange(row, col, end_row, end_col)
            processed.update(rng.cells())
            ranges.append(rng)

        return ranges

    @classmethod
    def format_ranges(cls, cells: Iterable[Any]) -> list[str]:
        """A1-notation labels of :meth:`compress`, in the same order."""
        return [range_label(rng) for rng in cls.compress(cells)]


def compress(cells: Iterable[Any]) -> list[CellRange]:
    return RangeCompressor.compress(cells)


def format_ranges(cells: Iterable[Any]) -> list[str]:
    """Format a selection as A1 ranges, e.g. ``["A1:C5", "E2"]``."""
    return RangeCompressor.format_ranges(cells)


def join_ranges(labels: Iterable[str], sep: str = ", ") -> str:
    """Display string for a list of range labels."""
    return sep.join(labels)


def covered_cells(ranges: Iterable[CellRange]) -> set[tuple[int, int]]:
    """Union of all (row, col) covered by ``ranges``."""
    result: set[tuple[int, int]] = set()
    for rng in ranges:
        result.update(rng.cells())
    return result


__all__ = [
    "RangeCompressor",
    "compress",
    "format_ranges",
    "join_ranges",
    "covered_cells",
]
