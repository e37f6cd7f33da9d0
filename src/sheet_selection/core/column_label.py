"""Column-label codec: zero-based column index <-> spreadsheet letters.

Labels use bijective base-26 numbering. There is no zero digit, so after
"Z" comes "AA" rather than "BA". The ``- 1`` after each division is what
makes the numbering bijective.
"""

from __future__ import annotations

import numbers
import re

from .cell import CellRange

_CELL_LABEL_RE = re.compile(r"^([A-Za-z]+)([1-9][0-9]*)$")


def _check_index(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}.")
    value = int(value)
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}.")
    return value


def column_index_to_label(col: int) -> str:
    """Convert a zero-based column index to its letter label.

    >>> column_index_to_label(0), column_index_to_label(26), column_index_to_label(702)
    ('A', 'AA', 'AAA')
    """
    col = _check_index(col, "Column index")
    label = ""
    while col >= 0:
        label = chr(ord("A") + col % 26) + label
        col = col // 26 - 1
    return label


def column_label_to_index(label: str) -> int:
    """Inverse of :func:`column_index_to_label` (case-insensitive)."""
    if not label or not label.isascii() or not label.isalpha():
        raise ValueError(f"Invalid column label '{label}'.")
    index = 0
    for ch in label.upper():
        index = index * 26 + (ord(ch) - ord("A") + 1)
    return index - 1


def cell_label(row: int, col: int) -> str:
    """A1-style label of a zero-based (row, col); rows display 1-based."""
    row = _check_index(row, "Row index")
    return f"{column_index_to_label(col)}{row + 1}"


def parse_cell_label(label: str) -> tuple[int, int]:
    """Parse "C5" into zero-based (row, col) = (4, 2)."""
    match = _CELL_LABEL_RE.match(label.strip())
    if match is None:
        raise ValueError(f"Invalid cell label '{label}'.")
    letters, digits = match.groups()
    return int(digits) - 1, column_label_to_index(letters)


def range_label(rng: CellRange) -> str:
    """Return "C5" for a single cell, "A1:C5" otherwise."""
    start = cell_label(rng.start_row, rng.start_col)
    if rng.is_single_cell:
        return start
    return f"{start}:{cell_label(rng.end_row, rng.end_col)}"
