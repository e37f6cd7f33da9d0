"""Coordinate validation for selection data coming from a grid widget.

Selection display is advisory, so bad coordinates are dropped rather than
raised: a corrupt cell from the widget must not take down range display.
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Iterable

import numpy as np
from loguru import logger

from .cell import Cell


def coerce_index(value: Any) -> int | None:
    """Return ``value`` as a non-negative int, or None if it is not one.

    Any integral type is accepted, numpy integers included. Integral floats
    (``3.0``) are accepted since JSON bridges often deliver numbers as
    floats. Booleans, NaN, infinities and negatives are rejected.
    """
    if isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, numbers.Integral):
        value = int(value)
        return value if value >= 0 else None
    if isinstance(value, numbers.Real):
        value = float(value)
        if not math.isfinite(value) or not value.is_integer() or value < 0:
            return None
        return int(value)
    return None


def coerce_bounds(r1: Any, c1: Any, r2: Any, c2: Any) -> tuple[int, int, int, int] | None:
    """Validate four selection corners; None if any is malformed."""
    coerced = [coerce_index(v) for v in (r1, c1, r2, c2)]
    if any(v is None for v in coerced):
        return None
    return tuple(coerced)  # type: ignore[return-value]


def cell_value_to_str(value: Any) -> str:
    """Snapshot a grid value as the string stored on a Cell."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value)


def sanitize_cells(cells: Iterable[Any]) -> list[Cell]:
    """Normalize cells to :class:`Cell`, dropping malformed entries.

    Accepts Cell objects, (row, col) / (row, col, value) tuples, or dicts
    with ``row``/``col`` (and optional ``value``) keys. Duplicate
    coordinates keep their first occurrence.
    """
    result: list[Cell] = []
    seen: set[tuple[int, int]] = set()
    dropped = 0
    for item in cells:
        if isinstance(item, Cell):
            row, col, value = item.row, item.col, item.value
        elif isinstance(item, dict):
            row, col, value = item.get("row"), item.get("col"), item.get("value", "")
        elif isinstance(item, (tuple, list)) and len(item) in (2, 3):
            row, col = item[0], item[1]
            value = item[2] if len(item) == 3 else ""
        else:
            dropped += 1
            continue

        r, c = coerce_index(row), coerce_index(col)
        if r is None or c is None:
            dropped += 1
            continue
        if (r, c) in seen:
            continue
        seen.add((r, c))
        result.append(Cell(r, c, cell_value_to_str(value)))

    if dropped:
        logger.debug("Dropped {} malformed cell(s) from selection input", dropped)
    return result
