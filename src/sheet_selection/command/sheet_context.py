"""Sheet context: the non-empty cells of the grid, sent alongside a command."""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from ..core.validation import cell_value_to_str
from ..widget.grid_handle import read_snapshot

DEFAULT_MAX_CELLS = 500


def _filled_mask(frame: pd.DataFrame) -> np.ndarray:
    return frame.map(lambda v: cell_value_to_str(v) != "").to_numpy(dtype=bool)


def snapshot_frame(handle: Any) -> pd.DataFrame | None:
    """Grid snapshot as a DataFrame trimmed to its used area.

    Trailing rows and columns with no content are dropped. Returns None if
    the handle has no ``get_data`` fast path, and an empty frame if the grid
    holds no content at all.
    """
    data = read_snapshot(handle)
    if data is None:
        return None
    if not data:
        return pd.DataFrame()
    frame = pd.DataFrame(data, dtype=object)
    rows, cols = np.nonzero(_filled_mask(frame))
    if len(rows) == 0:
        return pd.DataFrame()
    return frame.iloc[: rows.max() + 1, : cols.max() + 1]


def build_sheet_context(
    handle: Any, max_cells: int = DEFAULT_MAX_CELLS
) -> list[dict[str, Any]] | None:
    """Non-empty cells as [{row, col, value}] in row-major order.

    At most ``max_cells`` entries are returned. None when the handle cannot
    provide a snapshot.
    """
    if max_cells < 0:
        raise ValueError(f"max_cells must be >= 0, got {max_cells}.")
    frame = snapshot_frame(handle)
    if frame is None:
        return None
    if frame.empty:
        return []
    # np.nonzero walks the mask in row-major order
    rows, cols = np.nonzero(_filled_mask(frame))
    return [
        {"row": int(r), "col": int(c), "value": cell_value_to_str(frame.iat[r, c])}
        for r, c in zip(rows[:max_cells], cols[:max_cells])
    ]
