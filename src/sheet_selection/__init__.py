"""sheet-selection: spreadsheet selection compression and grid selection sync."""

from loguru import logger

from ._version import __version__
from .core.cell import Cell, CellRange
from .core.column_label import (
    cell_label,
    column_index_to_label,
    column_label_to_index,
    parse_cell_label,
    range_label,
)
from .transform.range_compressor import (
    RangeCompressor,
    compress,
    format_ranges,
    join_ranges,
)
from .widget.grid_handle import GridHandle
from .widget.grid_model import TraitletsGrid
from .widget.restore import RestoreGuard
from .widget.selection import SelectionStore
from .dashboard.state import EditorSession

# Library default: silent until the application opts in via setup_logging().
logger.disable("sheet_selection")

__all__ = [
    "__version__",
    "Cell",
    "CellRange",
    "cell_label",
    "column_index_to_label",
    "column_label_to_index",
    "parse_cell_label",
    "range_label",
    "RangeCompressor",
    "compress",
    "format_ranges",
    "join_ranges",
    "GridHandle",
    "TraitletsGrid",
    "RestoreGuard",
    "SelectionStore",
    "EditorSession",
]
