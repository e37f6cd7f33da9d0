"""Tests for Cell and CellRange primitives and coordinate validation."""

import math

import numpy as np
import pytest

from sheet_selection.core.cell import Cell, CellRange
from sheet_selection.core.validation import (
    coerce_bounds,
    coerce_index,
    cell_value_to_str,
    sanitize_cells,
)


class TestCellRange:
    def test_from_corners_normalizes(self):
        rng = CellRange.from_corners(5, 3, 1, 0)
        assert rng.to_list() == [1, 0, 5, 3]

    def test_inverted_bounds_raise(self):
        with pytest.raises(ValueError, match="must not exceed"):
            CellRange(3, 0, 1, 0)

    def test_dimensions(self):
        rng = CellRange(1, 1, 3, 4)
        assert rng.n_rows == 3
        assert rng.n_cols == 4
        assert rng.size == 12
        assert not rng.is_single_cell

    def test_cells_row_major(self):
        assert list(CellRange(0, 0, 1, 1).cells()) == [(0, 0), (0, 1), (1, 0), (1, 1)]

    def test_contains(self):
        rng = CellRange(1, 1, 2, 2)
        assert rng.contains(2, 1)
        assert not rng.contains(0, 1)
        assert not rng.contains(1, 3)

    def test_bounding(self):
        rng = CellRange.bounding([(3, 1), (0, 4), (2, 2)])
        assert rng.to_list() == [0, 1, 3, 4]

    def test_bounding_empty_raises(self):
        with pytest.raises(ValueError, match="no cells"):
            CellRange.bounding([])


class TestCell:
    def test_identity_key_and_dict(self):
        cell = Cell(2, 3, "x")
        assert cell.key == (2, 3)
        assert cell.to_dict() == {"row": 2, "col": 3, "value": "x"}

    def test_equality_includes_value(self):
        assert Cell(0, 0, "a") != Cell(0, 0, "b")
        assert Cell(0, 0, "a") == Cell(0, 0, "a")


class TestCoerceIndex:
    @pytest.mark.parametrize("value, expected", [
        (0, 0),
        (7, 7),
        (3.0, 3),
        (-1, None),
        (-2.0, None),
        (1.5, None),
        (math.nan, None),
        (math.inf, None),
        (True, None),
        ("3", None),
        (None, None),
        (np.int64(4), 4),
        (np.uint8(2), 2),
        (np.int32(-1), None),
        (np.float64(2.0), 2),
        (np.float32(2.5), None),
        (np.bool_(True), None),
    ])
    def test_coerce(self, value, expected):
        assert coerce_index(value) == expected

    def test_bounds_rejects_any_bad_corner(self):
        assert coerce_bounds(0, 0, 1, 1) == (0, 0, 1, 1)
        assert coerce_bounds(0, -1, 1, 1) is None
        assert coerce_bounds(0, 0, math.nan, 1) is None


class TestSanitizeCells:
    def test_mixed_inputs(self):
        cells = sanitize_cells([
            Cell(0, 0, "a"),
            (1, 2),
            (3, 4, 5),
            {"row": 2, "col": 2, "value": None},
        ])
        assert cells == [Cell(0, 0, "a"), Cell(1, 2, ""), Cell(3, 4, "5"), Cell(2, 2, "")]

    def test_drops_malformed(self):
        cells = sanitize_cells([(0, 0), (-1, 0), (0, math.nan), "A1", {"row": 1}, (1, 1)])
        assert [c.key for c in cells] == [(0, 0), (1, 1)]

    def test_duplicates_keep_first(self):
        cells = sanitize_cells([Cell(0, 0, "first"), Cell(0, 0, "second")])
        assert cells == [Cell(0, 0, "first")]

    def test_value_snapshot(self):
        assert cell_value_to_str(None) == ""
        assert cell_value_to_str(math.nan) == ""
        assert cell_value_to_str(12) == "12"
        assert cell_value_to_str("=SUM(A1:A3)") == "=SUM(A1:A3)"
