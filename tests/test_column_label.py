"""Tests for the column-label codec and A1 labels."""

import numpy as np
import pytest

from sheet_selection.core.cell import CellRange
from sheet_selection.core.column_label import (
    cell_label,
    column_index_to_label,
    column_label_to_index,
    parse_cell_label,
    range_label,
)


class TestColumnIndexToLabel:
    @pytest.mark.parametrize("col, label", [
        (0, "A"),
        (1, "B"),
        (25, "Z"),
        (26, "AA"),
        (27, "AB"),
        (51, "AZ"),
        (52, "BA"),
        (701, "ZZ"),
        (702, "AAA"),
        (16383, "XFD"),
    ])
    def test_known_labels(self, col, label):
        assert column_index_to_label(col) == label

    def test_multiples_of_26_have_no_zero_digit(self):
        # 26 * k - 1 always ends in "Z", never in a zero digit
        assert column_index_to_label(25) == "Z"
        assert column_index_to_label(77) == "BZ"
        assert column_index_to_label(675) == "YZ"

    def test_bijection_prefix(self):
        labels = [column_index_to_label(i) for i in range(20000)]
        assert len(set(labels)) == len(labels)
        for i, label in enumerate(labels):
            assert column_label_to_index(label) == i

    def test_labels_grow_in_length_at_boundaries(self):
        assert len(column_index_to_label(701)) == 2
        assert len(column_index_to_label(702)) == 3
        assert len(column_index_to_label(18277)) == 3
        assert len(column_index_to_label(18278)) == 4

    @pytest.mark.parametrize("bad", [-1, -26, 1.5, "A", True, None])
    def test_invalid_input_raises(self, bad):
        with pytest.raises(ValueError):
            column_index_to_label(bad)


class TestColumnLabelToIndex:
    def test_case_insensitive(self):
        assert column_label_to_index("aa") == 26
        assert column_label_to_index("Zz") == 701

    @pytest.mark.parametrize("bad", ["", "A1", "Ä", "-"])
    def test_invalid_label_raises(self, bad):
        with pytest.raises(ValueError, match="Invalid column label"):
            column_label_to_index(bad)


class TestCellLabel:
    def test_rows_are_one_based(self):
        assert cell_label(0, 0) == "A1"
        assert cell_label(4, 2) == "C5"
        assert cell_label(99, 26) == "AA100"

    def test_negative_row_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            cell_label(-1, 0)

    def test_parse_round_trip(self):
        assert parse_cell_label("C5") == (4, 2)
        assert parse_cell_label(" aa100 ") == (99, 26)

    @pytest.mark.parametrize("bad", ["", "5C", "A0", "A", "A-1", "A1:B2"])
    def test_parse_invalid(self, bad):
        with pytest.raises(ValueError, match="Invalid cell label"):
            parse_cell_label(bad)


class TestRangeLabel:
    def test_single_cell_range(self):
        assert range_label(CellRange(4, 2, 4, 2)) == "C5"

    def test_block_range(self):
        assert range_label(CellRange(0, 0, 4, 2)) == "A1:C5"

    def test_single_row_range(self):
        assert range_label(CellRange(1, 0, 1, 3)) == "A2:D2"


class TestNumpyIndices:
    def test_numpy_integers_accepted(self):
        assert column_index_to_label(np.int64(27)) == "AB"
        assert cell_label(np.int32(4), np.int64(2)) == "C5"

    def test_numpy_negative_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            column_index_to_label(np.int64(-1))
