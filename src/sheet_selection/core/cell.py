"""Cell and range primitives in grid coordinate space."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator


@dataclass(frozen=True)
class Cell:
    """A selected grid cell.

    Identity is (row, col). ``value`` is a snapshot of the grid content at
    selection time; the grid stays the source of truth.
    """

    row: int
    col: int
    value: str = ""

    @property
    def key(self) -> tuple[int, int]:
        return (self.row, self.col)

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row, "col": self.col, "value": self.value}


@dataclass(frozen=True)
class CellRange:
    """An axis-aligned rectangle of cells, bounds inclusive."""

    start_row: int
    start_col: int
    end_row: int
    end_col: int

    def __post_init__(self) -> None:
        if self.start_row > self.end_row or self.start_col > self.end_col:
            raise ValueError(
                f"Range start must not exceed end, got "
                f"({self.start_row}, {self.start_col})-({self.end_row}, {self.end_col})."
            )

    @classmethod
    def from_corners(cls, r1: int, c1: int, r2: int, c2: int) -> CellRange:
        """Build a range from two opposite corners in any order."""
        return cls(min(r1, r2), min(c1, c2), max(r1, r2), max(c1, c2))

    @classmethod
    def bounding(cls, keys: Iterable[tuple[int, int]]) -> CellRange:
        """Smallest range covering every (row, col) in ``keys``."""
        keys = list(keys)
        if not keys:
            raise ValueError("Cannot compute the bounding range of no cells.")
        rows = [r for r, _ in keys]
        cols = [c for _, c in keys]
        return cls(min(rows), min(cols), max(rows), max(cols))

    @property
    def is_single_cell(self) -> bool:
        return self.start_row == self.end_row and self.start_col == self.end_col

    @property
    def n_rows(self) -> int:
        return self.end_row - self.start_row + 1

    @property
    def n_cols(self) -> int:
        return self.end_col - self.start_col + 1

    @property
    def size(self) -> int:
        return self.n_rows * self.n_cols

    def contains(self, row: int, col: int) -> bool:
        return (
            self.start_row <= row <= self.end_row
            and self.start_col <= col <= self.end_col
        )

    def cells(self) -> Iterator[tuple[int, int]]:
        """Iterate (row, col) pairs in row-major order."""
        for r in range(self.start_row, self.end_row + 1):
            for c in range(self.start_col, self.end_col + 1):
                yield (r, c)

    def to_list(self) -> list[int]:
        """[start_row, start_col, end_row, end_col], the grid handle's shape."""
        return [self.start_row, self.start_col, self.end_row, self.end_col]
