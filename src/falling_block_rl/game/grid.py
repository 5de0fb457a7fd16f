from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np


Coordinate = Tuple[int, int]


class CellOutOfBounds(AssertionError):
    """Raised when the engine reads or writes a cell outside the board."""


@dataclass(frozen=True)
class RowClearResult:
    cleared_count: int
    sum_of_heights: int


class GameGrid:
    """Discrete W x H board of occupied flags.

    Row 0 is the bottom row and row ``height - 1`` the top one. Storage is a
    C-ordered ``(height, width)`` boolean array, so the flat index of a cell is
    ``y * width + x``.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.bool_)

    def reset(self) -> None:
        self.grid.fill(False)

    def in_columns(self, x: int) -> bool:
        return 0 <= x < self.width

    def in_rows(self, y: int) -> bool:
        return 0 <= y < self.height

    def is_inside(self, x: int, y: int) -> bool:
        return self.in_columns(x) and self.in_rows(y)

    def index_of(self, x: int, y: int) -> int:
        return y * self.width + x

    def _check(self, x: int, y: int) -> None:
        if not self.is_inside(x, y):
            raise CellOutOfBounds(f"cell ({x}, {y}) outside {self.width}x{self.height} board")

    def is_occupied(self, x: int, y: int) -> bool:
        self._check(x, y)
        return bool(self.grid[y, x])

    def set_occupied(self, x: int, y: int) -> None:
        self._check(x, y)
        self.grid[y, x] = True

    def clear_full_rows(self) -> RowClearResult:
        """Remove full rows, compact the rest downward and refill the top.

        ``sum_of_heights`` adds ``row + 1`` for every cleared row, using the
        row index before compaction.
        """
        compacted = np.zeros_like(self.grid)
        cleared = 0
        heights = 0
        for y in range(self.height):
            if np.all(self.grid[y]):
                cleared += 1
                heights += y + 1
                continue
            compacted[y - cleared] = self.grid[y]
        if cleared:
            self.grid = compacted
        return RowClearResult(cleared_count=cleared, sum_of_heights=heights)

    def filled_cells(self) -> int:
        return int(np.count_nonzero(self.grid))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
