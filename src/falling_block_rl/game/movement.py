from __future__ import annotations

from typing import Iterable, Optional

from .grid import Coordinate, GameGrid
from .pieces import Piece


def any_occupied(grid: GameGrid, cells: Iterable[Coordinate]) -> bool:
    """True if an on-board cell of ``cells`` is already filled.

    Rows at or above the top of the board are open sky and never collide.
    Columns must already be in range.
    """
    for x, y in cells:
        if y >= grid.height:
            continue
        if grid.is_occupied(x, y):
            return True
    return False


def try_shift(grid: GameGrid, piece: Piece, dx: int) -> Optional[Piece]:
    """Return ``piece`` moved ``dx`` columns, or None if the move is blocked."""
    candidate = piece.translated(dx, 0)
    cells = candidate.cells()
    if not all(grid.in_columns(x) for x, _ in cells):
        return None
    if any_occupied(grid, cells):
        return None
    return candidate


def try_fall(grid: GameGrid, piece: Piece) -> Optional[Piece]:
    """Return ``piece`` one row lower, or None when gravity is blocked."""
    if min(y for _, y in piece.cells()) <= 0:
        return None
    candidate = piece.translated(0, -1)
    if any_occupied(grid, candidate.cells()):
        return None
    return candidate
