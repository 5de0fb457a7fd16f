from __future__ import annotations

from typing import Optional

from .grid import GameGrid
from .movement import any_occupied
from .pieces import Piece


def wall_correction(grid: GameGrid, piece: Piece) -> Piece:
    """Translate ``piece`` back inside the side walls and above the floor.

    The left and right overflows are summed into a single horizontal shift.
    Only the floor is corrected vertically; a piece poking out of the top of
    the board is left where it is.
    """
    cells = piece.cells()
    left = min(0, min(x for x, _ in cells))
    right = max(0, max(x for x, _ in cells) - (grid.width - 1))
    bottom = min(y for _, y in cells)
    lift = -bottom if bottom < 0 else 0
    return piece.translated(-(left + right), lift)


def try_rotate(grid: GameGrid, piece: Piece, clockwise: bool) -> Optional[Piece]:
    """Return the rotated and wall-corrected piece, or None if it would overlap."""
    candidate = wall_correction(grid, piece.rotated(clockwise))
    if any_occupied(grid, candidate.cells()):
        return None
    return candidate
