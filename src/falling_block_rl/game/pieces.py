from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Tuple


class TetrominoType(IntEnum):
    O = 1
    I = 2
    L = 3
    J = 4
    S = 5
    Z = 6
    T = 7


Offset = Tuple[int, int]
Offsets = Tuple[Offset, Offset, Offset]


# Cells besides the anchor, which sits at the implicit offset (0, 0).
BASE_OFFSETS: Dict[TetrominoType, Offsets] = {
    TetrominoType.O: ((0, 1), (1, 1), (1, 0)),
    TetrominoType.I: ((0, -1), (0, 1), (0, 2)),
    TetrominoType.L: ((0, 1), (0, 2), (1, 0)),
    TetrominoType.J: ((0, 1), (0, 2), (-1, 0)),
    TetrominoType.S: ((-1, 0), (0, 1), (1, 1)),
    TetrominoType.Z: ((-1, 1), (0, 1), (1, 0)),
    TetrominoType.T: ((-1, 0), (0, 1), (1, 0)),
}


def rotate_offset(offset: Offset, clockwise: bool) -> Offset:
    dx, dy = offset
    if clockwise:
        return dy, -dx
    return -dy, dx


@dataclass(frozen=True)
class Piece:
    kind: TetrominoType
    x: int
    y: int
    offsets: Offsets

    @classmethod
    def spawn(cls, kind: TetrominoType, x: int, y: int) -> "Piece":
        return cls(kind=kind, x=x, y=y, offsets=BASE_OFFSETS[kind])

    def cells(self) -> List[Tuple[int, int]]:
        cells = [(self.x, self.y)]
        for dx, dy in self.offsets:
            cells.append((self.x + dx, self.y + dy))
        return cells

    def translated(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self, clockwise: bool) -> "Piece":
        """Rotate the offsets 90 degrees about the anchor."""
        offsets = tuple(rotate_offset(o, clockwise) for o in self.offsets)
        return replace(self, offsets=offsets)  # type: ignore[arg-type]
