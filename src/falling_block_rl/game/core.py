from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

import numpy as np

from .grid import Coordinate, GameGrid, RowClearResult
from .movement import try_fall, try_shift
from .pieces import Piece, TetrominoType
from .rotation import try_rotate
from .rules import ScoringRules

logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    SOFT_DROP = 2
    ROTATE_CW = 3
    ROTATE_CCW = 4
    NONE = 5


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_x: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width < 4 or self.height < 4:
            raise ValueError(f"board must be at least 4x4, got {self.width}x{self.height}")
        # Spawn offsets reach one column either side of the anchor
        if self.spawn_x is None:
            self.spawn_x = min(4, self.width - 2)
        if not 1 <= self.spawn_x <= self.width - 2:
            raise ValueError(
                f"spawn column {self.spawn_x} must be in 1..{self.width - 2} for a board of width {self.width}"
            )

    @property
    def spawn_y(self) -> int:
        return self.height - 1


@dataclass(frozen=True)
class Frame:
    """Immutable render snapshot. ``rows`` is bottom row first."""

    width: int
    height: int
    rows: Tuple[Tuple[bool, ...], ...]
    piece_cells: Tuple[Coordinate, ...]
    piece_kind: Optional[TetrominoType]
    score: int
    game_over: bool

    def is_filled(self, x: int, y: int) -> bool:
        return self.rows[y][x] or (x, y) in self.piece_cells

    def to_array(self) -> np.ndarray:
        # 1 for frozen cells, -1 for the visible part of the falling piece
        state = np.array(self.rows, dtype=np.int8).reshape(self.height, self.width)
        for x, y in self.piece_cells:
            if 0 <= y < self.height and 0 <= x < self.width:
                state[y, x] = -1
        return state


class FallingBlockGame:
    """Session state: board, live piece, score and play flag."""

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.score = 0
        self.rows_cleared_total = 0
        self.pieces_spawned = 0
        self.game_over = False
        self.current_piece: Optional[Piece] = None
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.score = 0
        self.rows_cleared_total = 0
        self.pieces_spawned = 0
        self.game_over = False
        self._spawn_piece()

    @property
    def playing(self) -> bool:
        return not self.game_over

    def generate_piece(self) -> Piece:
        kind = self.rng.choice(list(TetrominoType))
        return Piece.spawn(kind, self.config.spawn_x, self.config.spawn_y)

    def _spawn_piece(self) -> None:
        self.current_piece = self.generate_piece()
        self.pieces_spawned += 1
        logger.debug("spawned %s at (%d, %d)", self.current_piece.kind.name,
                     self.current_piece.x, self.current_piece.y)

    def _commit(self, candidate: Optional[Piece]) -> bool:
        if candidate is None:
            return False
        self.current_piece = candidate
        return True

    def move_left(self) -> bool:
        if self.game_over or self.current_piece is None:
            return False
        return self._commit(try_shift(self.grid, self.current_piece, -1))

    def move_right(self) -> bool:
        if self.game_over or self.current_piece is None:
            return False
        return self._commit(try_shift(self.grid, self.current_piece, 1))

    def rotate(self, clockwise: bool = True) -> bool:
        if self.game_over or self.current_piece is None:
            return False
        return self._commit(try_rotate(self.grid, self.current_piece, clockwise))

    def apply_gravity(self) -> bool:
        """Drop the piece one row. Returns True when gravity is blocked."""
        if self.game_over or self.current_piece is None:
            return True
        return not self._commit(try_fall(self.grid, self.current_piece))

    def apply_action(self, action: Action) -> bool:
        """Apply one player action and report whether gravity is now blocked.

        Only a soft drop can report a blocked piece; sideways moves and
        rotations always report False, so a landed piece that slides away
        keeps falling.
        """
        if action == Action.LEFT:
            self.move_left()
        elif action == Action.RIGHT:
            self.move_right()
        elif action == Action.SOFT_DROP:
            return self.apply_gravity()
        elif action == Action.ROTATE_CW:
            self.rotate(clockwise=True)
        elif action == Action.ROTATE_CCW:
            self.rotate(clockwise=False)
        return False

    def freeze_piece(self) -> bool:
        """Write the live piece into the board. Returns True on overflow.

        Cells at or above the top row cannot be stored; they end the game.
        """
        piece = self.current_piece
        if piece is None:
            raise RuntimeError("no live piece to freeze")
        overflow = False
        for x, y in piece.cells():
            if y >= self.grid.height:
                overflow = True
                continue
            self.grid.set_occupied(x, y)
        logger.debug("froze %s at (%d, %d)", piece.kind.name, piece.x, piece.y)
        if overflow:
            self.game_over = True
        return overflow

    def lock_piece(self) -> RowClearResult:
        """Freeze, clear rows, score and spawn the next piece."""
        if self.game_over:
            return RowClearResult(cleared_count=0, sum_of_heights=0)
        overflow = self.freeze_piece()
        result = self.grid.clear_full_rows()
        gained = self.rules.score_for_result(result)
        self.score += gained
        self.rows_cleared_total += result.cleared_count
        if result.cleared_count:
            logger.debug("cleared %d rows (height sum %d) for %d points",
                         result.cleared_count, result.sum_of_heights, gained)
        self._spawn_piece()
        if overflow:
            logger.info("board overflow, game over with score %d", self.score)
        return result

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        """Advance one tick: the player's action, then one gravity step."""
        if self.game_over:
            return self.get_state(), 0, True, {}

        before = self.score
        blocked = self.apply_action(action)
        if not blocked:
            blocked = self.apply_gravity()
        rows = 0
        if blocked:
            rows = self.lock_piece().cleared_count

        info = {
            "score": self.score,
            "rows_cleared": rows,
            "rows_cleared_total": self.rows_cleared_total,
            "pieces_spawned": self.pieces_spawned,
        }
        return self.get_state(), self.score - before, self.game_over, info

    def snapshot(self) -> Frame:
        rows = tuple(tuple(bool(v) for v in row) for row in self.grid.clone_state())
        piece = self.current_piece
        return Frame(
            width=self.grid.width,
            height=self.grid.height,
            rows=rows,
            piece_cells=tuple(piece.cells()) if piece is not None else (),
            piece_kind=piece.kind if piece is not None else None,
            score=self.score,
            game_over=self.game_over,
        )

    def get_state(self) -> np.ndarray:
        return self.snapshot().to_array()
