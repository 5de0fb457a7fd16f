"""Game module for Falling Block RL.

Exports the simulation engine and supporting classes:
- GameGrid: Board storage and row clearing
- Piece: Anchor plus three offsets, with the seven shape tables
- TetrominoType: Enum of available piece types
- ScoringRules: Height-weighted clear scoring
- FallingBlockGame: Session state and the freeze/spawn transition
- GameLoop: Fixed-interval poll loop with pluggable keys, sink and clock
"""

from .grid import CellOutOfBounds, GameGrid, RowClearResult
from .pieces import BASE_OFFSETS, Piece, TetrominoType
from .rules import ScoringRules
from .core import Action, FallingBlockGame, Frame, GameConfig
from .loop import (
    GameLoop,
    LoopConfig,
    RecordingSink,
    ScriptedKeySource,
    SystemClock,
    VirtualClock,
)

__all__ = [
    "CellOutOfBounds",
    "GameGrid",
    "RowClearResult",
    "BASE_OFFSETS",
    "Piece",
    "TetrominoType",
    "ScoringRules",
    "Action",
    "FallingBlockGame",
    "Frame",
    "GameConfig",
    "GameLoop",
    "LoopConfig",
    "RecordingSink",
    "ScriptedKeySource",
    "SystemClock",
    "VirtualClock",
]
