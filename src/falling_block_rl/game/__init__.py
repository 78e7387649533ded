"""Game module for Falling Block RL.

Exports the core game engine and supporting classes:
- Stage: Grid of locked cells, collision checks and row sweeping
- Player: The falling piece and its position
- TetrominoType: Enum of piece kinds (plus the NONE sentinel)
- ScoringRules / ScoreController: Linear scoring and drop-speed curve
- PieceQueue: Next-piece lookahead and hold slot
- TetrisGame: State machine driven by Commands
- GameLoop / DropTimer: Command serialization and timed drops
"""

from .grid import CellStatus, Stage
from .pieces import PLAYABLE_TYPES, SHAPES, Player, RotationDirection, TetrominoType, kind_of, rotate_shape
from .rotation import rotate
from .rules import ScoreController, ScoringRules
from .queue import PieceQueue
from .core import Command, GameConfig, GameSnapshot, GameState, TetrisGame
from .loop import DropTimer, GameLoop

__all__ = [
    "CellStatus",
    "Stage",
    "PLAYABLE_TYPES",
    "SHAPES",
    "Player",
    "RotationDirection",
    "TetrominoType",
    "kind_of",
    "rotate_shape",
    "rotate",
    "ScoreController",
    "ScoringRules",
    "PieceQueue",
    "Command",
    "GameConfig",
    "GameSnapshot",
    "GameState",
    "TetrisGame",
    "DropTimer",
    "GameLoop",
]
