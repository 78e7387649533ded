from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

import numpy as np

from .grid import Stage
from .pieces import Player, RotationDirection, TetrominoType
from .queue import PieceQueue
from .rotation import rotate
from .rules import ScoreController, ScoringRules

logger = logging.getLogger(__name__)


class Command(IntEnum):
    START = 0
    MOVE_LEFT = 1
    MOVE_RIGHT = 2
    SOFT_DROP = 3
    ROTATE_CW = 4
    ROTATE_CCW = 5
    HOLD = 6


class GameState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 12
    height: int = 20
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width < 4 or self.height < 4:
            raise ValueError(f"stage must be at least 4x4, got {self.width}x{self.height}")


@dataclass(frozen=True)
class GameSnapshot:
    symbols: np.ndarray
    locked: np.ndarray
    score: int
    drop_interval: float
    state: GameState
    next_kind: TetrominoType
    held_kind: Optional[TetrominoType]
    can_hold: bool

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER


class TetrisGame:
    """Falling-block state machine.

    Mutation happens only through `handle` (or the per-command methods it
    dispatches to). Every change to the player is followed by a board update
    that redraws the overlay and, when the player has come to rest, locks it,
    sweeps full rows, updates the score and spawns the next piece.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.stage = Stage(self.config.width, self.config.height)
        self.queue = PieceQueue(self.rng)
        self.scoring = ScoreController(self.rules)
        self.player = Player()
        self.state = GameState.IDLE

    @property
    def score(self) -> int:
        return self.scoring.score

    @property
    def drop_interval(self) -> float:
        return self.scoring.drop_interval

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    @property
    def running(self) -> bool:
        return self.state is GameState.RUNNING

    def handle(self, command: Command) -> bool:
        """Apply one command. Returns False when it was a no-op."""
        if command == Command.START:
            self.start()
            return True
        if not self.running:
            return False
        if command == Command.MOVE_LEFT:
            return self.move(-1)
        if command == Command.MOVE_RIGHT:
            return self.move(1)
        if command == Command.SOFT_DROP:
            return self.drop()
        if command == Command.ROTATE_CW:
            return self.rotate(RotationDirection.CLOCKWISE)
        if command == Command.ROTATE_CCW:
            return self.rotate(RotationDirection.COUNTER_CLOCKWISE)
        if command == Command.HOLD:
            return self.hold()
        raise ValueError(f"unknown command: {command!r}")

    def start(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.stage.reset()
        self.scoring.reset()
        self.queue.reset()
        self.state = GameState.RUNNING
        self._spawn()
        logger.info("game started (%dx%d)", self.stage.width, self.stage.height)

    def move(self, dx: int) -> bool:
        if not self.running or self.stage.collides(self.player, dx, 0):
            return False
        self.player.x += dx
        self._update_stage()
        return True

    def drop(self) -> bool:
        if not self.running:
            return False
        if not self.stage.collides(self.player, 0, 1):
            self.player.y += 1
            self.player.collided = False
            self._update_stage()
            return True
        if self.player.y < 1:
            self.state = GameState.GAME_OVER
            logger.info("game over with score %d", self.score)
            return True
        self.player.collided = True
        self._update_stage()
        return True

    def rotate(self, direction: RotationDirection) -> bool:
        if not self.running:
            return False
        rotated = rotate(self.player, self.stage, direction)
        if rotated is None:
            return False
        self.player = rotated
        self._update_stage()
        return True

    def hold(self) -> bool:
        if not self.running:
            return False
        current = self.player.kind
        replacement = self.queue.hold(current)
        if replacement is None:
            return False
        logger.debug("held %s, now playing %s", current.name, replacement.name)
        self.player = Player.spawn(replacement, self.stage.width)
        self._update_stage()
        return True

    def _spawn(self) -> None:
        self.player = Player.spawn(self.queue.pop_next(), self.stage.width)
        self._update_stage()

    def _update_stage(self) -> None:
        self.stage.draw(self.player)
        if not self.player.collided:
            return
        logger.debug("locked %s at (%d, %d)", self.player.kind.name, self.player.x, self.player.y)
        lines = self.stage.sweep()
        if lines:
            gained = self.scoring.record_sweep(lines)
            logger.debug(
                "cleared %d rows (+%d), drop interval now %.1f ms", lines, gained, self.scoring.drop_interval
            )
        self._spawn()

    def snapshot(self) -> GameSnapshot:
        symbols, locked = self.stage.clone_state()
        return GameSnapshot(
            symbols=symbols,
            locked=locked,
            score=self.score,
            drop_interval=self.drop_interval,
            state=self.state,
            next_kind=self.queue.next_kind,
            held_kind=self.queue.held_kind,
            can_hold=self.queue.can_hold,
        )
