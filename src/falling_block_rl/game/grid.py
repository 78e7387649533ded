from __future__ import annotations

from enum import IntEnum
from typing import Tuple

import numpy as np

from .pieces import Player, TetrominoType


class CellStatus(IntEnum):
    TRANSIENT = 0
    LOCKED = 1


class Stage:
    """Fixed-size grid of locked cells plus the falling piece's overlay.

    `symbols` holds tetromino codes (0 for empty) and `locked` marks cells
    that are part of the stack. Cells covered only by the falling piece
    carry its symbol but stay transient, so they never block collisions.
    Row 0 is the top.
    """

    def __init__(self, width: int = 12, height: int = 20) -> None:
        self.width = int(width)
        self.height = int(height)
        self.symbols = np.zeros((self.height, self.width), dtype=np.int8)
        self.locked = np.zeros((self.height, self.width), dtype=np.bool_)

    def reset(self) -> None:
        self.symbols.fill(0)
        self.locked.fill(False)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Tuple[TetrominoType, CellStatus]:
        status = CellStatus.LOCKED if self.locked[y, x] else CellStatus.TRANSIENT
        return TetrominoType(int(self.symbols[y, x])), status

    def collides(self, player: Player, dx: int = 0, dy: int = 0) -> bool:
        for x, y in player.cells_at(dx, dy):
            if not self.is_inside(x, y):
                return True
            if self.locked[y, x]:
                return True
        return False

    def draw(self, player: Player) -> None:
        """Replace the transient overlay with the player's cells.

        A collided player is merged into the stack. Locked cells are never
        painted over.
        """
        self.symbols[~self.locked] = 0
        value = int(player.kind)
        for x, y in player.cells_at():
            if not self.is_inside(x, y) or self.locked[y, x]:
                continue
            self.symbols[y, x] = value
            if player.collided:
                self.locked[y, x] = True

    def sweep(self) -> int:
        full_rows = np.where(np.all(self.symbols != 0, axis=1))[0]
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Remove full rows and add empty rows at the top
        self.symbols = np.vstack(
            (np.zeros((num, self.width), dtype=np.int8), np.delete(self.symbols, full_rows, axis=0))
        )
        self.locked = np.vstack(
            (np.zeros((num, self.width), dtype=np.bool_), np.delete(self.locked, full_rows, axis=0))
        )
        return num

    def clone_state(self) -> Tuple[np.ndarray, np.ndarray]:
        return self.symbols.copy(), self.locked.copy()
