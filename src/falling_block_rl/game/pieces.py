from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    NONE = 0  # no active piece yet
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


PLAYABLE_TYPES: Tuple[TetrominoType, ...] = tuple(t for t in TetrominoType if t is not TetrominoType.NONE)


class RotationDirection(IntEnum):
    CLOCKWISE = 1
    COUNTER_CLOCKWISE = -1


Shape = np.ndarray


def _build(kind: TetrominoType, rows: List[str]) -> Shape:
    shape = np.array([[int(kind) if c == "#" else 0 for c in row] for row in rows], dtype=np.int8)
    shape.flags.writeable = False
    return shape


# Square bounding boxes so rotation stays in place
SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.NONE: _build(TetrominoType.NONE, ["."]),
    TetrominoType.I: _build(TetrominoType.I, [".#..", ".#..", ".#..", ".#.."]),
    TetrominoType.J: _build(TetrominoType.J, [".#.", ".#.", "##."]),
    TetrominoType.L: _build(TetrominoType.L, [".#.", ".#.", ".##"]),
    TetrominoType.O: _build(TetrominoType.O, ["##", "##"]),
    TetrominoType.S: _build(TetrominoType.S, [".##", "##.", "..."]),
    TetrominoType.T: _build(TetrominoType.T, ["...", "###", ".#."]),
    TetrominoType.Z: _build(TetrominoType.Z, ["##.", ".##", "..."]),
}


def rotate_shape(shape: Shape, direction: RotationDirection) -> Shape:
    """Rotate a square shape a quarter turn.

    Clockwise is transpose then reverse each row; counter-clockwise is
    transpose then reverse the row order. The result is a fresh array.
    """
    transposed = shape.T
    if direction == RotationDirection.CLOCKWISE:
        return transposed[:, ::-1].copy()
    return transposed[::-1, :].copy()


def kind_of(shape: Shape) -> TetrominoType:
    """First non-empty symbol in row-major order, or NONE."""
    filled = np.flatnonzero(shape)
    if filled.size == 0:
        return TetrominoType.NONE
    return TetrominoType(int(shape.flat[filled[0]]))


@dataclass
class Player:
    """The falling piece: shape origin on the stage plus its lock flag."""

    x: int = 0
    y: int = 0
    shape: Shape = field(default_factory=lambda: SHAPES[TetrominoType.NONE].copy())
    collided: bool = False

    @classmethod
    def spawn(cls, kind: TetrominoType, stage_width: int) -> "Player":
        return cls(x=stage_width // 2 - 2, y=0, shape=SHAPES[kind].copy(), collided=False)

    @property
    def kind(self) -> TetrominoType:
        return kind_of(self.shape)

    def cells_at(self, dx: int = 0, dy: int = 0) -> List[Tuple[int, int]]:
        cells: List[Tuple[int, int]] = []
        h, w = self.shape.shape
        for row in range(h):
            for col in range(w):
                if self.shape[row, col]:
                    cells.append((self.x + col + dx, self.y + row + dy))
        return cells

    def copy(self) -> "Player":
        return Player(self.x, self.y, self.shape.copy(), self.collided)
