from __future__ import annotations

import random
from typing import Optional

from .pieces import PLAYABLE_TYPES, TetrominoType


class PieceQueue:
    """One-piece lookahead plus a single hold slot."""

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng
        self.next_kind = self._random_kind()
        self.held_kind: Optional[TetrominoType] = None
        self.can_hold = True

    def _random_kind(self) -> TetrominoType:
        return self.rng.choice(PLAYABLE_TYPES)

    def reset(self) -> None:
        self.next_kind = self._random_kind()
        self.held_kind = None
        self.can_hold = True

    def pop_next(self) -> TetrominoType:
        """Kind for a freshly spawned piece; refills the lookahead and re-enables hold."""
        kind = self.next_kind
        self.next_kind = self._random_kind()
        self.can_hold = True
        return kind

    def hold(self, current: TetrominoType) -> Optional[TetrominoType]:
        """Stash `current` and return the kind that replaces it, or None when hold is not allowed."""
        if not self.can_hold or current is TetrominoType.NONE:
            return None
        if self.held_kind is None:
            replacement = self.next_kind
            self.next_kind = self._random_kind()
        else:
            replacement = self.held_kind
        self.held_kind = current
        self.can_hold = False
        return replacement
