from __future__ import annotations

from typing import Optional

from .grid import Stage
from .pieces import Player, RotationDirection, rotate_shape


def rotate(player: Player, stage: Stage, direction: RotationDirection) -> Optional[Player]:
    """Rotate a copy of `player` and kick it sideways until it fits.

    Kicks shift the trial by +1, -2, +3, -4, ... columns in turn, giving net
    offsets 0, +1, -1, +2, ... The search gives up, returning None, as soon
    as the next rightward shift would be wider than the shape; the leftward
    shift applied just before that is never tested. `player` is never touched.
    """
    trial = player.copy()
    trial.shape = rotate_shape(trial.shape, direction)
    columns = trial.shape.shape[1]
    offset = 1
    while stage.collides(trial):
        trial.x += offset
        offset = -(offset + (1 if offset > 0 else -1))
        if offset > columns:
            return None
    return trial
