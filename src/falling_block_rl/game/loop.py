from __future__ import annotations

import logging
import time
from collections import deque
from typing import Callable, Deque, Optional

from .core import Command, TetrisGame

logger = logging.getLogger(__name__)


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class DropTimer:
    """Recurring deadline measured against an external millisecond clock."""

    def __init__(self) -> None:
        self.interval: Optional[float] = None
        self.deadline: Optional[float] = None

    @property
    def armed(self) -> bool:
        return self.deadline is not None

    def arm(self, interval: float, now: float) -> None:
        self.interval = float(interval)
        self.deadline = now + self.interval

    def disarm(self) -> None:
        self.interval = None
        self.deadline = None

    def due(self, now: float) -> bool:
        return self.deadline is not None and now >= self.deadline

    def advance(self) -> float:
        """Consume the current deadline and schedule the next one. Returns the consumed deadline."""
        if self.deadline is None or self.interval is None:
            raise RuntimeError("drop timer is not armed")
        fired = self.deadline
        self.deadline = fired + self.interval
        return fired


class GameLoop:
    """Serializes commands and timer drops against a single game.

    Commands are queued by `submit` and applied one at a time by `pump`,
    followed by every timer tick that has come due. The timer follows the
    game: armed at the current drop interval while running, re-armed when
    the interval changes or the game restarts, disarmed otherwise.
    """

    def __init__(self, game: Optional[TetrisGame] = None, clock: Callable[[], float] = monotonic_ms) -> None:
        self.game = game or TetrisGame()
        self.clock = clock
        self.timer = DropTimer()
        self._commands: Deque[Command] = deque()

    @property
    def pending(self) -> int:
        return len(self._commands)

    def submit(self, command: Command) -> None:
        self._commands.append(command)

    def pump(self, now: Optional[float] = None) -> int:
        """Process queued commands and due drops up to `now`. Returns how many were applied."""
        if now is None:
            now = self.clock()
        processed = 0
        while self._commands:
            command = self._commands.popleft()
            self.game.handle(command)
            self._sync_timer(now, restarted=command == Command.START)
            processed += 1
        while self.timer.due(now):
            fired_at = self.timer.advance()
            self.game.drop()
            self._sync_timer(fired_at)
            processed += 1
        return processed

    def _sync_timer(self, now: float, restarted: bool = False) -> None:
        if not self.game.running:
            if self.timer.armed:
                logger.debug("drop timer disarmed")
                self.timer.disarm()
            return
        if restarted or not self.timer.armed or self.timer.interval != self.game.drop_interval:
            self.timer.arm(self.game.drop_interval, now)
            logger.debug("drop timer armed at %.1f ms", self.game.drop_interval)
