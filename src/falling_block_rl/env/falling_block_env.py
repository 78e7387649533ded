from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_block_rl.game import Command, GameConfig, RotationDirection, ScoringRules, TetrisGame, rotate

# Discrete action index -> engine command (None is a no-op)
ACTIONS: Tuple[Optional[Command], ...] = (
    None,
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.SOFT_DROP,
    Command.ROTATE_CW,
    Command.ROTATE_CCW,
    Command.HOLD,
)

_PALETTE = np.array(
    [
        (30, 30, 36),     # empty
        (59, 130, 246),   # I
        (99, 102, 241),   # J
        (245, 158, 11),   # L
        (252, 211, 77),   # O
        (16, 185, 129),   # S
        (236, 72, 153),   # T
        (239, 68, 68),    # Z
    ],
    dtype=np.uint8,
)


def compute_action_mask(game: TetrisGame) -> np.ndarray:
    mask = np.zeros((len(ACTIONS),), dtype=np.bool_)
    if not game.running:
        return mask
    player, stage = game.player, game.stage
    for i, command in enumerate(ACTIONS):
        if command is None or command == Command.SOFT_DROP:
            mask[i] = True
        elif command == Command.MOVE_LEFT:
            mask[i] = not stage.collides(player, -1, 0)
        elif command == Command.MOVE_RIGHT:
            mask[i] = not stage.collides(player, 1, 0)
        elif command == Command.ROTATE_CW:
            mask[i] = rotate(player, stage, RotationDirection.CLOCKWISE) is not None
        elif command == Command.ROTATE_CCW:
            mask[i] = rotate(player, stage, RotationDirection.COUNTER_CLOCKWISE) is not None
        elif command == Command.HOLD:
            mask[i] = game.queue.can_hold
    return mask


class FallingBlockEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 render_mode: Optional[str] = None,
                 gravity_every: int = 1,
                 max_episode_steps: int = 10000,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        if gravity_every < 1:
            raise ValueError("gravity_every must be >= 1")
        self.game = TetrisGame(config, rules)
        self.render_mode = render_mode
        self.gravity_every = int(gravity_every)
        self.max_episode_steps = int(max_episode_steps)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)

        h, w = self.game.config.height, self.game.config.width
        n_kinds = len(_PALETTE)

        self.observation_space = spaces.Dict(
            {
                "stage": spaces.Box(low=0, high=n_kinds - 1, shape=(h, w), dtype=np.int8),
                "locked": spaces.Box(low=0, high=1, shape=(h, w), dtype=np.int8),
                "next": spaces.Discrete(n_kinds),
                "held": spaces.Discrete(n_kinds),
                "can_hold": spaces.Discrete(2),
            }
        )
        self.action_space = spaces.Discrete(len(ACTIONS))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        snap = self.game.snapshot()
        return {
            "stage": snap.symbols.astype(np.int8),
            "locked": snap.locked.astype(np.int8),
            "next": int(snap.next_kind),
            "held": int(snap.held_kind) if snap.held_kind is not None else 0,
            "can_hold": int(snap.can_hold),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": compute_action_mask(self.game),
            "score": self.game.score,
            "drop_interval": self.game.drop_interval,
            "lines_cleared_total": self.game.scoring.lines_cleared_total,
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.start(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        idx = int(action)
        if not 0 <= idx < len(ACTIONS):
            raise ValueError(f"action {action!r} outside 0..{len(ACTIONS) - 1}")

        score_before = self.game.score
        command = ACTIONS[idx]
        if command is not None:
            self.game.handle(command)
        self._steps += 1
        # Gravity
        if self._steps % self.gravity_every == 0:
            self.game.drop()

        reward = float(self.game.score - score_before) + self.step_penalty
        terminated = self.game.game_over
        if terminated:
            reward += self.terminal_penalty
        truncated = not terminated and self._steps >= self.max_episode_steps

        info = self._get_info()
        info["engine_score_delta"] = self.game.score - score_before
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            cell = 12
            symbols = self.game.stage.symbols
            img = _PALETTE[symbols.astype(np.intp)]
            return np.repeat(np.repeat(img, cell, axis=0), cell, axis=1)
        return None

    def close(self) -> None:
        pass
