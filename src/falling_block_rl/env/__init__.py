"""Gymnasium environments for Falling Block RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the default 12-wide, 20-tall stage
register(
    id="FallingBlock-12x20-v0",
    entry_point="falling_block_rl.env.falling_block_env:FallingBlockEnv",
)

__all__ = ["FallingBlock-12x20-v0"]
