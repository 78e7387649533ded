from __future__ import annotations

import argparse
from typing import Optional

import gymnasium as gym
import numpy as np

import falling_block_rl.env  # noqa: F401


def run_random(steps: int = 200, seed: Optional[int] = None, use_mask: bool = True) -> float:
    env = gym.make("FallingBlock-12x20-v0")
    rng = np.random.default_rng(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        # Prefer valid actions if available
        valid = np.flatnonzero(info.get("action_mask", [])) if use_mask else np.array([])
        if valid.size > 0:
            action = int(rng.choice(valid))
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} over {episodes} finished episodes")
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--no-mask", action="store_true", help="Sample from the full action space")
    return p


if __name__ == "__main__":  # pragma: no cover
    args = build_parser().parse_args()
    run_random(args.steps, args.seed, use_mask=not args.no_mask)
