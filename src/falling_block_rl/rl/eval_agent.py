from __future__ import annotations

import argparse

import pygame

from falling_block_rl.visualization.renderer import Renderer
from falling_block_rl.rl.train_ppo import make_env


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--algo", choices=["ppo", "maskable"], default="ppo")
    p.add_argument("--model", type=str, required=True)
    p.add_argument("--steps", type=int, default=500)
    p.add_argument("--gravity_every", type=int, default=4)
    p.add_argument("--fps", type=int, default=10)
    return p


def main() -> None:
    args = build_parser().parse_args()
    if args.algo == "maskable":
        from sb3_contrib import MaskablePPO as Algo
    else:
        from stable_baselines3 import PPO as Algo

    env = make_env(args.gravity_every)
    model = Algo.load(args.model, device="auto")

    game = env.unwrapped.game
    renderer = Renderer()

    pygame.init()
    try:
        screen = pygame.display.set_mode(renderer.window_size(game.stage.width, game.stage.height))
        pygame.display.set_caption("Falling Block - Agent Eval")
        clock = pygame.time.Clock()

        obs, info = env.reset()
        total_reward = 0.0
        episodes = 0
        steps = 0
        while steps < args.steps:
            # Events
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    return

            # Predict action
            if args.algo == "maskable":
                action, _ = model.predict(obs, deterministic=True, action_masks=env.get_action_mask())
            else:
                action, _ = model.predict(obs, deterministic=True)

            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += float(reward)
            steps += 1

            renderer.draw(screen, game.snapshot())
            if terminated or truncated:
                episodes += 1
                obs, info = env.reset()
            clock.tick(args.fps)
    finally:
        pygame.quit()
        print(f"{steps} steps, {episodes} episodes, total reward {total_reward:.1f}")


if __name__ == "__main__":  # pragma: no cover
    main()
