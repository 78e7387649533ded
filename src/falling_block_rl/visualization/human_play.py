from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from falling_block_rl.game import Command, GameConfig, GameLoop, TetrisGame
from .renderer import Renderer


KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE_CW,
    pygame.K_z: Command.ROTATE_CCW,
    pygame.K_c: Command.HOLD,
    pygame.K_RETURN: Command.START,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play the falling block game with the keyboard")
    p.add_argument("--width", type=int, default=12)
    p.add_argument("--height", type=int, default=20)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", default="WARNING")
    return p


def run(argv: Optional[list] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = TetrisGame(GameConfig(width=args.width, height=args.height, random_seed=args.seed))
        loop = GameLoop(game, clock=pygame.time.get_ticks)
        renderer = Renderer()

        screen = pygame.display.set_mode(renderer.window_size(args.width, args.height))
        pygame.display.set_caption("Falling Block - Enter to start")

        running = True
        while running:
            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            loop.submit(command)

            # Commands first, then any timed drops that came due
            loop.pump()

            renderer.draw(screen, game.snapshot())
            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
