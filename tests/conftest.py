from __future__ import annotations

import pytest

from falling_block_rl.game import GameConfig, Player, TetrisGame, TetrominoType


def _place_player(game: TetrisGame, kind: TetrominoType) -> Player:
    game.player = Player.spawn(kind, game.stage.width)
    game.stage.draw(game.player)
    return game.player


@pytest.fixture
def place_player():
    """Swap a game's active piece for a fresh `kind` at the spawn position."""
    return _place_player


@pytest.fixture
def game() -> TetrisGame:
    g = TetrisGame(GameConfig(random_seed=1234))
    g.start()
    return g
