from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from falling_block_rl.game import SHAPES, GameSnapshot, TetrominoType


def _color_for_value(v: int, locked: bool = True) -> Tuple[int, int, int]:
    palette = {
        0: (26, 32, 44),
        1: (59, 130, 246),   # I
        2: (99, 102, 241),   # J
        3: (245, 158, 11),   # L
        4: (252, 211, 77),   # O
        5: (16, 185, 129),   # S
        6: (236, 72, 153),   # T
        7: (239, 68, 68),    # Z
    }
    color = palette.get(abs(v), (200, 200, 200))
    if v and not locked:
        # Falling piece drawn slightly brighter than the stack
        return tuple(min(255, c + 30) for c in color)  # type: ignore[return-value]
    return color


class Renderer:
    def __init__(self, cell_size: int = 28, margin: int = 20, preview_cells: int = 4) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.preview_cells = preview_cells
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        side_panel = self.preview_cells * self.cell_size + self.margin
        return (
            width * self.cell_size + side_panel * 2 + self.margin * 2,
            height * self.cell_size + self.margin * 2 + 40,
        )

    def _grid_surface(self, symbols: np.ndarray, locked: np.ndarray) -> pygame.Surface:
        h, w = symbols.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                color = _color_for_value(int(symbols[y, x]), bool(locked[y, x]))
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color, rect)
        return surf

    def _preview_surface(self, kind: Optional[TetrominoType]) -> pygame.Surface:
        n = self.preview_cells
        preview = np.zeros((n, n), dtype=np.int8)
        if kind is not None:
            shape = SHAPES[kind]
            preview[: shape.shape[0], : shape.shape[1]] = shape
        return self._grid_surface(preview, np.ones((n, n), dtype=np.bool_))

    def draw(self, screen: pygame.Surface, snap: GameSnapshot) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 26)
        h, w = snap.symbols.shape
        side_panel = self.preview_cells * self.cell_size + self.margin
        board_x = self.margin + side_panel
        screen.fill((10, 10, 14))

        hold_label = "Hold" if snap.can_hold else "Hold (used)"
        screen.blit(self._font.render(hold_label, True, (230, 230, 230)), (self.margin, self.margin - 18))
        screen.blit(self._preview_surface(snap.held_kind), (self.margin, self.margin))

        screen.blit(self._grid_surface(snap.symbols, snap.locked), (board_x, self.margin))

        next_x = board_x + w * self.cell_size + self.margin
        screen.blit(self._font.render("Next", True, (230, 230, 230)), (next_x, self.margin - 18))
        screen.blit(self._preview_surface(snap.next_kind), (next_x, self.margin))

        status = f"Score: {snap.score}   Drop: {snap.drop_interval:.0f} ms"
        text_y = self.margin * 2 + h * self.cell_size - 10
        screen.blit(self._font.render(status, True, (230, 230, 230)), (board_x, text_y))
        if snap.game_over:
            over = self._font.render("Game Over - Enter to restart", True, (255, 100, 100))
            screen.blit(over, (board_x, text_y + 20))
        pygame.display.flip()
