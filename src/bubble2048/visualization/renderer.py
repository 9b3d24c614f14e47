from __future__ import annotations

from typing import Optional

import pygame

from bubble2048.game import Grid, GameStatus
from .palette import font_size_for, tile_colors


BACKGROUND = (8, 40, 64)
BOARD = (14, 52, 80)
TEXT = (230, 240, 250)
HEADER_HEIGHT = 60


def status_message(status: GameStatus, win_value: int = 2048) -> Optional[str]:
    if status is GameStatus.WON:
        return f"You reached {win_value}! C to continue, N for a new game"
    if status is GameStatus.LOST:
        return "No moves left - N for a new game"
    return None


class Renderer:
    def __init__(self, cell_size: int = 96, margin: int = 20, gap: int = 8) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.gap = gap
        self._fonts = {}

    def window_size(self, grid_size: int) -> tuple[int, int]:
        board = grid_size * self.cell_size + (grid_size + 1) * self.gap
        return board + self.margin * 2, board + self.margin * 2 + HEADER_HEIGHT

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.SysFont(None, size, bold=True)
        return self._fonts[size]

    def _grid_surface(self, grid: Grid) -> pygame.Surface:
        size = len(grid)
        side = size * self.cell_size + (size + 1) * self.gap
        surf = pygame.Surface((side, side))
        surf.fill(BOARD)
        for y, row in enumerate(grid):
            for x, tile in enumerate(row):
                value = tile.value if tile is not None else 0
                background, text = tile_colors(value)
                rect = pygame.Rect(
                    self.gap + x * (self.cell_size + self.gap),
                    self.gap + y * (self.cell_size + self.gap),
                    self.cell_size,
                    self.cell_size,
                )
                pygame.draw.rect(surf, background, rect, border_radius=self.cell_size // 2 if tile is None else 10)
                if tile is None:
                    continue
                if tile.is_new or tile.merged_from is not None:
                    pygame.draw.rect(surf, (255, 255, 255), rect, 2, border_radius=10)
                label = self._font(font_size_for(value, self.cell_size)).render(str(value), True, text)
                surf.blit(label, label.get_rect(center=rect.center))
        return surf

    def draw(self, screen: pygame.Surface, grid: Grid, score: int, best_score: int,
             status: GameStatus = GameStatus.PLAYING, win_value: int = 2048) -> None:
        screen.fill(BACKGROUND)
        header = self._font(28).render(f"Score {score}    Best {best_score}", True, TEXT)
        screen.blit(header, (self.margin, self.margin))
        screen.blit(self._grid_surface(grid), (self.margin, self.margin + HEADER_HEIGHT))

        message = status_message(status, win_value)
        if message:
            overlay = self._font(24).render(message, True, (255, 230, 120))
            rect = overlay.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
            backdrop = rect.inflate(20, 14)
            pygame.draw.rect(screen, (0, 0, 0), backdrop)
            screen.blit(overlay, rect)
        pygame.display.flip()
