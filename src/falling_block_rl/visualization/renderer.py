from __future__ import annotations

from typing import Optional, Tuple

import pygame

from falling_block_rl.game import Frame, TetrominoType


def _color_for_kind(kind: Optional[TetrominoType]) -> Tuple[int, int, int]:
    palette = {
        TetrominoType.O: (240, 240, 0),
        TetrominoType.I: (0, 240, 240),
        TetrominoType.L: (240, 160, 0),
        TetrominoType.J: (0, 0, 240),
        TetrominoType.S: (0, 240, 0),
        TetrominoType.Z: (240, 0, 0),
        TetrominoType.T: (160, 0, 240),
    }
    return palette.get(kind, (200, 200, 200))


FROZEN = (70, 200, 120)
EMPTY = (20, 20, 26)


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return width * self.cell_size + self.margin * 2, height * self.cell_size + self.margin * 2

    def _cell_rect(self, frame: Frame, x: int, y: int) -> pygame.Rect:
        # Board row 0 is at the bottom of the window
        top = (frame.height - 1 - y) * self.cell_size
        return pygame.Rect(x * self.cell_size, top, self.cell_size - 1, self.cell_size - 1)

    def _grid_surface(self, frame: Frame) -> pygame.Surface:
        surf = pygame.Surface((frame.width * self.cell_size, frame.height * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(frame.height):
            for x in range(frame.width):
                color = FROZEN if frame.rows[y][x] else EMPTY
                pygame.draw.rect(surf, color, self._cell_rect(frame, x, y))
        piece_color = _color_for_kind(frame.piece_kind)
        for x, y in frame.piece_cells:
            if 0 <= y < frame.height:
                pygame.draw.rect(surf, piece_color, self._cell_rect(frame, x, y))
        return surf

    def draw(self, screen: pygame.Surface, frame: Frame, font: Optional[pygame.font.Font] = None) -> None:
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(frame), (self.margin, self.margin))
        if font is not None:
            text = font.render(f"Score: {frame.score}", True, (230, 230, 230))
            screen.blit(text, (self.margin, 2))
            if frame.game_over:
                over = font.render("Game Over", True, (255, 100, 100))
                screen.blit(over, over.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2)))
        pygame.display.flip()
