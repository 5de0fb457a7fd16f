from __future__ import annotations

import logging
from typing import Dict, Optional

import pygame

from falling_block_rl.game import Action, FallingBlockGame, Frame, GameLoop
from .renderer import Renderer

logger = logging.getLogger(__name__)


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_x: Action.ROTATE_CW,
    pygame.K_z: Action.ROTATE_CCW,
}


class PygameKeySource:
    """Drains the event queue on each poll; the last mapped key wins."""

    def __init__(self) -> None:
        self.quit_requested = False

    def poll_key(self) -> Optional[Action]:
        last: Optional[Action] = None
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quit_requested = True
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.quit_requested = True
                else:
                    last = KEY_TO_ACTION.get(event.key, last)
        return last


class PygameSink:
    def __init__(self, screen: pygame.Surface, renderer: Renderer, font: pygame.font.Font) -> None:
        self.screen = screen
        self.renderer = renderer
        self.font = font

    def render(self, frame: Frame) -> None:
        self.renderer.draw(self.screen, frame, self.font)


class PygameClock:
    def sleep_ms(self, ms: int) -> None:
        pygame.time.wait(ms)


def run() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    pygame.init()
    try:
        game = FallingBlockGame()
        renderer = Renderer(cell_size=28)
        screen = pygame.display.set_mode(renderer.window_size(game.grid.width, game.grid.height))
        pygame.display.set_caption("Falling Block - Human Play")
        font = pygame.font.SysFont(None, 24)

        keys = PygameKeySource()
        loop = GameLoop(game, keys, PygameSink(screen, renderer, font), clock=PygameClock())
        loop.render()
        while game.playing and not keys.quit_requested:
            loop.run_cycle()
        logger.info("final score %d, %d rows cleared", game.score, game.rows_cleared_total)

        # Hold the final board until the window is closed
        while game.game_over and not keys.quit_requested:
            keys.poll_key()
            pygame.time.wait(50)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
