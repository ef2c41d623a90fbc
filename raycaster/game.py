from __future__ import annotations
import logging
from typing import Optional

import pygame

from .config import (
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
    FPS,
    WINDOW_TITLE,
    LOG_LEVEL,
)
from .scene import Scene
from .presenter import FramePresenter
from .input_handler import InputHandler

logger = logging.getLogger(__name__)


class Game:
    """Frame driver: window, timing, and the update/render/present loop."""

    def __init__(
        self,
        clock: Optional[pygame.time.Clock] = None,
        scene: Optional[Scene] = None,
    ) -> None:
        pygame.init()
        self.screen_width = SCREEN_WIDTH
        self.screen_height = SCREEN_HEIGHT
        # OpenGL-enabled window; frames are uploaded as a texture
        self.screen = pygame.display.set_mode(
            (self.screen_width, self.screen_height),
            pygame.OPENGL | pygame.DOUBLEBUF,
        )
        pygame.display.set_caption(WINDOW_TITLE)
        # Clock for frame rate (injectable for testing)
        self.clock = clock or pygame.time.Clock()
        self.fps = FPS
        self.scene = scene or Scene(
            screen_width=self.screen_width, screen_height=self.screen_height
        )
        self.frame = self.scene.new_frame()
        self.presenter = FramePresenter(self.screen_width, self.screen_height)
        self.input = InputHandler()
        self.running = True

    def handle_events(self) -> None:
        self.input.process_events()
        if self.input.should_quit():
            self.running = False

    def update(self, dt: float) -> None:
        self.scene.update(self.input.get_state(), dt)

    def render(self) -> None:
        """Render the scene into the frame buffer and show it."""
        self.scene.render(self.frame)
        self.presenter.present(self.frame)
        pygame.display.flip()

    def run(self) -> None:
        """Main loop: handle events, update, and render."""
        try:
            while self.running:
                # Cap the frame rate and compute delta time in seconds
                dt = self.clock.tick(self.fps) / 1000.0
                self.handle_events()
                if not self.running:
                    break
                self.update(dt)
                self.render()
        finally:
            self.scene.shutdown()
            self.presenter.shutdown()
            pygame.quit()
            logger.info("Game loop stopped")


def main() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    Game().run()
