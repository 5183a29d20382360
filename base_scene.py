"""Shared scene base class for the pygame viewer."""
from __future__ import annotations

from pathlib import Path
from typing import Union

import pygame
from loguru import logger

from simulation_config import ViewerConfig


class BaseScene:
    """Main loop shared by the viewer scenes."""

    BG_COLOR = (12, 12, 18)

    def __init__(self, screen: pygame.Surface, config: ViewerConfig) -> None:
        self.screen = screen
        self.config = config
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 28)
        self.running = True

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.QUIT:
            self.running = False
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key == pygame.K_F12:
                self.save_screenshot(self.config.screenshot_path)
        return True

    def update(self) -> None:
        """Hook for subclasses to update their state once per frame."""

    def draw(self) -> None:
        """Hook for subclasses to render their scene."""

    def close(self) -> None:
        """Hook called once when the main loop ends, however it ends."""

    def snapshot(self) -> pygame.Surface:
        """Surface written by :meth:`save_screenshot`; the whole window by default."""

        return self.screen

    def save_screenshot(self, path: Union[str, Path]) -> Path:
        """Write :meth:`snapshot` to ``path`` (format from the extension)."""

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        pygame.image.save(self.snapshot(), str(path))
        logger.info(f"Screenshot saved to {path}")
        return path

    def run(self) -> bool:
        """Main loop. Returns False if the window was closed."""

        try:
            while self.running:
                for event in pygame.event.get():
                    if not self.handle_event(event):
                        return False

                self.update()
                self.draw()
                pygame.display.flip()
                self.clock.tick(self.config.fps)
            return True
        finally:
            self.close()
