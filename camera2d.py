"""2D camera mapping canvas coordinates onto the viewer workspace."""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Tuple


@dataclass
class Camera2D:
    """Translation and zoom between canvas units and workspace pixels."""

    MIN_ZOOM: ClassVar[float] = 0.05
    MAX_ZOOM: ClassVar[float] = 40.0
    FIT_MARGIN: ClassVar[float] = 0.9

    offset_x: float = 0.0
    offset_y: float = 0.0
    zoom: float = 1.0

    def world_to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return (x - self.offset_x) * self.zoom, (y - self.offset_y) * self.zoom

    def screen_to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        if self.zoom == 0:
            return self.offset_x, self.offset_y
        return sx / self.zoom + self.offset_x, sy / self.zoom + self.offset_y

    def fit(self, width: float, height: float, viewport_w: float, viewport_h: float) -> None:
        """Center the ``width`` x ``height`` canvas in the viewport."""

        if width <= 0 or height <= 0:
            return
        zoom = min(viewport_w / width, viewport_h / height) * self.FIT_MARGIN
        self.zoom = max(self.MIN_ZOOM, min(zoom, self.MAX_ZOOM))
        self.offset_x = width / 2 - viewport_w / (2 * self.zoom)
        self.offset_y = height / 2 - viewport_h / (2 * self.zoom)

    def pan(self, dx_pixels: float, dy_pixels: float) -> None:
        self.offset_x -= dx_pixels / self.zoom
        self.offset_y -= dy_pixels / self.zoom

    def zoom_at(self, focus_x: float, focus_y: float, zoom_factor: float) -> None:
        """Zoom while keeping a given focus point stationary on screen."""

        if zoom_factor <= 0:
            return
        world_focus_x, world_focus_y = self.screen_to_world(focus_x, focus_y)
        self.zoom = max(self.MIN_ZOOM, min(self.zoom * zoom_factor, self.MAX_ZOOM))
        self.offset_x = world_focus_x - focus_x / self.zoom
        self.offset_y = world_focus_y - focus_y / self.zoom
