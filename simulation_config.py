"""Configuration objects for the field-line tracer and its viewer."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from objects import Sign


@dataclass(frozen=True)
class TracerSettings:
    """Numerical constants shared by the field evaluator and the line tracer."""

    # Margin beyond the canvas rectangle inside which a line keeps going.
    tolerance: float = 100.0
    # Canvas units per unit of distance in the inverse-square term.
    distance_scale: float = 100.0
    min_distance: float = 1e-6
    # Net fields weaker than this end the line where it stands.
    field_epsilon: float = 1e-12

    def describe(self) -> str:
        return (
            f"tolerance={self.tolerance:g} scale={self.distance_scale:g} "
            f"min_distance={self.min_distance:g} field_epsilon={self.field_epsilon:g}"
        )


DEFAULT_SETTINGS = TracerSettings()


@dataclass
class ViewerConfig:
    """Settings of the interactive viewer, including defaults for new charges."""

    window_size: Tuple[int, int] = (1100, 720)
    panel_width: int = 280
    fps: int = 60

    sign: Sign = Sign.POSITIVE
    magnitude: float = 10.0
    r: float = 20.0
    density: int = 12
    steps: int = 400
    delta: float = 5.0

    screenshot_path: Path = Path("electrostat.png")

    def toggle_sign(self) -> None:
        """Switch the polarity used for the next placed charge."""

        self.sign = self.sign.flipped()

    def describe(self) -> str:
        """Return a short human-readable summary of the placement defaults."""

        return (
            f"{self.sign.value} • q={self.magnitude:g} • "
            f"{self.density} lignes • {self.steps} pas de {self.delta:g}"
        )
