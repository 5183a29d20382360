"""Charges and tracing jobs placed on the 2D canvas."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, NamedTuple, Sequence, Tuple


class Position(NamedTuple):
    """A point on the canvas, in canvas units."""

    x: float
    y: float


Line = List[Position]


class Sign(Enum):
    """Polarity of a charge. Values match the serialized form."""

    POSITIVE = "Positive"
    NEGATIVE = "Negative"

    @property
    def factor(self) -> float:
        return 1.0 if self is Sign.POSITIVE else -1.0

    def flipped(self) -> "Sign":
        return Sign.NEGATIVE if self is Sign.POSITIVE else Sign.POSITIVE


@dataclass(frozen=True)
class Charge:
    """A point charge with the radius of the circle its lines are seeded on."""

    id: int
    sign: Sign
    magnitude: float
    position: Position
    r: float

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    @property
    def signed_magnitude(self) -> float:
        return self.sign.factor * self.magnitude


@dataclass(frozen=True)
class FieldSpec:
    """One tracing job around a source charge.

    ``lines`` is output only: it stays empty until the job has been traced.
    """

    source: Charge
    density: int
    steps: int
    delta: float
    lines: Tuple[Line, ...] = field(default=(), compare=False)

    def with_lines(self, lines: Sequence[Line]) -> "FieldSpec":
        return replace(self, lines=tuple(lines))

    def with_source(self, source: Charge) -> "FieldSpec":
        return replace(self, source=source, lines=())
