"""Fixed-step field-line tracing through the superposed field of all charges."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence

from field import compute_E_at_point, compute_field_magnitude
from objects import Charge, Line, Position, Sign
from simulation_config import DEFAULT_SETTINGS, TracerSettings


class TraceStatus(Enum):
    """How a traced line came to an end."""

    BUDGET = auto()
    BOUNDS = auto()
    STALLED = auto()

    def label(self) -> str:
        if self is TraceStatus.BOUNDS:
            return "left the canvas"
        if self is TraceStatus.STALLED:
            return "no field to follow"
        return "step budget exhausted"


@dataclass(frozen=True)
class TraceResult:
    line: Line
    status: TraceStatus


def is_out_of_bounds(point: Position, x_bound: float, y_bound: float, tolerance: float) -> bool:
    x, y = point
    return x > x_bound + tolerance or x < -tolerance or y > y_bound + tolerance or y < -tolerance


def trace_field_line_with_status(
    charges: Sequence[Charge],
    steps: int,
    delta: float,
    source_sign: Sign,
    start: Position,
    x_bound: float,
    y_bound: float,
    settings: TracerSettings = DEFAULT_SETTINGS,
) -> TraceResult:
    """Walk from ``start`` along the normalized net field, ``delta`` per step.

    Lines seeded around a negative source walk against the field. The walk
    makes at most ``steps - 1`` moves and stops early once the current point
    is outside the canvas (plus tolerance) or the field vanishes there.
    """

    line: Line = [Position(*start)]
    for _ in range(max(steps, 1) - 1):
        current = line[-1]
        if is_out_of_bounds(current, x_bound, y_bound, settings.tolerance):
            return TraceResult(line, TraceStatus.BOUNDS)

        net_field = compute_E_at_point(current, charges, settings)
        magnitude = compute_field_magnitude(net_field)
        if not math.isfinite(magnitude) or magnitude < settings.field_epsilon:
            return TraceResult(line, TraceStatus.STALLED)

        scale = delta / magnitude
        if source_sign is Sign.NEGATIVE:
            scale = -scale
        next_point = Position(current.x + net_field[0] * scale, current.y + net_field[1] * scale)
        if not (math.isfinite(next_point.x) and math.isfinite(next_point.y)):
            return TraceResult(line, TraceStatus.STALLED)
        line.append(next_point)

    return TraceResult(line, TraceStatus.BUDGET)


def trace_field_line(
    charges: Sequence[Charge],
    steps: int,
    delta: float,
    source_sign: Sign,
    start: Position,
    x_bound: float,
    y_bound: float,
    settings: TracerSettings = DEFAULT_SETTINGS,
) -> Line:
    return trace_field_line_with_status(
        charges, steps, delta, source_sign, start, x_bound, y_bound, settings
    ).line
