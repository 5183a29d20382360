"""Electric field of a set of point charges on the 2D canvas."""
from __future__ import annotations

import math
from typing import Sequence, Tuple

from objects import Charge
from simulation_config import DEFAULT_SETTINGS, TracerSettings

EPSILON = 1e-12

Vector = Tuple[float, float]


def normalize(vec: Vector) -> Vector:
    """Return ``vec`` scaled to unit length, or the zero vector if it has none."""

    mag = math.hypot(vec[0], vec[1])
    if mag < EPSILON:
        return 0.0, 0.0
    return vec[0] / mag, vec[1] / mag


def compute_E_at_point(
    point: Vector,
    charges: Sequence[Charge],
    settings: TracerSettings = DEFAULT_SETTINGS,
) -> Vector:
    """Compute the net field (Ex, Ey) of every charge at ``point``.

    Each charge contributes ``magnitude / d**2`` along the unit vector from the
    charge to ``point``, signed by its polarity, where ``d`` is the distance in
    units of ``settings.distance_scale``. A charge sitting exactly on ``point``
    has no direction and contributes nothing.
    """

    px, py = point
    field_x = 0.0
    field_y = 0.0

    for charge in charges:
        dx = px - charge.x
        dy = py - charge.y
        ux, uy = normalize((dx, dy))
        if ux == 0.0 and uy == 0.0:
            continue
        d_raw = max(math.hypot(dx, dy), settings.min_distance)
        d = d_raw / settings.distance_scale
        intensity = charge.sign.factor * (charge.magnitude / (d * d))
        field_x += ux * intensity
        field_y += uy * intensity

    return field_x, field_y


def compute_field_magnitude(vec: Vector) -> float:
    return math.hypot(vec[0], vec[1])
