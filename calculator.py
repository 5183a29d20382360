"""Batch tracing of field lines for every source charge on a canvas."""
from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Sequence, Union

from loguru import logger
from pydantic import ValidationError

from objects import Charge, FieldSpec, Line, Position
from schema import FieldResultModel, FieldSpecList
from simulation_config import DEFAULT_SETTINGS, TracerSettings
from tracer import TraceStatus, trace_field_line_with_status

SerializedFields = Union[str, bytes, Sequence[Dict[str, Any]]]


def collect_charges(fields: Iterable[FieldSpec]) -> List[Charge]:
    """Return the source charge of every field, in input order."""

    return [spec.source for spec in fields]


def seed_points(charge: Charge, density: int) -> List[Position]:
    """Spread ``density`` start points evenly on the circle of radius ``charge.r``."""

    density = max(density, 1)
    delta_angle = 2 * math.pi / density
    seeds: List[Position] = []
    for index in range(density):
        angle = delta_angle * index
        seeds.append(
            Position(charge.x + charge.r * math.cos(angle), charge.y + charge.r * math.sin(angle))
        )
    return seeds


def trace_field(
    spec: FieldSpec,
    charges: Sequence[Charge],
    width: float,
    height: float,
    settings: TracerSettings = DEFAULT_SETTINGS,
) -> FieldSpec:
    """Trace one line per seed point of ``spec`` under the field of ``charges``."""

    lines: List[Line] = []
    stopped = {status: 0 for status in TraceStatus}
    for start in seed_points(spec.source, spec.density):
        result = trace_field_line_with_status(
            charges, spec.steps, spec.delta, spec.source.sign, start, width, height, settings
        )
        stopped[result.status] += 1
        lines.append(result.line)

    logger.debug(
        f"Charge {spec.source.id} ({spec.source.sign.value}): {len(lines)} lines, "
        + ", ".join(f"{count} {status.label()}" for status, count in stopped.items() if count)
    )
    return spec.with_lines(lines)


def trace_fields(
    width: float,
    height: float,
    fields: Sequence[FieldSpec],
    settings: TracerSettings = DEFAULT_SETTINGS,
) -> List[FieldSpec]:
    """Trace every field against the combined charge set of the whole batch."""

    charges = collect_charges(fields)
    return [trace_field(spec, charges, width, height, settings) for spec in fields]


def calculate_fields(
    width: float,
    height: float,
    fields_in: SerializedFields,
    settings: TracerSettings = DEFAULT_SETTINGS,
) -> List[Dict[str, Any]]:
    """Trace a serialized batch and return it with each record's ``lines`` filled in.

    ``fields_in`` is either a JSON document or the already decoded list of
    records. Input that does not validate gives an empty list; the details
    go to the log.
    """

    try:
        if isinstance(fields_in, (str, bytes)):
            models = FieldSpecList.validate_json(fields_in)
        else:
            models = FieldSpecList.validate_python(fields_in)
    except ValidationError as e:
        logger.error(f"Could not parse field specifications: {e}")
        return []

    traced = trace_fields(width, height, [model.to_domain() for model in models], settings)
    return [FieldResultModel.from_domain(spec).model_dump(mode="json") for spec in traced]
