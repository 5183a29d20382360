"""Pydantic models for the serialized field specifications."""
from __future__ import annotations

from typing import List

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from objects import Charge, FieldSpec, Line, Position, Sign


class WireModel(BaseModel):
    """Base for the serialized records; NaN and infinities are rejected"""
    model_config = ConfigDict(allow_inf_nan=False)


class PositionModel(WireModel):
    x: float
    y: float

    def to_domain(self) -> Position:
        return Position(self.x, self.y)


class ChargeModel(WireModel):
    """Serialized point charge"""
    id: int = Field(..., ge=0, description="Unique charge identifier")
    sign: Sign
    magnitude: float
    position: PositionModel
    r: float = Field(..., description="Radius of the seed circle")

    def to_domain(self) -> Charge:
        return Charge(
            id=self.id,
            sign=self.sign,
            magnitude=self.magnitude,
            position=self.position.to_domain(),
            r=self.r,
        )

    @classmethod
    def from_domain(cls, charge: Charge) -> "ChargeModel":
        return cls(
            id=charge.id,
            sign=charge.sign,
            magnitude=charge.magnitude,
            position=PositionModel(x=charge.x, y=charge.y),
            r=charge.r,
        )


class FieldSpecModel(WireModel):
    """Serialized tracing job, as received. Any ``lines`` key is ignored."""
    source: ChargeModel
    density: int = Field(..., ge=0, description="Number of lines seeded around the source")
    steps: int = Field(..., ge=0, description="Maximum number of points per line")
    delta: float = Field(..., description="Step length in canvas units")

    @field_validator("density", "steps")
    @classmethod
    def clamp_to_one(cls, v, info):
        if v < 1:
            logger.warning(f"{info.field_name}={v} is below 1, using 1")
            return 1
        return v

    def to_domain(self) -> FieldSpec:
        return FieldSpec(
            source=self.source.to_domain(),
            density=self.density,
            steps=self.steps,
            delta=self.delta,
        )

    @classmethod
    def from_domain(cls, spec: FieldSpec) -> "FieldSpecModel":
        return cls(
            source=ChargeModel.from_domain(spec.source),
            density=spec.density,
            steps=spec.steps,
            delta=spec.delta,
        )


class FieldResultModel(FieldSpecModel):
    """Tracing job together with its traced lines"""
    lines: List[List[PositionModel]] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, spec: FieldSpec) -> "FieldResultModel":
        return cls(
            source=ChargeModel.from_domain(spec.source),
            density=spec.density,
            steps=spec.steps,
            delta=spec.delta,
            lines=[_line_model(line) for line in spec.lines],
        )


def _line_model(line: Line) -> List[PositionModel]:
    return [PositionModel(x=point.x, y=point.y) for point in line]


FieldSpecList = TypeAdapter(List[FieldSpecModel])
