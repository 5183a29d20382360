"""Tests for the fixed-step field-line tracer"""

import math

import pytest

from objects import Charge, Position, Sign
from tracer import TraceStatus, is_out_of_bounds, trace_field_line, trace_field_line_with_status

WIDTH = 500.0
HEIGHT = 500.0


def _distances(line, center):
    return [math.hypot(p.x - center.x, p.y - center.y) for p in line]


def _strictly_increasing(values):
    return all(b > a for a, b in zip(values, values[1:]))


def _strictly_decreasing(values):
    return all(b < a for a, b in zip(values, values[1:]))


class TestRadialField:
    """Lines around a lone charge follow the radial field."""

    def test_positive_charge_moves_outward(self, positive_charge):
        line = trace_field_line(
            [positive_charge], 10, 5.0, Sign.POSITIVE, Position(270.0, 250.0), WIDTH, HEIGHT
        )
        assert len(line) == 10
        assert _strictly_increasing(_distances(line, positive_charge.position))

    def test_following_negative_field_moves_inward(self, negative_charge):
        line = trace_field_line(
            [negative_charge], 6, 5.0, Sign.POSITIVE, Position(300.0, 250.0), WIDTH, HEIGHT
        )
        distances = _distances(line, negative_charge.position)
        assert _strictly_decreasing(distances)
        assert distances == pytest.approx([50.0, 45.0, 40.0, 35.0, 30.0, 25.0])

    def test_negative_source_walks_against_field(self, negative_charge):
        line = trace_field_line(
            [negative_charge], 6, 5.0, Sign.NEGATIVE, Position(270.0, 250.0), WIDTH, HEIGHT
        )
        assert _strictly_increasing(_distances(line, negative_charge.position))

    def test_steps_are_delta_long(self, positive_charge):
        line = trace_field_line(
            [positive_charge], 8, 3.5, Sign.POSITIVE, Position(250.0, 280.0), WIDTH, HEIGHT
        )
        for a, b in zip(line, line[1:]):
            assert math.hypot(b.x - a.x, b.y - a.y) == pytest.approx(3.5)


class TestTermination:
    """Budget, bounds and zero-field endings."""

    def test_budget_exhausted(self, positive_charge):
        result = trace_field_line_with_status(
            [positive_charge], 5, 5.0, Sign.POSITIVE, Position(270.0, 250.0), WIDTH, HEIGHT
        )
        assert len(result.line) == 5
        assert result.status is TraceStatus.BUDGET

    def test_leaves_canvas_plus_tolerance(self, positive_charge):
        result = trace_field_line_with_status(
            [positive_charge], 20, 50.0, Sign.POSITIVE, Position(480.0, 250.0), WIDTH, HEIGHT
        )
        assert [p.x for p in result.line] == pytest.approx([480.0, 530.0, 580.0, 630.0])
        assert result.status is TraceStatus.BOUNDS
        assert len(result.line) < 20

    def test_seed_far_outside_gives_single_point(self, positive_charge):
        start = Position(-101.0, 250.0)
        result = trace_field_line_with_status(
            [positive_charge], 10, 5.0, Sign.POSITIVE, start, WIDTH, HEIGHT
        )
        assert result.line == [start]
        assert result.status is TraceStatus.BOUNDS

    def test_seed_within_tolerance_keeps_going(self, positive_charge):
        line = trace_field_line(
            [positive_charge], 3, 5.0, Sign.NEGATIVE, Position(250.0, -100.0), WIDTH, HEIGHT
        )
        assert len(line) == 3

    def test_zero_field_ends_line(self):
        charges = [
            Charge(id=1, sign=Sign.POSITIVE, magnitude=10.0, position=Position(200.0, 250.0), r=20.0),
            Charge(id=2, sign=Sign.POSITIVE, magnitude=10.0, position=Position(300.0, 250.0), r=20.0),
        ]
        result = trace_field_line_with_status(
            charges, 10, 5.0, Sign.POSITIVE, Position(250.0, 250.0), WIDTH, HEIGHT
        )
        assert result.line == [Position(250.0, 250.0)]
        assert result.status is TraceStatus.STALLED

    def test_no_charges_stalls(self):
        result = trace_field_line_with_status(
            [], 10, 5.0, Sign.POSITIVE, Position(10.0, 10.0), WIDTH, HEIGHT
        )
        assert len(result.line) == 1
        assert result.status is TraceStatus.STALLED

    @pytest.mark.parametrize("steps", [0, 1])
    def test_minimal_step_budget(self, positive_charge, steps):
        line = trace_field_line(
            [positive_charge], steps, 5.0, Sign.POSITIVE, Position(270.0, 250.0), WIDTH, HEIGHT
        )
        assert line == [Position(270.0, 250.0)]


class TestInvariants:
    def test_repeated_trace_is_identical(self, dipole_specs):
        charges = [spec.source for spec in dipole_specs]
        args = (charges, 60, 4.0, Sign.POSITIVE, Position(220.0, 255.0), WIDTH, HEIGHT)
        assert trace_field_line(*args) == trace_field_line(*args)

    def test_zero_magnitude_charge_does_not_change_line(self, positive_charge):
        neutral = Charge(id=9, sign=Sign.NEGATIVE, magnitude=0.0, position=Position(100.0, 400.0), r=20.0)
        start = Position(262.0, 266.0)
        alone = trace_field_line([positive_charge], 30, 5.0, Sign.POSITIVE, start, WIDTH, HEIGHT)
        with_neutral = trace_field_line(
            [positive_charge, neutral], 30, 5.0, Sign.POSITIVE, start, WIDTH, HEIGHT
        )
        assert with_neutral == alone

    def test_all_points_finite_through_a_charge(self, positive_charge):
        sink = Charge(id=3, sign=Sign.NEGATIVE, magnitude=10.0, position=Position(350.0, 250.0), r=20.0)
        line = trace_field_line(
            [positive_charge, sink], 200, 5.0, Sign.POSITIVE, Position(270.0, 250.0), WIDTH, HEIGHT
        )
        assert 1 <= len(line) <= 200
        assert all(math.isfinite(p.x) and math.isfinite(p.y) for p in line)


@pytest.mark.parametrize(
    "point, expected",
    [
        ((0.0, 0.0), False),
        ((-100.0, 600.0), False),
        ((-100.5, 250.0), True),
        ((600.5, 250.0), True),
        ((250.0, -100.5), True),
        ((250.0, 600.5), True),
    ],
)
def test_is_out_of_bounds(point, expected):
    assert is_out_of_bounds(Position(*point), WIDTH, HEIGHT, 100.0) is expected
