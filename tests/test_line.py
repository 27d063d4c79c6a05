"""Tests for arskit.envelope.line."""

import math

import pytest

from arskit.envelope.line import Line, intersection
from arskit.exceptions import InvalidOrderingError


def test_line_converts_to_float():
    """Tests that slope and intercept are stored as floats."""
    line = Line(2, 3)
    assert isinstance(line.slope, float)
    assert isinstance(line.intercept, float)
    assert line == Line(2.0, 3.0)


def test_line_is_immutable():
    """Tests that a line cannot be modified after construction."""
    line = Line(1.0, 0.0)
    with pytest.raises(AttributeError):
        line.slope = 2.0


def test_line_call_evaluates():
    """Tests that calling a line evaluates slope * x + intercept."""
    assert Line(2.0, -1.0)(3.0) == 5.0


def test_intersection_of_crossing_lines():
    """Tests the intersection x-coordinate of two crossing lines."""
    assert intersection(Line(-1.0, 1.0), Line(1.0, -1.0)) == 1.0
    assert Line(1.0, 1.0).intersection(Line(-3.0, 2.0)) == 0.25


def test_intersection_is_symmetric():
    """Tests that the intersection does not depend on argument order."""
    l1, l2 = Line(0.5, 2.0), Line(-1.5, 0.0)
    assert intersection(l1, l2) == pytest.approx(intersection(l2, l1))


def test_intersection_of_parallel_lines_raises():
    """Tests that parallel lines raise an ordering error."""
    with pytest.raises(InvalidOrderingError) as info:
        intersection(Line(-1.0, 1.0), Line(-1.0, -1.0))
    assert info.value.reason == "slopes"


def test_tangent_passes_through_point():
    """Tests that a tangent line passes through the given point with the given slope."""
    line = Line.tangent(2.0, -2.0, -2.0)
    assert line.slope == -2.0
    assert line.intercept == 2.0
    assert line(2.0) == -2.0


@pytest.mark.parametrize(
    "slope, intercept, expected",
    [
        (1.0, 2.0, True),
        (math.nan, 0.0, False),
        (0.0, -math.inf, False),
    ],
)
def test_is_finite(slope, intercept, expected):
    """Tests that is_finite flags NaN and infinite coefficients."""
    assert Line(slope, intercept).is_finite is expected
