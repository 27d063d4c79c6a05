"""Tests for arskit.envelope.integrals."""

import math
import warnings

import pytest

from arskit.diagnostics import NumericalDiagnostics
from arskit.envelope.integrals import DEFAULT_CLAMP_THRESHOLD, exp_integral, peak_exponent
from arskit.envelope.line import Line
from arskit.exceptions import NumericalInstabilityWarning, NumericalOverflowError


@pytest.mark.parametrize(
    "slope, intercept, x1, x2",
    [
        (1.0, 0.0, -1.0, 1.0),
        (-2.0, 0.5, 0.0, 3.0),
        (0.3, -1.0, 2.0, 4.5),
    ],
)
def test_exp_integral_matches_closed_form(slope, intercept, x1, x2):
    """Tests the segment integral against exp(b) (exp(a x2) - exp(a x1)) / a."""
    expected = math.exp(intercept) * (math.exp(slope * x2) - math.exp(slope * x1)) / slope
    got = exp_integral(Line(slope, intercept), x1, x2)
    assert got == pytest.approx(expected, rel=1e-12)


def test_exp_integral_zero_slope_is_rectangle():
    """Tests that a flat line integrates to exp(b) times the interval length."""
    assert exp_integral(Line(0.0, 1.0), -1.0, 2.0) == pytest.approx(3.0 * math.e)


@pytest.mark.parametrize(
    "line, x1, x2, expected",
    [
        (Line(1.0, 1.0), -math.inf, 0.25, math.exp(1.25)),
        (Line(-3.0, 2.0), 0.25, math.inf, math.exp(1.25) / 3.0),
    ],
)
def test_exp_integral_infinite_bounds(line, x1, x2, expected):
    """Tests decaying tails integrated to an infinite bound."""
    assert exp_integral(line, x1, x2) == pytest.approx(expected, rel=1e-12)


def test_exp_integral_rising_to_infinity_raises():
    """Tests that a line rising towards an unbounded end is rejected."""
    with pytest.raises(NumericalOverflowError):
        exp_integral(Line(0.5, 0.0), 0.0, math.inf)


def test_exp_integral_flat_unbounded_raises():
    """Tests that a flat line over an unbounded interval is rejected."""
    with pytest.raises(NumericalOverflowError):
        exp_integral(Line(0.0, 0.0), 0.0, math.inf)


def test_exp_integral_clamps_large_exponent():
    """Tests that a large peak exponent is clamped to the threshold."""
    diagnostics = NumericalDiagnostics()
    with pytest.warns(NumericalInstabilityWarning):
        got = exp_integral(Line(2.0, 0.0), 0.0, 20.0, diagnostics=diagnostics)
    assert got == pytest.approx(math.exp(DEFAULT_CLAMP_THRESHOLD) / 2.0)
    assert diagnostics.n_clamped == 1
    assert diagnostics.last_event["quantities"] == {"exponent": 40.0}


def test_exp_integral_clamps_intercept_for_flat_line():
    """Tests that the intercept is the peak exponent for a zero slope."""
    diagnostics = NumericalDiagnostics()
    with pytest.warns(NumericalInstabilityWarning):
        got = exp_integral(Line(0.0, 30.0), 0.0, 1.0, diagnostics=diagnostics)
    assert got == pytest.approx(math.exp(25.0))
    assert diagnostics.last_event["quantities"] == {"exponent": 30.0}


def test_exp_integral_warns_once_then_counts():
    """Tests that repeated clamps warn once and keep counting."""
    diagnostics = NumericalDiagnostics()
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        for _ in range(3):
            exp_integral(Line(0.0, 30.0), 0.0, 1.0, diagnostics=diagnostics)
    instability = [w for w in caught if issubclass(w.category, NumericalInstabilityWarning)]
    assert len(instability) == 1
    assert diagnostics.n_clamped == 3


def test_exp_integral_custom_threshold_avoids_clamp():
    """Tests that a larger threshold leaves moderate exponents untouched."""
    diagnostics = NumericalDiagnostics()
    got = exp_integral(Line(0.0, 30.0), 0.0, 1.0, threshold=40.0, diagnostics=diagnostics)
    assert got == pytest.approx(math.exp(30.0))
    assert diagnostics.n_clamped == 0


def test_exp_integral_overflow_raises():
    """Tests that an exponent beyond double range raises NumericalOverflowError."""
    with pytest.raises(NumericalOverflowError):
        exp_integral(Line(1.0, 0.0), 0.0, 800.0, threshold=1000.0)


@pytest.mark.parametrize(
    "line, x1, x2, expected",
    [
        (Line(2.0, 1.0), -1.0, 3.0, 7.0),
        (Line(-2.0, 1.0), -1.0, 3.0, 3.0),
        (Line(0.0, -4.0), -1.0, 3.0, -4.0),
        (Line(-1.0, 0.0), -math.inf, 0.0, math.inf),
    ],
)
def test_peak_exponent(line, x1, x2, expected):
    """Tests the maximum of a line over an interval."""
    assert peak_exponent(line, x1, x2) == expected


def test_exp_integral_is_accurate_far_below_zero():
    """Tests that very negative exponents give tiny positive weights, not zero."""
    got = exp_integral(Line(-1.0, -700.0), 0.0, 1.0)
    assert got > 0.0
    assert got == pytest.approx(math.exp(-700.0) * -math.expm1(-1.0), rel=1e-12)
