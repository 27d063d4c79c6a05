"""Tests for the finite-difference derivative engine."""

import math

import numpy as np
import pytest

from arskit.derivatives.finite.core import single_finite_step
from arskit.derivatives.finite.finite_difference import FiniteDifferenceDerivative
from arskit.derivatives.finite.stencil import (
    STENCILS,
    TRUNCATION_ORDER,
    get_finite_difference_tables,
    validate_stencil,
)


def _poly3(x: float) -> float:
    """Test cubic: f(x) = x^3 - 2x + 0.5."""
    return x**3 - 2.0 * x + 0.5


@pytest.mark.parametrize("num_points", [3, 5, 7, 9])
def test_first_derivative_of_sin(num_points):
    """Tests first derivatives of sin for every stencil size."""
    d = FiniteDifferenceDerivative(math.sin, 0.3)
    assert d.differentiate(num_points=num_points) == pytest.approx(
        math.cos(0.3), abs=1e-4
    )


def test_cubic_first_derivative_five_point():
    """Tests the first derivative of a cubic with the 5-point stencil."""
    d = FiniteDifferenceDerivative(_poly3, 0.7)
    assert d.differentiate(stepsize=0.01, num_points=5) == pytest.approx(
        3.0 * 0.49 - 2.0, rel=1e-8, abs=1e-8
    )


def test_quadratic_log_density_exact():
    """Tests that central differences are exact for a quadratic."""
    d = FiniteDifferenceDerivative(lambda x: -0.5 * x**2, 1.5)
    assert d.differentiate() == pytest.approx(-1.5, abs=1e-10)


def test_richardson_improves_accuracy():
    """Tests that Richardson extrapolation beats a single coarse stencil."""
    d = FiniteDifferenceDerivative(math.exp, 0.5)
    plain = abs(d.differentiate(stepsize=0.2, num_points=3) - math.exp(0.5))
    extrap = abs(
        d.differentiate(stepsize=0.2, num_points=3, extrapolation="richardson", levels=4)
        - math.exp(0.5)
    )
    assert extrap < plain * 1e-3


def test_single_finite_step_returns_float():
    """Tests the single-stencil helper directly."""
    value = single_finite_step(np.exp, 0.0, 0.01, 5)
    assert isinstance(value, float)
    assert value == pytest.approx(1.0, abs=1e-8)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"stepsize": 0.0},
        {"stepsize": -0.1},
        {"num_points": 4},
        {"num_points": 1},
        {"extrapolation": "ridders"},
        {"extrapolation": "richardson", "levels": 1},
    ],
)
def test_invalid_arguments_raise(kwargs):
    """Tests that invalid step sizes, stencils and schemes raise ValueError."""
    d = FiniteDifferenceDerivative(math.sin, 0.0)
    with pytest.raises(ValueError):
        d.differentiate(**kwargs)


def test_validate_stencil():
    """Tests the stencil size check."""
    assert STENCILS == (3, 5, 7, 9)
    for num_points in STENCILS:
        validate_stencil(num_points)
    with pytest.raises(ValueError):
        validate_stencil(11)


def test_coefficients_are_antisymmetric_for_first_derivative():
    """Tests that first-derivative coefficients are antisymmetric and sum to zero."""
    offsets, coeffs = get_finite_difference_tables(0.1)
    c = np.asarray(coeffs[5])
    np.testing.assert_allclose(c, -c[::-1], atol=1e-12)
    assert abs(c.sum()) < 1e-10
    assert tuple(offsets[5]) == (-2, -1, 0, 1, 2)


def test_truncation_orders():
    """Tests leading error orders of central stencils."""
    assert TRUNCATION_ORDER[3] == 2
    assert TRUNCATION_ORDER[5] == 4
    assert TRUNCATION_ORDER[9] == 8
