"""Tests for arskit.objective."""

import math

import numpy as np
import pytest

from arskit.objective import Objective, log_of


def test_objective_uses_supplied_grad():
    """Tests that an explicit derivative is used as given."""
    obj = Objective(lambda x: -0.5 * x**2, grad=lambda x: 42.0)
    assert obj.grad(0.0) == 42.0
    assert obj.method is None


def test_objective_builds_finite_difference_grad(normal_logpdf):
    """Tests that the default derivative matches the analytic one."""
    obj = Objective(normal_logpdf)
    assert obj.method == "finite"
    for x in (-2.0, -0.3, 0.0, 1.7):
        assert obj.grad(x) == pytest.approx(-x, abs=1e-8)


def test_objective_forwards_derivative_options():
    """Tests that derivative options reach the finite-difference engine."""
    obj = Objective(math.sin, derivative_options={"stepsize": 1e-3, "num_points": 3})
    assert obj.grad(0.4) == pytest.approx(math.cos(0.4), abs=1e-6)


def test_objective_returns_python_floats():
    """Tests that logf and grad return plain floats for numpy-valued callables."""
    obj = Objective(lambda x: np.float64(-x**2), grad=lambda x: np.array(-2.0 * x))
    assert type(obj.logf(1.0)) is float
    assert type(obj.grad(1.0)) is float


def test_from_density_takes_log(normal_pdf):
    """Tests that from_density wraps log f."""
    obj = Objective.from_density(normal_pdf)
    assert obj.logf(0.0) == pytest.approx(-0.5 * math.log(2.0 * math.pi))
    assert obj.grad(0.0) == pytest.approx(0.0, abs=1e-8)
    assert obj.grad(1.0) == pytest.approx(-1.0, abs=1e-8)


def test_log_of_zero_density_is_minus_inf():
    """Tests that zero density gives -inf without a floating-point warning."""
    logf = log_of(lambda x: 0.0 * x)
    with np.errstate(all="raise"):
        assert logf(1.0) == -math.inf


def test_objective_rejects_non_callables():
    """Tests that logf and grad must be callable."""
    with pytest.raises(TypeError):
        Objective(1.0)
    with pytest.raises(TypeError):
        Objective(math.sin, grad="cos")


def test_objective_unknown_method_raises():
    """Tests that an unknown derivative method fails at construction."""
    with pytest.raises(ValueError, match="Unknown derivative method"):
        Objective(math.sin, method="magic")
