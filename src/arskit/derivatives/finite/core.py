"""Finite difference derivative estimation with a single step size."""

from __future__ import annotations

from typing import Callable

import numpy as np

from .stencil import get_finite_difference_tables

__all__ = [
    "single_finite_step",
]


def single_finite_step(
    function: Callable[[float], float],
    x0: float,
    stepsize: float,
    num_points: int,
) -> float:
    """Returns one central finite-difference estimate at a given step size h.

    Args:
        function:
            Scalar function whose derivative is to be estimated.
        x0:
            The point at which to evaluate the derivative.
        stepsize:
            The step size (h) used to evaluate the function around x0.
        num_points:
            The number of points in the finite difference stencil. Must be
            one of [3, 5, 7, 9].

    Returns:
        The estimated first derivative.

    Raises:
        ValueError:
            If ``num_points`` is not a supported stencil size.
    """
    offsets, coeffs_table = get_finite_difference_tables(float(stepsize))
    if num_points not in coeffs_table:
        raise ValueError(
            f"[FiniteDifference] Internal table missing coefficients for stencil={num_points}."
        )

    values = np.array(
        [float(function(x0 + i * stepsize)) for i in offsets[num_points]],
        dtype=float,
    )
    return float(np.dot(coeffs_table[num_points], values))
