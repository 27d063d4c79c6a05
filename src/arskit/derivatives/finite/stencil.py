"""Stencil definitions for central finite-difference first derivatives."""

import math
from functools import lru_cache

import numpy as np
from numpy.typing import NDArray

__all__ = [
    "get_finite_difference_tables",
    "validate_stencil",
    "TRUNCATION_ORDER",
    "STENCILS",
]


#: A list of supported stencil sizes.
STENCILS = (3, 5, 7, 9)


def _central_offsets(num_points: int) -> NDArray[np.float64]:
    """Returns integer offsets ``-n//2, ..., n//2`` as floats."""
    half = num_points // 2
    return np.arange(-half, half + 1, dtype=np.float64)


def _first_derivative_coeffs(
    offsets: NDArray[np.float64],
    stepsize: float,
) -> NDArray[np.float64]:
    """Computes first-derivative finite difference coefficients for given offsets.

    Solves the Taylor moment system so that the weighted sum of function values
    at ``x0 + offsets * stepsize`` reproduces the first derivative.

    Args:
        offsets: Integer offsets of the stencil.
        stepsize: The step size of the stencil.

    Returns:
        An array of finite difference coefficients.
    """
    n = offsets.size
    matrix = np.zeros((n, n), dtype=float)
    b = np.zeros(n, dtype=float)

    for k in range(n):
        matrix[k, :] = offsets**k / math.factorial(k)
    b[1] = 1.0

    return np.linalg.solve(matrix, b) / stepsize


def truncation_order_from_coeffs(
    offsets: NDArray[np.float64],
    coeffs: NDArray[np.float64],
    tol: float = 1e-12,
) -> int:
    """Computes the truncation order of a stencil from its first non-zero moment.

    Args:
        offsets: Integer offsets of the stencil.
        coeffs: First-derivative coefficients for unit step size.
        tol: Numerical tolerance for a vanishing moment.

    Returns:
        The power of ``h`` in the leading error term.
    """
    for r in range(2, 41):
        moment = float(np.dot(coeffs, offsets**r))
        if abs(moment) > tol:
            return r - 1
    raise RuntimeError("Could not detect truncation order.")


#: Dictionary of truncation order by stencil size.
TRUNCATION_ORDER = {
    n: truncation_order_from_coeffs(
        _central_offsets(n), _first_derivative_coeffs(_central_offsets(n), 1.0)
    )
    for n in STENCILS
}


@lru_cache(maxsize=64)
def get_finite_difference_tables(
    stepsize: float,
) -> tuple[dict[int, tuple[float, ...]], dict[int, NDArray[np.float64]]]:
    """Computes offset patterns and coefficient tables for one step size.

    The result is cached: a sampler differentiates at many points with the
    same step size.

    Args:
        stepsize: The step size to use for the stencil spacing.

    Returns:
        A dictionary of offsets by stencil size, and a dictionary of
        first-derivative coefficients by stencil size.
    """
    offsets = {n: tuple(_central_offsets(n).tolist()) for n in STENCILS}
    coeffs_table = {n: _first_derivative_coeffs(_central_offsets(n), stepsize) for n in STENCILS}
    return offsets, coeffs_table


def validate_stencil(num_points: int) -> None:
    """Validates the stencil size.

    Args:
        num_points: Number of points in the finite difference stencil.

    Raises:
        ValueError: If the stencil size is not supported.
    """
    if num_points not in STENCILS:
        raise ValueError(
            f"[FiniteDifference] Unsupported stencil size: {num_points}. "
            f"Must be one of {list(STENCILS)}."
        )
