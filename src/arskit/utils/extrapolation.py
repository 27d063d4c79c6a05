"""Extrapolation methods for numerical approximations."""

from __future__ import annotations

from typing import Sequence

__all__ = [
    "richardson_extrapolate",
]


def richardson_extrapolate(
        base_values: Sequence[float],
        p: int,
        r: float = 2.0,
) -> float:
    """Computes Richardson extrapolation on a sequence of approximations.

    Given approximations computed with step sizes ``h, h/r, h/r^2, ...`` whose
    leading error term is ``O(h^p)``, successive combinations cancel that term
    level by level, yielding a more accurate estimate of the limit.

    Args:
        base_values:
            Sequence of approximations at decreasing step sizes.
        p:
            The order of the leading error term in the approximations.
        r:
            The step-size reduction factor between successive entries
            (default is 2.0).

    Returns:
        The extrapolated value.

    Raises:
        ValueError: If `base_values` has fewer than two entries.
    """
    n = len(base_values)
    if n < 2:
        raise ValueError("richardson_extrapolate requires at least two base values.")

    vals = [float(v) for v in base_values]

    for j in range(1, n):
        factor = r ** (p * j)
        for k in range(n - 1, j - 1, -1):
            vals[k] = (factor * vals[k] - vals[k - 1]) / (factor - 1.0)

    return vals[-1]
