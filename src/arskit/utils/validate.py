"""Validation utilities for arskit."""

from __future__ import annotations

import math
import numbers
from typing import Any

from arskit.exceptions import InvalidSupportError, NotLogConcaveAtSeedError

__all__ = [
    "validate_support",
    "validate_seed_points",
    "validate_positive_int",
    "intersect_intervals",
]


def validate_support(support: Any) -> tuple[float, float]:
    """Validates a support interval and converts it to a pair of floats.

    Accepted forms are ``(-inf, inf)``, ``(-inf, a)``, ``(b, inf)`` and
    ``(a, b)``.

    Args:
        support: Two-element sequence ``(lo, hi)``.

    Returns:
        ``(lo, hi)`` as floats.

    Raises:
        InvalidSupportError: If ``support`` does not have two entries, a
            bound is NaN, or ``lo >= hi``.
    """
    try:
        lo, hi = (float(v) for v in support)
    except (TypeError, ValueError) as exc:
        raise InvalidSupportError(
            f"support must be a pair (lo, hi) of numbers; got {support!r}."
        ) from exc

    if not lo < hi:
        raise InvalidSupportError(
            f"support lower bound must be strictly less than upper bound; got ({lo}, {hi})."
        )
    return lo, hi


def validate_seed_points(
    init: Any,
    support: tuple[float, float],
) -> tuple[float, float]:
    """Validates a pair of seed points against a support.

    Args:
        init: Two-element sequence ``(x1, x2)``.
        support: Validated ``(lo, hi)`` support.

    Returns:
        ``(x1, x2)`` as floats.

    Raises:
        InvalidSupportError: If a seed is not finite or lies outside the
            support.
        NotLogConcaveAtSeedError: If ``x1 >= x2``.
    """
    try:
        x1, x2 = (float(v) for v in init)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"init must be a pair (x1, x2) of numbers; got {init!r}.") from exc

    lo, hi = support
    for x in (x1, x2):
        if not (math.isfinite(x) and lo <= x <= hi):
            raise InvalidSupportError(f"seed point {x} lies outside the support ({lo}, {hi}).")
    if not x1 < x2:
        raise NotLogConcaveAtSeedError(f"seed points must be ordered; got x1={x1}, x2={x2}.")
    return x1, x2


def validate_positive_int(value: Any, name: str) -> int:
    """Returns ``value`` as an int, raising unless it is a positive integer.

    Args:
        value: Candidate value.
        name: Name used in error messages.

    Returns:
        The value as ``int``.

    Raises:
        ValueError: If ``value`` is not a positive integer.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
        raise ValueError(f"{name} must be a positive integer; got {value!r}.")
    return int(value)


def intersect_intervals(
    a: tuple[float, float],
    b: tuple[float, float],
) -> tuple[float, float] | None:
    """Returns the intersection of two closed intervals, or ``None`` if empty."""
    lo = max(a[0], b[0])
    hi = min(a[1], b[1])
    if not lo <= hi:
        return None
    return lo, hi
