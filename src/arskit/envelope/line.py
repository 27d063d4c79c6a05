"""Tangent lines of a log-density, the building block of an envelope."""

from __future__ import annotations

import math
from dataclasses import dataclass

from arskit.exceptions import InvalidOrderingError

__all__ = ["Line", "intersection"]


@dataclass(frozen=True)
class Line:
    """The line ``y = slope * x + intercept`` in log-density space.

    Exponentiated, a line is one piece of the piecewise-exponential envelope.
    """

    slope: float
    intercept: float

    def __post_init__(self):
        object.__setattr__(self, "slope", float(self.slope))
        object.__setattr__(self, "intercept", float(self.intercept))

    @classmethod
    def tangent(cls, x: float, value: float, slope: float) -> "Line":
        """Builds the line with the given slope passing through ``(x, value)``.

        Args:
            x: Tangent point.
            value: Log-density at ``x``.
            slope: Derivative of the log-density at ``x``.

        Returns:
            The tangent line.
        """
        return cls(slope, value - slope * x)

    def __call__(self, x: float) -> float:
        """Evaluates the line at ``x``."""
        return self.slope * x + self.intercept

    @property
    def is_finite(self) -> bool:
        """True if both slope and intercept are finite."""
        return math.isfinite(self.slope) and math.isfinite(self.intercept)

    def intersection(self, other: "Line") -> float:
        """Returns the x-coordinate where this line meets ``other``."""
        return intersection(self, other)


def intersection(l1: Line, l2: Line) -> float:
    """Finds the horizontal coordinate of the intersection of two lines.

    Args:
        l1: First line.
        l2: Second line.

    Returns:
        The x-coordinate at which ``l1(x) == l2(x)``.

    Raises:
        InvalidOrderingError: If the lines have equal slopes.
    """
    if l1.slope == l2.slope:
        raise InvalidOrderingError(
            f"lines with equal slope {l1.slope} do not intersect.", reason="slopes"
        )
    return (l2.intercept - l1.intercept) / (l1.slope - l2.slope)
