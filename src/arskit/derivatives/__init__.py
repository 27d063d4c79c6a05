"""Differentiation capability injected into objectives."""

from arskit.derivatives.differentiator import (
    available_methods,
    make_derivative,
    register_method,
)
from arskit.derivatives.finite.finite_difference import FiniteDifferenceDerivative

__all__ = [
    "FiniteDifferenceDerivative",
    "available_methods",
    "make_derivative",
    "register_method",
]
