"""Central finite-difference derivative engine."""

from arskit.derivatives.finite.finite_difference import FiniteDifferenceDerivative

__all__ = ["FiniteDifferenceDerivative"]
