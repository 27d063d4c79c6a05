"""Provides the FiniteDifferenceDerivative class.

This is the default differentiation engine behind
:class:`~arskit.objective.Objective`: when the caller does not supply the
derivative of the log-density, tangent slopes are estimated with central
finite differences.

Examples:
--------
>>> from arskit.derivatives.finite.finite_difference import FiniteDifferenceDerivative
>>> f = lambda x: -0.5 * x**2
>>> d = FiniteDifferenceDerivative(function=f, x0=1.5)
>>> round(d.differentiate(), 10)
-1.5

With Richardson extrapolation over three step sizes:

>>> import math
>>> d = FiniteDifferenceDerivative(function=math.sin, x0=0.7)
>>> abs(d.differentiate(stepsize=0.1, extrapolation="richardson", levels=3) - math.cos(0.7)) < 1e-7
True
"""

from __future__ import annotations

from collections.abc import Callable
from functools import partial

from arskit.derivatives.finite.core import single_finite_step
from arskit.derivatives.finite.stencil import (
    TRUNCATION_ORDER,
    validate_stencil,
)
from arskit.utils.extrapolation import richardson_extrapolate


class FiniteDifferenceDerivative:
    """Computes first derivatives of scalar functions with central stencils.

    Stencils of 3, 5, 7 and 9 points are supported, with truncation errors of
    order 2, 4, 6 and 8 in the step size.

    Attributes:
        function: The function to differentiate. Must accept a single
            float and return a float.
        x0: The point at which the derivative is evaluated.
    """

    def __init__(self, function: Callable[[float], float], x0: float) -> None:
        """Initialises the class based on function and central value.

        Arguments:
            function: The function to differentiate.
            x0: The point at which the derivative is evaluated.
        """
        self.function = function
        self.x0 = float(x0)

    def differentiate(
        self,
        stepsize: float = 0.01,
        num_points: int = 5,
        extrapolation: str | None = None,
        levels: int = 3,
    ) -> float:
        """Computes the first derivative using a central finite difference scheme.

        Args:
            stepsize: Step size (h) used to evaluate the function around the
                central value. Default is 0.01.
            num_points: Number of points in the stencil, one of [3, 5, 7, 9].
                Default is 5.
            extrapolation: ``None`` for a single stencil evaluation, or
                ``"richardson"`` to combine ``levels`` evaluations at step
                sizes ``h, h/2, h/4, ...``.
            levels: Number of step sizes used by Richardson extrapolation.

        Returns:
            The estimated derivative.

        Raises:
            ValueError: If the stencil size is unsupported, the step size
                is not positive, or the extrapolation scheme is unknown.
        """
        if stepsize <= 0:
            raise ValueError("stepsize must be positive.")

        validate_stencil(num_points)

        single = partial(single_finite_step, self.function, self.x0)

        if extrapolation is None:
            return single(stepsize, num_points)

        if extrapolation != "richardson":
            raise ValueError(f"Unknown extrapolation scheme: {extrapolation!r}")
        if levels < 2:
            raise ValueError("Richardson extrapolation requires levels >= 2.")

        r = 2.0
        base_values = [single(stepsize / r**j, num_points) for j in range(levels)]
        return richardson_extrapolate(base_values, p=TRUNCATION_ORDER[num_points], r=r)
