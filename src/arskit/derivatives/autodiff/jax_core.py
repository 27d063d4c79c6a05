"""JAX-based derivative of a scalar function f: R -> R.

Use only with JAX-differentiable functions (bodies written with
``jax.numpy``). For arbitrary log-densities, prefer the "finite" method.
"""

from __future__ import annotations

from functools import partial
from typing import Callable

from arskit.derivatives.autodiff.jax_utils import (
    AutodiffUnavailable,
    apply_scalar_1d,
    jax,
    require_jax,
)

__all__ = [
    "autodiff_derivative",
]


def autodiff_derivative(func: Callable, x0: float) -> float:
    """Calculates the first derivative of a function f: R -> R via JAX autodiff.

    Args:
        func: Callable mapping float -> scalar.
        x0: Point at which to evaluate the derivative.

    Returns:
        Derivative value as a float.

    Raises:
        AutodiffUnavailable: If JAX is not available, or the function is not
            differentiable or not scalar-valued.
    """
    require_jax()

    g = jax.grad(partial(apply_scalar_1d, func, "autodiff_derivative"))

    try:
        val = g(float(x0))
    except (TypeError, ValueError) as exc:
        raise AutodiffUnavailable(
            "autodiff_derivative: function is not JAX-differentiable at x0. "
            "Use JAX primitives / jax.numpy or fall back to 'finite'."
        ) from exc

    return float(val)
