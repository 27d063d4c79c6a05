"""JAX-based autodiff backend for the derivative registry.

The backend must be registered explicitly before it can be selected by name:

    >>> from arskit.derivatives.autodiff.jax_autodiff import register_jax_autodiff_backend
    >>> register_jax_autodiff_backend()  # doctest: +SKIP
    >>>
    >>> import jax.numpy as jnp
    >>> from arskit import RejectionSampler
    >>> sampler = RejectionSampler(
    ...     lambda x: -0.5 * x**2, init=(-1.0, 1.0),
    ...     logdensity=True, derivative_method="autodiff",
    ... )  # doctest: +SKIP

To enable this backend, install the JAX extra: ``pip install "arskit[jax]"``.
"""

from __future__ import annotations

from typing import Any, Callable

from arskit.derivatives.autodiff.jax_core import autodiff_derivative
from arskit.derivatives.autodiff.jax_utils import require_jax
from arskit.derivatives.differentiator import register_method

__all__ = [
    "AutodiffDerivative",
    "register_jax_autodiff_backend",
]


class AutodiffDerivative:
    """Derivative engine for JAX-based autodiff of scalar functions f: R -> R."""

    def __init__(self, function: Callable[[float], Any], x0: float):
        """Initializes the JAX autodiff derivative engine."""
        self.function = function
        self.x0 = float(x0)

    def differentiate(self, **_: Any) -> float:
        """Computes the first derivative via JAX autodiff.

        Returns:
            Derivative value as a float.
        """
        return autodiff_derivative(self.function, self.x0)


def register_jax_autodiff_backend(
    *,
    name: str = "autodiff",
    aliases: tuple[str, ...] = ("jax", "jax-autodiff", "jd"),
) -> None:
    """Registers the JAX autodiff backend with the derivative registry.

    After calling this, ``derivative_method="autodiff"`` (or an alias) can be
    passed to :class:`~arskit.objective.Objective` and
    :class:`~arskit.sampler.RejectionSampler`.

    Args:
        name: Name of the method to register.
        aliases: Alternative names for the method.

    Raises:
        AutodiffUnavailable: If JAX is not available.
    """
    require_jax()

    register_method(
        name=name,
        cls=AutodiffDerivative,
        aliases=aliases,
    )
