"""Value and derivative oracle for the log-density being sampled."""

from __future__ import annotations

from typing import Any, Callable, Mapping

import numpy as np

from arskit.derivatives.autodiff.jax_utils import is_jax_array, jnp
from arskit.derivatives.differentiator import make_derivative

__all__ = ["Objective", "log_of"]


def log_of(f: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Returns ``x -> log(f(x))``, traceable by JAX when ``f`` is.

    Zero density maps to ``-inf`` without a floating-point warning.
    """

    def logf(x):
        value = f(x)
        if is_jax_array(value):
            return jnp.log(value)
        with np.errstate(divide="ignore"):
            return np.log(value)

    logf.__name__ = f"log_{getattr(f, '__name__', 'f')}"
    return logf


class Objective:
    """Wraps a log-density and its derivative.

    The derivative is taken from the caller when given, otherwise it is built
    by the differentiation registry (:func:`~arskit.derivatives.make_derivative`).
    Both callables return Python floats.

    Example:
        >>> from arskit.objective import Objective
        >>> obj = Objective(lambda x: -0.5 * x**2)
        >>> obj.logf(2.0)
        -2.0
        >>> round(obj.grad(2.0), 8)
        -2.0

    Attributes:
        method: Name of the derivative method, or ``None`` when the
            derivative was supplied.
    """

    def __init__(
        self,
        logf: Callable[[float], Any],
        grad: Callable[[float], Any] | None = None,
        *,
        method: str = "finite",
        derivative_options: Mapping[str, Any] | None = None,
    ):
        """Initializes the objective.

        Args:
            logf: Log of the (unnormalized) density.
            grad: Derivative of ``logf``. Built from ``method`` when omitted.
            method: Derivative method name used when ``grad`` is omitted.
            derivative_options: Keyword arguments forwarded to the derivative
                engine (e.g. ``{"stepsize": 1e-3}`` for finite differences).

        Raises:
            TypeError: If ``logf`` or ``grad`` is not callable.
            ValueError: If ``method`` is unknown.
        """
        if not callable(logf):
            raise TypeError("logf must be callable.")
        if grad is not None and not callable(grad):
            raise TypeError("grad must be callable.")

        self._logf = logf
        if grad is None:
            self._grad = make_derivative(logf, method, **dict(derivative_options or {}))
            self.method = method
        else:
            self._grad = grad
            self.method = None

    @classmethod
    def from_density(
        cls,
        f: Callable[[float], Any],
        grad: Callable[[float], Any] | None = None,
        **kwargs: Any,
    ) -> "Objective":
        """Builds an objective from a density rather than its logarithm.

        Args:
            f: The (unnormalized) density.
            grad: Derivative of ``log f``, if known.
            **kwargs: Forwarded to :class:`Objective`.

        Returns:
            An objective with ``logf = log f``.
        """
        return cls(log_of(f), grad, **kwargs)

    def logf(self, x: float) -> float:
        """Log-density at ``x``."""
        return float(self._logf(x))

    def grad(self, x: float) -> float:
        """Derivative of the log-density at ``x``."""
        return float(self._grad(x))
