"""Utilities for JAX-based autodiff in arskit."""

from __future__ import annotations

from typing import Any, Callable

try:
    import jax
    import jax.numpy as jnp
except ImportError:
    jax = None
    jnp = None
    _HAS_JAX = False
else:
    _HAS_JAX = True

has_jax: bool = _HAS_JAX

__all__ = [
    "AutodiffUnavailable",
    "require_jax",
    "is_jax_array",
    "to_jax_scalar",
    "apply_scalar_1d",
]


class AutodiffUnavailable(RuntimeError):
    """Raises when JAX-based autodiff is unavailable."""


def require_jax() -> None:
    """Raises if JAX is not available.

    Raises:
        AutodiffUnavailable: If JAX is not installed.
    """
    if not _HAS_JAX:
        raise AutodiffUnavailable(
            "JAX autodiff requires `jax` + `jaxlib`.\n"
            'Install with `pip install "arskit[jax]"` '
            "(or follow JAX's official install instructions for GPU)."
        )


def is_jax_array(y: Any) -> bool:
    """True if ``y`` is a JAX array or tracer (always False without JAX)."""
    return _HAS_JAX and isinstance(y, jax.Array)


def to_jax_scalar(y: Any, *, where: str) -> "jnp.ndarray":
    """Ensures that output is scalar and returns as JAX array.

    Args:
        y: Output to check.
        where: Context string for error messages.

    Returns:
        JAX array with shape ().

    Raises:
        TypeError: If output is not scalar.
    """
    arr = jnp.asarray(y)
    if arr.ndim != 0:
        raise TypeError(f"{where}: expected scalar output; got shape {tuple(arr.shape)}.")
    return arr


def apply_scalar_1d(
    func: Callable[[float], Any],
    where: str,
    x: "jnp.ndarray",
) -> "jnp.ndarray":
    """Calls ``func`` on a scalar input and enforces a scalar output.

    Args:
        func: Function to apply.
        where: Context string for error messages.
        x: Scalar JAX input.

    Returns:
        Scalar JAX output.
    """
    return to_jax_scalar(func(x), where=where)
