"""Registry of derivative engines used to build tangent slopes.

The sampler never differentiates anything itself: it asks
:func:`make_derivative` for a ``float -> float`` callable and evaluates it at
seed points and rejected candidates. Engines are looked up by name, so a new
technique can be plugged in without touching the sampler.

Adding methods
--------------
An engine is any class constructible as ``Engine(function, x0)`` whose
``differentiate(**kwargs)`` returns the first derivative at ``x0``:

    >>> from arskit.derivatives.differentiator import register_method
    >>> class ForwardDifference:
    ...     def __init__(self, function, x0):
    ...         self.function, self.x0 = function, x0
    ...     def differentiate(self, h=1e-6):
    ...         return (self.function(self.x0 + h) - self.function(self.x0)) / h
    >>> register_method("forward", ForwardDifference, aliases=("fwd",))  # doctest: +SKIP

Notes:
    - Method names are case/spacing/punctuation insensitive.
    - For available canonical method names at runtime, call
      ``available_methods()``.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any, Callable, Iterable, Mapping, Protocol, Type

from arskit.derivatives.finite.finite_difference import FiniteDifferenceDerivative

__all__ = [
    "DerivativeEngine",
    "available_methods",
    "make_derivative",
    "register_method",
]


class DerivativeEngine(Protocol):
    """Protocol each derivative engine must satisfy.

    Any class registered as an engine must be constructible with a target
    function and an expansion point ``x0`` and provide ``differentiate``.
    It is a structural type only and carries no runtime behavior.
    """
    def __init__(self, function: Callable[[float], Any], x0: float):
        """Initialize the engine with a target function and expansion point."""
        ...
    def differentiate(self, *args: Any, **kwargs: Any) -> float:
        """Compute the first derivative at ``x0`` using the engine's algorithm."""
        ...


# Built-in methods; "autodiff" is added by register_jax_autodiff_backend().
_METHOD_SPECS: list[tuple[str, Type[DerivativeEngine], list[str]]] = [
    ("finite", FiniteDifferenceDerivative, ["finite-difference", "finite_difference", "fd"]),
]


def _norm(s: str) -> str:
    """Normalize a method string for robust matching (case/spacing/punct insensitive).

    Args:
        s: Input string.

    Returns:
        Normalized string.
    """
    return re.sub(r"[^a-z0-9]+", "", s.lower())


@lru_cache(maxsize=1)
def _method_maps() -> tuple[Mapping[str, Type[DerivativeEngine]], tuple[str, ...]]:
    """Construct and cache lookup tables for derivative methods.

    Returns:
        A pair ``(method_map, canonical_names)`` where ``method_map`` maps
        normalized names and aliases to engine classes and
        ``canonical_names`` lists the sorted canonical method names.
    """
    method_map: dict[str, Type[DerivativeEngine]] = {}
    canonical: set[str] = set()
    for name, cls, aliases in _METHOD_SPECS:
        k = _norm(name)
        method_map[k] = cls
        canonical.add(k)
        for a in aliases:
            method_map[_norm(a)] = cls
    return method_map, tuple(sorted(canonical))


def register_method(
    name: str,
    cls: Type[DerivativeEngine],
    *,
    aliases: Iterable[str] = (),
) -> None:
    """Register a new derivative method.

    The internal lookup cache is cleared and rebuilt on the next lookup, so
    registration is safe regardless of import order.

    Args:
        name: Canonical public name of the method (e.g., "autodiff").
        cls: Engine class implementing the DerivativeEngine protocol.
        aliases: Additional accepted spellings.
    """
    _METHOD_SPECS.append((name, cls, list(aliases)))
    _method_maps.cache_clear()


def _resolve(method: str) -> Type[DerivativeEngine]:
    """Resolve a user-provided method name or alias to an engine class.

    Args:
        method: User-provided method name or alias.

    Returns:
        Corresponding derivative engine class.

    Raises:
        ValueError: If the method is not registered.
    """
    method_map, canon = _method_maps()
    try:
        return method_map[_norm(method)]
    except KeyError:
        opts = ", ".join(canon)
        raise ValueError(f"Unknown derivative method '{method}'. Choose one of {{{opts}}}.") from None


def make_derivative(
    function: Callable[[float], Any],
    method: str = "finite",
    **kwargs: Any,
) -> Callable[[float], float]:
    """Returns the first derivative of ``function`` as a callable.

    The engine is resolved once, so an unknown method fails here rather than
    at the first evaluation.

    Args:
        function: Scalar function of one variable.
        method: Method name or alias (e.g., "finite", "fd", "autodiff").
        **kwargs: Passed to the engine's ``differentiate`` on every call.

    Returns:
        A callable ``x -> d function / dx (x)``.

    Raises:
        ValueError: If ``method`` is not recognized.
    """
    Engine = _resolve(method)

    def derivative(x: float) -> float:
        return float(Engine(function, x).differentiate(**kwargs))

    derivative.__name__ = f"d_{getattr(function, '__name__', 'function')}"
    return derivative


def available_methods() -> list[str]:
    """List canonical method names exposed by this API.

    Returns:
        List of method names.
    """
    _, canon = _method_maps()
    return list(canon)
