"""Exception and warning types raised by arskit.

Every error derives from :class:`ARSError` and from the closest built-in
exception, so callers may catch either the specific type, ``ARSError``, or
the generic built-in (e.g. ``ValueError``).
"""

from __future__ import annotations

__all__ = [
    "ARSError",
    "InvalidSupportError",
    "NotLogConcaveAtSeedError",
    "InitialPointSearchFailedError",
    "InvalidOrderingError",
    "NumericalOverflowError",
    "MaxFailedRateExceededError",
    "EnvelopeViolationError",
    "NumericalInstabilityWarning",
]


class ARSError(Exception):
    """Base class for all adaptive rejection sampling errors."""


class InvalidSupportError(ARSError, ValueError):
    """Raises when a support interval is empty or a point lies outside it."""


class NotLogConcaveAtSeedError(ARSError, ValueError):
    """Raises when seed points do not bracket the mode of the log-density.

    The left seed must have a positive log-density slope and the right seed
    a negative one, with the left seed strictly smaller.
    """


class InitialPointSearchFailedError(ARSError, RuntimeError):
    """Raises when the grid search cannot find a valid pair of seed points."""


class InvalidOrderingError(ARSError, ValueError):
    """Raises when envelope lines or cutpoints violate their ordering.

    Attributes:
        reason: ``"slopes"`` when line slopes are not strictly decreasing,
            ``"cutpoints"`` when cutpoints are not strictly increasing.
    """

    def __init__(self, message: str, *, reason: str):
        super().__init__(message)
        self.reason = reason


class NumericalOverflowError(ARSError, OverflowError):
    """Raises when an envelope segment weight cannot be made finite."""


class MaxFailedRateExceededError(ARSError, RuntimeError):
    """Raises when a run exhausts its rejection budget.

    Attributes:
        n_rejected: Rejections counted when the run was aborted.
        n_accepted: Samples accepted before the run was aborted.
    """

    def __init__(self, message: str, *, n_rejected: int, n_accepted: int):
        super().__init__(message)
        self.n_rejected = n_rejected
        self.n_accepted = n_accepted


class EnvelopeViolationError(ARSError, RuntimeError):
    """Raises when the log-density rises above the envelope at a candidate."""


class NumericalInstabilityWarning(RuntimeWarning):
    """Emitted when segment integration clamps an exponent to stay finite."""
