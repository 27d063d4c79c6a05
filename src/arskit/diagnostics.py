"""Structured channel for numerical-instability events.

Segment integration may clamp large exponents to keep envelope weights
finite. Each clamp is recorded here instead of being logged on the spot, so a
long run that clamps thousands of times produces a single warning plus a
counter the caller can inspect.
"""

from __future__ import annotations

import warnings
from typing import Any, Dict, Optional

from arskit.exceptions import NumericalInstabilityWarning
from arskit.logger import arskit_logger

__all__ = ["NumericalDiagnostics"]


class NumericalDiagnostics:
    """Counts clamp events and reports the first one.

    Attributes:
        n_clamped: Number of segment integrals that required clamping.
        last_event: Details of the most recent clamp, or ``None``.
    """

    def __init__(self, max_reports: int = 1):
        """Initializes an empty channel.

        Args:
            max_reports: Number of events reported through ``warnings`` and
                the package logger before further events are only counted.
        """
        self.max_reports = int(max_reports)
        self.n_clamped = 0
        self.last_event: Optional[Dict[str, Any]] = None

    def record_clamp(
        self,
        *,
        slope: float,
        intercept: float,
        quantities: Dict[str, float],
        threshold: float,
    ) -> None:
        """Records that a segment integral clamped one or more exponents.

        Args:
            slope: Slope of the line being integrated.
            intercept: Intercept of the line being integrated.
            quantities: Original values of the clamped exponents, keyed by
                name (``"exponent"`` for the peak of the segment).
            threshold: The clamp threshold in effect.
        """
        self.n_clamped += 1
        self.last_event = {
            "slope": slope,
            "intercept": intercept,
            "quantities": dict(quantities),
            "threshold": threshold,
        }
        if self.n_clamped > self.max_reports:
            arskit_logger.debug("Clamped segment integral (event %d).", self.n_clamped)
            return

        names = ", ".join(f"{k}={v:.4g}" for k, v in quantities.items())
        msg = (
            f"Numerical instability in envelope integration: clamped {names} "
            f"to {threshold:g} (line slope={slope:.4g}, intercept={intercept:.4g}). "
            "The segment weight is underestimated; further events are only counted."
        )
        arskit_logger.warning(msg)
        warnings.warn(msg, NumericalInstabilityWarning, stacklevel=3)

    def reset(self) -> None:
        """Clears the counter and the last recorded event."""
        self.n_clamped = 0
        self.last_event = None

    def summary(self) -> Dict[str, Any]:
        """Returns the counters as a plain dictionary."""
        return {"n_clamped": self.n_clamped, "last_event": self.last_event}
