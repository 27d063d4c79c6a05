"""Configuration for initial point search and envelope numerics.

:class:`SearchConfig` controls the greedy grid scan used by
:class:`~arskit.sampler.RejectionSampler` when no seed points are given.
:class:`NumericsConfig` controls the overflow clamping applied when
envelope segments are integrated and the tolerance of the majorization check
performed on every candidate.
"""

from __future__ import annotations

import math

__all__ = ["SearchConfig", "NumericsConfig"]


class SearchConfig:
    """Configuration for the grid search of initial tangent points."""

    def __init__(
        self,
        delta: float = 0.5,
        search_range: tuple[float, float] = (-10.0, 10.0),
        min_slope: float = 1e-6,
        max_slope: float = 1e6,
    ):
        """Initialize configuration.

        Args:
            delta:
                Grid step. The scan visits ``lo, lo + delta, lo + 2*delta, ...``
                up to ``hi`` where ``(lo, hi)`` is ``search_range`` intersected
                with the support. Must be positive and finite.

            search_range:
                ``(lo, hi)`` interval to scan. Intersected with the support
                before the grid is built, so it may be wider than the support.

            min_slope:
                Lower bound (exclusive) on the magnitude of the log-density
                slope at a seed. Rejects points where the density is
                numerically flat.

            max_slope:
                Upper bound (exclusive) on the magnitude of the log-density
                slope at a seed. Rejects points so far in a tail that the
                tangent line is too steep to integrate reliably.

        Raises:
            ValueError: If any value is out of range.
        """
        delta = float(delta)
        if not (math.isfinite(delta) and delta > 0):
            raise ValueError(f"delta must be positive and finite; got {delta}.")
        lo, hi = (float(v) for v in search_range)
        if not lo < hi:
            raise ValueError(f"search_range must satisfy lo < hi; got {search_range}.")
        if not 0 <= min_slope < max_slope:
            raise ValueError(
                f"slope bounds must satisfy 0 <= min_slope < max_slope; "
                f"got ({min_slope}, {max_slope})."
            )

        self.delta = delta
        self.search_range = (lo, hi)
        self.min_slope = float(min_slope)
        self.max_slope = float(max_slope)


class NumericsConfig:
    """Numerical safety settings for envelope integration and acceptance."""

    def __init__(
        self,
        clamp_threshold: float = 25.0,
        ratio_tolerance: float | None = 1e-6,
    ):
        """Initialize configuration.

        Args:
            clamp_threshold:
                Largest exponent (natural-log units) allowed when integrating
                an envelope segment; a larger peak exponent is clamped, which
                underestimates that segment weight. The envelope also uses it
                as the range of peak log values reported without rescaling:
                beyond it, weights and envelope values are expressed
                relative to the peak.

            ratio_tolerance:
                Slack allowed when checking that the log-density does not
                exceed the envelope at a candidate, in log units. A larger
                excess raises :class:`~arskit.exceptions.EnvelopeViolationError`.
                ``None`` disables the check.

        Raises:
            ValueError: If any value is out of range.
        """
        clamp_threshold = float(clamp_threshold)
        if not (math.isfinite(clamp_threshold) and clamp_threshold > 0):
            raise ValueError(
                f"clamp_threshold must be positive and finite; got {clamp_threshold}."
            )
        if ratio_tolerance is not None and not ratio_tolerance >= 0:
            raise ValueError(
                f"ratio_tolerance must be non-negative or None; got {ratio_tolerance}."
            )

        self.clamp_threshold = clamp_threshold
        self.ratio_tolerance = None if ratio_tolerance is None else float(ratio_tolerance)
