"""Provides the RejectionSampler class.

An adaptive rejection sampler draws iid samples from a log-concave density
``f`` known up to a constant. The density is majorized by a
piecewise-exponential envelope built from tangent lines of ``log f``; every
rejected candidate contributes a new tangent, so the envelope tightens and
the rejection rate falls as sampling proceeds.

Examples:
--------
Seeds on either side of the mode:

>>> import numpy as np
>>> from arskit import RejectionSampler
>>> f = lambda x: np.exp(-0.5 * x**2) / np.sqrt(2 * np.pi)
>>> sampler = RejectionSampler(f, (-np.inf, np.inf), (-1.0, 1.0))
>>> sampler.run(5, rng=0).shape
(5,)

Log-density with a known derivative and seeds found by grid search:

>>> from arskit import SearchConfig
>>> sampler = RejectionSampler(
...     lambda x: 2.0 * np.log(x) - x,
...     support=(0.0, np.inf),
...     logdensity=True,
...     grad=lambda x: 2.0 / x - 1.0,
...     search=SearchConfig(delta=0.25, search_range=(0.1, 10.0)),
... )
>>> bool(np.all(sampler.run(100, rng=1) > 0))
True
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, Mapping

import numpy as np

from arskit.config import NumericsConfig, SearchConfig
from arskit.diagnostics import NumericalDiagnostics
from arskit.envelope.envelope import Envelope
from arskit.envelope.line import Line
from arskit.exceptions import (
    EnvelopeViolationError,
    MaxFailedRateExceededError,
    NotLogConcaveAtSeedError,
)
from arskit.logger import arskit_logger
from arskit.objective import Objective
from arskit.search import find_initial_points
from arskit.utils.validate import (
    validate_positive_int,
    validate_seed_points,
    validate_support,
)

__all__ = ["RejectionSampler"]


class RejectionSampler:
    """Adaptive rejection sampler for a univariate log-concave density.

    The sampler exclusively owns its envelope; repeated calls to :meth:`run`
    keep refining the same envelope.

    Attributes:
        objective: Value/derivative oracle for ``log f``.
        support: ``(lo, hi)`` interval where ``f`` is positive.
        max_segments: Envelope size beyond which rejected candidates no
            longer add tangents.
        max_failed_rate: A run fails after ``n / max_failed_rate`` rejections.
        numerics: Clamping and majorization-check settings.
        diagnostics: Channel counting numerical-instability events.
        n_accepted: Samples accepted over the sampler's lifetime, including
            runs that ended in an error.
        n_rejected: Candidates rejected over the sampler's lifetime.
        n_segments_added: Tangents inserted after construction.
        n_insertions_skipped: Rejections below the segment cap whose
            tangent could not be inserted (non-finite or duplicate slope).
    """

    def __init__(
        self,
        f: Callable[[float], Any],
        support: tuple[float, float] = (-math.inf, math.inf),
        init: tuple[float, float] | None = None,
        *,
        logdensity: bool = False,
        grad: Callable[[float], Any] | None = None,
        derivative_method: str = "finite",
        derivative_options: Mapping[str, Any] | None = None,
        search: SearchConfig | None = None,
        max_segments: int = 25,
        max_failed_rate: float = 0.001,
        numerics: NumericsConfig | None = None,
    ):
        """Initializes the sampler and its two-line envelope.

        Args:
            f: The density, or its logarithm when ``logdensity`` is True.
                Need not be normalized.
            support: Interval where ``f`` is positive, one of ``(-inf, inf)``,
                ``(-inf, a)``, ``(b, inf)`` or ``(a, b)``.
            init: Seed points ``(x1, x2)`` with ``x1 < x2``,
                ``(log f)'(x1) > 0`` and ``(log f)'(x2) < 0``. When omitted,
                seeds are found by grid search.
            logdensity: Whether ``f`` already is the log-density.
            grad: Derivative of ``log f``. Built with ``derivative_method``
                when omitted.
            derivative_method: Name of the derivative engine used when
                ``grad`` is omitted ("finite" by default, "autodiff" after
                registering the JAX backend).
            derivative_options: Keyword arguments for the derivative engine.
            search: Grid search settings used when ``init`` is omitted.
            max_segments: Maximum number of envelope segments (>= 2).
            max_failed_rate: Positive rate defining the rejection budget of a
                run as ``n / max_failed_rate``.
            numerics: Clamping and majorization-check settings.

        Raises:
            InvalidSupportError: If the support is empty or a seed lies
                outside it.
            NotLogConcaveAtSeedError: If the seeds are out of order or the
                log-density slopes at them have the wrong signs.
            InitialPointSearchFailedError: If the grid search fails.
            ValueError: If ``max_segments`` or ``max_failed_rate`` is invalid.
        """
        if validate_positive_int(max_segments, "max_segments") < 2:
            raise ValueError(f"max_segments must be an integer >= 2; got {max_segments!r}.")
        if not (math.isfinite(max_failed_rate) and max_failed_rate > 0):
            raise ValueError(f"max_failed_rate must be positive; got {max_failed_rate!r}.")

        self.support = validate_support(support)
        self.max_segments = max_segments
        self.max_failed_rate = float(max_failed_rate)
        self.numerics = numerics or NumericsConfig()
        self.diagnostics = NumericalDiagnostics()

        build = Objective if logdensity else Objective.from_density
        self.objective = build(
            f,
            grad,
            method=derivative_method,
            derivative_options=derivative_options,
        )

        if init is None:
            init = find_initial_points(self.objective.grad, self.support, search)
        x1, x2 = validate_seed_points(init, self.support)

        a1, a2 = self.objective.grad(x1), self.objective.grad(x2)
        if not a1 > 0:
            raise NotLogConcaveAtSeedError(
                f"logf must have positive slope at initial point x1={x1}; got {a1}."
            )
        if not a2 < 0:
            raise NotLogConcaveAtSeedError(
                f"logf must have negative slope at initial point x2={x2}; got {a2}."
            )

        lines = [
            Line.tangent(x1, self.objective.logf(x1), a1),
            Line.tangent(x2, self.objective.logf(x2), a2),
        ]
        if not all(line.is_finite for line in lines):
            raise NotLogConcaveAtSeedError(
                f"logf or its slope is not finite at the initial points ({x1}, {x2})."
            )
        self._envelope = Envelope(
            lines,
            self.support,
            clamp_threshold=self.numerics.clamp_threshold,
            diagnostics=self.diagnostics,
        )

        self.n_accepted = 0
        self.n_rejected = 0
        self.n_segments_added = 0
        self.n_insertions_skipped = 0

    @property
    def envelope(self) -> Envelope:
        """The envelope owned by this sampler (mutated only by :meth:`run`)."""
        return self._envelope

    def evaluate(self, x: float) -> float:
        """Returns the current envelope density value at ``x``.

        Intended for diagnostics and plotting; ``0.0`` outside the support.
        Values are relative to ``exp(envelope.log_scale)``, which is one
        unless the log-density is offset by more than the clamp threshold.
        """
        return self._envelope.evaluate(float(x))

    def run(
        self,
        n: int,
        rng: np.random.Generator | int | None = None,
    ) -> np.ndarray:
        """Draws ``n`` samples, refining the envelope at rejected candidates.

        Each iteration draws a candidate from the envelope and accepts it with
        probability ``f(candidate) / envelope(candidate)``. A rejected
        candidate adds the tangent of ``log f`` at that point while the
        envelope has fewer than ``max_segments`` segments. Every rejection
        counts towards the budget ``n / max_failed_rate``.

        Args:
            n: Number of samples (positive integer).
            rng: Random source: a ``numpy.random.Generator``, a seed, or
                ``None`` for fresh OS entropy.

        Returns:
            Array of shape ``(n,)`` in acceptance order.

        Raises:
            ValueError: If ``n`` is not a positive integer.
            MaxFailedRateExceededError: If the rejection budget is exhausted.
            EnvelopeViolationError: If ``log f`` exceeds the envelope at a
                candidate by more than ``numerics.ratio_tolerance``.
            InvalidOrderingError: If a tangent is incompatible with the
                envelope (``f`` is not log-concave).
        """
        n = validate_positive_int(n, "n")
        rng = np.random.default_rng(rng)
        max_failed = int(n / self.max_failed_rate)
        tolerance = self.numerics.ratio_tolerance
        envelope = self._envelope
        objective = self.objective
        clamps_before = self.diagnostics.n_clamped

        out = np.empty(n, dtype=float)
        accepted = failed = 0
        try:
            while accepted < n:
                candidate = envelope.sample(rng)
                logf_c = objective.logf(candidate)
                log_ratio = logf_c - envelope.log_evaluate(candidate)
                if tolerance is not None and log_ratio > tolerance:
                    raise EnvelopeViolationError(
                        f"log-density exceeds the envelope by {log_ratio:.3g} at x={candidate}; "
                        "f is not log-concave or its derivative is inaccurate."
                    )

                if rng.random() < math.exp(min(log_ratio, 0.0)):
                    out[accepted] = candidate
                    accepted += 1
                    continue

                failed += 1
                if len(envelope) < self.max_segments:
                    self._refine(candidate, logf_c)
                if failed >= max_failed:
                    raise MaxFailedRateExceededError(
                        f"{failed} rejections while drawing {n} samples "
                        f"(max_failed_rate={self.max_failed_rate}); "
                        "f may be nearly flat or numerically unstable.",
                        n_rejected=failed,
                        n_accepted=accepted,
                    )
        finally:
            self.n_accepted += accepted
            self.n_rejected += failed

        arskit_logger.info(
            "Drew %d samples with %d rejections; envelope has %d segments.",
            n, failed, len(envelope),
        )
        new_clamps = self.diagnostics.n_clamped - clamps_before
        if new_clamps:
            arskit_logger.info("%d segment integrals were clamped during this run.", new_clamps)
        return out

    def _refine(self, x: float, logf_x: float) -> None:
        """Inserts the tangent of ``log f`` at ``x`` when it is usable."""
        slope = self.objective.grad(x)
        line = Line.tangent(x, logf_x, slope)
        if not line.is_finite or self._envelope.has_slope(line.slope):
            self.n_insertions_skipped += 1
            arskit_logger.debug("Skipped tangent at x=%g (slope=%g).", x, slope)
            return
        self._envelope.insert(line)
        self.n_segments_added += 1

    def diagnostics_summary(self) -> Dict[str, Any]:
        """Returns counters describing the sampler's history.

        Returns:
            Dictionary with ``n_accepted``, ``n_rejected``,
            ``acceptance_rate``, ``n_segments``, ``n_segments_added``,
            ``n_insertions_skipped`` and ``n_clamped``.
        """
        proposals = self.n_accepted + self.n_rejected
        return {
            "n_accepted": self.n_accepted,
            "n_rejected": self.n_rejected,
            "acceptance_rate": self.n_accepted / proposals if proposals else float("nan"),
            "n_segments": len(self._envelope),
            "n_segments_added": self.n_segments_added,
            "n_insertions_skipped": self.n_insertions_skipped,
            "n_clamped": self.diagnostics.n_clamped,
        }
