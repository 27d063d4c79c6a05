"""Piecewise-exponential envelope of a log-concave density.

An :class:`Envelope` with lines ``L_1, ..., L_k`` and cutpoints
``c_0 < c_1 < ... < c_k`` is the function that equals ``exp(L_i(x))`` on the
half-open segment ``[c_{i-1}, c_i)``. The outer cutpoints are the support
bounds; interior cutpoints are intersections of adjacent lines. When the
lines are tangents of a concave log-density, the envelope majorizes the
density everywhere on the support.

Each segment carries the weight ``w_i = ∫ exp(L_i(x) - s) dx`` over its
interval, where the log scale ``s`` is zero unless the envelope peak lies
further than the clamp threshold from zero, in which case it is the peak
itself. A log-density is only known up to an additive constant, so weights
and :meth:`Envelope.evaluate` are reported relative to ``exp(s)``; this
keeps them finite and positive whatever the constant. Weights are
unnormalized: :meth:`Envelope.sample` normalizes them when choosing a segment.

Examples:
    >>> import numpy as np
    >>> from arskit.envelope import Envelope, Line
    >>> env = Envelope([Line(1.0, 1.0), Line(-3.0, 2.0)], (-np.inf, np.inf))
    >>> env.cutpoints.tolist()
    [-inf, 0.25, inf]
    >>> env.insert(Line(-1.0, 1.0))
    >>> len(env)
    3
"""

from __future__ import annotations

import bisect
import math
from typing import Sequence

import numpy as np

from arskit.diagnostics import NumericalDiagnostics
from arskit.envelope.integrals import DEFAULT_CLAMP_THRESHOLD, exp_integral, peak_exponent
from arskit.envelope.line import Line, intersection
from arskit.exceptions import InvalidOrderingError, NumericalOverflowError
from arskit.logger import arskit_logger
from arskit.utils.validate import validate_support

__all__ = ["Envelope"]

class Envelope:
    """Ordered collection of tangent lines with cutpoints and segment weights.

    Lines are kept in strictly decreasing order of slope, which makes the
    cutpoints strictly increasing. The envelope only grows: lines are added
    with :meth:`insert` and never removed.

    Attributes:
        support: ``(lo, hi)`` interval covered by the envelope.
        clamp_threshold: Exponent threshold used by segment integration.
        diagnostics: Channel receiving numerical-instability events.
    """

    def __init__(
        self,
        lines: Sequence[Line],
        support: tuple[float, float],
        *,
        clamp_threshold: float = DEFAULT_CLAMP_THRESHOLD,
        diagnostics: NumericalDiagnostics | None = None,
    ):
        """Builds an envelope from lines sorted by decreasing slope.

        Args:
            lines: At least two lines, slopes strictly decreasing.
            support: ``(lo, hi)`` with ``lo < hi``; bounds may be infinite.
            clamp_threshold: Exponent threshold for segment integration.
            diagnostics: Channel receiving clamp events; a fresh one is
                created when omitted.

        Raises:
            ValueError: If fewer than two lines are given.
            InvalidSupportError: If ``support`` is empty.
            InvalidOrderingError: If slopes are not strictly decreasing
                (``reason="slopes"``) or the resulting cutpoints are not
                strictly increasing (``reason="cutpoints"``).
            NumericalOverflowError: If the envelope cannot be integrated.
        """
        lines = list(lines)
        if len(lines) < 2:
            raise ValueError(f"an envelope needs at least two lines; got {len(lines)}.")

        self.support = validate_support(support)
        self.clamp_threshold = float(clamp_threshold)
        self.diagnostics = diagnostics if diagnostics is not None else NumericalDiagnostics()

        slopes = [line.slope for line in lines]
        if not all(s1 > s2 for s1, s2 in zip(slopes, slopes[1:])):
            raise InvalidOrderingError(
                f"line slopes must be strictly decreasing; got {slopes}.", reason="slopes"
            )
        _check_integrable(lines, self.support)

        lo, hi = self.support
        cutpoints = [lo]
        cutpoints += [intersection(l1, l2) for l1, l2 in zip(lines, lines[1:])]
        cutpoints.append(hi)
        _check_increasing(cutpoints)

        self._lines = lines
        self._neg_slopes = [-s for s in slopes]
        self._cutpoints = cutpoints
        self._update_weights()

    def __len__(self) -> int:
        """Number of segments (equivalently, of lines)."""
        return len(self._lines)

    def __repr__(self) -> str:
        return f"Envelope(segments={len(self)}, support={self.support})"

    @property
    def lines(self) -> tuple[Line, ...]:
        """Lines in decreasing order of slope."""
        return tuple(self._lines)

    @property
    def slopes(self) -> np.ndarray:
        """Copy of the line slopes."""
        return -np.asarray(self._neg_slopes, dtype=float)

    @property
    def cutpoints(self) -> np.ndarray:
        """Copy of the cutpoints, ``len(self) + 1`` values."""
        return np.asarray(self._cutpoints, dtype=float)

    @property
    def log_scale(self) -> float:
        """Log of the common factor dividing :attr:`weights` and :meth:`evaluate`."""
        return self._log_scale

    @property
    def weights(self) -> np.ndarray:
        """Copy of the unnormalized segment weights, relative to ``exp(log_scale)``."""
        return np.asarray(self._weights, dtype=float)

    @property
    def log_weights(self) -> np.ndarray:
        """Logs of the segment integrals ``∫ exp(L_i(x)) dx`` (``-inf`` for underflow)."""
        with np.errstate(divide="ignore"):
            return np.log(self.weights) + self._log_scale

    def has_slope(self, slope: float) -> bool:
        """True if a line with exactly this slope is already in the envelope."""
        pos = bisect.bisect_left(self._neg_slopes, -slope)
        return pos < len(self._neg_slopes) and self._neg_slopes[pos] == -slope

    def insert(self, line: Line) -> None:
        """Adds a line, splitting the segment(s) where it is the lowest.

        The position is found by binary search on slopes. A line steeper than
        all others only meets its right neighbour, a line flatter than all
        others only its left neighbour; otherwise the cutpoint between its two
        neighbours is replaced by the two new intersections. Weights are
        recomputed afterwards. On failure the envelope is left unchanged.

        Args:
            line: The line to add, typically a tangent of the log-density.

        Raises:
            ValueError: If the line has a non-finite slope or intercept.
            InvalidOrderingError: If a line with the same slope is present
                (``reason="slopes"``) or the new cutpoints are out of order
                (``reason="cutpoints"``).
            NumericalOverflowError: If a recomputed weight is not finite.
        """
        if not line.is_finite:
            raise ValueError(f"cannot insert a non-finite line {line}.")
        if self.has_slope(line.slope):
            raise InvalidOrderingError(
                f"envelope already has a line with slope {line.slope}.", reason="slopes"
            )

        pos = bisect.bisect_left(self._neg_slopes, -line.slope)
        cutpoints = list(self._cutpoints)
        if pos == 0:
            cutpoints.insert(1, intersection(line, self._lines[0]))
        elif pos == len(self._lines):
            cutpoints.insert(pos, intersection(self._lines[pos - 1], line))
        else:
            left = intersection(self._lines[pos - 1], line)
            right = intersection(line, self._lines[pos])
            cutpoints[pos:pos + 1] = [left, right]
        _check_increasing(cutpoints)

        lines = list(self._lines)
        lines.insert(pos, line)
        weights, log_scale = self._integrate(lines, cutpoints)
        cumulative, total = _accumulate(weights)

        self._lines = lines
        self._neg_slopes.insert(pos, -line.slope)
        self._cutpoints = cutpoints
        self._weights, self._log_scale = weights, log_scale
        self._cumulative, self._total = cumulative, total
        arskit_logger.debug(
            "Inserted line (slope=%.6g, intercept=%.6g) at position %d; %d segments.",
            line.slope, line.intercept, pos, len(self),
        )

    def segment_index(self, x: float) -> int | None:
        """Returns the index of the segment containing ``x``, or ``None`` outside."""
        cuts = self._cutpoints
        if not cuts[0] <= x <= cuts[-1]:
            return None
        return min(bisect.bisect_right(cuts, x) - 1, len(self._lines) - 1)

    def log_evaluate(self, x: float) -> float:
        """Returns the log of the envelope at ``x`` (``-inf`` outside the support)."""
        i = self.segment_index(x)
        if i is None:
            return -math.inf
        return self._lines[i](x)

    def evaluate(self, x: float) -> float:
        """Returns the envelope density value at ``x`` relative to ``exp(log_scale)``.

        Equal to ``exp(slope * x + intercept)`` of the active line when
        ``log_scale`` is zero, and ``0.0`` outside the support.
        """
        return math.exp(self.log_evaluate(x) - self._log_scale)

    def sample(self, rng: np.random.Generator) -> float:
        """Draws one point from the normalized envelope density.

        A segment is chosen with probability proportional to its weight, then
        a point inside it by inverting the segment's exponential CDF. The
        inversion is anchored at the segment end where the line is highest, so
        no intermediate exponential exceeds one.

        Args:
            rng: Random source.

        Returns:
            A point inside ``[cutpoints[0], cutpoints[-1]]``.
        """
        i = bisect.bisect_right(self._cumulative, rng.random() * self._total)
        i = min(i, len(self._lines) - 1)
        a = self._lines[i].slope
        c_lo, c_hi = self._cutpoints[i], self._cutpoints[i + 1]
        span = c_hi - c_lo

        if a == 0.0:
            x = c_lo + rng.random() * span
        elif a > 0.0:
            v = 1.0 - rng.random()
            x = c_hi + math.log(v + (1.0 - v) * math.exp(-a * span)) / a
        else:
            v = rng.random()
            x = c_lo + math.log1p(v * math.expm1(a * span)) / a
        return min(max(x, c_lo), c_hi)

    def _integrate(
        self, lines: Sequence[Line], cutpoints: Sequence[float]
    ) -> tuple[list[float], float]:
        """Returns the segment weights and the log scale they are relative to."""
        peak = max(
            peak_exponent(line, cutpoints[i], cutpoints[i + 1]) for i, line in enumerate(lines)
        )
        log_scale = peak if math.isfinite(peak) and abs(peak) > self.clamp_threshold else 0.0
        weights = [
            exp_integral(
                Line(line.slope, line.intercept - log_scale),
                cutpoints[i],
                cutpoints[i + 1],
                threshold=self.clamp_threshold,
                diagnostics=self.diagnostics,
            )
            for i, line in enumerate(lines)
        ]
        return weights, log_scale

    def _update_weights(self) -> None:
        weights, log_scale = self._integrate(self._lines, self._cutpoints)
        self._cumulative, self._total = _accumulate(weights)
        self._weights, self._log_scale = weights, log_scale


def _accumulate(weights: Sequence[float]) -> tuple[list[float], float]:
    """Returns running sums of the weights and their total."""
    cumulative = np.cumsum(weights, dtype=float).tolist()
    total = cumulative[-1]
    if not (math.isfinite(total) and total > 0.0):
        raise NumericalOverflowError(
            f"total envelope weight {total} is not positive and finite."
        )
    return cumulative, total


def _check_increasing(cutpoints: Sequence[float]) -> None:
    """Raises unless cutpoints are strictly increasing (NaNs included)."""
    if not all(c1 < c2 for c1, c2 in zip(cutpoints, cutpoints[1:])):
        raise InvalidOrderingError(
            f"cutpoints must be strictly increasing; got {list(cutpoints)}.",
            reason="cutpoints",
        )


def _check_integrable(lines: Sequence[Line], support: tuple[float, float]) -> None:
    """Raises unless the exponentiated tails decay on unbounded sides."""
    lo, hi = support
    if math.isinf(lo) and not lines[0].slope > 0:
        raise NumericalOverflowError(
            "envelope is not integrable: first slope must be positive "
            "when the support is unbounded below."
        )
    if math.isinf(hi) and not lines[-1].slope < 0:
        raise NumericalOverflowError(
            "envelope is not integrable: last slope must be negative "
            "when the support is unbounded above."
        )
