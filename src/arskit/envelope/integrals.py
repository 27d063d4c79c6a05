"""Integration of exponentiated envelope segments."""

from __future__ import annotations

import math

from arskit.diagnostics import NumericalDiagnostics
from arskit.envelope.line import Line
from arskit.exceptions import NumericalOverflowError

__all__ = ["DEFAULT_CLAMP_THRESHOLD", "exp_integral", "peak_exponent"]

#: Largest exponent used when integrating a segment, in natural-log units.
DEFAULT_CLAMP_THRESHOLD = 25.0


def peak_exponent(line: Line, x1: float, x2: float) -> float:
    """Returns the largest value of ``line`` on ``[x1, x2]``.

    The maximum sits at ``x2`` for a rising line, at ``x1`` for a falling
    one, and is the intercept for a flat line. It is ``+inf`` when the line
    rises towards an unbounded end.
    """
    if line.slope > 0.0:
        return line(x2)
    if line.slope < 0.0:
        return line(x1)
    return line.intercept


def exp_integral(
    line: Line,
    x1: float,
    x2: float,
    *,
    threshold: float = DEFAULT_CLAMP_THRESHOLD,
    diagnostics: NumericalDiagnostics | None = None,
) -> float:
    r"""Computes :math:`\int_{x_1}^{x_2} \exp(a x + b)\,dx` for ``line = (a, b)``.

    The closed form ``exp(b) * (exp(a*x2) - exp(a*x1)) / a`` is evaluated
    anchored at the segment end where the line is highest:

    * ``a > 0``: ``exp(a*x2 + b) * (1 - exp(-a*(x2 - x1))) / a``
    * ``a < 0``: ``exp(a*x1 + b) * (1 - exp(a*(x2 - x1))) / -a``
    * ``a == 0``: ``exp(b) * (x2 - x1)``

    so the only exponential that can overflow is the one of the peak value.
    A peak exponent larger than ``threshold`` is clamped to it and the clamp
    is recorded on ``diagnostics``.

    Args:
        line: The line whose exponential is integrated.
        x1: Lower integration bound (may be ``-inf``).
        x2: Upper integration bound (may be ``+inf``).
        threshold: Clamp threshold for the peak exponent.
        diagnostics: Channel receiving clamp events. Without one, clamps are
            applied silently.

    Returns:
        The (possibly clamped) integral, a finite non-negative float.

    Raises:
        NumericalOverflowError: If the integral diverges, or the result is
            not finite or is negative even after clamping.
    """
    a, b = line.slope, line.intercept
    peak = peak_exponent(line, x1, x2)
    if math.isnan(peak) or peak == math.inf:
        raise NumericalOverflowError(
            f"exp({a}*x + {b}) is not integrable over [{x1}, {x2}]."
        )

    if peak > threshold:
        if diagnostics is not None:
            diagnostics.record_clamp(
                slope=a, intercept=b, quantities={"exponent": peak}, threshold=threshold
            )
        peak = threshold

    span = x2 - x1
    try:
        if a == 0.0:
            value = math.exp(peak) * span
        else:
            value = math.exp(peak) * -math.expm1(-abs(a) * span) / abs(a)
    except OverflowError as exc:
        raise NumericalOverflowError(
            f"overflow integrating exp({a}*x + {b}) over [{x1}, {x2}]."
        ) from exc

    if not (math.isfinite(value) and value >= 0.0):
        raise NumericalOverflowError(
            f"non-finite segment weight {value} for exp({a}*x + {b}) over [{x1}, {x2}]."
        )
    return value
