"""Piecewise-exponential envelopes built from tangent lines."""

from arskit.envelope.envelope import Envelope
from arskit.envelope.integrals import exp_integral
from arskit.envelope.line import Line, intersection

__all__ = [
    "Envelope",
    "Line",
    "exp_integral",
    "intersection",
]
