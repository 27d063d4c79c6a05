"""Provides all arskit classes."""

from importlib.metadata import PackageNotFoundError, version

from arskit.config import NumericsConfig, SearchConfig
from arskit.derivatives.differentiator import make_derivative, register_method
from arskit.diagnostics import NumericalDiagnostics
from arskit.envelope.envelope import Envelope
from arskit.envelope.line import Line
from arskit.exceptions import (
    ARSError,
    EnvelopeViolationError,
    InitialPointSearchFailedError,
    InvalidOrderingError,
    InvalidSupportError,
    MaxFailedRateExceededError,
    NotLogConcaveAtSeedError,
    NumericalInstabilityWarning,
    NumericalOverflowError,
)
from arskit.objective import Objective
from arskit.sampler import RejectionSampler

try:
    __version__ = version("arskit")
except PackageNotFoundError:
    pass

__all__ = [
    "ARSError",
    "Envelope",
    "EnvelopeViolationError",
    "InitialPointSearchFailedError",
    "InvalidOrderingError",
    "InvalidSupportError",
    "Line",
    "MaxFailedRateExceededError",
    "NotLogConcaveAtSeedError",
    "NumericalDiagnostics",
    "NumericalInstabilityWarning",
    "NumericalOverflowError",
    "NumericsConfig",
    "Objective",
    "RejectionSampler",
    "SearchConfig",
    "make_derivative",
    "register_method",
]
