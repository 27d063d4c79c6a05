"""Pytest configuration file with shared densities and a seeded random source."""

import math

import numpy as np
import pytest

__all__ = ["rng", "normal_logpdf", "normal_pdf"]

_LOG_SQRT_2PI = 0.5 * math.log(2.0 * math.pi)


@pytest.fixture
def rng():
    """Seeded random source so sampling tests are reproducible."""
    return np.random.default_rng(20240611)


@pytest.fixture(scope="session")
def normal_logpdf():
    """Return the standard normal log-density."""
    def _logpdf(x):
        return -0.5 * x**2 - _LOG_SQRT_2PI
    return _logpdf


@pytest.fixture(scope="session")
def normal_pdf():
    """Return the standard normal density."""
    def _pdf(x):
        return np.exp(-0.5 * x**2) / np.sqrt(2.0 * np.pi)
    return _pdf
