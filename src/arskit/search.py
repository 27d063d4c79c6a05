"""Greedy grid search for the two initial tangent points."""

from __future__ import annotations

import math
from typing import Callable

import numpy as np

from arskit.config import SearchConfig
from arskit.exceptions import InitialPointSearchFailedError
from arskit.logger import arskit_logger
from arskit.utils.validate import intersect_intervals

__all__ = ["search_grid", "find_initial_points"]


def search_grid(support: tuple[float, float], config: SearchConfig) -> np.ndarray:
    """Builds the uniform scan grid over ``search_range`` intersected with ``support``.

    Args:
        support: Validated ``(lo, hi)`` support.
        config: Search configuration.

    Returns:
        Grid points ``lo, lo + delta, ...`` not exceeding ``hi``.

    Raises:
        InitialPointSearchFailedError: If the intersection is empty or
            unbounded.
    """
    scan = intersect_intervals(config.search_range, support)
    if scan is None or not all(math.isfinite(v) for v in scan):
        raise InitialPointSearchFailedError(
            f"search range {config.search_range} does not overlap the support {support} "
            "in a bounded interval."
        )
    lo, hi = scan
    n_steps = int(math.floor((hi - lo) / config.delta + 1e-9))
    return np.minimum(lo + config.delta * np.arange(n_steps + 1, dtype=float), hi)


def find_initial_points(
    grad: Callable[[float], float],
    support: tuple[float, float],
    config: SearchConfig | None = None,
) -> tuple[float, float]:
    """Finds seed points where the log-density is increasing and decreasing.

    The left seed is the first grid point whose slope lies in
    ``(min_slope, max_slope)``; the right seed is the last grid point whose
    negated slope lies in the same interval. Points where the slope is not
    finite (e.g. on a support boundary) are skipped.

    Args:
        grad: Derivative of the log-density.
        support: Validated ``(lo, hi)`` support.
        config: Search configuration; defaults to :class:`SearchConfig`.

    Returns:
        ``(x1, x2)`` with ``x1 < x2``.

    Raises:
        InitialPointSearchFailedError: If no qualifying point exists on
            either side, or the left seed does not precede the right seed.
    """
    config = config or SearchConfig()
    grid = search_grid(support, config)
    lo_slope, hi_slope = config.min_slope, config.max_slope

    i1 = i2 = None
    for i, x in enumerate(grid):
        g = grad(float(x))
        if not math.isfinite(g):
            continue
        if i1 is None and lo_slope < g < hi_slope:
            i1 = i
        if lo_slope < -g < hi_slope:
            i2 = i

    if i1 is None or i2 is None:
        raise InitialPointSearchFailedError(
            "couldn't find initial points with increasing and decreasing log-density "
            f"on {grid.size} grid points; provide them or verify that f is log-concave."
        )
    if not i1 < i2:
        raise InitialPointSearchFailedError(
            f"initial points out of order (x1={grid[i1]}, x2={grid[i2]}); "
            "f does not look log-concave over the search range."
        )

    x1, x2 = float(grid[i1]), float(grid[i2])
    arskit_logger.info("Initial point search selected x1=%g, x2=%g.", x1, x2)
    return x1, x2
