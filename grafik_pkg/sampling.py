"""Shared sweep infrastructure for the analyzers."""

from __future__ import annotations

import numpy as np

from .config import GRID_DECIMALS
from .types import SamplePoint


def sample_grid(start: float, stop: float, step: float) -> np.ndarray:
    """Return evenly spaced points from start to stop inclusive.

    Points are computed from their index rather than by accumulating the
    step, and rounded so that decimal grids hit values like 0.0 exactly
    (never -0.0).
    """
    count = int(round((stop - start) / step))
    grid = np.linspace(start, stop, count + 1)
    return np.round(grid, GRID_DECIMALS) + 0.0


def sweep(evaluator, grid) -> list[SamplePoint]:
    """Evaluate the function at every grid point."""
    return [SamplePoint(float(x), evaluator.evaluate(x)) for x in grid]
