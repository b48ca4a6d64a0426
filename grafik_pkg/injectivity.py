"""One-to-one (horizontal line) probe."""

from __future__ import annotations

from .config import (
    INJECTIVITY_MIN_SAMPLES,
    INJECTIVITY_STEP,
    INJECTIVITY_TOLERANCE,
    INJECTIVITY_X_MAX,
    INJECTIVITY_X_MIN,
)
from .sampling import sample_grid, sweep


def is_one_to_one(evaluator) -> bool:
    """Return True if no two sampled inputs share an output.

    Samples [-5, 5] in steps of 0.5. The first finite output within
    INJECTIVITY_TOLERANCE of an earlier one settles the answer as False.
    True needs at least INJECTIVITY_MIN_SAMPLES finite outputs.
    """
    grid = sample_grid(INJECTIVITY_X_MIN, INJECTIVITY_X_MAX, INJECTIVITY_STEP)
    seen: list[float] = []
    for point in sweep(evaluator, grid):
        if not point.defined:
            continue
        if any(abs(point.y - previous) < INJECTIVITY_TOLERANCE for previous in seen):
            return False
        seen.append(point.y)
    return len(seen) >= INJECTIVITY_MIN_SAMPLES
