"""Vertical asymptote detection over a caller-chosen logical range.

The renderer calls scan_asymptotes() on every redraw with its visible x
range and a threshold scaled to the current zoom. Work is bounded by a
fixed step count, independent of screen resolution.
"""

from __future__ import annotations

import math

from .config import ASYMPTOTE_DEDUP_FACTOR, ASYMPTOTE_STEPS
from .sampling import sample_grid
from .types import AsymptoteCandidate

UNDEFINED = "undefined"
SIGN_FLIP = "sign_flip"
SLOPE_SPIKE = "slope_spike"


def _opposite_signs(a: float, b: float) -> bool:
    return (a > 0 > b) or (a < 0 < b)


def _classify(y_left: float, y: float, y_right: float, step: float, threshold: float) -> str | None:
    """Return the detection method that flags this point, or None."""
    neighbours_finite = math.isfinite(y_left) and math.isfinite(y_right)
    if not neighbours_finite:
        return None
    if not math.isfinite(y):
        return UNDEFINED

    if (
        abs(y_left) > threshold
        and abs(y_right) > threshold
        and _opposite_signs(y_left, y_right)
    ):
        return SIGN_FLIP

    max_slope = max(abs(y - y_left), abs(y_right - y)) / step
    if max_slope > threshold / step and (
        (y_left > threshold and y_right < -threshold)
        or (y_left < -threshold and y_right > threshold)
    ):
        return SLOPE_SPIKE
    return None


def find_asymptote_candidates(
    evaluator,
    x_min: float,
    x_max: float,
    y_threshold: float,
    steps: int = ASYMPTOTE_STEPS,
) -> list[AsymptoteCandidate]:
    """Scan [x_min, x_max] for suspected vertical asymptotes.

    A point x is flagged when, with neighbours one step away on each side:
    the centre is undefined while both neighbours are finite; both
    neighbours exceed y_threshold in magnitude with opposite signs; or the
    steeper one-sided slope exceeds y_threshold/step while the neighbours
    straddle +-y_threshold. Candidates closer than ASYMPTOTE_DEDUP_FACTOR
    steps to an earlier one are dropped.

    Raises:
        ValueError: If the range, threshold or step count is invalid
    """
    if not (math.isfinite(x_min) and math.isfinite(x_max)) or x_max <= x_min:
        raise ValueError(f"Invalid scan range [{x_min}, {x_max}]")
    if not y_threshold > 0:
        raise ValueError(f"Threshold must be positive, got {y_threshold}")
    if steps < 1:
        raise ValueError(f"Step count must be positive, got {steps}")

    step = (x_max - x_min) / steps
    min_distance = step * ASYMPTOTE_DEDUP_FACTOR
    kept: list[AsymptoteCandidate] = []

    for x in sample_grid(x_min, x_max, step):
        x = float(x)
        method = _classify(
            evaluator.evaluate(x - step),
            evaluator.evaluate(x),
            evaluator.evaluate(x + step),
            step,
            y_threshold,
        )
        if method is None:
            continue
        if any(abs(existing.x - x) < min_distance for existing in kept):
            continue
        kept.append(AsymptoteCandidate(x, method))
    return kept


def scan_asymptotes(
    evaluator,
    x_min: float,
    x_max: float,
    y_threshold: float,
    steps: int = ASYMPTOTE_STEPS,
) -> list[float]:
    """Return the x positions of deduplicated asymptote candidates, in order."""
    return [
        candidate.x
        for candidate in find_asymptote_candidates(
            evaluator, x_min, x_max, y_threshold, steps
        )
    ]
