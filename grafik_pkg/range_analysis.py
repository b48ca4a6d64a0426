"""Range analysis by sweeping [-50, 50] and a few far probes.

The decision policy is ordered; the first rule that applies wins. It is a
display heuristic: it reports "All real numbers" for anything that spans
more than RANGE_UNBOUNDED_LEVEL, and only sees poles that land exactly on
the sweep grid.
"""

from __future__ import annotations

import math

from .config import (
    ALL_REAL_NUMBERS,
    RANGE_CONSTANT_TOLERANCE,
    RANGE_MIN_SAMPLES,
    RANGE_MIN_SLOPE,
    RANGE_PROBE_POINTS,
    RANGE_STEP,
    RANGE_TRIG_INNER,
    RANGE_TRIG_OUTER,
    RANGE_UNBOUNDED_LEVEL,
    RANGE_X_MAX,
    RANGE_X_MIN,
    RANGE_ZERO_TOLERANCE,
)
from .logging_config import get_logger
from .sampling import sample_grid, sweep

logger = get_logger("range")

CANNOT_DETERMINE = "Cannot determine range"


def _near_zero(value: float) -> bool:
    return -RANGE_ZERO_TOLERANCE <= value <= RANGE_ZERO_TOLERANCE


def _classify_probes(probes: list[float], min_y: float, max_y: float) -> str | None:
    """Recognize parabola-like and monotone shapes from the far probes."""
    y_neg100, y_neg10, y_0, y_10, y_100 = probes
    level = RANGE_UNBOUNDED_LEVEL

    if y_neg100 > level and y_100 > level and y_0 <= min(y_neg100, y_100):
        return "y ≥ 0" if _near_zero(min_y) else f"y ≥ {min_y:.2f}"

    if y_neg100 < -level and y_100 < -level and y_0 >= max(y_neg100, y_100):
        return "y ≤ 0" if _near_zero(max_y) else f"y ≤ {max_y:.2f}"

    increasing = y_neg100 < y_neg10 < y_0 < y_10 < y_100
    decreasing = y_neg100 > y_neg10 > y_0 > y_10 > y_100
    if increasing or decreasing:
        slope = (y_100 - y_neg100) / (RANGE_PROBE_POINTS[-1] - RANGE_PROBE_POINTS[0])
        if abs(slope) > RANGE_MIN_SLOPE:
            return ALL_REAL_NUMBERS
    return None


def analyze_range(evaluator) -> str:
    """Describe the range of the function.

    Returns:
        Description such as "-1 ≤ y ≤ 1", "y ≥ 0", "y → +∞" or
        "Cannot determine range"
    """
    min_y = math.inf
    max_y = -math.inf
    has_positive_infinity = False
    has_negative_infinity = False
    valid_points = 0

    for point in sweep(evaluator, sample_grid(RANGE_X_MIN, RANGE_X_MAX, RANGE_STEP)):
        y = point.y
        if not point.defined:
            if y == math.inf:
                has_positive_infinity = True
            elif y == -math.inf:
                has_negative_infinity = True
            continue
        valid_points += 1
        min_y = min(min_y, y)
        max_y = max(max_y, y)

    if has_positive_infinity and has_negative_infinity:
        return ALL_REAL_NUMBERS
    if has_positive_infinity:
        return "y → +∞"
    if has_negative_infinity:
        return "y → -∞"

    if valid_points < RANGE_MIN_SAMPLES or not (
        math.isfinite(min_y) and math.isfinite(max_y)
    ):
        return CANNOT_DETERMINE

    probes = [evaluator.evaluate(x) for x in RANGE_PROBE_POINTS]
    if all(math.isfinite(y) for y in probes):
        shape = _classify_probes(probes, min_y, max_y)
        if shape is not None:
            logger.debug("Range from probe shape: %s", shape)
            return shape

    if abs(max_y - min_y) < RANGE_CONSTANT_TOLERANCE:
        return f"y ≈ {(min_y + max_y) / 2:.2f} (approximately constant)"

    if (
        -RANGE_TRIG_OUTER <= min_y <= -RANGE_TRIG_INNER
        and RANGE_TRIG_INNER <= max_y <= RANGE_TRIG_OUTER
    ):
        return "-1 ≤ y ≤ 1"

    if _near_zero(min_y):
        if max_y > RANGE_UNBOUNDED_LEVEL:
            return "y ≥ 0"
        return f"0 ≤ y ≤ {max_y:.2f}"

    if _near_zero(max_y):
        if min_y < -RANGE_UNBOUNDED_LEVEL:
            return "y ≤ 0"
        return f"{min_y:.2f} ≤ y ≤ 0"

    if abs(max_y - min_y) > RANGE_UNBOUNDED_LEVEL:
        return ALL_REAL_NUMBERS

    return f"{min_y:.2f} ≤ y ≤ {max_y:.2f}"
