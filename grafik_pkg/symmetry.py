"""Even/odd symmetry probe."""

from __future__ import annotations

import math

from .config import SYMMETRY_MATCH_RATIO, SYMMETRY_POINTS, SYMMETRY_TOLERANCE
from .types import SymmetryResult


def check_symmetry(evaluator) -> SymmetryResult:
    """Classify a function as even and/or odd from paired probes.

    For each probe x where f(x) and f(-x) are both finite, f is counted as
    even there if f(-x) == f(x) and odd there if f(-x) == -f(x), within
    SYMMETRY_TOLERANCE. A property holds when it matched on at least
    SYMMETRY_MATCH_RATIO of the valid pairs. With no valid pair the function
    is reported as neither.
    """
    even_count = 0
    odd_count = 0
    valid_pairs = 0

    for x in SYMMETRY_POINTS:
        if x == 0:
            continue
        fx = evaluator.evaluate(x)
        f_neg_x = evaluator.evaluate(-x)
        if not (math.isfinite(fx) and math.isfinite(f_neg_x)):
            continue

        valid_pairs += 1
        if abs(f_neg_x - fx) < SYMMETRY_TOLERANCE:
            even_count += 1
        if abs(f_neg_x + fx) < SYMMETRY_TOLERANCE:
            odd_count += 1

    if valid_pairs == 0:
        return SymmetryResult(is_even=False, is_odd=False)
    return SymmetryResult(
        is_even=even_count / valid_pairs >= SYMMETRY_MATCH_RATIO,
        is_odd=odd_count / valid_pairs >= SYMMETRY_MATCH_RATIO,
    )
