"""Assemble the analysis report for a compiled function."""

from __future__ import annotations

from .config import VERTICAL_LINE_POINTS
from .domain import analyze_domain
from .injectivity import is_one_to_one
from .logging_config import get_logger
from .range_analysis import analyze_range
from .symmetry import check_symmetry
from .types import AnalysisReport

logger = get_logger("analyzer")


def passes_vertical_line_test(evaluator) -> bool:
    """Check that every probe yields exactly one float.

    The evaluator is total and deterministic, so this is a sanity gate
    rather than a real multi-valuedness test.
    """
    return all(
        isinstance(evaluator.evaluate(x), float) for x in VERTICAL_LINE_POINTS
    )


def analyze(evaluator, canonical: str | None = None) -> AnalysisReport:
    """Run every analyzer and combine the results.

    Args:
        evaluator: Compiled evaluator
        canonical: Canonical expression for the domain patterns
            (defaults to evaluator.canonical)

    Returns:
        AnalysisReport with symmetry, injectivity, domain, range and the
        list of property labels
    """
    if canonical is None:
        canonical = evaluator.canonical

    if not passes_vertical_line_test(evaluator):
        return AnalysisReport(is_function=False)

    symmetry = check_symmetry(evaluator)
    one_to_one = is_one_to_one(evaluator)

    properties = []
    if symmetry.is_even:
        properties.append("Even")
    if symmetry.is_odd:
        properties.append("Odd")
    if one_to_one:
        properties.append("One-to-One")
    if not symmetry.is_even and not symmetry.is_odd:
        properties.append("Neither Even nor Odd")

    report = AnalysisReport(
        is_function=True,
        is_even=symmetry.is_even,
        is_odd=symmetry.is_odd,
        is_one_to_one=one_to_one,
        domain=analyze_domain(evaluator, canonical),
        range=analyze_range(evaluator),
        properties=tuple(properties),
    )
    logger.debug("Analysis of %r: %s", canonical, report)
    return report
