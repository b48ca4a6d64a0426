"""Public API for Grafik - compile, analyze and scan expressions."""

from __future__ import annotations

from .analyzer import analyze as _analyze
from .asymptotes import scan_asymptotes as _scan_asymptotes
from .compiler import Evaluator
from .compiler import compile_expression as _compile_expression
from .logging_config import get_logger
from .normalizer import normalize
from .session import build_function
from .types import AnalysisReport, CompileError, CompileResult

logger = get_logger("api")


def compile_expression(expression: str) -> Evaluator:
    """Compile a raw expression into an evaluator.

    Args:
        expression: Expression in x (e.g., "2x^2 + sin(x)")

    Returns:
        Evaluator whose evaluate(x) never raises

    Raises:
        CompileError: EmptyExpressionError, ExpressionSyntaxError,
            ExpressionTooLongError or UnevaluableExpressionError

    Example:
        >>> from grafik_pkg.api import compile_expression
        >>> f = compile_expression("2x + 1")
        >>> f.evaluate(3)
        7.0
        >>> f.canonical
        '2*x+1'
    """
    return _compile_expression(expression)


def analyze(evaluator: Evaluator, canonical: str | None = None) -> AnalysisReport:
    """Analyze a compiled function.

    Example:
        >>> from grafik_pkg.api import analyze, compile_expression
        >>> report = analyze(compile_expression("x^2"))
        >>> report.properties
        ('Even',)
        >>> report.range
        'y ≥ 0'
    """
    return _analyze(evaluator, canonical)


def scan_asymptotes(
    evaluator: Evaluator, x_min: float, x_max: float, y_threshold: float
) -> list[float]:
    """Return suspected vertical asymptotes in [x_min, x_max].

    Example:
        >>> from grafik_pkg.api import compile_expression, scan_asymptotes
        >>> scan_asymptotes(compile_expression("1/x"), -10, 10, 5)
        [0.0]
    """
    return _scan_asymptotes(evaluator, x_min, x_max, y_threshold)


def inspect(expression: str) -> CompileResult:
    """Compile and analyze an expression without raising.

    Returns:
        CompileResult with the canonical form and report, or the error
        message and code
    """
    try:
        compiled = build_function(expression)
    except CompileError as e:
        logger.info("Rejected expression %r: %s", expression, e.message)
        return CompileResult(ok=False, error=e.message, code=e.code)
    return CompileResult(ok=True, canonical=compiled.canonical, report=compiled.report)


def validate_expression(expression: str) -> tuple[bool, str | None]:
    """Check that an expression normalizes, without compiling it.

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> from grafik_pkg.api import validate_expression
        >>> validate_expression("(x+1")
        (False, 'Mismatched parentheses: 1 unclosed parenthesis')
    """
    try:
        normalize(expression)
        return True, None
    except CompileError as e:
        return False, str(e)
