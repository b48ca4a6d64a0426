"""Caller-owned graphing session.

The session holds the expression currently on screen. A renderer or UI
owns one instance and passes it around instead of sharing module globals.
Submitting a new expression builds a complete CompiledFunction first and
then replaces the previous one in a single assignment, so readers never
see an evaluator paired with a stale report.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from .analyzer import analyze
from .asymptotes import scan_asymptotes
from .compiler import Evaluator, compile_canonical
from .expression import NAN
from .formatting import latex_expression, prettify_expr
from .logging_config import get_logger
from .normalizer import normalize
from .types import AnalysisReport, CompileError, CompileResult, EmptyExpressionError

logger = get_logger("session")


@dataclass(frozen=True)
class CompiledFunction:
    """Everything derived from one successfully compiled expression."""

    raw: str
    canonical: str
    evaluator: Evaluator
    report: AnalysisReport

    @cached_property
    def display(self) -> str:
        return prettify_expr(self.canonical)

    @cached_property
    def latex(self) -> str | None:
        return latex_expression(self.evaluator.tree)


def build_function(raw: str) -> CompiledFunction:
    """Normalize, compile and analyze raw input.

    Raises:
        CompileError: If the expression cannot be compiled
    """
    canonical = normalize(raw)
    evaluator = compile_canonical(canonical)
    return CompiledFunction(
        raw=raw.strip(),
        canonical=canonical,
        evaluator=evaluator,
        report=analyze(evaluator, canonical),
    )


class GraphSession:
    """The current function of one graph view."""

    def __init__(self) -> None:
        self.current: CompiledFunction | None = None
        self.error: str | None = None

    def submit(self, raw: str) -> CompileResult:
        """Compile and analyze a new expression and make it current.

        On failure nothing is current afterwards and `error` holds the
        message. Empty input clears the view without an error message.
        """
        try:
            compiled = build_function(raw)
        except EmptyExpressionError as e:
            self.current = None
            self.error = None
            return CompileResult(ok=False, error=e.message, code=e.code)
        except CompileError as e:
            logger.info("Rejected expression %r: %s", raw, e.message)
            self.current = None
            self.error = e.message
            return CompileResult(ok=False, error=e.message, code=e.code)

        self.current = compiled
        self.error = None
        logger.debug("Current expression is now %r", compiled.canonical)
        return CompileResult(ok=True, canonical=compiled.canonical, report=compiled.report)

    def clear(self) -> None:
        self.current = None
        self.error = None

    def evaluate(self, x: float) -> float:
        """Evaluate the current function, NaN when nothing is compiled."""
        current = self.current
        if current is None:
            return NAN
        return current.evaluator.evaluate(x)

    def scan_asymptotes(
        self, x_min: float, x_max: float, y_threshold: float
    ) -> list[float]:
        """Scan the current function for asymptotes, [] when nothing is compiled."""
        current = self.current
        if current is None:
            return []
        return scan_asymptotes(current.evaluator, x_min, x_max, y_threshold)
