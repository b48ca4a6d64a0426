"""Type definitions, result dataclasses and the compile error taxonomy."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SamplePoint:
    """One probe of an evaluator during a sweep."""

    x: float
    y: float

    @property
    def defined(self) -> bool:
        """True when the function produced a finite value at x."""
        return math.isfinite(self.y)


@dataclass(frozen=True)
class AsymptoteCandidate:
    """A suspected vertical asymptote and the check that flagged it."""

    x: float
    method: str  # "undefined", "sign_flip", "slope_spike"


@dataclass(frozen=True)
class SymmetryResult:
    """Outcome of the even/odd probe."""

    is_even: bool
    is_odd: bool


@dataclass(frozen=True)
class AnalysisReport:
    """Structural analysis of a compiled function."""

    is_function: bool
    is_even: bool = False
    is_odd: bool = False
    is_one_to_one: bool = False
    domain: str | None = None
    range: str | None = None
    properties: tuple[str, ...] = field(default_factory=tuple)

    def details(self) -> list[str]:
        """Return human-readable sentences describing the report."""
        if not self.is_function:
            return ["Fails the vertical line test"]
        lines = []
        if self.is_even:
            lines.append("Symmetric about y-axis (f(-x) = f(x))")
        elif self.is_odd:
            lines.append("Symmetric about origin (f(-x) = -f(x))")
        else:
            lines.append("No symmetry about y-axis or origin")
        if self.is_one_to_one:
            lines.append("Passes horizontal line test (injective)")
        else:
            lines.append("Does not pass horizontal line test")
        return lines

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {
            "is_function": self.is_function,
            "is_even": self.is_even,
            "is_odd": self.is_odd,
            "is_one_to_one": self.is_one_to_one,
            "properties": list(self.properties),
        }
        if self.domain is not None:
            result_dict["domain"] = self.domain
        if self.range is not None:
            result_dict["range"] = self.range
        return result_dict


@dataclass
class CompileResult:
    """Result of compiling and analyzing one raw expression."""

    ok: bool
    canonical: str | None = None
    report: AnalysisReport | None = None
    error: str | None = None
    code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.canonical is not None:
            result_dict["canonical"] = self.canonical
        if self.report is not None:
            result_dict["report"] = self.report.to_dict()
        if self.error is not None:
            result_dict["error"] = self.error
        if self.code is not None:
            result_dict["code"] = self.code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"CompileResult(ok=False, code={self.code!r}, error={self.error!r})"
        return f"CompileResult(ok=True, canonical={self.canonical!r}, report={self.report!r})"


class CompileError(Exception):
    """Raised when a raw expression cannot be turned into an evaluator."""

    default_code = "COMPILE_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class EmptyExpressionError(CompileError):
    """Raised when the input is empty or whitespace-only."""

    default_code = "EMPTY_INPUT"


class ExpressionTooLongError(CompileError):
    """Raised when the input exceeds MAX_INPUT_LENGTH."""

    default_code = "TOO_LONG"


class ExpressionSyntaxError(CompileError):
    """Raised for malformed input: unbalanced parentheses, bad tokens, unknown names."""

    default_code = "SYNTAX_ERROR"

    def __init__(
        self, message: str, code: str | None = None, position: int | None = None
    ):
        self.position = position
        super().__init__(message, code)


class UnevaluableExpressionError(CompileError):
    """Raised when no probe point yields a finite result."""

    default_code = "NO_NUMERIC_RESULT"
