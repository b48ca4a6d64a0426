"""Domain analysis: text patterns first, numeric sweep as fallback.

The patterns run on the canonical expression, where csc/sec/cot already
appear as 1/sin, 1/cos, 1/tan. Both spellings are recognized. sqrt and
log/ln arguments are checked on tokens, so only a real x counts, not the
letter inside a name like exp. Patterns are a shortcut for common textbook
forms and say nothing about the rest of the expression; the sweep only
sees exclusions that land on its 0.1 grid.
"""

from __future__ import annotations

import re

from .config import (
    ALL_REAL_NUMBERS,
    DOMAIN_DEDUP_DISTANCE,
    DOMAIN_MAX_LISTED,
    DOMAIN_STEP,
    DOMAIN_X_MAX,
    DOMAIN_X_MIN,
    VARIABLE_NAME,
)
from .formatting import format_number
from .logging_config import get_logger
from .sampling import sample_grid, sweep
from .tokenizer import LPAREN, NAME, RPAREN, Token, tokenize
from .types import ExpressionSyntaxError

logger = get_logger("domain")

# (function names, description when the argument is x alone,
#  description when x appears inside a larger argument)
_ARGUMENT_RULES = (
    (("sqrt",), "x ≥ 0", "argument of √ must be ≥ 0"),
    (("log", "ln"), "x > 0", "argument of log must be > 0"),
)

_HALF_PI_POLES = re.compile(r"\b(?:tan|cot|sec)\(x\)|1/cos\(x\)")
_INTEGER_PI_POLES = re.compile(r"\bcsc\(x\)|1/sin\(x\)")

_PATTERNS = (
    (re.compile(r"/x"), "x ≠ 0"),
    (_HALF_PI_POLES, "x ≠ π/2 + nπ, where n is any integer"),
    (_INTEGER_PI_POLES, "x ≠ nπ, where n is any integer"),
)

MULTIPLE_RESTRICTIONS = "Multiple restrictions (see graph for asymptotes)"


def _is_variable(token: Token) -> bool:
    return token.kind == NAME and token.text == VARIABLE_NAME


def _call_arguments(tokens: list[Token], names: tuple[str, ...]):
    """Yield the argument tokens of every call to one of the named functions."""
    for index, token in enumerate(tokens[:-1]):
        if token.kind != NAME or token.text not in names:
            continue
        if tokens[index + 1].kind != LPAREN:
            continue
        depth = 0
        for end in range(index + 1, len(tokens)):
            if tokens[end].kind == LPAREN:
                depth += 1
            elif tokens[end].kind == RPAREN:
                depth -= 1
                if depth == 0:
                    yield tokens[index + 2 : end]
                    break


def _argument_restriction(
    tokens: list[Token], names: tuple[str, ...], simple: str, compound: str
) -> str | None:
    arguments = list(_call_arguments(tokens, names))
    if any(len(argument) == 1 and _is_variable(argument[0]) for argument in arguments):
        return simple
    if any(any(_is_variable(t) for t in argument) for argument in arguments):
        return compound
    return None


def match_domain_pattern(canonical: str) -> str | None:
    """Return the domain for a recognized restriction form, else None."""
    try:
        tokens = tokenize(canonical)
    except ExpressionSyntaxError as e:
        logger.debug("Domain patterns on untokenizable text %r: %s", canonical, e)
        tokens = []
    for names, simple, compound in _ARGUMENT_RULES:
        described = _argument_restriction(tokens, names, simple, compound)
        if described is not None:
            return described

    text = canonical.replace(" ", "")
    for pattern, description in _PATTERNS:
        if pattern.search(text):
            return description
    return None


def find_exclusions(evaluator) -> list[float]:
    """Sweep [-20, 20] and return the x values where f is not finite.

    Values are rounded to one decimal and kept only if no earlier exclusion
    lies within DOMAIN_DEDUP_DISTANCE.
    """
    exclusions: list[float] = []
    grid = sample_grid(DOMAIN_X_MIN, DOMAIN_X_MAX, DOMAIN_STEP)
    for point in sweep(evaluator, grid):
        if point.defined:
            continue
        rounded = round(point.x, 1) + 0.0
        if not any(abs(r - rounded) < DOMAIN_DEDUP_DISTANCE for r in exclusions):
            exclusions.append(rounded)
    return exclusions


def analyze_domain(evaluator, canonical: str | None = None) -> str:
    """Describe the domain of the function.

    Args:
        evaluator: Compiled evaluator
        canonical: Canonical expression text (defaults to evaluator.canonical)

    Returns:
        Description such as "x ≥ 0", "x ≠ -2, 2" or "All real numbers (ℝ)"
    """
    if canonical is None:
        canonical = evaluator.canonical
    described = match_domain_pattern(canonical)
    if described is not None:
        logger.debug("Domain of %r from pattern: %s", canonical, described)
        return described

    exclusions = find_exclusions(evaluator)
    if not exclusions:
        return ALL_REAL_NUMBERS
    if len(exclusions) > DOMAIN_MAX_LISTED:
        return MULTIPLE_RESTRICTIONS
    return "x ≠ " + ", ".join(format_number(value) for value in exclusions)
