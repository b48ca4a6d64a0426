"""Input normalization: raw user text to a canonical expression string.

This module handles:
- Input validation (empty input, length limit)
- Case folding and power-operator conversion (^ to **)
- Constant substitution (pi, e) on whole names
- Function-name classification against the static function table
- Rewriting csc/sec/cot calls as reciprocals of sin/cos/tan
- Implicit multiplication (2x -> 2*x, (x+1)x -> (x+1)*x, x(x+1) -> x*(x+1))
- Parenthesis balance validation

The steps are order-sensitive; later steps assume earlier ones completed.
"""

from __future__ import annotations

from .config import (
    CONSTANTS,
    FUNCTION_NAMES,
    MAX_INPUT_LENGTH,
    RECIPROCAL_FUNCTIONS,
    VARIABLE_NAME,
)
from .logging_config import get_logger
from .tokenizer import (
    CONSTANT,
    FUNCTION,
    LPAREN,
    NAME,
    NUMBER,
    OPERATOR,
    RPAREN,
    VARIABLE,
    Token,
    render,
    tokenize,
)
from .types import EmptyExpressionError, ExpressionSyntaxError, ExpressionTooLongError

logger = get_logger("normalizer")

# (left kind, right kinds) pairs that get an explicit "*" between them
_IMPLICIT_MULTIPLICATION = (
    (NUMBER, (VARIABLE, FUNCTION, CONSTANT)),  # 2x, 2sin(x), 2pi
    (RPAREN, (VARIABLE, FUNCTION, CONSTANT)),  # (x+1)x
    (NUMBER, (LPAREN,)),  # 2(x+1)
    (RPAREN, (NUMBER,)),  # (x+1)2
    (RPAREN, (LPAREN,)),  # (x+1)(x-1)
    (VARIABLE, (LPAREN, CONSTANT)),  # x(x+1), x pi, never sin(
    (CONSTANT, (NUMBER, CONSTANT, VARIABLE, FUNCTION, LPAREN)),  # pi x, pi(x+1)
)


def _convert_power(tokens: list[Token]) -> list[Token]:
    return [
        token._replace(text="**") if token.kind == OPERATOR and token.text == "^" else token
        for token in tokens
    ]


def _substitute_constants(tokens: list[Token]) -> list[Token]:
    return [
        Token(CONSTANT, repr(CONSTANTS[token.text]), token.position)
        if token.kind == NAME and token.text in CONSTANTS
        else token
        for token in tokens
    ]


def _classify_names(tokens: list[Token]) -> list[Token]:
    """Tag every remaining name as the variable or a function head."""
    classified = []
    for token in tokens:
        if token.kind == NAME:
            if token.text == VARIABLE_NAME:
                token = token._replace(kind=VARIABLE)
            elif token.text in FUNCTION_NAMES:
                token = token._replace(kind=FUNCTION)
            else:
                logger.info("Rejected unknown identifier %r", token.text)
                raise ExpressionSyntaxError(
                    f"Unknown identifier '{token.text}' at position {token.position}",
                    "UNKNOWN_IDENTIFIER",
                    position=token.position,
                )
        classified.append(token)
    return classified


def _matching_parens(tokens: list[Token]) -> dict[int, int]:
    """Map the index of every matched '(' to the index of its ')'."""
    matches: dict[int, int] = {}
    stack: list[int] = []
    for index, token in enumerate(tokens):
        if token.kind == LPAREN:
            stack.append(index)
        elif token.kind == RPAREN and stack:
            matches[stack.pop()] = index
    return matches


def _expand_reciprocals(tokens: list[Token]) -> list[Token]:
    """Rewrite csc(a), sec(a), cot(a) as (1/sin(a)), (1/cos(a)), (1/tan(a)).

    The whole balanced argument is kept, nested calls included. A head whose
    '(' is never closed is left untouched for the balance check to reject.
    """
    matches = _matching_parens(tokens)
    expanded: list[Token] = []
    # One entry per open paren: True when closing it must also close "(1/"
    closes_reciprocal: list[bool] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if (
            token.kind == FUNCTION
            and token.text in RECIPROCAL_FUNCTIONS
            and index + 1 in matches
        ):
            pos = token.position
            expanded.extend(
                [
                    Token(LPAREN, "(", pos),
                    Token(NUMBER, "1", pos),
                    Token(OPERATOR, "/", pos),
                    Token(FUNCTION, RECIPROCAL_FUNCTIONS[token.text], pos),
                    tokens[index + 1],
                ]
            )
            closes_reciprocal.append(True)
            index += 2
            continue
        expanded.append(token)
        if token.kind == LPAREN:
            closes_reciprocal.append(False)
        elif token.kind == RPAREN and closes_reciprocal:
            if closes_reciprocal.pop():
                expanded.append(Token(RPAREN, ")", token.position))
        index += 1
    return expanded


def _insert_implicit_multiplication(tokens: list[Token]) -> list[Token]:
    result: list[Token] = []
    for token in tokens:
        if result:
            previous = result[-1]
            for left_kind, right_kinds in _IMPLICIT_MULTIPLICATION:
                if previous.kind == left_kind and token.kind in right_kinds:
                    result.append(Token(OPERATOR, "*", token.position))
                    break
        result.append(token)
    return result


def validate_parentheses(tokens: list[Token]) -> None:
    """Scan left to right and fail on the first imbalance.

    Raises:
        ExpressionSyntaxError: When a ')' has no opener, or '(' remain open
            at the end (code UNBALANCED_PARENS)
    """
    depth = 0
    for token in tokens:
        if token.kind == LPAREN:
            depth += 1
        elif token.kind == RPAREN:
            depth -= 1
            if depth < 0:
                raise ExpressionSyntaxError(
                    f"Mismatched parentheses: unexpected ')' at position {token.position}",
                    "UNBALANCED_PARENS",
                    position=token.position,
                )
    if depth != 0:
        plural = "es" if depth > 1 else ""
        raise ExpressionSyntaxError(
            f"Mismatched parentheses: {depth} unclosed parenthesis{plural}",
            "UNBALANCED_PARENS",
        )


def normalize(raw: str) -> str:
    """Turn raw user input into a canonical expression string.

    Args:
        raw: Raw input string from the user (e.g., "2Sin(x)^2 + csc(x)")

    Returns:
        Canonical expression (e.g., "2*sin(x)**2+(1/sin(x))")

    Raises:
        EmptyExpressionError: If input is empty or whitespace-only
        ExpressionTooLongError: If input exceeds MAX_INPUT_LENGTH
        ExpressionSyntaxError: On invalid characters, unknown names or
            mismatched parentheses
    """
    text = raw.strip() if raw else ""
    if not text:
        raise EmptyExpressionError("Expression cannot be empty")
    if len(text) > MAX_INPUT_LENGTH:
        raise ExpressionTooLongError(
            f"Input too long (>{MAX_INPUT_LENGTH} characters)"
        )
    logger.debug("Original expression: %s", text)

    tokens = tokenize(text.lower())
    tokens = _convert_power(tokens)
    tokens = _substitute_constants(tokens)
    tokens = _classify_names(tokens)
    tokens = _expand_reciprocals(tokens)
    tokens = _insert_implicit_multiplication(tokens)
    validate_parentheses(tokens)

    canonical = render(tokens)
    logger.debug("Canonical expression: %s", canonical)
    return canonical
