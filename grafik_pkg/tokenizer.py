"""Tokenizer shared by the normalizer and the compiler."""

from __future__ import annotations

import re
from typing import NamedTuple

from .types import ExpressionSyntaxError

NUMBER = "number"
NAME = "name"
OPERATOR = "operator"
LPAREN = "lparen"
RPAREN = "rparen"

# Kinds assigned by the normalizer when it classifies names
VARIABLE = "variable"
CONSTANT = "constant"
FUNCTION = "function"

_TOKEN_RE = re.compile(
    r"(?P<number>\d+\.?\d*|\.\d+)"
    r"|(?P<name>[A-Za-z]+)"
    r"|(?P<operator>\*\*|[+\-*/^])"
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
)
_WHITESPACE_RE = re.compile(r"\s+")


class Token(NamedTuple):
    kind: str
    text: str
    position: int


def tokenize(text: str) -> list[Token]:
    """Split expression text into tokens.

    Whitespace is skipped. Any character outside numbers, ASCII letters,
    arithmetic operators and parentheses is rejected.

    Raises:
        ExpressionSyntaxError: On an invalid character (code INVALID_CHARACTER)
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        space = _WHITESPACE_RE.match(text, pos)
        if space:
            pos = space.end()
            continue
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise ExpressionSyntaxError(
                f"Invalid character {text[pos]!r} at position {pos}",
                "INVALID_CHARACTER",
                position=pos,
            )
        tokens.append(Token(match.lastgroup, match.group(), pos))
        pos = match.end()
    return tokens


def _would_merge(left: str, right: str) -> bool:
    if left[-1].isalnum() or left[-1] == ".":
        return right[0].isalnum() or right[0] == "."
    return left == "*" and right[0] == "*"


def render(tokens: list[Token]) -> str:
    """Join tokens back into text.

    A space is kept only between tokens that would otherwise re-tokenize as
    one (two numbers, two names, "*" followed by "*"), so that rendering and
    tokenizing again round-trips.
    """
    parts: list[str] = []
    for token in tokens:
        if parts and _would_merge(parts[-1], token.text):
            parts.append(" ")
        parts.append(token.text)
    return "".join(parts)
