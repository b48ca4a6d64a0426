"""Parser and compiler: canonical expression string to a numeric evaluator.

The parser is a recursive-descent parser over the token stream with the
usual precedence (lowest first):

    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/") unary)*
    unary      := ("+" | "-") unary | power
    power      := primary ("**" unary)?          right associative
    primary    := number | x | function "(" expression ")" | "(" expression ")"

so -x**2 is -(x**2) and 2**3**2 is 2**9. The resulting tree only contains
whitelisted operations; there is no path to executing arbitrary code.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Any

from .config import (
    CACHE_SIZE_PARSE,
    CONSTANTS,
    FUNCTION_NAMES,
    MAX_EXPRESSION_DEPTH,
    MAX_EXPRESSION_NODES,
    MAX_TREE_DEPTH,
    PROBE_POINTS,
    VARIABLE_NAME,
)
from .expression import (
    BINARY_OPERATORS,
    FUNCTIONS,
    NAN,
    BinaryOp,
    Call,
    Node,
    Number,
    UnaryOp,
    Variable,
)
from .logging_config import get_logger
from .normalizer import normalize
from .tokenizer import LPAREN, NAME, NUMBER, OPERATOR, RPAREN, Token, tokenize
from .types import (
    EmptyExpressionError,
    ExpressionSyntaxError,
    UnevaluableExpressionError,
)

logger = get_logger("compiler")


class _Parser:
    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.index = 0
        self.depth = 0

    def _peek(self) -> Token | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _advance(self) -> Token:
        token = self._peek()
        if token is None:
            raise ExpressionSyntaxError("Unexpected end of expression")
        self.index += 1
        return token

    def _is_operator(self, *symbols: str) -> bool:
        token = self._peek()
        return token is not None and token.kind == OPERATOR and token.text in symbols

    def _unexpected(self, token: Token) -> ExpressionSyntaxError:
        return ExpressionSyntaxError(
            f"Unexpected '{token.text}' at position {token.position}",
            position=token.position,
        )

    def _enter(self) -> None:
        self.depth += 1
        if self.depth > MAX_EXPRESSION_DEPTH:
            raise ExpressionSyntaxError(
                f"Expression too deeply nested (>{MAX_EXPRESSION_DEPTH} levels)",
                "TOO_DEEP",
            )

    def parse(self) -> Node:
        node = self.expression()
        token = self._peek()
        if token is not None:
            raise self._unexpected(token)
        return node

    def expression(self) -> Node:
        node = self.term()
        while self._is_operator("+", "-"):
            operator = self._advance().text
            node = BinaryOp(operator, node, self.term())
        return node

    def term(self) -> Node:
        node = self.unary()
        while self._is_operator("*", "/"):
            operator = self._advance().text
            node = BinaryOp(operator, node, self.unary())
        return node

    def unary(self) -> Node:
        if self._is_operator("+", "-"):
            operator = self._advance().text
            self._enter()
            operand = self.unary()
            self.depth -= 1
            return UnaryOp(operator, operand)
        return self.power()

    def power(self) -> Node:
        base = self.primary()
        if self._is_operator("**", "^"):
            self._advance()
            self._enter()
            exponent = self.unary()
            self.depth -= 1
            return BinaryOp("**", base, exponent)
        return base

    def _group(self) -> Node:
        self._enter()
        node = self.expression()
        self.depth -= 1
        closing = self._advance()
        if closing.kind != RPAREN:
            raise self._unexpected(closing)
        return node

    def primary(self) -> Node:
        token = self._advance()
        if token.kind == NUMBER:
            return Number(float(token.text))
        if token.kind == LPAREN:
            return self._group()
        if token.kind == NAME:
            if token.text == VARIABLE_NAME:
                return Variable()
            if token.text in CONSTANTS:
                return Number(CONSTANTS[token.text])
            if token.text in FUNCTION_NAMES:
                opening = self._peek()
                if opening is None or opening.kind != LPAREN:
                    raise ExpressionSyntaxError(
                        f"Function '{token.text}' at position {token.position} must be followed by '('",
                        position=token.position,
                    )
                self._advance()
                return Call(token.text, self._group())
            raise ExpressionSyntaxError(
                f"Unknown identifier '{token.text}' at position {token.position}",
                "UNKNOWN_IDENTIFIER",
                position=token.position,
            )
        raise self._unexpected(token)


def _check_size(tree: Node) -> None:
    """Reject trees too large, or too tall to convert to SymPy recursively."""
    nodes = 0
    stack = [(tree, 1)]
    while stack:
        node, height = stack.pop()
        nodes += 1
        if nodes > MAX_EXPRESSION_NODES:
            raise ExpressionSyntaxError(
                f"Expression too complex (>{MAX_EXPRESSION_NODES} nodes)", "TOO_COMPLEX"
            )
        if height > MAX_TREE_DEPTH:
            raise ExpressionSyntaxError(
                f"Expression too deeply nested (>{MAX_TREE_DEPTH} levels)", "TOO_DEEP"
            )
        if isinstance(node, BinaryOp):
            stack.append((node.left, height + 1))
            stack.append((node.right, height + 1))
        elif isinstance(node, UnaryOp):
            stack.append((node.operand, height + 1))
        elif isinstance(node, Call):
            stack.append((node.argument, height + 1))


@lru_cache(maxsize=CACHE_SIZE_PARSE)
def parse_canonical(canonical: str) -> Node:
    """Parse a canonical expression string into an expression tree.

    Raises:
        ExpressionSyntaxError: On malformed input or oversized trees
    """
    tokens = tokenize(canonical)
    if not tokens:
        raise EmptyExpressionError("Expression cannot be empty")
    tree = _Parser(tokens).parse()
    _check_size(tree)
    return tree


# Opcodes of the flattened program
_PUSH_NUMBER = 0
_PUSH_X = 1
_NEGATE = 2
_APPLY_BINARY = 3
_APPLY_FUNCTION = 4


def flatten(tree: Node) -> tuple[tuple[int, Any], ...]:
    """Lay the tree out in postfix order.

    Running the program needs a value stack only, so evaluation depth does
    not depend on tree height or on the caller's own stack depth.
    """
    program: list[tuple[int, Any]] = []
    pending: list[tuple[Node, bool]] = [(tree, False)]
    while pending:
        node, children_done = pending.pop()
        if isinstance(node, Number):
            program.append((_PUSH_NUMBER, node.value))
        elif isinstance(node, Variable):
            program.append((_PUSH_X, None))
        elif children_done:
            if isinstance(node, UnaryOp):
                if node.operator == "-":
                    program.append((_NEGATE, None))
            elif isinstance(node, BinaryOp):
                program.append((_APPLY_BINARY, BINARY_OPERATORS[node.operator]))
            else:
                program.append((_APPLY_FUNCTION, FUNCTIONS[node.function]))
        else:
            pending.append((node, True))
            if isinstance(node, BinaryOp):
                pending.append((node.right, False))
                pending.append((node.left, False))
            elif isinstance(node, UnaryOp):
                pending.append((node.operand, False))
            else:
                pending.append((node.argument, False))
    return tuple(program)


def _run(program: tuple[tuple[int, Any], ...], x: float) -> float:
    values: list[float] = []
    for opcode, operand in program:
        if opcode == _PUSH_NUMBER:
            values.append(operand)
        elif opcode == _PUSH_X:
            values.append(x)
        elif opcode == _NEGATE:
            values[-1] = -values[-1]
        elif opcode == _APPLY_BINARY:
            right = values.pop()
            values[-1] = operand(values[-1], right)
        else:
            values[-1] = operand(values[-1])
    return values[-1]


class Evaluator:
    """A compiled, pure function of x.

    evaluate(x) never raises: any arithmetic failure becomes NaN. Poles keep
    their IEEE sign (1/0 is +inf, ln(0) is -inf); callers treat every
    non-finite value as "undefined here".
    """

    __slots__ = ("canonical", "tree", "_program")

    def __init__(self, canonical: str, tree: Node):
        self.canonical = canonical
        self.tree = tree
        self._program = flatten(tree)

    def evaluate(self, x: float) -> float:
        try:
            return float(_run(self._program, float(x)))
        except (ArithmeticError, ValueError, TypeError):
            return NAN

    __call__ = evaluate

    def __repr__(self) -> str:
        return f"Evaluator({self.canonical!r})"


def compile_canonical(canonical: str) -> Evaluator:
    """Compile a canonical expression and self-test it on the probe points.

    Raises:
        ExpressionSyntaxError: If the expression cannot be parsed
        UnevaluableExpressionError: If no probe point yields a finite value
    """
    evaluator = Evaluator(canonical, parse_canonical(canonical))
    if not any(math.isfinite(evaluator.evaluate(x)) for x in PROBE_POINTS):
        logger.info("No finite result for %r on probes %s", canonical, PROBE_POINTS)
        raise UnevaluableExpressionError(
            "Expression does not produce valid numeric results"
        )
    logger.debug("Compiled %r", canonical)
    return evaluator


def compile_expression(raw: str) -> Evaluator:
    """Normalize and compile raw user input.

    Args:
        raw: Raw expression string (e.g., "2x^2 - sin(x)")

    Returns:
        Evaluator for the expression

    Raises:
        CompileError: Any subclass, see normalize() and compile_canonical()
    """
    return compile_canonical(normalize(raw))
