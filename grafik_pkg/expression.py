"""Expression tree nodes and the whitelisted numeric operations they use.

Nodes are immutable data; the compiler flattens them into a postfix
program over the tables below. Arithmetic follows IEEE-754 the way a
browser's Math object does: a non-zero value divided by zero is a signed
infinity, 0/0 and out-of-domain arguments are NaN, and overflow saturates
to infinity. Nothing here raises for a finite or non-finite float input
except on genuinely unexpected failures, which the Evaluator turns into
NaN.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import sympy as sp

from .config import VARIABLE_NAME

NAN = math.nan
INF = math.inf


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value.is_integer() and int(value) % 2 == 1


def divide(left: float, right: float) -> float:
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return NAN
        return math.copysign(INF, left) * math.copysign(1.0, right)
    return left / right


def power(base: float, exponent: float) -> float:
    try:
        result = base ** exponent
    except ZeroDivisionError:
        # 0 ** negative
        if _is_odd_integer(exponent):
            return math.copysign(INF, base)
        return INF
    except OverflowError:
        if base < 0 and not exponent.is_integer():
            return NAN
        if base < 0 and _is_odd_integer(exponent):
            return -INF
        return INF
    if isinstance(result, complex):
        # negative base with a fractional exponent
        return NAN
    return result


def _log_guard(x: float) -> float | None:
    if math.isnan(x) or x < 0:
        return NAN
    if x == 0:
        return -INF
    return None


def log10(x: float) -> float:
    guarded = _log_guard(x)
    return math.log10(x) if guarded is None else guarded


def ln(x: float) -> float:
    guarded = _log_guard(x)
    return math.log(x) if guarded is None else guarded


def sqrt(x: float) -> float:
    if math.isnan(x) or x < 0:
        return NAN
    return math.sqrt(x)


def exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return INF


def _periodic(func: Callable[[float], float]) -> Callable[[float], float]:
    def wrapped(x: float) -> float:
        if not math.isfinite(x):
            return NAN
        return func(x)

    wrapped.__name__ = func.__name__
    return wrapped


def _integral(func: Callable[[float], int]) -> Callable[[float], float]:
    def wrapped(x: float) -> float:
        if not math.isfinite(x):
            return x
        return float(func(x))

    wrapped.__name__ = func.__name__
    return wrapped


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


# Whitelisted function table. csc/sec/cot normally never reach the tree
# because the normalizer rewrites them, but a hand-written canonical
# string may still use them.
FUNCTIONS: dict[str, Callable[[float], float]] = {
    "sin": _periodic(math.sin),
    "cos": _periodic(math.cos),
    "tan": _periodic(math.tan),
    "csc": lambda x: divide(1.0, FUNCTIONS["sin"](x)),
    "sec": lambda x: divide(1.0, FUNCTIONS["cos"](x)),
    "cot": lambda x: divide(1.0, FUNCTIONS["tan"](x)),
    "log": log10,
    "ln": ln,
    "sqrt": sqrt,
    "abs": math.fabs,
    "floor": _integral(math.floor),
    "ceil": _integral(math.ceil),
    "round": _integral(_round_half_up),
    "exp": exp,
}

BINARY_OPERATORS: dict[str, Callable[[float, float], float]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": divide,
    "**": power,
}

_X = sp.Symbol(VARIABLE_NAME, real=True)

_SYMPY_FUNCTIONS: dict[str, Callable[[sp.Basic], sp.Basic]] = {
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "csc": sp.csc,
    "sec": sp.sec,
    "cot": sp.cot,
    "log": lambda arg: sp.log(arg, 10),
    "ln": sp.log,
    "sqrt": sp.sqrt,
    "abs": sp.Abs,
    "floor": sp.floor,
    "ceil": sp.ceiling,
    "round": lambda arg: sp.floor(arg + sp.Rational(1, 2)),
    "exp": sp.exp,
}


class Node:
    """Base class for expression tree nodes."""

    def to_sympy(self) -> sp.Basic:
        raise NotImplementedError


@dataclass(frozen=True)
class Number(Node):
    value: float

    def to_sympy(self) -> sp.Basic:
        if self.value.is_integer():
            return sp.Integer(int(self.value))
        if self.value == math.pi:
            return sp.pi
        if self.value == math.e:
            return sp.E
        return sp.Float(self.value)


@dataclass(frozen=True)
class Variable(Node):
    name: str = VARIABLE_NAME

    def to_sympy(self) -> sp.Basic:
        return _X


@dataclass(frozen=True)
class UnaryOp(Node):
    operator: str  # "+" or "-"
    operand: Node

    def to_sympy(self) -> sp.Basic:
        operand = self.operand.to_sympy()
        return -operand if self.operator == "-" else operand


@dataclass(frozen=True)
class BinaryOp(Node):
    operator: str
    left: Node
    right: Node

    def to_sympy(self) -> sp.Basic:
        left = self.left.to_sympy()
        right = self.right.to_sympy()
        if self.operator == "+":
            return sp.Add(left, right, evaluate=False)
        if self.operator == "-":
            return sp.Add(left, sp.Mul(-1, right, evaluate=False), evaluate=False)
        if self.operator == "*":
            return sp.Mul(left, right, evaluate=False)
        if self.operator == "/":
            return sp.Mul(left, sp.Pow(right, -1, evaluate=False), evaluate=False)
        return sp.Pow(left, right, evaluate=False)


@dataclass(frozen=True)
class Call(Node):
    function: str
    argument: Node

    def to_sympy(self) -> sp.Basic:
        return _SYMPY_FUNCTIONS[self.function](self.argument.to_sympy())
