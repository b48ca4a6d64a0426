"""Display helpers for numbers and canonical expressions."""

from __future__ import annotations

import re
from typing import Any

import sympy as sp

from .logging_config import get_logger

logger = get_logger("formatting")

DISPLAY_PRECISION = 6


def superscriptify(input_str: str) -> str:
    """Convert numeric string to Unicode superscript characters.

    Args:
        input_str: Input string with digits and '-' (e.g., "123", "-5")

    Returns:
        String with superscript Unicode characters (e.g., "¹²³", "⁻⁵")
    """
    mapping = {
        "0": "⁰",
        "1": "¹",
        "2": "²",
        "3": "³",
        "4": "⁴",
        "5": "⁵",
        "6": "⁶",
        "7": "⁷",
        "8": "⁸",
        "9": "⁹",
        "-": "⁻",
    }
    return "".join(mapping.get(char, char) for char in input_str)


def format_superscript(expr_str: str) -> str:
    """Replace integer powers (**) with Unicode superscripts.

    Args:
        expr_str: Expression string (e.g., "x**2", "x**-3")

    Returns:
        String with superscripts (e.g., "x²", "x⁻³")
    """
    return re.sub(
        r"\*\*(-?\d+)(?![\d.])", lambda m: superscriptify(m.group(1)), expr_str
    )


def format_number(val: Any, precision: int = DISPLAY_PRECISION) -> str:
    """Format a numeric value with the given number of significant digits.

    Args:
        val: Numeric value to format
        precision: Number of significant digits

    Returns:
        Formatted string representation of the number ("-0" becomes "0")
    """
    try:
        return "{:.{}g}".format(float(val) + 0.0, int(precision))
    except (ValueError, TypeError, OverflowError):
        return str(val)


def prettify_expr(expr_str: str) -> str:
    """Convert a canonical expression to a more readable form.

    Replaces integer powers with superscripts, 'sqrt(' with '√(' and '*'
    with '×'.

    Args:
        expr_str: Canonical expression (e.g., "2*sqrt(x)**3")

    Returns:
        Prettified string (e.g., "2×√(x)³")
    """
    result = format_superscript(expr_str)
    result = result.replace("sqrt(", "√(")
    return result.replace("*", "×")


def latex_expression(tree) -> str | None:
    """Render an expression tree as LaTeX through SymPy.

    Args:
        tree: Parsed expression tree (see expression.Node)

    Returns:
        LaTeX string, or None when SymPy cannot render the tree
    """
    try:
        return sp.latex(tree.to_sympy())
    except (RecursionError, TypeError, ValueError, AttributeError) as e:
        logger.warning("Could not render expression as LaTeX: %s", e)
        return None
