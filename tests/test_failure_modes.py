"""Tests for failure modes and invalid input handling."""

import pytest

from grafik_pkg.compiler import compile_expression
from grafik_pkg.config import MAX_INPUT_LENGTH
from grafik_pkg.types import (
    CompileError,
    EmptyExpressionError,
    ExpressionSyntaxError,
    ExpressionTooLongError,
    UnevaluableExpressionError,
)


class TestInputValidationFailures:
    """Test input validation failure modes."""

    def test_empty_input(self):
        """Test empty input."""
        with pytest.raises(EmptyExpressionError, match="Expression cannot be empty"):
            compile_expression("")

    def test_whitespace_only(self):
        """Test whitespace-only input."""
        with pytest.raises(EmptyExpressionError):
            compile_expression("   ")

    def test_too_long_input(self):
        """Test input exceeding maximum length."""
        with pytest.raises(ExpressionTooLongError):
            compile_expression("x" * (MAX_INPUT_LENGTH + 1))

    def test_unbalanced_parentheses(self):
        """Test unbalanced parentheses."""
        with pytest.raises(ExpressionSyntaxError, match="Mismatched parentheses"):
            compile_expression("(x + 1")

    def test_unexpected_closing_parenthesis(self):
        """Test a closing parenthesis with no opener."""
        with pytest.raises(ExpressionSyntaxError, match="unexpected '\\)' at position 5"):
            compile_expression("x + 1) * (2")

    def test_forbidden_characters(self):
        """Test characters outside the expression alphabet."""
        for expression in ["__import__('os')", "x; y", "x = 2", "x[0]", "x, 1", "x!"]:
            with pytest.raises(ExpressionSyntaxError) as exc_info:
                compile_expression(expression)
            assert exc_info.value.code == "INVALID_CHARACTER"

    def test_unknown_identifiers(self):
        """Test names that are not x, a constant or a function."""
        for expression in ["y", "2t", "sinh(x)", "eval(x)", "xx"]:
            with pytest.raises(ExpressionSyntaxError) as exc_info:
                compile_expression(expression)
            assert exc_info.value.code == "UNKNOWN_IDENTIFIER"


class TestSyntaxFailures:
    """Test malformed expressions that balance and tokenize."""

    @pytest.mark.parametrize(
        "expression",
        ["x**", "*x", "x+", "2 3", "x y", "sin x", "sin()", "()", "x//2", "1..2"],
    )
    def test_rejected(self, expression):
        with pytest.raises(ExpressionSyntaxError):
            compile_expression(expression)

    def test_deep_nesting(self):
        """Test expressions nested beyond the parser limit."""
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            compile_expression("(" * 150 + "x" + ")" * 150)
        assert exc_info.value.code == "TOO_DEEP"

    def test_deep_unary_chain(self):
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            compile_expression("-" * 150 + "x")
        assert exc_info.value.code == "TOO_DEEP"


class TestEvaluationFailures:
    """Test expressions that parse but never evaluate."""

    @pytest.mark.parametrize("expression", ["sqrt(-1)", "ln(-1-x^2)", "0/0", "1/(x-x)"])
    def test_no_numeric_result(self, expression):
        with pytest.raises(UnevaluableExpressionError):
            compile_expression(expression)


class TestErrorTaxonomy:
    """Test the error hierarchy and codes."""

    @pytest.mark.parametrize(
        "expression,error_type,code",
        [
            ("", EmptyExpressionError, "EMPTY_INPUT"),
            ("x" * (MAX_INPUT_LENGTH + 1), ExpressionTooLongError, "TOO_LONG"),
            ("(x", ExpressionSyntaxError, "UNBALANCED_PARENS"),
            ("x$", ExpressionSyntaxError, "INVALID_CHARACTER"),
            ("z", ExpressionSyntaxError, "UNKNOWN_IDENTIFIER"),
            ("x+", ExpressionSyntaxError, "SYNTAX_ERROR"),
            ("sqrt(-1)", UnevaluableExpressionError, "NO_NUMERIC_RESULT"),
        ],
    )
    def test_codes(self, expression, error_type, code):
        with pytest.raises(error_type) as exc_info:
            compile_expression(expression)
        assert isinstance(exc_info.value, CompileError)
        assert exc_info.value.code == code
        assert str(exc_info.value) == exc_info.value.message

    def test_syntax_error_is_not_builtin(self):
        assert not issubclass(ExpressionSyntaxError, SyntaxError)
