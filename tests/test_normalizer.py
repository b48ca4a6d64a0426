"""Unit tests for the normalizer and tokenizer."""

import unittest

from grafik_pkg.normalizer import normalize
from grafik_pkg.tokenizer import LPAREN, NAME, NUMBER, OPERATOR, RPAREN, render, tokenize
from grafik_pkg.types import (
    EmptyExpressionError,
    ExpressionSyntaxError,
    ExpressionTooLongError,
)

PI = "3.141592653589793"
E = "2.718281828459045"


class TestTokenize(unittest.TestCase):
    """Test the token stream."""

    def test_token_kinds(self):
        kinds = [token.kind for token in tokenize("2.5*sin(x)^2")]
        self.assertEqual(
            kinds,
            [NUMBER, OPERATOR, NAME, LPAREN, NAME, RPAREN, OPERATOR, NUMBER],
        )

    def test_power_operator_is_one_token(self):
        tokens = tokenize("x**2")
        self.assertEqual([t.text for t in tokens], ["x", "**", "2"])

    def test_leading_dot_number(self):
        self.assertEqual(tokenize(".5")[0].text, ".5")

    def test_positions_skip_whitespace(self):
        tokens = tokenize("  x +  1")
        self.assertEqual([t.position for t in tokens], [2, 4, 7])

    def test_invalid_character(self):
        with self.assertRaises(ExpressionSyntaxError) as ctx:
            tokenize("x$2")
        self.assertEqual(ctx.exception.code, "INVALID_CHARACTER")
        self.assertEqual(ctx.exception.position, 1)

    def test_render_keeps_separate_tokens_apart(self):
        self.assertEqual(render(tokenize("2 3")), "2 3")
        self.assertEqual(render(tokenize("2* *3")), "2* *3")
        self.assertEqual(render(tokenize("2 * x")), "2*x")


class TestNormalize(unittest.TestCase):
    """Test the canonical form produced from raw input."""

    def test_plain_expression_unchanged(self):
        self.assertEqual(normalize("x+1"), "x+1")
        self.assertEqual(normalize("2*x"), "2*x")

    def test_lowercase_and_whitespace(self):
        self.assertEqual(normalize("  Ln( X ) "), "ln(x)")

    def test_power_conversion(self):
        self.assertEqual(normalize("x^2"), "x**2")
        self.assertEqual(normalize("x^-2"), "x**-2")

    def test_constants(self):
        self.assertEqual(normalize("pi"), PI)
        self.assertEqual(normalize("e^x"), f"{E}**x")

    def test_constants_only_on_whole_names(self):
        self.assertEqual(normalize("exp(x)"), "exp(x)")
        self.assertEqual(normalize("sec(x)"), "(1/cos(x))")

    def test_constant_multiplication(self):
        self.assertEqual(normalize("2pi"), f"2*{PI}")
        self.assertEqual(normalize("pi x"), f"{PI}*x")
        self.assertEqual(normalize("pi(x+1)"), f"{PI}*(x+1)")

    def test_variable_then_constant(self):
        self.assertEqual(normalize("x pi"), f"x*{PI}")
        self.assertEqual(normalize("x e"), f"x*{E}")
        self.assertEqual(normalize("2x pi"), f"2*x*{PI}")

    def test_reciprocal_trig(self):
        self.assertEqual(normalize("csc(x)"), "(1/sin(x))")
        self.assertEqual(normalize("sec(x)"), "(1/cos(x))")
        self.assertEqual(normalize("cot(x)"), "(1/tan(x))")

    def test_reciprocal_keeps_full_argument(self):
        self.assertEqual(normalize("csc(2x+1)"), "(1/sin(2*x+1))")
        self.assertEqual(normalize("cot(sin(x))"), "(1/tan(sin(x)))")
        self.assertEqual(normalize("sec((x+1)*(x-1))"), "(1/cos((x+1)*(x-1)))")

    def test_nested_reciprocals(self):
        self.assertEqual(normalize("csc(csc(x))"), "(1/sin((1/sin(x))))")

    def test_implicit_multiplication_patterns(self):
        self.assertEqual(normalize("2x"), "2*x")
        self.assertEqual(normalize("(x+1)x"), "(x+1)*x")
        self.assertEqual(normalize("2(x+1)"), "2*(x+1)")
        self.assertEqual(normalize("(x+1)2"), "(x+1)*2")
        self.assertEqual(normalize("x(x+1)"), "x*(x+1)")
        self.assertEqual(normalize("(x+1)(x-1)"), "(x+1)*(x-1)")

    def test_function_head_is_not_split(self):
        self.assertEqual(normalize("sin(x)"), "sin(x)")
        self.assertEqual(normalize("2sin(x)"), "2*sin(x)")
        self.assertEqual(normalize("(x)sqrt(x)"), "(x)*sqrt(x)")

    def test_whitespace_does_not_block_multiplication(self):
        self.assertEqual(normalize("2 x"), "2*x")

    def test_adjacent_numbers_are_kept_apart(self):
        self.assertEqual(normalize("2 3"), "2 3")


class TestNormalizeErrors(unittest.TestCase):
    """Test rejected input."""

    def test_empty(self):
        with self.assertRaises(EmptyExpressionError) as ctx:
            normalize("")
        self.assertEqual(ctx.exception.code, "EMPTY_INPUT")

    def test_whitespace_only(self):
        with self.assertRaises(EmptyExpressionError):
            normalize("   \t ")

    def test_too_long(self):
        from grafik_pkg.config import MAX_INPUT_LENGTH

        with self.assertRaises(ExpressionTooLongError) as ctx:
            normalize("x" + "+x" * MAX_INPUT_LENGTH)
        self.assertEqual(ctx.exception.code, "TOO_LONG")

    def test_unclosed_parenthesis(self):
        with self.assertRaises(ExpressionSyntaxError) as ctx:
            normalize("(x+1")
        self.assertEqual(ctx.exception.code, "UNBALANCED_PARENS")
        self.assertIn("1 unclosed", str(ctx.exception))

    def test_stray_closing_parenthesis(self):
        with self.assertRaises(ExpressionSyntaxError) as ctx:
            normalize("x+1)")
        self.assertEqual(ctx.exception.code, "UNBALANCED_PARENS")
        self.assertEqual(ctx.exception.position, 3)

    def test_fails_when_counter_goes_negative(self):
        # balanced overall, but ')' comes first
        with self.assertRaises(ExpressionSyntaxError) as ctx:
            normalize(")x(")
        self.assertEqual(ctx.exception.position, 0)

    def test_unclosed_reciprocal(self):
        with self.assertRaises(ExpressionSyntaxError) as ctx:
            normalize("sec(x")
        self.assertEqual(ctx.exception.code, "UNBALANCED_PARENS")

    def test_unknown_identifier(self):
        with self.assertRaises(ExpressionSyntaxError) as ctx:
            normalize("y+1")
        self.assertEqual(ctx.exception.code, "UNKNOWN_IDENTIFIER")

    def test_name_containing_constant_letters(self):
        with self.assertRaises(ExpressionSyntaxError):
            normalize("pix")


if __name__ == "__main__":
    unittest.main()
