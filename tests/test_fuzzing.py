"""Fuzzing tests for the compiler and evaluator with random inputs."""

import math
import random
import string
import unittest

from grafik_pkg.api import inspect
from grafik_pkg.compiler import compile_expression
from grafik_pkg.types import CompileError, CompileResult

# Characters that survive tokenization, so random strings reach the parser
_EXPRESSION_ALPHABET = "x0123456789.+-*/^() sincotalgqrbfexpudm"


class TestCompilerFuzzing(unittest.TestCase):
    """Fuzz test the compile pipeline with random inputs."""

    def setUp(self):
        self.rng = random.Random(1234)

    def test_random_printable_strings(self):
        """Random garbage either compiles or raises CompileError."""
        for _ in range(200):
            length = self.rng.randint(1, 80)
            text = "".join(self.rng.choices(string.printable, k=length))
            try:
                compile_expression(text)
            except CompileError:
                pass

    def test_random_expression_alphabet(self):
        """inspect() never raises, whatever the input."""
        for _ in range(300):
            length = self.rng.randint(1, 40)
            text = "".join(self.rng.choices(_EXPRESSION_ALPHABET, k=length))
            result = inspect(text)
            self.assertIsInstance(result, CompileResult)
            if result.ok:
                self.assertIsNotNone(result.report)
            else:
                self.assertIsNotNone(result.code)

    def test_malformed_expressions(self):
        """Test malformed expressions are rejected with a code."""
        malformed = ["(((", ")))", "x++", "x**", "*/x", "", "   ", "sin", "(()", "^x"]
        for text in malformed:
            with self.subTest(text=text):
                result = inspect(text)
                self.assertFalse(result.ok)
                self.assertIsNotNone(result.error)


class TestEvaluatorFuzzing(unittest.TestCase):
    """Fuzz the evaluator with random inputs."""

    EXPRESSIONS = [
        "sin(x)/x",
        "x^x",
        "ln(abs(x))*sqrt(x)",
        "tan(x)^2 - sec(x)^2",
        "exp(exp(x))",
        "floor(1/x) + round(x)",
        "(x^2-1)/(x-1)",
        "csc(x)cot(x)",
        "10^(x^3)",
    ]

    def test_always_returns_float(self):
        rng = random.Random(5678)
        points = [0.0, -0.0, math.inf, -math.inf, math.nan, 1e308, -1e308, 5e-324]
        points += [rng.uniform(-1e6, 1e6) for _ in range(200)]
        for expression in self.EXPRESSIONS:
            evaluator = compile_expression(expression)
            for x in points:
                self.assertIsInstance(evaluator.evaluate(x), float)


if __name__ == "__main__":
    unittest.main()
