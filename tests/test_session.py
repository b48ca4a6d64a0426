"""Tests for the graphing session."""

import math
import unittest

from grafik_pkg.session import CompiledFunction, GraphSession, build_function


class TestBuildFunction(unittest.TestCase):
    """Test the compiled-function snapshot."""

    def test_fields(self):
        compiled = build_function("  2x^2 ")
        self.assertEqual(compiled.raw, "2x^2")
        self.assertEqual(compiled.canonical, "2*x**2")
        self.assertEqual(compiled.evaluator.evaluate(3), 18.0)
        self.assertEqual(compiled.report.range, "y ≥ 0")

    def test_display(self):
        self.assertEqual(build_function("x^2").display, "x²")
        self.assertEqual(build_function("2sqrt(x)").display, "2×√(x)")

    def test_latex(self):
        self.assertEqual(build_function("x^2").latex, "x^{2}")

    def test_display_and_latex_are_computed_once(self):
        compiled = build_function("sin(x)+1")
        self.assertIs(compiled.display, compiled.display)
        self.assertIs(compiled.latex, compiled.latex)

    def test_is_frozen(self):
        compiled = build_function("x")
        with self.assertRaises(AttributeError):
            compiled.canonical = "x+1"


class TestGraphSession(unittest.TestCase):
    """Test compile-and-swap behavior."""

    def setUp(self):
        self.session = GraphSession()

    def test_starts_empty(self):
        self.assertIsNone(self.session.current)
        self.assertIsNone(self.session.error)
        self.assertTrue(math.isnan(self.session.evaluate(1.0)))
        self.assertEqual(self.session.scan_asymptotes(-10, 10, 5), [])

    def test_submit_success(self):
        result = self.session.submit("x^2")
        self.assertTrue(result.ok)
        self.assertEqual(result.canonical, "x**2")
        self.assertIsInstance(self.session.current, CompiledFunction)
        self.assertEqual(self.session.evaluate(3), 9.0)
        self.assertIsNone(self.session.error)

    def test_submit_replaces_current(self):
        self.session.submit("x^2")
        self.session.submit("1/x")
        self.assertEqual(self.session.current.canonical, "1/x")
        self.assertEqual(self.session.current.report.domain, "x ≠ 0")
        self.assertEqual(self.session.scan_asymptotes(-10, 10, 5), [0.0])

    def test_failed_submit_clears_current(self):
        self.session.submit("x^2")
        result = self.session.submit("(x")
        self.assertFalse(result.ok)
        self.assertEqual(result.code, "UNBALANCED_PARENS")
        self.assertIsNone(self.session.current)
        self.assertEqual(
            self.session.error, "Mismatched parentheses: 1 unclosed parenthesis"
        )
        self.assertTrue(math.isnan(self.session.evaluate(0)))

    def test_empty_submit_clears_without_error(self):
        self.session.submit("x^2")
        result = self.session.submit("   ")
        self.assertFalse(result.ok)
        self.assertEqual(result.code, "EMPTY_INPUT")
        self.assertIsNone(self.session.current)
        self.assertIsNone(self.session.error)

    def test_success_clears_previous_error(self):
        self.session.submit("y")
        self.assertIsNotNone(self.session.error)
        self.session.submit("x")
        self.assertIsNone(self.session.error)

    def test_clear(self):
        self.session.submit("x")
        self.session.clear()
        self.assertIsNone(self.session.current)
        self.assertIsNone(self.session.error)

    def test_sessions_are_independent(self):
        other = GraphSession()
        self.session.submit("x^2")
        other.submit("x^3")
        self.assertEqual(self.session.evaluate(2), 4.0)
        self.assertEqual(other.evaluate(2), 8.0)


if __name__ == "__main__":
    unittest.main()
