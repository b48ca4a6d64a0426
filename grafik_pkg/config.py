"""Centralized configuration for Grafik.

This module defines:
- Input validation limits (length, depth, node count)
- Cache sizes for parsing
- The constant and function-name tables used by the normalizer and compiler
- Probe sets used by the compiler self-test and the vertical-line test
- Heuristic parameters for the symmetry, injectivity, domain, range and
  asymptote analyzers

Every scalar value can be overridden via environment variables prefixed
with GRAFIK_. The heuristics are empirically chosen; they are not derived
from a correctness proof and will misclassify pathological or highly
oscillatory functions.
"""

import math
import os

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("grafik")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("GRAFIK_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("GRAFIK_MAX_EXPRESSION_DEPTH", "100")
)  # nesting depth
MAX_EXPRESSION_NODES = int(
    os.getenv("GRAFIK_MAX_EXPRESSION_NODES", "5000")
)  # total nodes
MAX_TREE_DEPTH = int(
    os.getenv("GRAFIK_MAX_TREE_DEPTH", "400")
)  # tree height, long sums included

# Cache configuration
CACHE_SIZE_PARSE = int(os.getenv("GRAFIK_CACHE_SIZE_PARSE", "1024"))

# The single free variable
VARIABLE_NAME = "x"

# Named constants, substituted on whole-name tokens only
CONSTANTS = {
    "pi": math.pi,
    "e": math.e,
}

# Fixed function vocabulary. log is base 10, ln is natural.
FUNCTION_NAMES = frozenset(
    {
        "sin",
        "cos",
        "tan",
        "csc",
        "sec",
        "cot",
        "log",
        "ln",
        "sqrt",
        "abs",
        "floor",
        "ceil",
        "round",
        "exp",
    }
)

# Reciprocal trig heads rewritten as 1/<base>(...) by the normalizer
RECIPROCAL_FUNCTIONS = {
    "csc": "sin",
    "sec": "cos",
    "cot": "tan",
}

# Shared label for unrestricted domains and unbounded ranges
ALL_REAL_NUMBERS = "All real numbers (ℝ)"

# Compiler self-test: at least one probe must give a finite result
PROBE_POINTS = (0.0, 1.0, -1.0, 0.5, 2.0)

# Vertical-line sanity gate
VERTICAL_LINE_POINTS = (-5.0, -2.0, 0.0, 1.0, 3.0, 5.0)

# Symmetry analyzer
SYMMETRY_POINTS = (-3.0, -2.0, -1.0, -0.5, 0.5, 1.0, 2.0, 3.0)
SYMMETRY_TOLERANCE = float(os.getenv("GRAFIK_SYMMETRY_TOLERANCE", "1e-10"))
SYMMETRY_MATCH_RATIO = float(
    os.getenv("GRAFIK_SYMMETRY_MATCH_RATIO", "0.8")
)  # fraction of valid pairs that must match

# Injectivity analyzer
INJECTIVITY_X_MIN = float(os.getenv("GRAFIK_INJECTIVITY_X_MIN", "-5"))
INJECTIVITY_X_MAX = float(os.getenv("GRAFIK_INJECTIVITY_X_MAX", "5"))
INJECTIVITY_STEP = float(os.getenv("GRAFIK_INJECTIVITY_STEP", "0.5"))
INJECTIVITY_TOLERANCE = float(os.getenv("GRAFIK_INJECTIVITY_TOLERANCE", "1e-8"))
INJECTIVITY_MIN_SAMPLES = int(os.getenv("GRAFIK_INJECTIVITY_MIN_SAMPLES", "6"))

# Domain analyzer (fallback sweep)
DOMAIN_X_MIN = float(os.getenv("GRAFIK_DOMAIN_X_MIN", "-20"))
DOMAIN_X_MAX = float(os.getenv("GRAFIK_DOMAIN_X_MAX", "20"))
DOMAIN_STEP = float(os.getenv("GRAFIK_DOMAIN_STEP", "0.1"))
DOMAIN_DEDUP_DISTANCE = float(os.getenv("GRAFIK_DOMAIN_DEDUP_DISTANCE", "0.05"))
DOMAIN_MAX_LISTED = int(
    os.getenv("GRAFIK_DOMAIN_MAX_LISTED", "5")
)  # more exclusions than this are summarized

# Range analyzer
RANGE_X_MIN = float(os.getenv("GRAFIK_RANGE_X_MIN", "-50"))
RANGE_X_MAX = float(os.getenv("GRAFIK_RANGE_X_MAX", "50"))
RANGE_STEP = float(os.getenv("GRAFIK_RANGE_STEP", "0.1"))
RANGE_MIN_SAMPLES = int(os.getenv("GRAFIK_RANGE_MIN_SAMPLES", "10"))
RANGE_PROBE_POINTS = (-100.0, -10.0, 0.0, 10.0, 100.0)
RANGE_UNBOUNDED_LEVEL = float(
    os.getenv("GRAFIK_RANGE_UNBOUNDED_LEVEL", "100")
)  # |y| beyond this counts as "grows large"
RANGE_MIN_SLOPE = float(os.getenv("GRAFIK_RANGE_MIN_SLOPE", "0.1"))
RANGE_CONSTANT_TOLERANCE = float(os.getenv("GRAFIK_RANGE_CONSTANT_TOLERANCE", "0.01"))
RANGE_ZERO_TOLERANCE = float(os.getenv("GRAFIK_RANGE_ZERO_TOLERANCE", "0.1"))
RANGE_TRIG_OUTER = float(os.getenv("GRAFIK_RANGE_TRIG_OUTER", "1.1"))
RANGE_TRIG_INNER = float(os.getenv("GRAFIK_RANGE_TRIG_INNER", "0.9"))

# Asymptote detector
ASYMPTOTE_STEPS = int(os.getenv("GRAFIK_ASYMPTOTE_STEPS", "2000"))
ASYMPTOTE_DEDUP_FACTOR = float(
    os.getenv("GRAFIK_ASYMPTOTE_DEDUP_FACTOR", "10")
)  # candidates closer than factor*step are merged

# Grid coordinates are rounded to this many decimals so decimal steps land
# on exact values such as 0.0 and 3.0
GRID_DECIMALS = int(os.getenv("GRAFIK_GRID_DECIMALS", "10"))
