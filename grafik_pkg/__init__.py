"""Grafik package: expression compiler and function analysis for graphing."""

__all__ = [
    "config",
    "tokenizer",
    "normalizer",
    "expression",
    "sampling",
    "formatting",
    "compiler",
    "symmetry",
    "injectivity",
    "domain",
    "range_analysis",
    "asymptotes",
    "analyzer",
    "session",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "compile_expression",
    "analyze",
    "scan_asymptotes",
    "inspect",
    "validate_expression",
]
