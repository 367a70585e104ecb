"""Developer tools for the SLA parser.

Key Components:
    ParseProfiler: Records timing, memory and parse metrics per parse
    benchmark_nesting_depth: Times parses of synthetic deeply nested documents
"""

from .profiling import (
    ParseProfiler,
    ProfilingReport,
    ProfilingSession,
    benchmark_nesting_depth,
    build_nested_expression_document,
)

__all__ = [
    "ParseProfiler",
    "ProfilingReport",
    "ProfilingSession",
    "benchmark_nesting_depth",
    "build_nested_expression_document",
]
