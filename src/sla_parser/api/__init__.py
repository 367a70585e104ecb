"""Public API for SLA document parsing.

Key Components:
    parse: Parse a document or raise the first error
    parse_with_metrics: Parse a document into a ParseOutcome
    SlaParser: Reusable parser bound to one configuration
"""

from .parser import SlaParser, parse, parse_with_metrics

__all__ = [
    "SlaParser",
    "parse",
    "parse_with_metrics",
]
