"""SLA Parser.

Parses the compiled processor-description interchange format (``.sla``) into
an immutable, fully typed document tree: address spaces, the symbol table,
constructors, pattern expressions, decision trees and p-code templates.

Progressive API Disclosure:
- Level 1: Simple function - parse()
- Level 2: Configured parser - SlaParser class with parse_with_metrics()
"""

__version__ = "0.1.0"
__author__ = "SLA Parser Team"

from .api import SlaParser, parse, parse_with_metrics
from .model import Document
from .shared.config import BooleanStyle, ParserConfig
from .shared.errors import (
    CardinalityError,
    EncodingError,
    ErrorKind,
    LimitExceededError,
    MissingAttributeError,
    SlaParseError,
    SourcePosition,
    StructuralError,
)
from .shared.result import ParseMetrics, ParseOutcome

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing function
    "parse",
    "parse_with_metrics",

    # Level 2: Configured parser
    "SlaParser",

    # Result objects
    "Document",
    "ParseMetrics",
    "ParseOutcome",

    # Configuration
    "BooleanStyle",
    "ParserConfig",

    # Errors
    "CardinalityError",
    "EncodingError",
    "ErrorKind",
    "LimitExceededError",
    "MissingAttributeError",
    "SlaParseError",
    "SourcePosition",
    "StructuralError",
]
