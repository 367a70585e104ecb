"""Shared utilities for SLA parsing.

This module provides the error hierarchy, result and metrics types,
configuration objects and logging helpers used across all parsing layers.
"""

from .errors import (
    CardinalityError,
    EncodingError,
    ErrorKind,
    LimitExceededError,
    MissingAttributeError,
    SlaParseError,
    SourcePosition,
    StructuralError,
)
from .config import (
    BooleanStyle,
    ConfigError,
    ConfigValidationError,
    ParserConfig,
)
from .logging import (
    CorrelationLogger,
    configure_level,
    get_logger,
    parse_error_fields,
)
from .result import (
    ParseMetrics,
    ParseOutcome,
)

__all__ = [
    "CardinalityError",
    "EncodingError",
    "ErrorKind",
    "LimitExceededError",
    "MissingAttributeError",
    "SlaParseError",
    "SourcePosition",
    "StructuralError",
    "BooleanStyle",
    "ConfigError",
    "ConfigValidationError",
    "ParserConfig",
    "CorrelationLogger",
    "configure_level",
    "get_logger",
    "parse_error_fields",
    "ParseMetrics",
    "ParseOutcome",
]
