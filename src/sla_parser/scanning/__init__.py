"""Tag scanning for SLA documents.

Key Components:
    TagScanner: Cursor that reads one start or closing tag at a time
    Tag: A scanned start tag with raw attribute values
    TAG_VOCABULARY: Every element name the format defines
"""

from .scanner import (
    BINARY_EXPRESSION_TAGS,
    DISJOINT_PATTERN_TAGS,
    PATTERN_EXPRESSION_TAGS,
    PATTERN_VALUE_TAGS,
    SPACE_TAGS,
    SYMBOL_HEADER_TAGS,
    SYMBOL_TAGS,
    TAG_VOCABULARY,
    UNARY_EXPRESSION_TAGS,
    Tag,
    TagScanner,
)

__all__ = [
    "BINARY_EXPRESSION_TAGS",
    "DISJOINT_PATTERN_TAGS",
    "PATTERN_EXPRESSION_TAGS",
    "PATTERN_VALUE_TAGS",
    "SPACE_TAGS",
    "SYMBOL_HEADER_TAGS",
    "SYMBOL_TAGS",
    "TAG_VOCABULARY",
    "UNARY_EXPRESSION_TAGS",
    "Tag",
    "TagScanner",
]
