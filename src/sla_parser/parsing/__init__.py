"""Node parsers for SLA documents.

Each parser takes a ``ParseContext`` and the start tag it was dispatched on,
reads the tag's attributes and children, and returns a model object.

Key Components:
    ParseContext: Scanner, configuration and counters of one parse
    parse_document: Parse a complete document
    parse_pattern_expression: Iterative pattern expression parser
    parse_decision_tree: Iterative decision tree parser
"""

from .constructors import parse_constructor, parse_context_commit, parse_context_operation
from .context import Attributes, ParseContext
from .document import (
    parse_address_space,
    parse_document,
    parse_sleigh,
    parse_source_file,
    parse_space_table,
)
from .expressions import (
    parse_pattern_expression,
    parse_pattern_value,
    read_pattern_expression,
    read_pattern_value,
)
from .patterns import (
    parse_decision_pair,
    parse_decision_tree,
    parse_disjoint_pattern,
    parse_mask_word,
    parse_pattern_block,
)
from .symbols import parse_scope, parse_symbol, parse_symbol_header, parse_symbol_table
from .templates import (
    parse_constant_template,
    parse_constructor_template,
    parse_handle_template,
    parse_operation_template,
    parse_varnode_template,
)

__all__ = [
    "Attributes",
    "ParseContext",
    "parse_address_space",
    "parse_constant_template",
    "parse_constructor",
    "parse_constructor_template",
    "parse_context_commit",
    "parse_context_operation",
    "parse_decision_pair",
    "parse_decision_tree",
    "parse_disjoint_pattern",
    "parse_document",
    "parse_handle_template",
    "parse_mask_word",
    "parse_operation_template",
    "parse_pattern_block",
    "parse_pattern_expression",
    "parse_pattern_value",
    "parse_scope",
    "parse_sleigh",
    "parse_source_file",
    "parse_space_table",
    "parse_symbol",
    "parse_symbol_header",
    "parse_symbol_table",
    "parse_varnode_template",
    "read_pattern_expression",
    "read_pattern_value",
]
