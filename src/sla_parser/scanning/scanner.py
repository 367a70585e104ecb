"""Tag scanner for the SLA interchange format.

The scanner tokenizes one tag at a time: a start tag with its attributes, or a
closing tag. It does not understand nesting rules beyond counting open
elements; deciding which child may appear where is the node parsers' job.
"""

import re
from dataclasses import dataclass, field
from typing import Collection, Dict, Optional

from sla_parser.shared.errors import (
    LimitExceededError,
    SourcePosition,
    StructuralError,
)

# Maximum number of characters quoted back in "found ..." messages
SNIPPET_LENGTH = 24
# Expected-tag lists longer than this are abbreviated in messages
MAX_LISTED_TAGS = 6

WHITESPACE = re.compile(r"\s*")
START_TAG = re.compile(r"<\s*([A-Za-z_][A-Za-z0-9_]*)")
END_TAG_START = re.compile(r"<\s*/")
END_TAG = re.compile(r"<\s*/\s*([A-Za-z_][A-Za-z0-9_]*)\s*>")
TAG_CLOSE = re.compile(r"(/\s*)?>")
ATTRIBUTE = re.compile(
    r"""([A-Za-z_][A-Za-z0-9_.:-]*)\s*=\s*(?:"([^"]*)"|'([^']*)')"""
)
XML_DECLARATION = re.compile(r"<\?xml\b.*?\?>", re.DOTALL)

SPACE_TAGS = frozenset({
    "space_base", "space_unique", "space_other", "space_overlay", "space",
})

SYMBOL_KIND_NAMES = (
    "userop", "epsilon_sym", "value_sym", "valuemap_sym", "name_sym",
    "varnode_sym", "context_sym", "varlist_sym", "operand_sym", "start_sym",
    "end_sym", "next2_sym", "flowdest_sym", "flowref_sym", "subtable_sym",
)
SYMBOL_TAGS = frozenset(SYMBOL_KIND_NAMES)
SYMBOL_HEADER_TAGS = frozenset(f"{name}_head" for name in SYMBOL_KIND_NAMES)

PATTERN_VALUE_TAGS = frozenset({
    "tokenfield", "contextfield", "intb", "operand_exp",
    "start_exp", "end_exp", "next2_exp",
})
BINARY_EXPRESSION_TAGS = frozenset({
    "plus_exp", "sub_exp", "mult_exp", "lshift_exp", "rshift_exp",
    "and_exp", "or_exp", "xor_exp", "div_exp",
})
UNARY_EXPRESSION_TAGS = frozenset({"minus_exp", "not_exp"})
PATTERN_EXPRESSION_TAGS = (
    PATTERN_VALUE_TAGS | BINARY_EXPRESSION_TAGS | UNARY_EXPRESSION_TAGS
)

DISJOINT_PATTERN_TAGS = frozenset({"instruct_pat", "context_pat", "combine_pat"})

TAG_VOCABULARY = frozenset({
    "sleigh", "sourcefiles", "sourcefile", "spaces", "symbol_table", "scope",
    "constructor", "oper", "print", "opprint", "context_op", "commit",
    "construct_tpl", "op_tpl", "varnode_tpl", "handle_tpl", "const_tpl", "null",
    "decision", "pair", "pat_block", "mask_word",
    "valuetab", "nametab", "var",
}) | (
    SPACE_TAGS
    | SYMBOL_TAGS
    | SYMBOL_HEADER_TAGS
    | PATTERN_EXPRESSION_TAGS
    | DISJOINT_PATTERN_TAGS
)


@dataclass(frozen=True)
class Tag:
    """A scanned start tag.

    Attribute values are kept exactly as written; decoding them is left to
    the codec so each field can apply its own convention.
    """

    name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    attribute_offsets: Dict[str, int] = field(default_factory=dict)
    self_closing: bool = False
    offset: int = 0


class TagScanner:
    """Cursor over an input buffer that reads SLA tags.

    Whitespace between tags and around attribute ``=`` signs is skipped
    everywhere two tokens meet.

    Examples:
        >>> scanner = TagScanner('<intb val="42"/>')
        >>> tag = scanner.read_start_tag()
        >>> tag.name, tag.attributes["val"], tag.self_closing
        ('intb', '42', True)
    """

    def __init__(self, text: str, max_depth: Optional[int] = None) -> None:
        """Initialize the scanner.

        Args:
            text: Complete input buffer
            max_depth: Maximum number of simultaneously open elements
        """
        self.text = text
        self.max_depth = max_depth
        self.pos = 0
        self.depth = 0
        self.deepest = 0
        self.tags_read = 0

    def position(self, offset: Optional[int] = None) -> SourcePosition:
        """Convert a character offset (default: the cursor) to line and column."""
        if offset is None:
            offset = self.pos
        offset = min(max(offset, 0), len(self.text))
        line = self.text.count("\n", 0, offset) + 1
        column = offset - (self.text.rfind("\n", 0, offset) + 1) + 1
        return SourcePosition(offset=offset, line=line, column=column)

    def describe(self, offset: int) -> str:
        """Quote the input at ``offset`` for error messages."""
        if offset >= len(self.text):
            return "end of input"
        snippet = self.text[offset:offset + SNIPPET_LENGTH]
        if offset + SNIPPET_LENGTH < len(self.text):
            snippet += "..."
        return repr(snippet)

    def skip_whitespace(self) -> None:
        self.pos = WHITESPACE.match(self.text, self.pos).end()

    def at_end(self) -> bool:
        """Check whether only whitespace remains."""
        self.skip_whitespace()
        return self.pos >= len(self.text)

    def at_end_tag(self) -> bool:
        """Check whether a closing tag starts at the cursor."""
        self.skip_whitespace()
        return END_TAG_START.match(self.text, self.pos) is not None

    def skip_declaration(self) -> bool:
        """Skip an ``<?xml ...?>`` declaration at the cursor, if present."""
        self.skip_whitespace()
        match = XML_DECLARATION.match(self.text, self.pos)
        if match is None:
            return False
        self.pos = match.end()
        return True

    def read_start_tag(self, expected: Optional[Collection[str]] = None) -> Tag:
        """Read one start tag or self-closing tag.

        Args:
            expected: Tag names permitted here, any vocabulary tag when None

        Returns:
            The scanned tag with its raw attributes

        Raises:
            StructuralError: If no permitted tag starts at the cursor, an
                attribute is malformed or repeated, or the tag is unterminated
            LimitExceededError: If opening the element exceeds ``max_depth``
        """
        self.skip_whitespace()
        start = self.pos
        match = START_TAG.match(self.text, start)
        if match is None:
            raise StructuralError(
                _expected_text(expected), self.describe(start), self.position(start)
            )
        name = match.group(1)
        if name not in TAG_VOCABULARY:
            raise StructuralError(
                _expected_text(expected), f"unknown tag <{name}>", self.position(start)
            )
        if expected is not None and name not in expected:
            raise StructuralError(
                _expected_text(expected), f"<{name}>", self.position(start)
            )
        self.pos = match.end()

        attributes: Dict[str, str] = {}
        offsets: Dict[str, int] = {}
        while True:
            self.skip_whitespace()
            close = TAG_CLOSE.match(self.text, self.pos)
            if close is not None:
                self_closing = close.group(1) is not None
                self.pos = close.end()
                break
            attribute = ATTRIBUTE.match(self.text, self.pos)
            if attribute is None:
                raise StructuralError(
                    f"attribute or end of <{name}> tag",
                    self.describe(self.pos),
                    self.position(self.pos),
                )
            key = attribute.group(1)
            if key in attributes:
                raise StructuralError(
                    f"at most one '{key}' attribute on <{name}>",
                    f"duplicate '{key}'",
                    self.position(attribute.start()),
                )
            value = attribute.group(2)
            if value is None:
                value = attribute.group(3)
            attributes[key] = value
            offsets[key] = attribute.start()
            self.pos = attribute.end()

        self.tags_read += 1
        if not self_closing:
            self._enter(start)
        return Tag(
            name=name,
            attributes=attributes,
            attribute_offsets=offsets,
            self_closing=self_closing,
            offset=start,
        )

    def read_end_tag(self, name: str) -> None:
        """Read the closing tag ``</name>``.

        Raises:
            StructuralError: If anything else is at the cursor
        """
        self.skip_whitespace()
        start = self.pos
        match = END_TAG.match(self.text, start)
        if match is None:
            raise StructuralError(f"</{name}>", self.describe(start), self.position(start))
        if match.group(1) != name:
            raise StructuralError(
                f"</{name}>", f"</{match.group(1)}>", self.position(start)
            )
        self.pos = match.end()
        self.depth -= 1

    def expect_end_of_input(self) -> None:
        """Require that only whitespace remains."""
        if not self.at_end():
            raise StructuralError(
                "end of input", self.describe(self.pos), self.position(self.pos)
            )

    def _enter(self, offset: int) -> None:
        self.depth += 1
        if self.depth > self.deepest:
            self.deepest = self.depth
        if self.max_depth is not None and self.depth > self.max_depth:
            raise LimitExceededError(
                "element nesting depth", self.depth, self.max_depth, self.position(offset)
            )


def _expected_text(expected: Optional[Collection[str]]) -> str:
    if expected is None:
        return "a start tag"
    names = sorted(expected)
    if len(names) == 1:
        return f"<{names[0]}>"
    if len(names) > MAX_LISTED_TAGS:
        listed = ", ".join(f"<{n}>" for n in names[:MAX_LISTED_TAGS])
        return f"one of {listed}, ..."
    return "one of " + ", ".join(f"<{n}>" for n in names)
