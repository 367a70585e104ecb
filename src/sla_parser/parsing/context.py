"""Per-parse state shared by the node parsers.

A ``ParseContext`` owns the scanner for one input buffer together with the
configuration, logger and counters of that parse. Node parsers receive the
context and the start tag they were dispatched on, read the tag's attributes
through an ``Attributes`` reader and pull child elements through the
context's child helpers.
"""

import re
from typing import Collection, Optional, Set

from sla_parser.codec import decode_bool, decode_dec, decode_hex, unescape_xml
from sla_parser.scanning import Tag, TagScanner
from sla_parser.shared.config import ParserConfig
from sla_parser.shared.errors import (
    CardinalityError,
    EncodingError,
    MissingAttributeError,
    SourcePosition,
    StructuralError,
)
from sla_parser.shared.logging import CorrelationLogger, get_logger
from sla_parser.shared.result import ParseMetrics


class ParseContext:
    """Scanner, configuration and counters of a single parse."""

    def __init__(
        self,
        scanner: TagScanner,
        config: Optional[ParserConfig] = None,
        logger: Optional[CorrelationLogger] = None,
    ) -> None:
        self.scanner = scanner
        self.config = config or ParserConfig()
        self.logger = logger or get_logger(
            __name__, self.config.correlation_id, "node_parsers"
        )
        self.symbols_parsed = 0
        self.constructors_parsed = 0

    @classmethod
    def from_text(
        cls, text: str, config: Optional[ParserConfig] = None
    ) -> "ParseContext":
        """Create a context with a fresh scanner over ``text``."""
        config = config or ParserConfig()
        return cls(TagScanner(text, max_depth=config.max_depth), config)

    def attributes(self, tag: Tag) -> "Attributes":
        return Attributes(self, tag)

    def read_tag(self, expected: Optional[Collection[str]] = None) -> Tag:
        """Read the next start tag, which must be one of ``expected``."""
        return self.scanner.read_start_tag(expected)

    def has_child(self, parent: Tag) -> bool:
        """Check whether another child element of ``parent`` follows."""
        if parent.self_closing:
            return False
        return not self.scanner.at_end_tag() and not self.scanner.at_end()

    def require_child(
        self, parent: Tag, expected: Collection[str], detail: Optional[str] = None
    ) -> Tag:
        """Read a mandatory child of ``parent``.

        Raises:
            CardinalityError: If ``parent`` has no further children
            StructuralError: If the next child is not one of ``expected``
        """
        if parent.self_closing or self.scanner.at_end_tag():
            offset = parent.offset if parent.self_closing else self.scanner.pos
            if detail is None:
                names = " or ".join(f"<{name}>" for name in sorted(expected))
                detail = f"missing required child {names}"
            raise CardinalityError(parent.name, detail, self.scanner.position(offset))
        return self.scanner.read_start_tag(expected)

    def optional_child(
        self, parent: Tag, expected: Collection[str]
    ) -> Optional[Tag]:
        """Read the next child of ``parent`` if there is one."""
        if not self.has_child(parent):
            return None
        return self.scanner.read_start_tag(expected)

    def close(self, tag: Tag) -> None:
        """Consume the closing tag of ``tag`` unless it was self-closing."""
        if not tag.self_closing:
            self.scanner.read_end_tag(tag.name)

    def position(self, offset: Optional[int] = None) -> SourcePosition:
        return self.scanner.position(offset)

    def snapshot_metrics(self) -> ParseMetrics:
        """Return the counters collected so far."""
        return ParseMetrics(
            characters_processed=self.scanner.pos,
            elements_parsed=self.scanner.tags_read,
            max_depth=self.scanner.deepest,
            symbols_parsed=self.symbols_parsed,
            constructors_parsed=self.constructors_parsed,
        )


class Attributes:
    """Typed reader over the raw attributes of one tag.

    Each accessor applies the field's encoding convention. Required accessors
    raise ``MissingAttributeError`` when the attribute is absent; ``opt_``
    accessors return None instead. Source positions are computed only when an
    error is raised.
    """

    def __init__(self, context: ParseContext, tag: Tag) -> None:
        self._context = context
        self._tag = tag
        self._used: Set[str] = set()

    def _raw(self, name: str, required: bool) -> Optional[str]:
        self._used.add(name)
        raw = self._tag.attributes.get(name)
        if raw is None and required:
            raise MissingAttributeError(
                self._tag.name, name, self._context.position(self._tag.offset)
            )
        return raw

    def _reposition(self, error: EncodingError) -> EncodingError:
        offset = self._tag.attribute_offsets.get(error.attribute, self._tag.offset)
        return EncodingError(
            error.attribute, error.raw, self._context.position(offset), error.reason
        )

    def dec(self, name: str) -> int:
        raw = self._raw(name, True)
        try:
            return decode_dec(name, raw)
        except EncodingError as error:
            raise self._reposition(error) from None

    def opt_dec(self, name: str) -> Optional[int]:
        if self._raw(name, False) is None:
            return None
        return self.dec(name)

    def hex(self, name: str) -> int:
        raw = self._raw(name, True)
        try:
            return decode_hex(name, raw)
        except EncodingError as error:
            raise self._reposition(error) from None

    def opt_hex(self, name: str) -> Optional[int]:
        if self._raw(name, False) is None:
            return None
        return self.hex(name)

    def flag(self, name: str) -> bool:
        raw = self._raw(name, True)
        try:
            return decode_bool(name, raw, self._context.config.boolean_style)
        except EncodingError as error:
            raise self._reposition(error) from None

    def opt_flag(self, name: str) -> Optional[bool]:
        if self._raw(name, False) is None:
            return None
        return self.flag(name)

    def text(self, name: str) -> str:
        """Return an entity-unescaped string attribute."""
        return unescape_xml(self._raw(name, True))

    def opt_text(self, name: str) -> Optional[str]:
        raw = self._raw(name, False)
        return None if raw is None else unescape_xml(raw)

    def pattern(self, name: str, regex: "re.Pattern[str]", description: str) -> "re.Match[str]":
        """Match a required attribute against ``regex`` as a whole."""
        raw = self._raw(name, True)
        match = regex.fullmatch(raw)
        if match is None:
            raise self._reposition(
                EncodingError(name, raw, reason=f"expected {description}")
            )
        return match

    def finish(self) -> None:
        """Reject unread attributes when ``strict_attributes`` is enabled."""
        if not self._context.config.strict_attributes:
            return
        for name in self._tag.attributes:
            if name not in self._used:
                offset = self._tag.attribute_offsets[name]
                raise StructuralError(
                    f"a known attribute of <{self._tag.name}>",
                    f"'{name}'",
                    self._context.position(offset),
                )
