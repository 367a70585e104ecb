"""Error types raised while parsing SLA documents.

Every failure is reported as a single positioned exception. There is no
recovery: the first structural, encoding, cardinality or limit violation
aborts the whole parse.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class ErrorKind(Enum):
    """Categories of parse failures."""

    STRUCTURAL = auto()   # Expected tag/attribute/closing sequence not found
    ENCODING = auto()     # Attribute value has the wrong lexical form
    CARDINALITY = auto()  # Required child missing or count constraint violated
    LIMIT = auto()        # Configured input size or depth limit exceeded


@dataclass(frozen=True)
class SourcePosition:
    """Location of a failure inside the input buffer."""

    offset: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


class SlaParseError(Exception):
    """Base exception for every SLA parse failure."""

    kind: ErrorKind = ErrorKind.STRUCTURAL

    def __init__(self, message: str, position: Optional[SourcePosition] = None):
        self.message = message
        self.position = position
        if position is not None:
            super().__init__(f"{position}: {message}")
        else:
            super().__init__(message)


class StructuralError(SlaParseError):
    """Raised when the expected tag or attribute is not at the current position."""

    kind = ErrorKind.STRUCTURAL

    def __init__(
        self,
        expected: str,
        found: str,
        position: Optional[SourcePosition] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(f"expected {expected}, found {found}", position)


class MissingAttributeError(StructuralError):
    """Raised when a required attribute is absent from an element."""

    def __init__(
        self,
        element: str,
        attribute: str,
        position: Optional[SourcePosition] = None,
    ):
        self.element = element
        self.attribute = attribute
        super().__init__(
            f"attribute '{attribute}' on <{element}>", "no such attribute", position
        )


class EncodingError(SlaParseError):
    """Raised when an attribute value does not decode to its field's type."""

    kind = ErrorKind.ENCODING

    def __init__(
        self,
        attribute: str,
        raw: str,
        position: Optional[SourcePosition] = None,
        reason: Optional[str] = None,
    ):
        self.attribute = attribute
        self.raw = raw
        self.reason = reason
        message = f"invalid value for attribute {attribute}: {raw!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, position)


class CardinalityError(SlaParseError):
    """Raised when a child element is missing or a count constraint fails."""

    kind = ErrorKind.CARDINALITY

    def __init__(
        self,
        element: str,
        detail: str,
        position: Optional[SourcePosition] = None,
    ):
        self.element = element
        self.detail = detail
        super().__init__(f"<{element}>: {detail}", position)


class LimitExceededError(SlaParseError):
    """Raised when the input exceeds a configured size or nesting limit."""

    kind = ErrorKind.LIMIT

    def __init__(
        self,
        limit: str,
        value: int,
        maximum: int,
        position: Optional[SourcePosition] = None,
    ):
        self.limit = limit
        self.value = value
        self.maximum = maximum
        super().__init__(f"{limit} {value} exceeds maximum {maximum}", position)
