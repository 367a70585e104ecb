"""Constructors: one decoding rule of a subtable."""

from dataclasses import dataclass
from typing import Optional, Tuple

from .expressions import PatternExpression
from .templates import ConstructorTemplate


@dataclass(frozen=True)
class SourceLocation:
    """Line (and column, when recorded) of the rule in the SLEIGH source."""

    line: int
    column: Optional[int]

    def __str__(self) -> str:
        if self.column is None:
            return str(self.line)
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class PrintPiece:
    """Base class of display-syntax fragments."""


@dataclass(frozen=True)
class PrintText(PrintPiece):
    """Literal text, already entity-unescaped."""

    piece: str


@dataclass(frozen=True)
class OperandPrint(PrintPiece):
    """Placeholder for operand ``index`` of the constructor."""

    index: int


@dataclass(frozen=True)
class ContextChange:
    """Base class of ``context_op`` and ``commit`` actions."""


@dataclass(frozen=True)
class ContextOperation(ContextChange):
    """Store ``expression`` shifted by ``shift`` into context word ``word_index`` under ``mask``."""

    word_index: int
    shift: int
    mask: int
    expression: PatternExpression


@dataclass(frozen=True)
class ContextCommit(ContextChange):
    """Mark context bits of ``symbol_id`` for propagation to the next address."""

    symbol_id: int
    word_index: int
    mask: int
    flow: bool


@dataclass(frozen=True)
class Constructor:
    """One decoding rule.

    Attributes:
        parent: Id of the owning subtable symbol
        first: Index of the first operand that starts the print syntax
        length: Minimum pattern length in bytes
        location: Position of the rule in the SLEIGH source
        operands: Symbol ids of the operands, in operand order
        print_pieces: Display syntax, literal text interleaved with operands
        context_changes: Context register updates applied on a match
        template: Primary p-code template, when the rule has semantics
        named_templates: Templates for named sections
    """

    parent: int
    first: int
    length: int
    location: SourceLocation
    operands: Tuple[int, ...]
    print_pieces: Tuple[PrintPiece, ...]
    context_changes: Tuple[ContextChange, ...]
    template: Optional[ConstructorTemplate]
    named_templates: Tuple[ConstructorTemplate, ...]
