"""Symbol table and the symbol class hierarchy.

The hierarchy is closed and exists for ``isinstance`` matching only:

    Symbol
    ├── UserOpSymbol
    └── TripleSymbol
        ├── FamilySymbol
        │   └── ValueSymbol
        │       ├── ValueMapSymbol
        │       ├── NameSymbol
        │       ├── ContextSymbol
        │       └── VarNodeListSymbol
        ├── SpecificSymbol
        │   ├── PatternlessSymbol
        │   │   ├── EpsilonSymbol
        │   │   └── VarNodeSymbol
        │   ├── OperandSymbol
        │   ├── StartSymbol / EndSymbol / Next2Symbol
        │   └── FlowDestSymbol / FlowRefSymbol
        └── SubtableSymbol

Symbols and headers are matched by position: the n-th header describes the
n-th symbol.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterator, Optional, Tuple

from .constructors import Constructor
from .expressions import OperandValue, PatternExpression, PatternValue
from .patterns import DecisionNode


class SymbolHeaderKind(Enum):
    """Symbol kinds, valued by the symbol element name."""

    USEROP = "userop"
    EPSILON = "epsilon_sym"
    VALUE = "value_sym"
    VALUEMAP = "valuemap_sym"
    NAME = "name_sym"
    VARNODE = "varnode_sym"
    CONTEXT = "context_sym"
    VARLIST = "varlist_sym"
    OPERAND = "operand_sym"
    START = "start_sym"
    END = "end_sym"
    NEXT2 = "next2_sym"
    FLOWDEST = "flowdest_sym"
    FLOWREF = "flowref_sym"
    SUBTABLE = "subtable_sym"

    @property
    def header_tag(self) -> str:
        return f"{self.value}_head"

    @classmethod
    def from_header_tag(cls, tag: str) -> "SymbolHeaderKind":
        return cls(tag[: -len("_head")])


@dataclass(frozen=True)
class Scope:
    """Symbol scope; the global scope is its own parent."""

    id: int
    parent: int


@dataclass(frozen=True)
class SymbolHeader:
    kind: SymbolHeaderKind
    name: str
    id: int
    scope: int


@dataclass(frozen=True)
class Symbol:
    """Base class of every symbol."""

    kind: ClassVar[SymbolHeaderKind]

    name: str
    id: int
    scope: int


@dataclass(frozen=True)
class UserOpSymbol(Symbol):
    """User-defined p-code operation; ``index`` selects it in CALLOTHER."""

    kind = SymbolHeaderKind.USEROP

    index: int


@dataclass(frozen=True)
class TripleSymbol(Symbol):
    """Symbol that can appear as a constructor operand."""


@dataclass(frozen=True)
class FamilySymbol(TripleSymbol):
    pass


@dataclass(frozen=True)
class ValueSymbol(FamilySymbol):
    kind = SymbolHeaderKind.VALUE

    patval: PatternValue


@dataclass(frozen=True)
class ValueMapSymbol(ValueSymbol):
    """Value symbol whose field value indexes ``values``."""

    kind = SymbolHeaderKind.VALUEMAP

    values: Tuple[int, ...]


@dataclass(frozen=True)
class NameSymbol(ValueSymbol):
    """Value symbol whose field value indexes ``names``; None marks an unused slot."""

    kind = SymbolHeaderKind.NAME

    names: Tuple[Optional[str], ...]


@dataclass(frozen=True)
class ContextSymbol(ValueSymbol):
    """Bit range ``low``..``high`` of context register ``varnode``."""

    kind = SymbolHeaderKind.CONTEXT

    varnode: int
    low: int
    high: int
    flow: bool


@dataclass(frozen=True)
class VarNodeListSymbol(ValueSymbol):
    """Value symbol whose field value indexes ``varnodes``; None marks an unused slot."""

    kind = SymbolHeaderKind.VARLIST

    varnodes: Tuple[Optional[int], ...]


@dataclass(frozen=True)
class SpecificSymbol(TripleSymbol):
    pass


@dataclass(frozen=True)
class PatternlessSymbol(SpecificSymbol):
    pass


@dataclass(frozen=True)
class EpsilonSymbol(PatternlessSymbol):
    kind = SymbolHeaderKind.EPSILON


@dataclass(frozen=True)
class VarNodeSymbol(PatternlessSymbol):
    """Named storage location, typically a register."""

    kind = SymbolHeaderKind.VARNODE

    space: str
    offset: int
    size: int


@dataclass(frozen=True)
class OperandSymbol(SpecificSymbol):
    """Operand of a constructor.

    Attributes:
        subsym: Id of the defining symbol, absent for expression operands
        off: Offset relative to ``base`` in bytes
        base: Index of the operand the offset is relative to, -1 for the start
        minlen: Minimum operand length in bytes
        code: True when the operand is used only in p-code
        index: Position among the constructor's operands
        localexp: Expression referring to this operand
        defexp: Defining expression, when the operand is computed
    """

    kind = SymbolHeaderKind.OPERAND

    subsym: Optional[int]
    off: int
    base: int
    minlen: int
    code: Optional[bool]
    index: int
    localexp: OperandValue
    defexp: Optional[PatternExpression]


@dataclass(frozen=True)
class StartSymbol(SpecificSymbol):
    kind = SymbolHeaderKind.START


@dataclass(frozen=True)
class EndSymbol(SpecificSymbol):
    kind = SymbolHeaderKind.END


@dataclass(frozen=True)
class Next2Symbol(SpecificSymbol):
    kind = SymbolHeaderKind.NEXT2


@dataclass(frozen=True)
class FlowDestSymbol(SpecificSymbol):
    kind = SymbolHeaderKind.FLOWDEST


@dataclass(frozen=True)
class FlowRefSymbol(SpecificSymbol):
    kind = SymbolHeaderKind.FLOWREF


@dataclass(frozen=True)
class SubtableSymbol(TripleSymbol):
    """Table of constructors plus the decision tree that selects among them."""

    kind = SymbolHeaderKind.SUBTABLE

    numct: int
    constructors: Tuple[Constructor, ...]
    decision_tree: DecisionNode


@dataclass(frozen=True)
class SymbolTable:
    """Scopes, symbol headers and symbols of a document.

    ``scopesize`` and ``symbolsize`` are capacity hints written by the
    compiler and are not checked against the list lengths.
    """

    scopesize: int
    symbolsize: int
    scopes: Tuple[Scope, ...]
    headers: Tuple[SymbolHeader, ...]
    symbols: Tuple[Symbol, ...]

    def entries(self) -> Iterator[Tuple[SymbolHeader, Symbol]]:
        """Pair every header with the symbol at the same position."""
        return zip(self.headers, self.symbols)

    def find(self, symbol_id: int) -> Optional[Symbol]:
        """Return the symbol whose header carries ``symbol_id``, if any."""
        for header, symbol in self.entries():
            if header.id == symbol_id:
                return symbol
        return None

    def subtables(self) -> Iterator[SubtableSymbol]:
        for symbol in self.symbols:
            if isinstance(symbol, SubtableSymbol):
                yield symbol
