"""Document root, source files and address spaces."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

from .constructors import Constructor
from .symbols import SymbolTable


class SpaceKind(Enum):
    """Role of an address space, valued by its element name."""

    BASE = "space_base"
    UNIQUE = "space_unique"
    OTHER = "space_other"
    OVERLAY = "space_overlay"
    GENERIC = "space"


@dataclass(frozen=True)
class AddressSpace:
    """Attributes shared by every address space variant."""

    name: str
    index: int
    bigendian: bool
    delay: int
    deadcodedelay: Optional[int]
    size: int
    wordsize: Optional[int]
    physical: bool


@dataclass(frozen=True)
class AddressSpaceEntry:
    kind: SpaceKind
    space: AddressSpace


@dataclass(frozen=True)
class SpaceTable:
    default_space: str
    spaces: Tuple[AddressSpaceEntry, ...]

    def find(self, name: str) -> Optional[AddressSpaceEntry]:
        for entry in self.spaces:
            if entry.space.name == name:
                return entry
        return None


@dataclass(frozen=True)
class SourceFile:
    name: str
    index: int


@dataclass(frozen=True)
class Document:
    """A complete parsed ``.sla`` document.

    Attributes:
        version: Format version, when recorded
        bigendian: Byte order of the processor
        align: Instruction alignment in bytes
        uniqbase: First free offset in the unique space
        maxdelay: Largest delay slot count, when recorded
        uniqmask: Mask applied to unique space offsets, when recorded
        numsections: Number of named p-code sections, when recorded
        source_files: SLEIGH source files the document was compiled from
        spaces: Address space table
        symbol_table: Symbols, headers and scopes
    """

    version: Optional[int]
    bigendian: bool
    align: int
    uniqbase: int
    maxdelay: Optional[int]
    uniqmask: Optional[int]
    numsections: Optional[int]
    source_files: Tuple[SourceFile, ...]
    spaces: SpaceTable
    symbol_table: SymbolTable

    def constructors(self) -> Iterator[Constructor]:
        """Yield every constructor of every subtable, in document order."""
        for subtable in self.symbol_table.subtables():
            yield from subtable.constructors
