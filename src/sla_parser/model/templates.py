"""P-code templates attached to constructors.

A constructor template is a list of operation templates. Each operand of an
operation is a varnode template built from three constant templates, and the
optional result is a handle template built from seven.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class OpCode(Enum):
    """P-code operation codes, valued by their spelling in ``op_tpl code``."""

    BLANK = "BLANK"
    COPY = "COPY"
    LOAD = "LOAD"
    STORE = "STORE"
    BRANCH = "BRANCH"
    CBRANCH = "CBRANCH"
    BRANCHIND = "BRANCHIND"
    CALL = "CALL"
    CALLIND = "CALLIND"
    CALLOTHER = "CALLOTHER"
    RETURN = "RETURN"
    INT_EQUAL = "INT_EQUAL"
    INT_NOTEQUAL = "INT_NOTEQUAL"
    INT_SLESS = "INT_SLESS"
    INT_SLESSEQUAL = "INT_SLESSEQUAL"
    INT_LESS = "INT_LESS"
    INT_LESSEQUAL = "INT_LESSEQUAL"
    INT_ZEXT = "INT_ZEXT"
    INT_SEXT = "INT_SEXT"
    INT_ADD = "INT_ADD"
    INT_SUB = "INT_SUB"
    INT_CARRY = "INT_CARRY"
    INT_SCARRY = "INT_SCARRY"
    INT_SBORROW = "INT_SBORROW"
    INT_2COMP = "INT_2COMP"
    INT_NEGATE = "INT_NEGATE"
    INT_XOR = "INT_XOR"
    INT_AND = "INT_AND"
    INT_OR = "INT_OR"
    INT_LEFT = "INT_LEFT"
    INT_RIGHT = "INT_RIGHT"
    INT_SRIGHT = "INT_SRIGHT"
    INT_MULT = "INT_MULT"
    INT_DIV = "INT_DIV"
    INT_SDIV = "INT_SDIV"
    INT_REM = "INT_REM"
    INT_SREM = "INT_SREM"
    BOOL_NEGATE = "BOOL_NEGATE"
    BOOL_XOR = "BOOL_XOR"
    BOOL_AND = "BOOL_AND"
    BOOL_OR = "BOOL_OR"
    FLOAT_EQUAL = "FLOAT_EQUAL"
    FLOAT_NOTEQUAL = "FLOAT_NOTEQUAL"
    FLOAT_LESS = "FLOAT_LESS"
    FLOAT_LESSEQUAL = "FLOAT_LESSEQUAL"
    UNUSED1 = "UNUSED1"
    FLOAT_NAN = "FLOAT_NAN"
    FLOAT_ADD = "FLOAT_ADD"
    FLOAT_DIV = "FLOAT_DIV"
    FLOAT_MULT = "FLOAT_MULT"
    FLOAT_SUB = "FLOAT_SUB"
    FLOAT_NEG = "FLOAT_NEG"
    FLOAT_ABS = "FLOAT_ABS"
    FLOAT_SQRT = "FLOAT_SQRT"
    INT2FLOAT = "INT2FLOAT"
    FLOAT2FLOAT = "FLOAT2FLOAT"
    TRUNC = "TRUNC"
    CEIL = "CEIL"
    FLOOR = "FLOOR"
    ROUND = "ROUND"
    BUILD = "BUILD"
    DELAY_SLOT = "DELAY_SLOT"
    PIECE = "PIECE"
    SUBPIECE = "SUBPIECE"
    CAST = "CAST"
    LABEL = "LABEL"
    CROSSBUILD = "CROSSBUILD"
    SEGMENTOP = "SEGMENTOP"
    CPOOLREF = "CPOOLREF"
    NEW = "NEW"
    INSERT = "INSERT"
    EXTRACT = "EXTRACT"
    POPCOUNT = "POPCOUNT"
    LZCOUNT = "LZCOUNT"


class HandleSelector(Enum):
    """Part of an operand handle a ``handle`` constant refers to."""

    SPACE = "space"
    OFFSET = "offset"
    SIZE = "size"
    OFFSET_PLUS = "offset_plus"


class ContextualKind(Enum):
    """Constants whose value is only known when an instruction is decoded."""

    START = "start"
    END = "end"
    NEXT = "next"
    NEXT2 = "next2"
    CURSPACE = "curspace"
    CURSPACE_SIZE = "curspace_size"
    FLOWREF = "flowref"
    FLOWDEST = "flowdest"
    FLOWDEST_SIZE = "flowdest_size"


@dataclass(frozen=True)
class ConstantTemplate:
    """Base class of ``const_tpl`` variants."""


@dataclass(frozen=True)
class RealConstant(ConstantTemplate):
    value: int


@dataclass(frozen=True)
class HandleConstant(ConstantTemplate):
    """A field of operand handle ``handle_index``, optionally offset by ``plus``."""

    handle_index: int
    selector: HandleSelector
    plus: Optional[int]


@dataclass(frozen=True)
class SpaceIdConstant(ConstantTemplate):
    name: str


@dataclass(frozen=True)
class RelativeConstant(ConstantTemplate):
    """Label-relative jump target."""

    value: int


@dataclass(frozen=True)
class ContextualConstant(ConstantTemplate):
    kind: ContextualKind


@dataclass(frozen=True)
class VarNodeTemplate:
    space: ConstantTemplate
    offset: ConstantTemplate
    size: ConstantTemplate


@dataclass(frozen=True)
class HandleTemplate:
    space: ConstantTemplate
    size: ConstantTemplate
    ptrspace: ConstantTemplate
    ptroffset: ConstantTemplate
    ptrsize: ConstantTemplate
    temp_space: ConstantTemplate
    temp_offset: ConstantTemplate


@dataclass(frozen=True)
class OperationTemplate:
    """One p-code operation; ``output`` is None for ``<null/>``."""

    opcode: OpCode
    output: Optional[VarNodeTemplate]
    inputs: Tuple[VarNodeTemplate, ...]


@dataclass(frozen=True)
class ConstructorTemplate:
    """P-code body of a constructor.

    The primary template has no ``section``; named templates carry the index
    of the section they belong to.
    """

    section: Optional[int]
    delay: Optional[int]
    labels: Optional[int]
    result: Optional[HandleTemplate]
    operations: Tuple[OperationTemplate, ...]

    @property
    def is_named(self) -> bool:
        return self.section is not None
