"""Pattern expression tree.

Leaves extract bits from the instruction stream or the context register, or
stand for constants and instruction addresses. Internal nodes combine them
with arithmetic and bitwise operators. Trees can be nested thousands of
levels deep, so every walker here is iterative.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple


class BinaryOperator(Enum):
    """Binary operators, valued by their element name."""

    ADD = "plus_exp"
    SUB = "sub_exp"
    MULT = "mult_exp"
    LEFT_SHIFT = "lshift_exp"
    RIGHT_SHIFT = "rshift_exp"
    AND = "and_exp"
    OR = "or_exp"
    XOR = "xor_exp"
    DIV = "div_exp"


class UnaryOperator(Enum):
    """Unary operators, valued by their element name."""

    MINUS = "minus_exp"
    NOT = "not_exp"


@dataclass(frozen=True, eq=False, repr=False)
class PatternExpression:
    """Base class of every pattern expression node.

    Equality, hashing and ``repr`` walk the tree with explicit stacks, so
    they work on trees of any depth.
    """

    def children(self) -> Tuple["PatternExpression", ...]:
        return ()

    def _attributes(self) -> Tuple[Any, ...]:
        return tuple(
            getattr(self, f.name) for f in fields(self)
            if not isinstance(getattr(self, f.name), PatternExpression)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PatternExpression):
            return NotImplemented
        pending: List[Tuple[PatternExpression, PatternExpression]] = [(self, other)]
        while pending:
            left, right = pending.pop()
            if left is right:
                continue
            if type(left) is not type(right) or left._attributes() != right._attributes():
                return False
            pending.extend(zip(left.children(), right.children()))
        return True

    def __hash__(self) -> int:
        value = 0
        for node in self.iter_nodes():
            value = hash((value, type(node).__name__, node._attributes()))
        return value

    def __repr__(self) -> str:
        pieces: List[str] = []
        stack: List[Any] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                pieces.append(item)
                continue
            parts: List[Any] = [f"{type(item).__name__}("]
            for index, f in enumerate(fields(item)):
                value = getattr(item, f.name)
                parts.append(f"{', ' if index else ''}{f.name}=")
                parts.append(value if isinstance(value, PatternExpression) else repr(value))
            parts.append(")")
            stack.extend(reversed(parts))
        return "".join(pieces)

    def iter_nodes(self) -> Iterator["PatternExpression"]:
        """Yield this node and all descendants in pre-order, left to right."""
        stack: List[PatternExpression] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))

    def depth(self) -> int:
        """Return the number of nodes on the longest root-to-leaf path."""
        deepest = 0
        stack: List[Tuple[PatternExpression, int]] = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children())
        return deepest


@dataclass(frozen=True, eq=False, repr=False)
class PatternValue(PatternExpression):
    """Leaf of a pattern expression."""


@dataclass(frozen=True, eq=False, repr=False)
class TokenField(PatternValue):
    """Bit range extracted from an instruction token."""

    bigendian: bool
    signbit: bool
    bitstart: int
    bitend: int
    bytestart: int
    byteend: int
    shift: Optional[int]


@dataclass(frozen=True, eq=False, repr=False)
class ContextField(PatternValue):
    """Bit range extracted from the context register."""

    signbit: bool
    startbit: int
    endbit: int
    startbyte: int
    endbyte: int
    shift: Optional[int]


@dataclass(frozen=True, eq=False, repr=False)
class ConstantValue(PatternValue):
    value: int


@dataclass(frozen=True, eq=False, repr=False)
class OperandValue(PatternValue):
    """Reference to operand ``index`` of constructor ``constructor_id`` in table ``table_id``."""

    index: int
    table_id: int
    constructor_id: int


@dataclass(frozen=True, eq=False, repr=False)
class StartInstructionValue(PatternValue):
    """Address of the current instruction."""


@dataclass(frozen=True, eq=False, repr=False)
class EndInstructionValue(PatternValue):
    """Address following the current instruction."""


@dataclass(frozen=True, eq=False, repr=False)
class Next2InstructionValue(PatternValue):
    """Address following the next instruction."""


@dataclass(frozen=True, eq=False, repr=False)
class BinaryExpression(PatternExpression):
    operator: BinaryOperator
    left: PatternExpression
    right: PatternExpression

    def children(self) -> Tuple[PatternExpression, ...]:
        return (self.left, self.right)


@dataclass(frozen=True, eq=False, repr=False)
class UnaryExpression(PatternExpression):
    operator: UnaryOperator
    operand: PatternExpression

    def children(self) -> Tuple[PatternExpression, ...]:
        return (self.operand,)
