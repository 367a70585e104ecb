"""Disjoint bit patterns and the decision tree that selects constructors."""

from dataclasses import dataclass
from typing import Any, Iterator, List, Tuple


@dataclass(frozen=True)
class MaskWord:
    """One word of a bit pattern: the bits selected by ``mask`` must equal ``value``."""

    mask: int
    value: int


@dataclass(frozen=True)
class PatternBlock:
    offset: int
    nonzero: int
    words: Tuple[MaskWord, ...]


@dataclass(frozen=True)
class DisjointPattern:
    """Base class of ``instruct_pat``, ``context_pat`` and ``combine_pat``."""


@dataclass(frozen=True)
class InstructionPattern(DisjointPattern):
    block: PatternBlock


@dataclass(frozen=True)
class ContextPattern(DisjointPattern):
    block: PatternBlock


@dataclass(frozen=True)
class CombinePattern(DisjointPattern):
    context: ContextPattern
    instruction: InstructionPattern


@dataclass(frozen=True)
class DecisionPair:
    constructor_id: int
    pattern: DisjointPattern


@dataclass(frozen=True, eq=False, repr=False)
class DecisionNode:
    """Node of the constructor decision tree.

    Equality, hashing and ``repr`` are iterative, like the other walkers,
    so deep trees can be compared.

    Attributes:
        number: Node number assigned by the compiler
        context: True when the node tests context bits, False for instruction bits
        start: First bit tested
        size: Number of bits tested
        pairs: Constructor candidates tested at this node
        children: Subtrees indexed by the tested bit value, empty for leaves
    """

    number: int
    context: bool
    start: int
    size: int
    pairs: Tuple[DecisionPair, ...]
    children: Tuple["DecisionNode", ...]

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def _attributes(self) -> Tuple[Any, ...]:
        return (self.number, self.context, self.start, self.size, self.pairs, len(self.children))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecisionNode):
            return NotImplemented
        pending: List[Tuple[DecisionNode, DecisionNode]] = [(self, other)]
        while pending:
            left, right = pending.pop()
            if left is right:
                continue
            if left._attributes() != right._attributes():
                return False
            pending.extend(zip(left.children, right.children))
        return True

    def __hash__(self) -> int:
        value = 0
        for node in self.iter_nodes():
            value = hash((value, node._attributes()))
        return value

    def __repr__(self) -> str:
        pieces: List[str] = []
        stack: List[Any] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                pieces.append(item)
                continue
            parts: List[Any] = [
                f"DecisionNode(number={item.number!r}, context={item.context!r}, "
                f"start={item.start!r}, size={item.size!r}, pairs={item.pairs!r}, children=("
            ]
            for index, child in enumerate(item.children):
                if index:
                    parts.append(", ")
                parts.append(child)
            parts.append(",))" if len(item.children) == 1 else "))")
            stack.extend(reversed(parts))
        return "".join(pieces)

    def iter_nodes(self) -> Iterator["DecisionNode"]:
        """Yield this node and all descendants in pre-order."""
        stack: List[DecisionNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def depth(self) -> int:
        deepest = 0
        stack: List[Tuple[DecisionNode, int]] = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children)
        return deepest
