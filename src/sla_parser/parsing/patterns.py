"""Parsers for disjoint patterns and decision trees."""

from dataclasses import dataclass, field
from typing import List

from sla_parser.model.patterns import (
    CombinePattern,
    ContextPattern,
    DecisionNode,
    DecisionPair,
    DisjointPattern,
    InstructionPattern,
    MaskWord,
    PatternBlock,
)
from sla_parser.scanning import DISJOINT_PATTERN_TAGS, Tag

from .context import ParseContext

MASK_WORD = frozenset({"mask_word"})
PAT_BLOCK = frozenset({"pat_block"})
CONTEXT_PAT = frozenset({"context_pat"})
INSTRUCT_PAT = frozenset({"instruct_pat"})
DECISION_CHILD_TAGS = frozenset({"pair", "decision"})


def parse_mask_word(context: ParseContext, tag: Tag) -> MaskWord:
    attrs = context.attributes(tag)
    word = MaskWord(mask=attrs.hex("mask"), value=attrs.hex("val"))
    attrs.finish()
    context.close(tag)
    return word


def parse_pattern_block(context: ParseContext, tag: Tag) -> PatternBlock:
    attrs = context.attributes(tag)
    offset = attrs.dec("offset")
    nonzero = attrs.dec("nonzero")
    attrs.finish()
    words = []
    while context.has_child(tag):
        words.append(parse_mask_word(context, context.read_tag(MASK_WORD)))
    context.close(tag)
    return PatternBlock(offset, nonzero, tuple(words))


def _read_block(context: ParseContext, tag: Tag) -> PatternBlock:
    context.attributes(tag).finish()
    block = parse_pattern_block(context, context.require_child(tag, PAT_BLOCK))
    context.close(tag)
    return block


def parse_instruction_pattern(context: ParseContext, tag: Tag) -> InstructionPattern:
    return InstructionPattern(_read_block(context, tag))


def parse_context_pattern(context: ParseContext, tag: Tag) -> ContextPattern:
    return ContextPattern(_read_block(context, tag))


def parse_combine_pattern(context: ParseContext, tag: Tag) -> CombinePattern:
    """Parse a ``combine_pat``: the context pattern, then the instruction pattern."""
    context.attributes(tag).finish()
    context_part = parse_context_pattern(context, context.require_child(tag, CONTEXT_PAT))
    instruction_part = parse_instruction_pattern(
        context, context.require_child(tag, INSTRUCT_PAT)
    )
    context.close(tag)
    return CombinePattern(context_part, instruction_part)


DISJOINT_PATTERN_PARSERS = {
    "instruct_pat": parse_instruction_pattern,
    "context_pat": parse_context_pattern,
    "combine_pat": parse_combine_pattern,
}


def parse_disjoint_pattern(context: ParseContext, tag: Tag) -> DisjointPattern:
    return DISJOINT_PATTERN_PARSERS[tag.name](context, tag)


def parse_decision_pair(context: ParseContext, tag: Tag) -> DecisionPair:
    attrs = context.attributes(tag)
    constructor_id = attrs.dec("id")
    attrs.finish()
    pattern = parse_disjoint_pattern(
        context, context.require_child(tag, DISJOINT_PATTERN_TAGS)
    )
    context.close(tag)
    return DecisionPair(constructor_id, pattern)


@dataclass
class _DecisionFrame:
    """A ``decision`` element whose children are still being read."""

    tag: Tag
    number: int
    context: bool
    start: int
    size: int
    pairs: List[DecisionPair] = field(default_factory=list)
    children: List[DecisionNode] = field(default_factory=list)

    def build(self) -> DecisionNode:
        return DecisionNode(
            number=self.number,
            context=self.context,
            start=self.start,
            size=self.size,
            pairs=tuple(self.pairs),
            children=tuple(self.children),
        )


def _open_decision(context: ParseContext, tag: Tag) -> _DecisionFrame:
    attrs = context.attributes(tag)
    frame = _DecisionFrame(
        tag=tag,
        number=attrs.dec("number"),
        context=attrs.flag("context"),
        start=attrs.dec("start"),
        size=attrs.dec("size"),
    )
    attrs.finish()
    return frame


def parse_decision_tree(context: ParseContext, tag: Tag) -> DecisionNode:
    """Parse the decision tree rooted at ``tag``.

    Pairs and child nodes may be interleaved; each keeps its document order.
    Nested ``decision`` elements are tracked on an explicit stack so the
    tree may be arbitrarily deep.
    """
    stack = [_open_decision(context, tag)]
    while True:
        frame = stack[-1]
        if context.has_child(frame.tag):
            child = context.read_tag(DECISION_CHILD_TAGS)
            if child.name == "pair":
                frame.pairs.append(parse_decision_pair(context, child))
            else:
                stack.append(_open_decision(context, child))
            continue

        context.close(frame.tag)
        stack.pop()
        node = frame.build()
        if not stack:
            return node
        stack[-1].children.append(node)
