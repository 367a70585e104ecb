"""Parsers for pattern expressions.

Expression trees are built with an explicit stack of open operator elements
so nesting depth is limited by memory, not by the interpreter's recursion
limit.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List

from sla_parser.model.expressions import (
    BinaryExpression,
    BinaryOperator,
    ConstantValue,
    ContextField,
    EndInstructionValue,
    Next2InstructionValue,
    OperandValue,
    PatternExpression,
    PatternValue,
    StartInstructionValue,
    TokenField,
    UnaryExpression,
    UnaryOperator,
)
from sla_parser.scanning import (
    BINARY_EXPRESSION_TAGS,
    PATTERN_EXPRESSION_TAGS,
    PATTERN_VALUE_TAGS,
    Tag,
)

from .context import ParseContext


def parse_token_field(context: ParseContext, tag: Tag) -> TokenField:
    attrs = context.attributes(tag)
    value = TokenField(
        bigendian=attrs.flag("bigendian"),
        signbit=attrs.flag("signbit"),
        bitstart=attrs.dec("bitstart"),
        bitend=attrs.dec("bitend"),
        bytestart=attrs.dec("bytestart"),
        byteend=attrs.dec("byteend"),
        shift=attrs.opt_dec("shift"),
    )
    attrs.finish()
    context.close(tag)
    return value


def parse_context_field(context: ParseContext, tag: Tag) -> ContextField:
    attrs = context.attributes(tag)
    value = ContextField(
        signbit=attrs.flag("signbit"),
        startbit=attrs.dec("startbit"),
        endbit=attrs.dec("endbit"),
        startbyte=attrs.dec("startbyte"),
        endbyte=attrs.dec("endbyte"),
        shift=attrs.opt_dec("shift"),
    )
    attrs.finish()
    context.close(tag)
    return value


def parse_constant_value(context: ParseContext, tag: Tag) -> ConstantValue:
    attrs = context.attributes(tag)
    value = ConstantValue(attrs.dec("val"))
    attrs.finish()
    context.close(tag)
    return value


def parse_operand_value(context: ParseContext, tag: Tag) -> OperandValue:
    attrs = context.attributes(tag)
    value = OperandValue(
        index=attrs.dec("index"),
        table_id=attrs.hex("table"),
        constructor_id=attrs.hex("ct"),
    )
    attrs.finish()
    context.close(tag)
    return value


def _marker(value_type: Callable[[], PatternValue]) -> Callable[[ParseContext, Tag], PatternValue]:
    def parse_marker(context: ParseContext, tag: Tag) -> PatternValue:
        context.attributes(tag).finish()
        context.close(tag)
        return value_type()

    return parse_marker


PATTERN_VALUE_PARSERS: Dict[str, Callable[[ParseContext, Tag], PatternValue]] = {
    "tokenfield": parse_token_field,
    "contextfield": parse_context_field,
    "intb": parse_constant_value,
    "operand_exp": parse_operand_value,
    "start_exp": _marker(StartInstructionValue),
    "end_exp": _marker(EndInstructionValue),
    "next2_exp": _marker(Next2InstructionValue),
}


def parse_pattern_value(context: ParseContext, tag: Tag) -> PatternValue:
    """Parse a leaf expression element already read as ``tag``."""
    return PATTERN_VALUE_PARSERS[tag.name](context, tag)


def read_pattern_value(context: ParseContext, parent: Tag) -> PatternValue:
    """Read the mandatory pattern value child of ``parent``."""
    tag = context.require_child(parent, PATTERN_VALUE_TAGS)
    return parse_pattern_value(context, tag)


@dataclass
class _OperatorFrame:
    """An operator element whose operands are still being read."""

    tag: Tag
    arity: int
    operands: List[PatternExpression] = field(default_factory=list)

    def build(self) -> PatternExpression:
        if self.arity == 2:
            left, right = self.operands
            return BinaryExpression(BinaryOperator(self.tag.name), left, right)
        return UnaryExpression(UnaryOperator(self.tag.name), self.operands[0])


def parse_pattern_expression(context: ParseContext, tag: Tag) -> PatternExpression:
    """Parse the expression rooted at ``tag``.

    Operands are taken in document order: the first child of a binary
    operator is its left operand.

    Args:
        context: Parse context positioned just after ``tag``
        tag: Start tag of the expression root

    Returns:
        The complete expression tree

    Raises:
        CardinalityError: If an operator has too few operands
        StructuralError: If an operator has too many operands or a child is
            not an expression element
    """
    stack: List[_OperatorFrame] = []
    current = tag
    while True:
        if current.name in PATTERN_VALUE_TAGS:
            result = parse_pattern_value(context, current)
        else:
            context.attributes(current).finish()
            arity = 2 if current.name in BINARY_EXPRESSION_TAGS else 1
            frame = _OperatorFrame(current, arity)
            stack.append(frame)
            current = context.require_child(
                current, PATTERN_EXPRESSION_TAGS, _operand_detail(frame)
            )
            continue

        # Hand the finished subtree to the innermost open operator, closing
        # every operator that becomes complete.
        while True:
            if not stack:
                return result
            frame = stack[-1]
            frame.operands.append(result)
            if len(frame.operands) < frame.arity:
                current = context.require_child(
                    frame.tag, PATTERN_EXPRESSION_TAGS, _operand_detail(frame)
                )
                break
            context.close(frame.tag)
            stack.pop()
            result = frame.build()


def read_pattern_expression(context: ParseContext, parent: Tag) -> PatternExpression:
    """Read the mandatory expression child of ``parent``."""
    tag = context.require_child(parent, PATTERN_EXPRESSION_TAGS)
    return parse_pattern_expression(context, tag)


def _operand_detail(frame: _OperatorFrame) -> str:
    noun = "operand" if frame.arity == 1 else "operands"
    return f"expected {frame.arity} {noun}, found {len(frame.operands)}"
