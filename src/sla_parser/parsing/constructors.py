"""Parser for ``constructor`` elements."""

import re
from typing import List, Optional

from sla_parser.model.constructors import (
    Constructor,
    ContextChange,
    ContextCommit,
    ContextOperation,
    OperandPrint,
    PrintPiece,
    PrintText,
    SourceLocation,
)
from sla_parser.model.templates import ConstructorTemplate
from sla_parser.scanning import Tag
from sla_parser.shared.errors import CardinalityError

from .context import ParseContext
from .expressions import read_pattern_expression
from .templates import parse_constructor_template

LINE_PATTERN = re.compile(r"(-?[0-9]+)(?::(-?[0-9]+))?")

CONSTRUCTOR_CHILD_TAGS = frozenset({
    "oper", "print", "opprint", "context_op", "commit", "construct_tpl",
})


def parse_source_location(match: "re.Match[str]") -> SourceLocation:
    line, column = match.groups()
    return SourceLocation(int(line), None if column is None else int(column))


def _parse_operand_reference(context: ParseContext, tag: Tag) -> int:
    attrs = context.attributes(tag)
    symbol_id = attrs.hex("id")
    attrs.finish()
    context.close(tag)
    return symbol_id


def _parse_print(context: ParseContext, tag: Tag) -> PrintText:
    attrs = context.attributes(tag)
    piece = PrintText(attrs.text("piece"))
    attrs.finish()
    context.close(tag)
    return piece


def _parse_operand_print(context: ParseContext, tag: Tag) -> OperandPrint:
    attrs = context.attributes(tag)
    piece = OperandPrint(attrs.dec("id"))
    attrs.finish()
    context.close(tag)
    return piece


def parse_context_operation(context: ParseContext, tag: Tag) -> ContextOperation:
    """Parse a ``context_op`` and its single expression child."""
    attrs = context.attributes(tag)
    word_index = attrs.dec("i")
    shift = attrs.dec("shift")
    mask = attrs.hex("mask")
    attrs.finish()
    expression = read_pattern_expression(context, tag)
    context.close(tag)
    return ContextOperation(word_index, shift, mask, expression)


def parse_context_commit(context: ParseContext, tag: Tag) -> ContextCommit:
    attrs = context.attributes(tag)
    commit = ContextCommit(
        symbol_id=attrs.hex("id"),
        word_index=attrs.dec("num"),
        mask=attrs.hex("mask"),
        flow=attrs.flag("flow"),
    )
    attrs.finish()
    context.close(tag)
    return commit


def parse_constructor(context: ParseContext, tag: Tag) -> Constructor:
    """Parse a ``constructor`` element.

    Children are grouped by kind and may appear in any interleaving; each
    group keeps document order. A ``construct_tpl`` without a ``section``
    attribute is the primary template, of which there is at most one.

    Raises:
        CardinalityError: If more than one primary template is present
    """
    attrs = context.attributes(tag)
    parent = attrs.hex("parent")
    first = attrs.dec("first")
    length = attrs.dec("length")
    location = parse_source_location(
        attrs.pattern("line", LINE_PATTERN, "line or line:column")
    )
    attrs.finish()

    operands: List[int] = []
    print_pieces: List[PrintPiece] = []
    context_changes: List[ContextChange] = []
    template: Optional[ConstructorTemplate] = None
    named_templates: List[ConstructorTemplate] = []

    while context.has_child(tag):
        child = context.read_tag(CONSTRUCTOR_CHILD_TAGS)
        if child.name == "oper":
            operands.append(_parse_operand_reference(context, child))
        elif child.name == "print":
            print_pieces.append(_parse_print(context, child))
        elif child.name == "opprint":
            print_pieces.append(_parse_operand_print(context, child))
        elif child.name == "context_op":
            context_changes.append(parse_context_operation(context, child))
        elif child.name == "commit":
            context_changes.append(parse_context_commit(context, child))
        else:
            parsed = parse_constructor_template(context, child)
            if parsed.is_named:
                named_templates.append(parsed)
            elif template is not None:
                raise CardinalityError(
                    tag.name,
                    "more than one construct_tpl without a section",
                    context.position(child.offset),
                )
            else:
                template = parsed
    context.close(tag)

    context.constructors_parsed += 1
    return Constructor(
        parent=parent,
        first=first,
        length=length,
        location=location,
        operands=tuple(operands),
        print_pieces=tuple(print_pieces),
        context_changes=tuple(context_changes),
        template=template,
        named_templates=tuple(named_templates),
    )
