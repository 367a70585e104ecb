"""Parsers for p-code templates."""

from typing import List, Optional

from sla_parser.model.templates import (
    ConstantTemplate,
    ConstructorTemplate,
    ContextualConstant,
    ContextualKind,
    HandleConstant,
    HandleSelector,
    HandleTemplate,
    OpCode,
    OperationTemplate,
    RealConstant,
    RelativeConstant,
    SpaceIdConstant,
    VarNodeTemplate,
)
from sla_parser.scanning import Tag
from sla_parser.shared.errors import StructuralError

from .context import Attributes, ParseContext

CONST_TPL = frozenset({"const_tpl"})
VARNODE_TPL = frozenset({"varnode_tpl"})
OP_TPL = frozenset({"op_tpl"})
OUTPUT_TAGS = frozenset({"null", "varnode_tpl"})
RESULT_TAGS = frozenset({"null", "handle_tpl"})

CONTEXTUAL_TYPES = {kind.value: kind for kind in ContextualKind}
CONSTANT_TYPES = ("real", "handle", "spaceid", "relative") + tuple(CONTEXTUAL_TYPES)


def _attribute_position(context: ParseContext, tag: Tag, name: str):
    return context.position(tag.attribute_offsets.get(name, tag.offset))


def _handle_selector(context: ParseContext, tag: Tag, attrs: Attributes) -> HandleSelector:
    raw = attrs.text("s")
    try:
        return HandleSelector(raw)
    except ValueError:
        allowed = ", ".join(selector.value for selector in HandleSelector)
        raise StructuralError(
            f"handle selector ({allowed})", repr(raw), _attribute_position(context, tag, "s")
        ) from None


def parse_constant_template(context: ParseContext, tag: Tag) -> ConstantTemplate:
    """Parse a ``const_tpl`` element, dispatching on its ``type`` attribute."""
    attrs = context.attributes(tag)
    kind = attrs.text("type")
    constant: ConstantTemplate
    if kind == "real":
        constant = RealConstant(attrs.hex("val"))
    elif kind == "handle":
        constant = HandleConstant(
            handle_index=attrs.dec("val"),
            selector=_handle_selector(context, tag, attrs),
            plus=attrs.opt_hex("plus"),
        )
    elif kind == "spaceid":
        constant = SpaceIdConstant(attrs.text("name"))
    elif kind == "relative":
        constant = RelativeConstant(attrs.hex("val"))
    elif kind in CONTEXTUAL_TYPES:
        constant = ContextualConstant(CONTEXTUAL_TYPES[kind])
    else:
        raise StructuralError(
            "const_tpl type (" + ", ".join(CONSTANT_TYPES) + ")",
            repr(kind),
            _attribute_position(context, tag, "type"),
        )
    attrs.finish()
    context.close(tag)
    return constant


def _read_constants(context: ParseContext, parent: Tag, count: int) -> List[ConstantTemplate]:
    constants = []
    for index in range(count):
        child = context.require_child(
            parent,
            CONST_TPL,
            f"expected {count} <const_tpl> children, found {index}",
        )
        constants.append(parse_constant_template(context, child))
    return constants


def parse_varnode_template(context: ParseContext, tag: Tag) -> VarNodeTemplate:
    context.attributes(tag).finish()
    space, offset, size = _read_constants(context, tag, 3)
    context.close(tag)
    return VarNodeTemplate(space, offset, size)


def parse_handle_template(context: ParseContext, tag: Tag) -> HandleTemplate:
    context.attributes(tag).finish()
    template = HandleTemplate(*_read_constants(context, tag, 7))
    context.close(tag)
    return template


def _parse_null(context: ParseContext, tag: Tag) -> None:
    context.attributes(tag).finish()
    context.close(tag)


def parse_operation_template(context: ParseContext, tag: Tag) -> OperationTemplate:
    """Parse an ``op_tpl``: the output (or ``<null/>``) then the inputs."""
    attrs = context.attributes(tag)
    code = attrs.text("code")
    try:
        opcode = OpCode(code)
    except ValueError:
        raise StructuralError(
            "a p-code operation name", repr(code), _attribute_position(context, tag, "code")
        ) from None
    attrs.finish()

    first = context.require_child(tag, OUTPUT_TAGS)
    output: Optional[VarNodeTemplate] = None
    if first.name == "null":
        _parse_null(context, first)
    else:
        output = parse_varnode_template(context, first)

    inputs = []
    while context.has_child(tag):
        child = context.read_tag(VARNODE_TPL)
        inputs.append(parse_varnode_template(context, child))
    context.close(tag)
    return OperationTemplate(opcode, output, tuple(inputs))


def parse_constructor_template(context: ParseContext, tag: Tag) -> ConstructorTemplate:
    """Parse a ``construct_tpl``: the result (or ``<null/>``) then the operations."""
    attrs = context.attributes(tag)
    section = attrs.opt_dec("section")
    delay = attrs.opt_dec("delay")
    labels = attrs.opt_dec("labels")
    attrs.finish()

    first = context.require_child(tag, RESULT_TAGS)
    result: Optional[HandleTemplate] = None
    if first.name == "null":
        _parse_null(context, first)
    else:
        result = parse_handle_template(context, first)

    operations = []
    while context.has_child(tag):
        child = context.read_tag(OP_TPL)
        operations.append(parse_operation_template(context, child))
    context.close(tag)
    return ConstructorTemplate(section, delay, labels, result, tuple(operations))
