"""Parsers for the symbol table, symbol headers and symbols."""

from typing import Callable, Dict, List, Optional, Tuple

from sla_parser.model.constructors import Constructor
from sla_parser.model.patterns import DecisionNode
from sla_parser.model.symbols import (
    ContextSymbol,
    EndSymbol,
    EpsilonSymbol,
    FlowDestSymbol,
    FlowRefSymbol,
    NameSymbol,
    Next2Symbol,
    OperandSymbol,
    Scope,
    StartSymbol,
    SubtableSymbol,
    Symbol,
    SymbolHeader,
    SymbolHeaderKind,
    SymbolTable,
    UserOpSymbol,
    ValueMapSymbol,
    ValueSymbol,
    VarNodeListSymbol,
    VarNodeSymbol,
)
from sla_parser.scanning import (
    PATTERN_EXPRESSION_TAGS,
    SYMBOL_HEADER_TAGS,
    SYMBOL_TAGS,
    Tag,
)
from sla_parser.shared.errors import CardinalityError

from .context import Attributes, ParseContext
from .constructors import parse_constructor
from .expressions import (
    parse_operand_value,
    parse_pattern_expression,
    read_pattern_value,
)
from .patterns import parse_decision_tree

SYMBOL_TABLE_CHILD_TAGS = frozenset({"scope"}) | SYMBOL_HEADER_TAGS | SYMBOL_TAGS
SUBTABLE_CHILD_TAGS = frozenset({"constructor", "decision"})
VALUETAB = frozenset({"valuetab"})
NAMETAB = frozenset({"nametab"})
VARLIST_CHILD_TAGS = frozenset({"var", "null"})
OPERAND_EXP = frozenset({"operand_exp"})


def parse_scope(context: ParseContext, tag: Tag) -> Scope:
    attrs = context.attributes(tag)
    scope = Scope(id=attrs.hex("id"), parent=attrs.hex("parent"))
    attrs.finish()
    context.close(tag)
    return scope


def parse_symbol_header(context: ParseContext, tag: Tag) -> SymbolHeader:
    attrs = context.attributes(tag)
    header = SymbolHeader(
        kind=SymbolHeaderKind.from_header_tag(tag.name),
        name=attrs.text("name"),
        id=attrs.hex("id"),
        scope=attrs.hex("scope"),
    )
    attrs.finish()
    context.close(tag)
    return header


def _identity(attrs: Attributes) -> Tuple[str, int, int]:
    return attrs.text("name"), attrs.hex("id"), attrs.hex("scope")


def _parse_user_op(context: ParseContext, tag: Tag) -> UserOpSymbol:
    attrs = context.attributes(tag)
    symbol = UserOpSymbol(*_identity(attrs), index=attrs.dec("index"))
    attrs.finish()
    context.close(tag)
    return symbol


def _plain_symbol(symbol_type: Callable[..., Symbol]) -> Callable[[ParseContext, Tag], Symbol]:
    def parse_plain(context: ParseContext, tag: Tag) -> Symbol:
        attrs = context.attributes(tag)
        symbol = symbol_type(*_identity(attrs))
        attrs.finish()
        context.close(tag)
        return symbol

    return parse_plain


def _parse_value(context: ParseContext, tag: Tag) -> ValueSymbol:
    attrs = context.attributes(tag)
    identity = _identity(attrs)
    attrs.finish()
    patval = read_pattern_value(context, tag)
    context.close(tag)
    return ValueSymbol(*identity, patval=patval)


def _parse_value_table_entry(context: ParseContext, tag: Tag) -> int:
    attrs = context.attributes(tag)
    value = attrs.dec("val")
    attrs.finish()
    context.close(tag)
    return value


def _parse_value_map(context: ParseContext, tag: Tag) -> ValueMapSymbol:
    attrs = context.attributes(tag)
    identity = _identity(attrs)
    attrs.finish()
    patval = read_pattern_value(context, tag)
    values = []
    while context.has_child(tag):
        values.append(_parse_value_table_entry(context, context.read_tag(VALUETAB)))
    context.close(tag)
    return ValueMapSymbol(*identity, patval=patval, values=tuple(values))


def _parse_name_table_entry(context: ParseContext, tag: Tag) -> Optional[str]:
    attrs = context.attributes(tag)
    name = attrs.opt_text("name")
    attrs.finish()
    context.close(tag)
    return name


def _parse_name(context: ParseContext, tag: Tag) -> NameSymbol:
    attrs = context.attributes(tag)
    identity = _identity(attrs)
    attrs.finish()
    patval = read_pattern_value(context, tag)
    names = []
    while context.has_child(tag):
        names.append(_parse_name_table_entry(context, context.read_tag(NAMETAB)))
    context.close(tag)
    return NameSymbol(*identity, patval=patval, names=tuple(names))


def _parse_context(context: ParseContext, tag: Tag) -> ContextSymbol:
    attrs = context.attributes(tag)
    identity = _identity(attrs)
    varnode = attrs.hex("varnode")
    low = attrs.dec("low")
    high = attrs.dec("high")
    flow = attrs.flag("flow")
    attrs.finish()
    patval = read_pattern_value(context, tag)
    context.close(tag)
    return ContextSymbol(
        *identity, patval=patval, varnode=varnode, low=low, high=high, flow=flow
    )


def _parse_varlist_entry(context: ParseContext, tag: Tag) -> Optional[int]:
    attrs = context.attributes(tag)
    symbol_id = attrs.hex("id") if tag.name == "var" else None
    attrs.finish()
    context.close(tag)
    return symbol_id


def _parse_varlist(context: ParseContext, tag: Tag) -> VarNodeListSymbol:
    attrs = context.attributes(tag)
    identity = _identity(attrs)
    attrs.finish()
    patval = read_pattern_value(context, tag)
    varnodes = []
    while context.has_child(tag):
        varnodes.append(_parse_varlist_entry(context, context.read_tag(VARLIST_CHILD_TAGS)))
    context.close(tag)
    return VarNodeListSymbol(*identity, patval=patval, varnodes=tuple(varnodes))


def _parse_varnode(context: ParseContext, tag: Tag) -> VarNodeSymbol:
    attrs = context.attributes(tag)
    symbol = VarNodeSymbol(
        *_identity(attrs),
        space=attrs.text("space"),
        offset=attrs.hex("offset"),
        size=attrs.dec("size"),
    )
    attrs.finish()
    context.close(tag)
    return symbol


def _parse_operand(context: ParseContext, tag: Tag) -> OperandSymbol:
    """Parse an ``operand_sym``: its ``operand_exp``, then an optional defining expression."""
    attrs = context.attributes(tag)
    identity = _identity(attrs)
    subsym = attrs.opt_hex("subsym")
    off = attrs.dec("off")
    base = attrs.dec("base")
    minlen = attrs.dec("minlen")
    code = attrs.opt_flag("code")
    index = attrs.dec("index")
    attrs.finish()

    localexp = parse_operand_value(context, context.require_child(tag, OPERAND_EXP))
    defexp = None
    child = context.optional_child(tag, PATTERN_EXPRESSION_TAGS)
    if child is not None:
        defexp = parse_pattern_expression(context, child)
    context.close(tag)
    return OperandSymbol(
        *identity,
        subsym=subsym,
        off=off,
        base=base,
        minlen=minlen,
        code=code,
        index=index,
        localexp=localexp,
        defexp=defexp,
    )


def _parse_subtable(context: ParseContext, tag: Tag) -> SubtableSymbol:
    """Parse a ``subtable_sym``: its constructors and exactly one decision tree."""
    attrs = context.attributes(tag)
    identity = _identity(attrs)
    numct = attrs.dec("numct")
    attrs.finish()

    constructors: List[Constructor] = []
    decision_tree: Optional[DecisionNode] = None
    while context.has_child(tag):
        child = context.read_tag(SUBTABLE_CHILD_TAGS)
        if child.name == "constructor":
            constructors.append(parse_constructor(context, child))
        elif decision_tree is not None:
            raise CardinalityError(
                tag.name, "more than one <decision> child", context.position(child.offset)
            )
        else:
            decision_tree = parse_decision_tree(context, child)
    if decision_tree is None:
        raise CardinalityError(
            tag.name, "missing required child <decision>", context.position()
        )
    context.close(tag)
    return SubtableSymbol(
        *identity,
        numct=numct,
        constructors=tuple(constructors),
        decision_tree=decision_tree,
    )


SYMBOL_PARSERS: Dict[str, Callable[[ParseContext, Tag], Symbol]] = {
    "userop": _parse_user_op,
    "epsilon_sym": _plain_symbol(EpsilonSymbol),
    "value_sym": _parse_value,
    "valuemap_sym": _parse_value_map,
    "name_sym": _parse_name,
    "varnode_sym": _parse_varnode,
    "context_sym": _parse_context,
    "varlist_sym": _parse_varlist,
    "operand_sym": _parse_operand,
    "start_sym": _plain_symbol(StartSymbol),
    "end_sym": _plain_symbol(EndSymbol),
    "next2_sym": _plain_symbol(Next2Symbol),
    "flowdest_sym": _plain_symbol(FlowDestSymbol),
    "flowref_sym": _plain_symbol(FlowRefSymbol),
    "subtable_sym": _parse_subtable,
}


def parse_symbol(context: ParseContext, tag: Tag) -> Symbol:
    """Parse one symbol element, dispatching on its tag name."""
    symbol = SYMBOL_PARSERS[tag.name](context, tag)
    context.symbols_parsed += 1
    return symbol


def parse_symbol_table(context: ParseContext, tag: Tag) -> SymbolTable:
    """Parse a ``symbol_table`` element.

    Scopes, headers and symbols may be interleaved; each group keeps
    document order.

    Raises:
        CardinalityError: If the header count differs from the symbol count
    """
    attrs = context.attributes(tag)
    scopesize = attrs.dec("scopesize")
    symbolsize = attrs.dec("symbolsize")
    attrs.finish()

    scopes: List[Scope] = []
    headers: List[SymbolHeader] = []
    symbols: List[Symbol] = []
    while context.has_child(tag):
        child = context.read_tag(SYMBOL_TABLE_CHILD_TAGS)
        if child.name == "scope":
            scopes.append(parse_scope(context, child))
        elif child.name in SYMBOL_HEADER_TAGS:
            headers.append(parse_symbol_header(context, child))
        else:
            symbols.append(parse_symbol(context, child))
    end_offset = context.scanner.pos

    if len(headers) != len(symbols):
        raise CardinalityError(
            tag.name,
            f"{len(headers)} symbol headers but {len(symbols)} symbols",
            context.position(end_offset),
        )
    context.close(tag)
    context.logger.debug(
        "Parsed symbol table",
        extra={"scopes": len(scopes), "symbols": len(symbols)},
    )
    return SymbolTable(
        scopesize=scopesize,
        symbolsize=symbolsize,
        scopes=tuple(scopes),
        headers=tuple(headers),
        symbols=tuple(symbols),
    )
