"""Parsers for the document root, source files and address spaces."""

from typing import List, Optional

from sla_parser.model.document import (
    AddressSpace,
    AddressSpaceEntry,
    Document,
    SourceFile,
    SpaceKind,
    SpaceTable,
)
from sla_parser.model.symbols import SymbolTable
from sla_parser.scanning import SPACE_TAGS, Tag
from sla_parser.shared.errors import CardinalityError

from .context import ParseContext
from .symbols import parse_symbol_table

ROOT_TAG = "sleigh"
SLEIGH_CHILD_TAGS = frozenset({"sourcefiles", "spaces", "symbol_table"})
SOURCEFILE = frozenset({"sourcefile"})


def parse_source_file(context: ParseContext, tag: Tag) -> SourceFile:
    attrs = context.attributes(tag)
    source_file = SourceFile(name=attrs.text("name"), index=attrs.dec("index"))
    attrs.finish()
    context.close(tag)
    return source_file


def parse_source_files(context: ParseContext, tag: Tag) -> List[SourceFile]:
    context.attributes(tag).finish()
    files = []
    while context.has_child(tag):
        files.append(parse_source_file(context, context.read_tag(SOURCEFILE)))
    context.close(tag)
    return files


def parse_address_space(context: ParseContext, tag: Tag) -> AddressSpaceEntry:
    """Parse one space element; the tag name selects the space's role."""
    attrs = context.attributes(tag)
    space = AddressSpace(
        name=attrs.text("name"),
        index=attrs.dec("index"),
        bigendian=attrs.flag("bigendian"),
        delay=attrs.dec("delay"),
        deadcodedelay=attrs.opt_dec("deadcodedelay"),
        size=attrs.dec("size"),
        wordsize=attrs.opt_dec("wordsize"),
        physical=attrs.flag("physical"),
    )
    attrs.finish()
    context.close(tag)
    return AddressSpaceEntry(SpaceKind(tag.name), space)


def parse_space_table(context: ParseContext, tag: Tag) -> SpaceTable:
    attrs = context.attributes(tag)
    default_space = attrs.text("defaultspace")
    attrs.finish()
    spaces = []
    while context.has_child(tag):
        spaces.append(parse_address_space(context, context.read_tag(SPACE_TAGS)))
    context.close(tag)
    context.logger.debug("Parsed space table", extra={"spaces": len(spaces)})
    return SpaceTable(default_space, tuple(spaces))


def parse_sleigh(context: ParseContext, tag: Tag) -> Document:
    """Parse the ``sleigh`` root element.

    ``sourcefiles`` is optional; ``spaces`` and ``symbol_table`` must each
    appear exactly once. The three may come in any order.

    Raises:
        CardinalityError: If a section is missing or repeated
    """
    attrs = context.attributes(tag)
    version = attrs.opt_dec("version")
    bigendian = attrs.flag("bigendian")
    align = attrs.dec("align")
    uniqbase = attrs.hex("uniqbase")
    maxdelay = attrs.opt_hex("maxdelay")
    uniqmask = attrs.opt_hex("uniqmask")
    numsections = attrs.opt_hex("numsections")
    attrs.finish()

    source_files: Optional[List[SourceFile]] = None
    spaces: Optional[SpaceTable] = None
    symbol_table: Optional[SymbolTable] = None
    while context.has_child(tag):
        child = context.read_tag(SLEIGH_CHILD_TAGS)
        seen = {
            "sourcefiles": source_files,
            "spaces": spaces,
            "symbol_table": symbol_table,
        }[child.name]
        if seen is not None:
            raise CardinalityError(
                tag.name,
                f"more than one <{child.name}> child",
                context.position(child.offset),
            )
        if child.name == "sourcefiles":
            source_files = parse_source_files(context, child)
        elif child.name == "spaces":
            spaces = parse_space_table(context, child)
        else:
            symbol_table = parse_symbol_table(context, child)

    for name, section in (("spaces", spaces), ("symbol_table", symbol_table)):
        if section is None:
            raise CardinalityError(
                tag.name, f"missing required child <{name}>", context.position()
            )
    context.close(tag)

    return Document(
        version=version,
        bigendian=bigendian,
        align=align,
        uniqbase=uniqbase,
        maxdelay=maxdelay,
        uniqmask=uniqmask,
        numsections=numsections,
        source_files=tuple(source_files or ()),
        spaces=spaces,
        symbol_table=symbol_table,
    )


def parse_document(context: ParseContext) -> Document:
    """Parse a complete document from the context's input.

    Skips an optional XML declaration when the configuration allows it,
    parses the root element and requires that only whitespace follows.
    """
    if context.config.allow_xml_declaration:
        context.scanner.skip_declaration()
    root = context.read_tag({ROOT_TAG})
    document = parse_sleigh(context, root)
    context.scanner.expect_end_of_input()
    return document
