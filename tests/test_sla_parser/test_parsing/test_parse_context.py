"""Tests for the parse context and attribute reader."""

import re

import pytest

from sla_parser.parsing import ParseContext
from sla_parser.shared.config import ParserConfig
from sla_parser.shared.errors import (
    CardinalityError,
    EncodingError,
    MissingAttributeError,
    StructuralError,
)


def _context(text, **overrides):
    context = ParseContext.from_text(text, ParserConfig(**overrides))
    return context, context.read_tag()


class TestAttributes:
    """Test typed attribute access."""

    def test_typed_readers(self):
        """Test each encoding convention."""
        context, tag = _context('<scope id="0x1f" parent="12"/>')
        attrs = context.attributes(tag)

        assert attrs.hex("id") == 0x1F
        assert attrs.dec("parent") == 12

    def test_optional_readers(self):
        """Test that absent optional attributes are None."""
        context, tag = _context("<null/>")
        attrs = context.attributes(tag)

        assert attrs.opt_dec("a") is None
        assert attrs.opt_hex("b") is None
        assert attrs.opt_flag("c") is None
        assert attrs.opt_text("d") is None

    def test_text_is_unescaped(self):
        """Test that string attributes are entity-unescaped."""
        context, tag = _context('<print piece="&lt;&amp;&gt;"/>')

        assert context.attributes(tag).text("piece") == "<&>"

    def test_missing_required(self):
        """Test the error for an absent required attribute."""
        context, tag = _context('\n  <scope id="0x0"/>')

        with pytest.raises(MissingAttributeError) as excinfo:
            context.attributes(tag).hex("parent")

        assert excinfo.value.element == "scope"
        assert excinfo.value.attribute == "parent"
        assert excinfo.value.position.line == 2
        assert excinfo.value.position.column == 3

    def test_encoding_error_points_at_attribute(self):
        """Test that decode errors are positioned at the attribute."""
        text = '<scope id="0x0"\n parent="zero"/>'
        context, tag = _context(text)

        with pytest.raises(EncodingError) as excinfo:
            context.attributes(tag).hex("parent")

        assert excinfo.value.position.line == 2
        assert excinfo.value.position.column == 2
        assert excinfo.value.raw == "zero"

    def test_pattern(self):
        """Test matching an attribute against a pattern."""
        context, tag = _context('<constructor parent="0x0" first="0" length="1" line="7:2"/>')
        attrs = context.attributes(tag)

        assert attrs.pattern("line", re.compile(r"[0-9]+:[0-9]+"), "line:column").group() == "7:2"
        with pytest.raises(EncodingError, match="expected a number"):
            attrs.pattern("first", re.compile(r"[a-z]+"), "a number")


class TestStrictAttributes:
    """Test rejection of unread attributes."""

    def test_unread_attribute_ignored_by_default(self):
        """Test that extra attributes are ignored in the default mode."""
        context, tag = _context('<scope id="0x0" parent="0x0" colour="red"/>')
        attrs = context.attributes(tag)
        attrs.hex("id")
        attrs.hex("parent")

        attrs.finish()

    def test_unread_attribute_rejected_when_strict(self):
        """Test that strict mode names the unknown attribute."""
        context, tag = _context(
            '<scope id="0x0" parent="0x0" colour="red"/>', strict_attributes=True
        )
        attrs = context.attributes(tag)
        attrs.hex("id")
        attrs.hex("parent")

        with pytest.raises(StructuralError) as excinfo:
            attrs.finish()

        assert excinfo.value.found == "'colour'"

    def test_optional_attribute_counts_as_read(self):
        """Test that probing an optional attribute marks it as known."""
        context, tag = _context('<const_tpl type="handle" val="0" s="offset" plus="0x1"/>',
                                strict_attributes=True)
        attrs = context.attributes(tag)
        attrs.text("type")
        attrs.dec("val")
        attrs.text("s")
        attrs.opt_hex("plus")

        attrs.finish()


class TestChildHelpers:
    """Test child element access."""

    def test_has_child(self):
        """Test child detection for self-closing, empty and populated parents."""
        context, tag = _context("<null/>")
        assert not context.has_child(tag)

        context, tag = _context("<pair></pair>")
        assert not context.has_child(tag)

        context, tag = _context("<pair><null/></pair>")
        assert context.has_child(tag)

    def test_require_child_on_self_closing_parent(self):
        """Test that a self-closing parent has no required child."""
        context, tag = _context("<pair/>")

        with pytest.raises(CardinalityError, match="missing required child <instruct_pat>"):
            context.require_child(tag, {"instruct_pat"})

    def test_require_child_custom_detail(self):
        """Test that a custom detail replaces the default message."""
        context, tag = _context("<pair></pair>")

        with pytest.raises(CardinalityError, match="nothing here"):
            context.require_child(tag, {"instruct_pat"}, "nothing here")

    def test_require_child_at_end_of_input(self):
        """Test that running out of input is structural."""
        context, tag = _context("<pair>")

        with pytest.raises(StructuralError, match="end of input"):
            context.require_child(tag, {"instruct_pat"})

    def test_optional_child(self):
        """Test reading an optional child."""
        context, tag = _context("<pair><null/></pair>")

        child = context.optional_child(tag, {"null"})
        assert child.name == "null"
        assert context.optional_child(tag, {"null"}) is None
        context.close(tag)
        assert context.scanner.at_end()

    def test_snapshot_metrics(self):
        """Test that the counters reflect the scanner state."""
        context, tag = _context("<pair><null/></pair>")
        context.close(context.read_tag())
        context.close(tag)

        metrics = context.snapshot_metrics()

        assert metrics.elements_parsed == 2
        assert metrics.max_depth == 1
        assert metrics.characters_processed == len("<pair><null/></pair>")
