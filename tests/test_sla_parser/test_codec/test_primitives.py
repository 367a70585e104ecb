"""Tests for the attribute value decoders."""

import pytest

from sla_parser.codec import (
    BOOLEAN_TOKENS,
    decode_bool,
    decode_dec,
    decode_hex,
    unescape_xml,
)
from sla_parser.shared.config import BooleanStyle
from sla_parser.shared.errors import EncodingError, ErrorKind, SourcePosition


class TestDecodeDec:
    """Test decimal integer decoding."""

    @pytest.mark.parametrize("raw,expected", [
        ("0", 0),
        ("42", 42),
        ("-1", -1),
        ("007", 7),
        ("18446744073709551616", 2**64),
    ])
    def test_valid_values(self, raw, expected):
        """Test that decimal text decodes to the exact integer."""
        assert decode_dec("val", raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("9" * 5000, 10 ** 5000 - 1),
        ("-1" + "0" * 5000, -(10 ** 5000)),
        ("0" * 4999 + "12", 12),
    ], ids=["nines", "negative_power_of_ten", "leading_zeros"])
    def test_values_beyond_conversion_limit(self, raw, expected):
        """Test decimal text longer than a single int() conversion allows."""
        assert decode_dec("val", raw) == expected

    @pytest.mark.parametrize("raw", ["", "0x10", "1.5", " 1", "1 ", "+1", "--1", "abc"])
    def test_invalid_values(self, raw):
        """Test that anything but -?[0-9]+ is rejected."""
        with pytest.raises(EncodingError) as excinfo:
            decode_dec("val", raw)

        assert excinfo.value.attribute == "val"
        assert excinfo.value.raw == raw
        assert excinfo.value.kind == ErrorKind.ENCODING

    def test_error_carries_position(self):
        """Test that a supplied position is attached to the error."""
        position = SourcePosition(offset=10, line=2, column=5)

        with pytest.raises(EncodingError) as excinfo:
            decode_dec("size", "four", position)

        assert excinfo.value.position == position
        assert str(excinfo.value).startswith("line 2, column 5: ")


class TestDecodeHex:
    """Test hexadecimal integer decoding."""

    def test_max_signed_64_bit(self):
        """Test that the largest signed 64-bit value decodes exactly."""
        assert decode_hex("mask", "0x7fffffffffffffff") == 2**63 - 1

    def test_wider_than_64_bits(self):
        """Test that values beyond 64 bits are never truncated."""
        assert decode_hex("mask", "0x10000000000000000") == 2**64
        assert decode_hex("mask", "0x" + "f" * 40) == 2**160 - 1

    def test_mixed_case_digits(self):
        """Test that upper and lower case hex digits are accepted."""
        assert decode_hex("id", "0xDeadBeef") == 0xDEADBEEF

    @pytest.mark.parametrize("raw", ["", "0x", "10", "0X10", "0xg", "-0x1", "0x1 "])
    def test_invalid_values(self, raw):
        """Test that only 0x-prefixed hex digits are accepted."""
        with pytest.raises(EncodingError, match="invalid value for attribute id"):
            decode_hex("id", raw)


class TestDecodeBool:
    """Test boolean flag decoding."""

    @pytest.mark.parametrize("raw,expected", [
        ("y", True), ("n", False), ("true", True), ("false", False),
    ])
    def test_any_style_accepts_both_pairs(self, raw, expected):
        """Test that the default style accepts letter and word tokens."""
        assert decode_bool("flow", raw) is expected

    def test_letter_style(self):
        """Test that the letter style rejects word tokens."""
        assert decode_bool("flow", "y", BooleanStyle.LETTER) is True
        with pytest.raises(EncodingError):
            decode_bool("flow", "true", BooleanStyle.LETTER)

    def test_word_style(self):
        """Test that the word style rejects letter tokens."""
        assert decode_bool("flow", "false", BooleanStyle.WORD) is False
        with pytest.raises(EncodingError):
            decode_bool("flow", "n", BooleanStyle.WORD)

    @pytest.mark.parametrize("raw", ["maybe", "", "Y", "TRUE", "1", "0", "yes"])
    def test_other_tokens_rejected(self, raw):
        """Test that a third token is an error, never a default value."""
        with pytest.raises(EncodingError) as excinfo:
            decode_bool("bigendian", raw)

        assert excinfo.value.attribute == "bigendian"
        assert excinfo.value.raw == raw

    def test_every_style_has_two_meanings(self):
        """Test that every style maps onto both truth values."""
        for style in BooleanStyle:
            assert set(BOOLEAN_TOKENS[style].values()) == {True, False}


class TestUnescapeXml:
    """Test predefined entity replacement."""

    @pytest.mark.parametrize("raw,expected", [
        ("&amp;", "&"),
        ("&lt;", "<"),
        ("&gt;", ">"),
        ("&quot;", '"'),
        ("&apos;", "'"),
        ("a &lt;b&gt; c", "a <b> c"),
    ])
    def test_single_entities(self, raw, expected):
        """Test each of the five entities."""
        assert unescape_xml(raw) == expected

    def test_ampersand_is_not_rescanned(self):
        """Test that text produced by &amp; is never decoded again."""
        assert unescape_xml("&amp;lt;") == "&lt;"
        assert unescape_xml("&amp;amp;") == "&amp;"

    def test_repeated_and_mixed(self):
        """Test repeated entities in arbitrary order."""
        assert unescape_xml("&gt;&gt;&amp;&lt;&quot;&apos;&amp;") == ">>&<\"'&"

    @pytest.mark.parametrize("raw", ["&nbsp;", "&#60;", "&#x3c;", "& amp;", "&amp", "&"])
    def test_unknown_sequences_pass_through(self, raw):
        """Test that unrecognized entity sequences are left as written."""
        assert unescape_xml(raw) == raw

    def test_plain_text_unchanged(self):
        """Test that text without entities is returned unchanged."""
        assert unescape_xml("mov r0, r1") == "mov r0, r1"
