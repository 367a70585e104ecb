"""Tests for pattern expression parsing."""

import pytest

from sla_parser.model import (
    BinaryExpression,
    BinaryOperator,
    ConstantValue,
    ContextField,
    EndInstructionValue,
    Next2InstructionValue,
    OperandValue,
    StartInstructionValue,
    TokenField,
    UnaryExpression,
    UnaryOperator,
)
from sla_parser.parsing import (
    ParseContext,
    parse_pattern_expression,
    parse_pattern_value,
)
from sla_parser.shared.config import BooleanStyle, ParserConfig
from sla_parser.shared.errors import (
    CardinalityError,
    EncodingError,
    MissingAttributeError,
    StructuralError,
)

TOKEN_FIELD = (
    '<tokenfield bigendian="false" signbit="false" bitstart="0" bitend="7"'
    ' bytestart="0" byteend="0" shift="0"/>'
)


class TestPatternValues:
    """Test leaf expression elements."""

    def test_constant(self, parse_fragment):
        """Test that intb yields its decimal value."""
        assert parse_fragment(parse_pattern_value, '<intb val="42"/>') == ConstantValue(42)

    def test_negative_constant(self, parse_fragment):
        """Test a negative constant."""
        assert parse_fragment(parse_pattern_value, '<intb val="-8"/>') == ConstantValue(-8)

    def test_very_long_constant(self, parse_fragment):
        """Test a constant with thousands of decimal digits."""
        text = '<intb val="' + "9" * 5000 + '"/>'

        assert parse_fragment(parse_pattern_value, text) == ConstantValue(10 ** 5000 - 1)

    def test_token_field(self, parse_fragment):
        """Test that every token field attribute is decoded."""
        value = parse_fragment(parse_pattern_value, TOKEN_FIELD)

        assert value == TokenField(
            bigendian=False, signbit=False, bitstart=0, bitend=7,
            bytestart=0, byteend=0, shift=0,
        )

    def test_token_field_open_close_form(self, parse_fragment):
        """Test that a leaf may be written with an explicit closing tag."""
        text = TOKEN_FIELD.replace("/>", "></tokenfield>")

        assert isinstance(parse_fragment(parse_pattern_value, text), TokenField)

    def test_token_field_without_shift(self, parse_fragment):
        """Test that shift is optional."""
        text = TOKEN_FIELD.replace(' shift="0"', "")

        assert parse_fragment(parse_pattern_value, text).shift is None

    def test_invalid_boolean(self, parse_fragment):
        """Test that a third boolean token is an encoding error on its attribute."""
        text = TOKEN_FIELD.replace('bigendian="false"', 'bigendian="maybe"')

        with pytest.raises(EncodingError) as excinfo:
            parse_fragment(parse_pattern_value, text)

        assert excinfo.value.attribute == "bigendian"
        assert excinfo.value.raw == "maybe"
        assert excinfo.value.position.column == text.index("bigendian") + 1

    def test_letter_booleans_rejected_in_word_style(self, parse_fragment):
        """Test that the configured boolean style is applied."""
        text = TOKEN_FIELD.replace('signbit="false"', 'signbit="n"')
        config = ParserConfig(boolean_style=BooleanStyle.WORD)

        with pytest.raises(EncodingError, match="signbit"):
            parse_fragment(parse_pattern_value, text, config)

    def test_context_field(self, parse_fragment):
        """Test the context field leaf."""
        text = (
            '<contextfield signbit="y" startbit="3" endbit="5" startbyte="0"'
            ' endbyte="0" shift="26"/>'
        )

        assert parse_fragment(parse_pattern_value, text) == ContextField(
            signbit=True, startbit=3, endbit=5, startbyte=0, endbyte=0, shift=26,
        )

    def test_operand_value(self, parse_fragment):
        """Test that table and constructor ids are hexadecimal."""
        text = '<operand_exp index="2" table="0x1f" ct="0xa"/>'

        assert parse_fragment(parse_pattern_value, text) == OperandValue(
            index=2, table_id=0x1F, constructor_id=0xA,
        )

    @pytest.mark.parametrize("tag,expected", [
        ("start_exp", StartInstructionValue()),
        ("end_exp", EndInstructionValue()),
        ("next2_exp", Next2InstructionValue()),
    ])
    def test_instruction_markers(self, parse_fragment, tag, expected):
        """Test the attribute-free instruction address leaves."""
        assert parse_fragment(parse_pattern_value, f"<{tag}/>") == expected

    def test_missing_attribute(self, parse_fragment):
        """Test that a required attribute must be present."""
        with pytest.raises(MissingAttributeError) as excinfo:
            parse_fragment(parse_pattern_value, "<intb/>")

        assert excinfo.value.element == "intb"
        assert excinfo.value.attribute == "val"

    def test_hex_where_decimal_expected(self, parse_fragment):
        """Test that field encodings are not interchangeable."""
        with pytest.raises(EncodingError):
            parse_fragment(parse_pattern_value, '<intb val="0x10"/>')

    def test_leaf_with_child_rejected(self, parse_fragment):
        """Test that a leaf element cannot contain children."""
        with pytest.raises(StructuralError, match="expected </intb>"):
            parse_fragment(parse_pattern_value, '<intb val="1"><intb val="2"/></intb>')


class TestOperators:
    """Test operator elements."""

    @pytest.mark.parametrize("operator", list(BinaryOperator))
    def test_binary_operators(self, parse_fragment, operator):
        """Test every binary operator with its operands in document order."""
        text = f'<{operator.value}><intb val="1"/><intb val="2"/></{operator.value}>'

        expression = parse_fragment(parse_pattern_expression, text)

        assert isinstance(expression, BinaryExpression)
        assert expression.operator is operator
        assert expression.left == ConstantValue(1)
        assert expression.right == ConstantValue(2)

    @pytest.mark.parametrize("operator", list(UnaryOperator))
    def test_unary_operators(self, parse_fragment, operator):
        """Test every unary operator."""
        text = f'<{operator.value}><intb val="5"/></{operator.value}>'

        expression = parse_fragment(parse_pattern_expression, text)

        assert expression == UnaryExpression(operator, ConstantValue(5))

    def test_nested_operands(self, parse_fragment):
        """Test that nested subtrees land on the correct side."""
        text = (
            "<sub_exp>"
            '<not_exp><intb val="1"/></not_exp>'
            '<plus_exp><start_exp/><intb val="4"/></plus_exp>'
            "</sub_exp>"
        )

        expression = parse_fragment(parse_pattern_expression, text)

        assert expression.operator is BinaryOperator.SUB
        assert expression.left == UnaryExpression(UnaryOperator.NOT, ConstantValue(1))
        assert expression.right == BinaryExpression(
            BinaryOperator.ADD, StartInstructionValue(), ConstantValue(4)
        )

    def test_too_few_operands(self, parse_fragment):
        """Test that a binary operator with one operand is rejected."""
        with pytest.raises(CardinalityError, match="expected 2 operands, found 1"):
            parse_fragment(parse_pattern_expression, '<plus_exp><intb val="1"/></plus_exp>')

    def test_empty_operator(self, parse_fragment):
        """Test that an operator with no operands is rejected."""
        with pytest.raises(CardinalityError, match="found 0"):
            parse_fragment(parse_pattern_expression, "<not_exp/>")

    def test_too_many_operands(self, parse_fragment):
        """Test that an extra operand is reported where the closing tag belongs."""
        text = '<not_exp><intb val="1"/><intb val="2"/></not_exp>'

        with pytest.raises(StructuralError, match="expected </not_exp>"):
            parse_fragment(parse_pattern_expression, text)

    def test_non_expression_child(self, parse_fragment):
        """Test that only expression elements may be operands."""
        with pytest.raises(StructuralError):
            parse_fragment(parse_pattern_expression, '<not_exp><valuetab val="1"/></not_exp>')


class TestDeepNesting:
    """Test expressions nested beyond the interpreter's recursion limit."""

    DEPTH = 3000

    def test_left_nested_binary_chain(self, parse_fragment):
        """Test a chain of binary operators nested through the left operand."""
        text = (
            "<plus_exp>" * self.DEPTH
            + '<intb val="0"/>'
            + '<intb val="1"/></plus_exp>' * self.DEPTH
        )

        expression = parse_fragment(parse_pattern_expression, text)

        assert expression.depth() == self.DEPTH + 1
        assert sum(1 for node in expression.iter_nodes() if node == ConstantValue(1)) == self.DEPTH

    def test_right_nested_binary_chain(self, parse_fragment):
        """Test a chain nested through the right operand."""
        text = (
            '<and_exp><intb val="7"/>' * self.DEPTH
            + "<end_exp/>"
            + "</and_exp>" * self.DEPTH
        )

        expression = parse_fragment(parse_pattern_expression, text)

        assert expression.depth() == self.DEPTH + 1
        assert expression.left == ConstantValue(7)

    def test_unary_chain(self, parse_fragment):
        """Test a chain of unary operators."""
        text = "<minus_exp>" * self.DEPTH + '<intb val="3"/>' + "</minus_exp>" * self.DEPTH

        expression = parse_fragment(parse_pattern_expression, text)

        assert expression.depth() == self.DEPTH + 1

    def test_depth_limit_applies(self):
        """Test that a configured nesting limit stops a deep chain."""
        from sla_parser.shared.errors import LimitExceededError

        text = "<not_exp>" * 50 + '<intb val="0"/>' + "</not_exp>" * 50
        context = ParseContext.from_text(text, ParserConfig(max_depth=10))

        with pytest.raises(LimitExceededError):
            parse_pattern_expression(context, context.read_tag())
