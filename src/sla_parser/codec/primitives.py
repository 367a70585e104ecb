"""Decoders for attribute value text.

The format writes integers either in decimal or as ``0x``-prefixed
hexadecimal, and which form a field uses is fixed by convention rather than
inferable from the text, so each form has its own decoder. All integers are
Python ``int`` values: masks and offsets on wide architectures exceed 64 bits
and must never be truncated.
"""

import re
from typing import Dict, Optional

from sla_parser.shared.config import BooleanStyle
from sla_parser.shared.errors import EncodingError, SourcePosition

DECIMAL_PATTERN = re.compile(r"-?[0-9]+")
HEX_PATTERN = re.compile(r"0x([0-9a-fA-F]+)")
ENTITY_PATTERN = re.compile(r"&(amp|lt|gt|quot|apos);")

# Stays under the interpreter's limit on decimal digits per int() call.
DECIMAL_CHUNK_DIGITS = 1000

XML_ENTITIES: Dict[str, str] = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
}

BOOLEAN_TOKENS: Dict[BooleanStyle, Dict[str, bool]] = {
    BooleanStyle.LETTER: {"y": True, "n": False},
    BooleanStyle.WORD: {"true": True, "false": False},
    BooleanStyle.ANY: {"y": True, "n": False, "true": True, "false": False},
}


def decode_dec(
    attribute: str, raw: str, position: Optional[SourcePosition] = None
) -> int:
    """Decode a decimal integer field.

    Args:
        attribute: Attribute name, reported on failure
        raw: Attribute text exactly as written
        position: Location of the attribute, reported on failure

    Returns:
        The integer value, with no width limit

    Raises:
        EncodingError: If ``raw`` is not ``-?[0-9]+``
    """
    if DECIMAL_PATTERN.fullmatch(raw) is None:
        raise EncodingError(attribute, raw, position, "expected decimal integer")
    negative = raw.startswith("-")
    digits = raw[1:] if negative else raw
    value = 0
    for start in range(0, len(digits), DECIMAL_CHUNK_DIGITS):
        chunk = digits[start:start + DECIMAL_CHUNK_DIGITS]
        value = value * 10 ** len(chunk) + int(chunk, 10)
    return -value if negative else value


def decode_hex(
    attribute: str, raw: str, position: Optional[SourcePosition] = None
) -> int:
    """Decode a ``0x``-prefixed hexadecimal integer field.

    Raises:
        EncodingError: If ``raw`` is not ``0x[0-9a-fA-F]+``
    """
    match = HEX_PATTERN.fullmatch(raw)
    if match is None:
        raise EncodingError(attribute, raw, position, "expected 0x-prefixed hex integer")
    return int(match.group(1), 16)


def decode_bool(
    attribute: str,
    raw: str,
    style: BooleanStyle = BooleanStyle.ANY,
    position: Optional[SourcePosition] = None,
) -> bool:
    """Decode a boolean flag.

    Only the token pairs allowed by ``style`` are accepted; anything else is
    an error rather than a default value.
    """
    tokens = BOOLEAN_TOKENS[style]
    try:
        return tokens[raw]
    except KeyError:
        allowed = "/".join(sorted(tokens))
        raise EncodingError(
            attribute, raw, position, f"expected one of {allowed}"
        ) from None


def unescape_xml(text: str) -> str:
    """Replace the five predefined XML entities in a single left-to-right pass.

    Text produced by a replacement is never rescanned, so ``&amp;lt;`` becomes
    ``&lt;``. Any other ``&...;`` sequence is left as written.
    """
    if "&" not in text:
        return text
    return ENTITY_PATTERN.sub(lambda match: XML_ENTITIES[match.group(1)], text)
