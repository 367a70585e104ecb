"""Primitive codec for SLA attribute values.

Key Components:
    decode_dec: Decimal integer decoder
    decode_hex: ``0x``-prefixed hexadecimal integer decoder
    decode_bool: Boolean flag decoder
    unescape_xml: Predefined XML entity replacement
"""

from .primitives import (
    BOOLEAN_TOKENS,
    XML_ENTITIES,
    decode_bool,
    decode_dec,
    decode_hex,
    unescape_xml,
)

__all__ = [
    "BOOLEAN_TOKENS",
    "XML_ENTITIES",
    "decode_bool",
    "decode_dec",
    "decode_hex",
    "unescape_xml",
]
