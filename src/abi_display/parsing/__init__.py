"""Parsing module for ABI type strings."""

from abi_display.parsing.type_lexer import TypeLexer
from abi_display.parsing.type_parser import TypeParser, decode_type, elementary_type

__all__ = [
    "TypeLexer",
    "TypeParser",
    "decode_type",
    "elementary_type",
]
