"""Parser for ABI type strings."""

from __future__ import annotations

import re
import threading
from typing import Any

import ply.yacc as yacc

from abi_display.parsing.type_lexer import TypeLexer
from abi_display.types import (
    PRIMITIVE_KIND_NAMES,
    AddressType,
    ArrayType,
    BytesType,
    PrimitiveTypeDescriptor,
    TupleType,
    TypeDescriptor,
)

_SIZED_INTEGER = re.compile(r"^(u?int)(\d+)$")
_SIZED_BYTES = re.compile(r"^bytes(\d+)$")
_SIZED_FIXED = re.compile(r"^(u?fixed)(\d+)x(\d+)$")


def elementary_type(name: str) -> TypeDescriptor:
    """Resolve an elementary type name like ``uint8`` or ``bytes32``.

    Raises:
        ValueError: If the name is not an ABI elementary type.
    """
    if name == "address":
        return AddressType()
    if name == "bytes":
        return BytesType()
    if name in PRIMITIVE_KIND_NAMES:
        return PrimitiveTypeDescriptor(kind=PRIMITIVE_KIND_NAMES[name])

    m = _SIZED_INTEGER.match(name)
    if m:
        return PrimitiveTypeDescriptor(kind=PRIMITIVE_KIND_NAMES[m.group(1)], size=int(m.group(2)))
    m = _SIZED_BYTES.match(name)
    if m:
        return BytesType(size=int(m.group(1)))
    m = _SIZED_FIXED.match(name)
    if m:
        return PrimitiveTypeDescriptor(
            kind=PRIMITIVE_KIND_NAMES[m.group(1)],
            size=int(m.group(2)),
            decimals=int(m.group(3)),
        )

    raise ValueError(f"Unknown ABI type '{name}'")


class TypeParser:
    """Parser turning an ABI type string into a :class:`TypeDescriptor` tree."""

    tokens = TypeLexer.tokens
    start = "type"

    def __init__(self) -> None:
        self.lexer = TypeLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_type_elementary(self, p: yacc.YaccProduction) -> None:
        """type : IDENTIFIER"""
        p[0] = elementary_type(p[1])

    def p_type_dynamic_array(self, p: yacc.YaccProduction) -> None:
        """type : type LBRACKET RBRACKET"""
        p[0] = ArrayType(element_type=p[1], length=None)

    def p_type_fixed_array(self, p: yacc.YaccProduction) -> None:
        """type : type LBRACKET INTEGER RBRACKET"""
        p[0] = ArrayType(element_type=p[1], length=p[3])

    def p_type_tuple(self, p: yacc.YaccProduction) -> None:
        """type : tuple_type"""
        p[0] = p[1]

    def p_tuple_type(self, p: yacc.YaccProduction) -> None:
        """tuple_type : LPAREN type_list RPAREN
                      | TUPLE LPAREN type_list RPAREN"""
        p[0] = TupleType(element_types=p[len(p) - 2])

    def p_tuple_type_empty(self, p: yacc.YaccProduction) -> None:
        """tuple_type : LPAREN RPAREN
                      | TUPLE LPAREN RPAREN"""
        p[0] = TupleType(element_types=[])

    def p_type_list_single(self, p: yacc.YaccProduction) -> None:
        """type_list : type"""
        p[0] = [p[1]]

    def p_type_list_multiple(self, p: yacc.YaccProduction) -> None:
        """type_list : type_list COMMA type"""
        p[0] = p[1]
        p[0].append(p[3])

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (position {p.lexpos})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse(self, data: str) -> TypeDescriptor:
        """Parse an ABI type string and return its descriptor.

        Raises:
            SyntaxError: If the string is not a well-formed type signature.
            ValueError: If it names an unknown elementary type.
        """
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        if not isinstance(data, str):
            raise TypeError(f"ABI type must be a string, got {type(data).__name__}")

        return self.parser.parse(data, lexer=self.lexer.lexer)


_local = threading.local()


def decode_type(type_string: str) -> TypeDescriptor:
    """Parse ``type_string`` with a parser owned by the calling thread."""
    parser = getattr(_local, "parser", None)
    if parser is None:
        parser = TypeParser()
        _local.parser = parser
    return parser.parse(type_string)
