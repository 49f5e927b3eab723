"""Tests for the ABI type string parser."""

import threading

import pytest

from abi_display.parsing import TypeParser, decode_type, elementary_type
from abi_display.parsing.type_lexer import TypeLexer
from abi_display.types import (
    AddressType,
    ArrayType,
    BytesType,
    PrimitiveKind,
    PrimitiveTypeDescriptor,
    TupleType,
)


class TestTypeLexer:
    """Tests for the type lexer."""

    def test_tokenize_elementary(self):
        lexer = TypeLexer()
        lexer.build()

        tokens = lexer.tokenize("uint256")

        assert [t.type for t in tokens] == ["IDENTIFIER"]
        assert tokens[0].value == "uint256"

    def test_tokenize_array(self):
        lexer = TypeLexer()
        lexer.build()

        tokens = lexer.tokenize("bytes32[][3]")
        token_types = [t.type for t in tokens]

        assert token_types == [
            "IDENTIFIER",
            "LBRACKET",
            "RBRACKET",
            "LBRACKET",
            "INTEGER",
            "RBRACKET",
        ]
        assert tokens[4].value == 3

    def test_tokenize_tuple(self):
        lexer = TypeLexer()
        lexer.build()

        tokens = lexer.tokenize("tuple(address, bool)")
        token_types = [t.type for t in tokens]

        assert token_types == ["TUPLE", "LPAREN", "IDENTIFIER", "COMMA", "IDENTIFIER", "RPAREN"]

    def test_whitespace_ignored(self):
        lexer = TypeLexer()
        lexer.build()

        tokens = lexer.tokenize(" ( address ,\n bool ) ")

        assert len(tokens) == 5

    def test_illegal_character(self):
        lexer = TypeLexer()
        lexer.build()

        with pytest.raises(SyntaxError):
            lexer.tokenize("uint256$")


class TestElementaryType:
    """Tests for elementary type name resolution."""

    def test_address(self):
        assert elementary_type("address") == AddressType()

    def test_bytes(self):
        assert elementary_type("bytes") == BytesType(size=None)
        assert elementary_type("bytes32") == BytesType(size=32)

    def test_integers(self):
        assert elementary_type("uint") == PrimitiveTypeDescriptor(kind=PrimitiveKind.UINT, size=256)
        assert elementary_type("uint8") == PrimitiveTypeDescriptor(kind=PrimitiveKind.UINT, size=8)
        assert elementary_type("int") == PrimitiveTypeDescriptor(kind=PrimitiveKind.INT, size=256)
        assert elementary_type("int64") == PrimitiveTypeDescriptor(kind=PrimitiveKind.INT, size=64)

    def test_fixed_point(self):
        assert elementary_type("fixed") == PrimitiveTypeDescriptor(
            kind=PrimitiveKind.FIXED, size=128, decimals=18
        )
        assert elementary_type("ufixed32x4") == PrimitiveTypeDescriptor(
            kind=PrimitiveKind.UFIXED, size=32, decimals=4
        )

    def test_other_primitives(self):
        assert elementary_type("bool").kind == PrimitiveKind.BOOL
        assert elementary_type("string").kind == PrimitiveKind.STRING
        assert elementary_type("function").kind == PrimitiveKind.FUNCTION

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown ABI type 'uintx'"):
            elementary_type("uintx")


class TestTypeParser:
    """Tests for the type parser."""

    def test_parse_elementary(self):
        parser = TypeParser()
        assert parser.parse("address") == AddressType()

    def test_parse_dynamic_array(self):
        parser = TypeParser()
        type_def = parser.parse("uint256[]")

        assert isinstance(type_def, ArrayType)
        assert type_def.length is None
        assert type_def.element_type == PrimitiveTypeDescriptor(kind=PrimitiveKind.UINT, size=256)

    def test_parse_fixed_array(self):
        parser = TypeParser()
        type_def = parser.parse("uint256[2]")

        assert type_def == ArrayType(
            element_type=PrimitiveTypeDescriptor(kind=PrimitiveKind.UINT, size=256), length=2
        )

    def test_parse_nested_arrays(self):
        """``T[][3]`` is a fixed array of three dynamic arrays."""
        parser = TypeParser()
        type_def = parser.parse("uint256[][3]")

        assert isinstance(type_def, ArrayType)
        assert type_def.length == 3
        assert isinstance(type_def.element_type, ArrayType)
        assert type_def.element_type.length is None

    def test_parse_tuple(self):
        parser = TypeParser()
        type_def = parser.parse("(address,bytes)")

        assert type_def == TupleType(element_types=[AddressType(), BytesType()])

    def test_parse_tuple_keyword(self):
        parser = TypeParser()
        assert parser.parse("tuple(address,bool)") == parser.parse("(address,bool)")

    def test_parse_empty_tuple(self):
        parser = TypeParser()
        assert parser.parse("()") == TupleType(element_types=[])
        assert parser.parse("tuple()") == TupleType(element_types=[])

    def test_parse_nested_tuple_array(self):
        parser = TypeParser()
        type_def = parser.parse("(address,(uint8,bytes32)[])[2]")

        assert isinstance(type_def, ArrayType)
        assert type_def.length == 2
        inner = type_def.element_type
        assert isinstance(inner, TupleType)
        assert inner.element_types[0] == AddressType()
        assert isinstance(inner.element_types[1], ArrayType)
        assert isinstance(inner.element_types[1].element_type, TupleType)

    def test_parse_with_whitespace(self):
        parser = TypeParser()
        assert parser.parse(" ( address , uint8 [ 2 ] ) ") == parser.parse("(address,uint8[2])")

    def test_canonical_format(self):
        parser = TypeParser()
        assert str(parser.parse("(uint,address)[]")) == "(uint256,address)[]"
        assert str(parser.parse("tuple(fixed, bytes1)")) == "(fixed128x18,bytes1)"

    def test_parser_is_reusable(self):
        parser = TypeParser()
        parser.parse("address")
        assert parser.parse("bool[]") == ArrayType(element_type=PrimitiveTypeDescriptor(kind=PrimitiveKind.BOOL))

    def test_parser_recovers_after_error(self):
        parser = TypeParser()
        with pytest.raises(SyntaxError):
            parser.parse("uint256[")
        assert parser.parse("address") == AddressType()

    def test_syntax_errors(self):
        parser = TypeParser()
        for text in ["", "uint256[", "(address", "address)", "uint256[-1]", "(,)", "tuple", "[]"]:
            with pytest.raises(SyntaxError):
                parser.parse(text)

    def test_unknown_type(self):
        parser = TypeParser()
        with pytest.raises(ValueError):
            parser.parse("(address,foo)")

    def test_non_string_input(self):
        parser = TypeParser()
        with pytest.raises(TypeError):
            parser.parse(None)  # type: ignore[arg-type]

    def test_deeply_nested_array(self):
        type_def = decode_type("uint8" + "[]" * 3000)
        depth = 0
        while isinstance(type_def, ArrayType):
            depth += 1
            type_def = type_def.element_type
        assert depth == 3000


class TestDecodeType:
    """Tests for the decode_type entry point."""

    def test_decode(self):
        assert decode_type("address[]") == ArrayType(element_type=AddressType())

    def test_decode_from_threads(self):
        """Each thread parses with its own parser."""
        results: dict[int, object] = {}
        errors: list[BaseException] = []
        type_strings = ["uint256[2]", "(address,bytes)", "bytes32[][3]", "bool"]

        def worker(i: int) -> None:
            try:
                for _ in range(50):
                    results[i] = str(decode_type(type_strings[i % len(type_strings)]))
            except BaseException as e:  # pragma: no cover
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        for i, text in results.items():
            assert text == type_strings[i % len(type_strings)]
