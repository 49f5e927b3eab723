"""Decoded value helpers: the dynamic wrapper, hex formatting and JSON input."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from abi_display.types import (
    AddressType,
    ArrayType,
    BytesType,
    TupleType,
    TypeDescriptor,
)

BYTES_LIKE = (bytes, bytearray, memoryview)


@dataclass(frozen=True)
class DynamicValue:
    """Raw payload whose type could not be resolved; always shown as hex."""

    data: bytes


def to_hex(value: Any) -> str:
    """Return ``0x`` followed by the lowercase hex of a bytes-like value."""
    if not isinstance(value, BYTES_LIKE):
        raise TypeError(f"Expected a bytes-like value, got {type(value).__name__}")
    return "0x" + bytes(value).hex()


def _hex_to_bytes(text: Any) -> bytes:
    if not isinstance(text, str):
        raise ValueError(f"Expected a hex string, got {text!r}")
    if text[:2] in ("0x", "0X"):
        text = text[2:]
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise ValueError(f"Invalid hex string '{text}': {e}") from e


def from_json(type_def: TypeDescriptor, obj: Any) -> Any:
    """Convert JSON-shaped input into a decoded value matching ``type_def``.

    Hex strings become ``bytes`` for byte and address types, lists become
    tuples for tuple types and ``{"dynamic": "0x.."}`` becomes a
    :class:`DynamicValue` at any position.  Other primitives pass through.
    """
    if isinstance(obj, dict):
        if set(obj) != {"dynamic"}:
            raise ValueError(f"Unexpected object {obj!r}; only {{\"dynamic\": hex}} is supported")
        return DynamicValue(_hex_to_bytes(obj["dynamic"]))

    if isinstance(type_def, (BytesType, AddressType)):
        return _hex_to_bytes(obj)

    if isinstance(type_def, ArrayType):
        if not isinstance(obj, list):
            raise ValueError(f"Expected a list for {type_def}, got {obj!r}")
        return [from_json(type_def.element_type, item) for item in obj]

    if isinstance(type_def, TupleType):
        if not isinstance(obj, list) or len(obj) != type_def.arity:
            raise ValueError(f"Expected a list of {type_def.arity} items for {type_def}, got {obj!r}")
        return tuple(
            from_json(member_type, item)
            for member_type, item in zip(type_def.element_types, obj)
        )

    return obj
