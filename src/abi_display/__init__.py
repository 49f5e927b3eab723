"""ABI Display - render decoded ABI values as display HTML and copy text."""

from abi_display.links import AddressRouter, address_path
from abi_display.parsing import TypeParser, decode_type
from abi_display.renderer import (
    ERROR,
    Renderer,
    RenderError,
    RenderFailure,
    copy_text,
    render_copy,
    render_display,
    value_html,
)
from abi_display.types import (
    AddressType,
    ArrayType,
    BytesType,
    PrimitiveKind,
    PrimitiveTypeDescriptor,
    TupleType,
    TypeDescriptor,
)
from abi_display.values import DynamicValue, from_json, to_hex

__all__ = [
    # Main API
    "value_html",
    "copy_text",
    "render_display",
    "render_copy",
    "Renderer",
    "ERROR",
    "RenderError",
    "RenderFailure",
    # Parsing
    "TypeParser",
    "decode_type",
    # Type descriptors
    "TypeDescriptor",
    "PrimitiveKind",
    "PrimitiveTypeDescriptor",
    "BytesType",
    "AddressType",
    "ArrayType",
    "TupleType",
    # Values
    "DynamicValue",
    "from_json",
    "to_hex",
    # Links
    "AddressRouter",
    "address_path",
]

__version__ = "0.1.0"
