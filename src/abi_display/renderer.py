"""Render decoded ABI values as display HTML or as copy/paste text.

Both projections walk a :class:`TypeDescriptor` tree and its decoded
value in lock-step:

* the **display form** is an HTML fragment meant for a ``<pre>`` block.
  Arrays put one element per line, indented two spaces per nesting
  level; tuples stay on one line; addresses become links unless
  ``no_links`` is set.
* the **copy form** is a flat literal such as ``[(0xab, 1), (0xcd, 2)]``
  with no markup and no escaping.

Public entry points never raise.  Any mismatch between a value and its
type is logged and reported by returning :data:`ERROR`::

    html = value_html("(address,uint256)[]", decoded)
    if html is ERROR:
        html = ""
"""

from __future__ import annotations

import html
import logging
import reprlib
from enum import Enum
from typing import Any, Callable

from abi_display.links import address_path as default_address_path
from abi_display.parsing import decode_type
from abi_display.types import (
    AddressType,
    ArrayType,
    BytesType,
    PrimitiveTypeDescriptor,
    TupleType,
    TypeDescriptor,
)
from abi_display.values import DynamicValue, to_hex

logger = logging.getLogger(__name__)

INDENT = "  "


class RenderError(Exception):
    """A decoded value does not have the shape its type descriptor requires."""


class RenderFailure(Enum):
    """Sentinel returned in place of text when a value cannot be rendered."""

    ERROR = "error"


ERROR = RenderFailure.ERROR

# Bounded repr for diagnostics: large or deeply nested values stay readable
_diagnostic_repr = reprlib.Repr()
_diagnostic_repr.maxlist = 50
_diagnostic_repr.maxtuple = 50
_diagnostic_repr.maxstring = 200
_diagnostic_repr.maxother = 200

# Work-stack operations
_VISIT = 0
_CLOSE_ARRAY = 1
_CLOSE_TUPLE = 2


def indent(depth: int) -> str:
    """Return the leading whitespace for a display line at ``depth``."""
    return INDENT * depth


def primitive_text(value: Any) -> str:
    """Return the plain textual form of a scalar value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def escape(text: str) -> str:
    """HTML-escape ``text``, writing the apostrophe as ``&#39;``."""
    return html.escape(text).replace("&#x27;", "&#39;")


def _describe(obj: Any) -> str:
    """Return a bounded repr of ``obj`` for a log line; never raises."""
    try:
        return _diagnostic_repr.repr(obj)
    except Exception:
        return f"<{type(obj).__name__} object>"


def _type_name(type_def: Any) -> str:
    try:
        return str(type_def)
    except Exception:
        return f"<{type(type_def).__name__}>"


def _sequence(type_def: ArrayType, value: Any) -> list | tuple:
    if not isinstance(value, (list, tuple)):
        raise RenderError(f"Expected a sequence for {type_def}, got {type(value).__name__}")
    return value


def _members(type_def: TupleType, value: Any) -> list[tuple[TypeDescriptor, Any]]:
    if not isinstance(value, (list, tuple)):
        raise RenderError(f"Expected a tuple for {type_def}, got {type(value).__name__}")
    if len(value) != type_def.arity:
        raise RenderError(f"{type_def} has {type_def.arity} members, value has {len(value)}")
    return list(zip(type_def.element_types, value))


def _take(out: list[str], count: int) -> list[str]:
    """Pop the last ``count`` rendered parts, preserving their order."""
    if count == 0:
        return []
    parts = out[-count:]
    del out[-count:]
    return parts


def _traverse(
    type_def: TypeDescriptor,
    value: Any,
    leaf: Callable[[TypeDescriptor, Any, int], str],
    close_array: Callable[[list[str], int], str],
    close_tuple: Callable[[list[str]], str],
) -> str:
    """Walk ``type_def`` and ``value`` together and assemble the output.

    Uses an explicit stack instead of recursion, so nesting depth is
    limited only by memory.  Every finished subtree leaves exactly one
    string on ``out``; a close operation replaces its children's strings
    with the combined one.  Array members are visited one level deeper;
    tuple members restart at depth 0, so only array lines carry indentation.
    """
    out: list[str] = []
    stack: list[tuple] = [(_VISIT, type_def, value, 0)]

    while stack:
        item = stack.pop()
        op = item[0]

        if op == _VISIT:
            _, t, v, depth = item
            if isinstance(v, DynamicValue):
                out.append(leaf(t, v, depth))
            elif t.is_array:
                elements = _sequence(t, v)
                stack.append((_CLOSE_ARRAY, len(elements), depth))
                for element in reversed(elements):
                    stack.append((_VISIT, t.element_type, element, depth + 1))
            elif t.is_tuple:
                members = _members(t, v)
                stack.append((_CLOSE_TUPLE, len(members), depth))
                for member_type, member in reversed(members):
                    stack.append((_VISIT, member_type, member, 0))
            else:
                out.append(leaf(t, v, depth))
        elif op == _CLOSE_ARRAY:
            _, count, depth = item
            out.append(close_array(_take(out, count), depth))
        else:
            _, count, _ = item
            out.append(close_tuple(_take(out, count)))

    return out[0]


class Renderer:
    """Type-directed renderer for decoded ABI values.

    Args:
        address_path: Callable returning the link target for a ``0x``
            address string.  Defaults to ``/address/<address>``.
        link_target: Value of the ``target`` attribute on address links.
    """

    def __init__(
        self,
        address_path: Callable[[str], str] = default_address_path,
        link_target: str = "_blank",
    ) -> None:
        self.address_path = address_path
        self.link_target = link_target

    # ------------------------------------------------------------------
    # Display form

    def _address_link(self, value: Any) -> str:
        address = to_hex(value)
        path = self.address_path(address)
        return (
            f'<a href="{escape(str(path))}" '
            f'target="{escape(self.link_target)}">{address}</a>'
        )

    def _display_leaf(self, no_links: bool) -> Callable[[TypeDescriptor, Any, int], str]:
        def leaf(type_def: TypeDescriptor, value: Any, depth: int) -> str:
            if isinstance(value, DynamicValue):
                text = to_hex(value.data)
            elif isinstance(type_def, AddressType):
                text = to_hex(value) if no_links else self._address_link(value)
            elif isinstance(type_def, BytesType):
                text = to_hex(value)
            elif isinstance(type_def, PrimitiveTypeDescriptor):
                text = escape(primitive_text(value))
            else:
                raise RenderError(f"Unexpected type descriptor {type_def!r}")
            return indent(depth) + text

        return leaf

    @staticmethod
    def _display_array(parts: list[str], depth: int) -> str:
        spacing = indent(depth)
        return f"{spacing}[\n" + ",\n".join(parts) + f"\n{spacing}]"

    @staticmethod
    def _display_tuple(parts: list[str]) -> str:
        return "(" + ",".join(parts) + ")"

    def _display(self, type_def: TypeDescriptor, value: Any, no_links: bool) -> str:
        return _traverse(
            type_def,
            value,
            self._display_leaf(no_links),
            self._display_array,
            self._display_tuple,
        )

    # ------------------------------------------------------------------
    # Copy form

    @staticmethod
    def _copy_leaf(type_def: TypeDescriptor, value: Any, depth: int) -> str:
        if isinstance(value, DynamicValue):
            return to_hex(value.data)
        if isinstance(type_def, (BytesType, AddressType)):
            return to_hex(value)
        if isinstance(type_def, PrimitiveTypeDescriptor):
            return primitive_text(value)
        raise RenderError(f"Unexpected type descriptor {type_def!r}")

    @staticmethod
    def _copy_array(parts: list[str], depth: int) -> str:
        return "[" + ", ".join(parts) + "]"

    @staticmethod
    def _copy_tuple(parts: list[str]) -> str:
        return "(" + ", ".join(parts) + ")"

    def _copy(self, type_def: TypeDescriptor, value: Any) -> str:
        return _traverse(type_def, value, self._copy_leaf, self._copy_array, self._copy_tuple)

    # ------------------------------------------------------------------
    # Public entry points

    def render_display(
        self, type_def: TypeDescriptor, value: Any, no_links: bool = False
    ) -> str | RenderFailure:
        """Render the display form of ``value`` for an already parsed type."""
        try:
            return self._display(type_def, value, no_links)
        except Exception:
            logger.warning(
                "Error determining value html for %s: %s", _type_name(type_def), _describe(value), exc_info=True
            )
            return ERROR

    def render_copy(self, type_def: TypeDescriptor, value: Any) -> str | RenderFailure:
        """Render the copy form of ``value`` for an already parsed type."""
        try:
            return self._copy(type_def, value)
        except Exception:
            logger.warning(
                "Error determining copy text for %s: %s", _type_name(type_def), _describe(value), exc_info=True
            )
            return ERROR

    def value_html(
        self, type_string: str, value: Any, no_links: bool = False
    ) -> str | RenderFailure:
        """Parse ``type_string`` and render the display form of ``value``."""
        try:
            return self._display(decode_type(type_string), value, no_links)
        except Exception:
            logger.warning(
                "Error determining value html for %s: %s", _describe(type_string), _describe(value), exc_info=True
            )
            return ERROR

    def copy_text(self, type_string: str, value: Any) -> str | RenderFailure:
        """Parse ``type_string`` and render the copy form of ``value``."""
        try:
            return self._copy(decode_type(type_string), value)
        except Exception:
            logger.warning(
                "Error determining copy text for %s: %s", _describe(type_string), _describe(value), exc_info=True
            )
            return ERROR


default_renderer = Renderer()


def render_display(type_def: TypeDescriptor, value: Any, no_links: bool = False) -> str | RenderFailure:
    """Render the display form with the default renderer."""
    return default_renderer.render_display(type_def, value, no_links)


def render_copy(type_def: TypeDescriptor, value: Any) -> str | RenderFailure:
    """Render the copy form with the default renderer."""
    return default_renderer.render_copy(type_def, value)


def value_html(type_string: str, value: Any, no_links: bool = False) -> str | RenderFailure:
    """Parse ``type_string`` and render the display form with the default renderer."""
    return default_renderer.value_html(type_string, value, no_links)


def copy_text(type_string: str, value: Any) -> str | RenderFailure:
    """Parse ``type_string`` and render the copy form with the default renderer."""
    return default_renderer.copy_text(type_string, value)
