"""Type descriptors for decoded ABI values."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PrimitiveKind(Enum):
    """Elementary ABI types rendered through the default textual path."""

    UINT = "uint"
    INT = "int"
    BOOL = "bool"
    STRING = "string"
    FUNCTION = "function"
    FIXED = "fixed"
    UFIXED = "ufixed"

    @property
    def default_size(self) -> int | None:
        """Return the bit width implied by the bare type name."""
        sizes = {
            PrimitiveKind.UINT: 256,
            PrimitiveKind.INT: 256,
            PrimitiveKind.FIXED: 128,
            PrimitiveKind.UFIXED: 128,
        }
        return sizes.get(self)

    @property
    def default_decimals(self) -> int | None:
        """Return the decimal count implied by ``fixed``/``ufixed``."""
        if self in (PrimitiveKind.FIXED, PrimitiveKind.UFIXED):
            return 18
        return None


# Mapping from bare type names to PrimitiveKind enum values
PRIMITIVE_KIND_NAMES: dict[str, PrimitiveKind] = {pk.value: pk for pk in PrimitiveKind}


@dataclass
class TypeDescriptor:
    """Base class for all ABI type descriptors."""

    @property
    def is_array(self) -> bool:
        """Return whether this is an array type."""
        return False

    @property
    def is_tuple(self) -> bool:
        """Return whether this is a tuple type."""
        return False


@dataclass
class PrimitiveTypeDescriptor(TypeDescriptor):
    """Integers, booleans, strings and the other elementary scalar types."""

    kind: PrimitiveKind
    size: int | None = None
    decimals: int | None = None

    def __post_init__(self) -> None:
        if self.size is None:
            self.size = self.kind.default_size
        if self.decimals is None:
            self.decimals = self.kind.default_decimals

    def __str__(self) -> str:
        if self.kind in (PrimitiveKind.UINT, PrimitiveKind.INT):
            return f"{self.kind.value}{self.size}"
        if self.kind in (PrimitiveKind.FIXED, PrimitiveKind.UFIXED):
            return f"{self.kind.value}{self.size}x{self.decimals}"
        return self.kind.value


@dataclass
class BytesType(TypeDescriptor):
    """Byte string type: ``bytes`` when size is None, otherwise ``bytes<size>``."""

    size: int | None = None

    def __str__(self) -> str:
        if self.size is None:
            return "bytes"
        return f"bytes{self.size}"


@dataclass
class AddressType(TypeDescriptor):
    """20-byte account or contract address."""

    def __str__(self) -> str:
        return "address"


@dataclass
class ArrayType(TypeDescriptor):
    """Homogeneous sequence, fixed length (``T[n]``) or dynamic (``T[]``)."""

    element_type: TypeDescriptor
    length: int | None = None

    @property
    def is_array(self) -> bool:
        return True

    def __str__(self) -> str:
        suffixes = []
        base: TypeDescriptor = self
        # Walk down iteratively so deeply nested arrays format without recursion
        while isinstance(base, ArrayType):
            suffixes.append("[]" if base.length is None else f"[{base.length}]")
            base = base.element_type
        return str(base) + "".join(reversed(suffixes))


@dataclass
class TupleType(TypeDescriptor):
    """Heterogeneous fixed-arity product of element types."""

    element_types: list[TypeDescriptor] = field(default_factory=list)

    @property
    def is_tuple(self) -> bool:
        return True

    @property
    def arity(self) -> int:
        """Return the number of members a paired value must have."""
        return len(self.element_types)

    def __str__(self) -> str:
        return "(" + ",".join(str(t) for t in self.element_types) + ")"
