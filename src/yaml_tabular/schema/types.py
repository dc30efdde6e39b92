"""InferredType value object and TypeKind StrEnum.

An InferredType describes the shape of a column or of a nested value.  The
set of variants is closed: NULL, BOOLEAN, INTEGER (8/16/32/64 bit), DOUBLE,
DATE, TIME, TIMESTAMP, STRING, LIST (one element type), STRUCT (ordered
fields) and ANY, the passthrough used for values that are re-serialised
rather than coerced.

Struct equality compares fields by name and ignores their order.  Field order
is still preserved and reported by ``field_names``; it just does not take part
in equality, so that unifying two structs gives equal results in either
argument order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = [
    "ANY",
    "BOOLEAN",
    "DATE",
    "DOUBLE",
    "INTEGER8",
    "INTEGER16",
    "INTEGER32",
    "INTEGER64",
    "INTEGER_WIDTHS",
    "NULL",
    "STRING",
    "TIME",
    "TIMESTAMP",
    "InferredType",
    "TypeKind",
]

INTEGER_WIDTHS: tuple[int, ...] = (8, 16, 32, 64)


class TypeKind(StrEnum):
    """The variants an InferredType can take."""

    NULL = auto()
    BOOLEAN = auto()
    INTEGER = auto()
    DOUBLE = auto()
    DATE = auto()
    TIME = auto()
    TIMESTAMP = auto()
    STRING = auto()
    LIST = auto()
    STRUCT = auto()
    ANY = auto()


_NUMERIC_KINDS = frozenset({TypeKind.INTEGER, TypeKind.DOUBLE})

_DISPLAY_NAMES = {
    TypeKind.NULL: "Null",
    TypeKind.BOOLEAN: "Boolean",
    TypeKind.DOUBLE: "Double",
    TypeKind.DATE: "Date",
    TypeKind.TIME: "Time",
    TypeKind.TIMESTAMP: "Timestamp",
    TypeKind.STRING: "String",
    TypeKind.ANY: "Any",
}


@dataclass(frozen=True, slots=True, eq=False)
class InferredType:
    """Immutable description of a value shape.

    Attributes:
        kind:    Which variant this is.
        width:   Bit width for INTEGER (one of 8, 16, 32, 64); None otherwise.
        element: Element type for LIST; None otherwise.
        fields:  Ordered (name, type) pairs for STRUCT; empty otherwise.
    """

    kind: TypeKind
    width: int | None = None
    element: InferredType | None = None
    fields: tuple[tuple[str, InferredType], ...] = ()

    def __post_init__(self) -> None:
        if self.kind == TypeKind.INTEGER and self.width not in INTEGER_WIDTHS:
            msg = f"integer width must be one of {INTEGER_WIDTHS}, got {self.width}"
            raise ValueError(msg)
        if self.kind != TypeKind.INTEGER and self.width is not None:
            msg = f"width is only valid for integers, got {self.kind}"
            raise ValueError(msg)
        if (self.kind == TypeKind.LIST) != (self.element is not None):
            msg = "element type is required for lists and invalid otherwise"
            raise ValueError(msg)
        if self.kind != TypeKind.STRUCT and self.fields:
            msg = f"fields are only valid for structs, got {self.kind}"
            raise ValueError(msg)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def integer(cls, width: int = 64) -> InferredType:
        return cls(kind=TypeKind.INTEGER, width=width)

    @classmethod
    def list_of(cls, element: InferredType) -> InferredType:
        return cls(kind=TypeKind.LIST, element=element)

    @classmethod
    def struct(cls, fields: Iterable[tuple[str, InferredType]] = ()) -> InferredType:
        """Build a STRUCT type; a repeated name keeps its first position, last type."""
        merged: dict[str, InferredType] = {}
        for name, field_type in fields:
            merged[name] = field_type
        return cls(kind=TypeKind.STRUCT, fields=tuple(merged.items()))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_numeric(self) -> bool:
        return self.kind in _NUMERIC_KINDS

    @property
    def is_nested(self) -> bool:
        return self.kind in (TypeKind.LIST, TypeKind.STRUCT)

    @property
    def field_names(self) -> list[str]:
        return [name for name, _ in self.fields]

    def field_type(self, name: str) -> InferredType | None:
        for field_name, field_type in self.fields:
            if field_name == name:
                return field_type
        return None

    # ------------------------------------------------------------------
    # Equality and display
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InferredType):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.width == other.width
            and self.element == other.element
            and dict(self.fields) == dict(other.fields)
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.width, self.element, frozenset(self.fields)))

    def __str__(self) -> str:
        if self.kind == TypeKind.INTEGER:
            return f"Integer{self.width}"
        if self.kind == TypeKind.LIST:
            return f"List({self.element})"
        if self.kind == TypeKind.STRUCT:
            inner = ", ".join(f"{name}: {field_type}" for name, field_type in self.fields)
            return f"Struct{{{inner}}}"
        return _DISPLAY_NAMES[self.kind]


NULL = InferredType(TypeKind.NULL)
BOOLEAN = InferredType(TypeKind.BOOLEAN)
INTEGER8 = InferredType.integer(8)
INTEGER16 = InferredType.integer(16)
INTEGER32 = InferredType.integer(32)
INTEGER64 = InferredType.integer(64)
DOUBLE = InferredType(TypeKind.DOUBLE)
DATE = InferredType(TypeKind.DATE)
TIME = InferredType(TypeKind.TIME)
TIMESTAMP = InferredType(TypeKind.TIMESTAMP)
STRING = InferredType(TypeKind.STRING)
ANY = InferredType(TypeKind.ANY)
