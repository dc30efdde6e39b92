"""ValueConverter: coerces a document node into a value of a target InferredType.

Conversion never raises for a single bad value.  Type mismatches and
unparsable scalars degrade to a null carrying the target type, so sibling
values and rows are unaffected.

Dispatch on the target kind:

- absent node (None)       -> null of the target
- ANY                      -> canonical JSON text of the node
- NULL node                -> null of the target
- STRING                   -> scalar text verbatim; containers as canonical JSON
- LIST                     -> each item converted against the element type;
                              an empty sequence is an empty list that still
                              carries the element type
- STRUCT                   -> declared fields in declared order; fields absent
                              from the map are nulls of their declared type
- scalar kinds             -> lexical parse, null on failure or out of range
- any other shape mismatch -> null of the target
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, cast

from yaml_tabular import serializer
from yaml_tabular.schema.scalars import (
    integer_width,
    parse_boolean,
    parse_date,
    parse_double,
    parse_integer,
    parse_time,
    parse_timestamp,
)
from yaml_tabular.schema.types import InferredType, TypeKind
from yaml_tabular.tree.nodes import Node, NodeKind

if TYPE_CHECKING:
    from yaml_tabular.schema.inference import Schema

__all__ = ["TypedValue", "ValueConverter"]


@dataclass(frozen=True, slots=True)
class TypedValue:
    """A converted value together with the type it was converted to.

    Attributes:
        value_type: The target type.  Always set, including for nulls and
            empty lists.
        value: None for a null.  For LIST a tuple of TypedValue; for STRUCT a
            tuple of (name, TypedValue) pairs in declared order; otherwise a
            plain Python value (bool, int, float, str, date, time, datetime).
    """

    value_type: InferredType
    value: Any = None

    @classmethod
    def null(cls, value_type: InferredType) -> TypedValue:
        return cls(value_type=value_type)

    @property
    def is_null(self) -> bool:
        return self.value is None

    @property
    def element_type(self) -> InferredType | None:
        return self.value_type.element

    def field(self, name: str) -> TypedValue:
        """Return the value of a struct field.

        Raises:
            KeyError: If ``name`` is not a declared field of this struct.
        """
        if self.value_type.kind != TypeKind.STRUCT:
            msg = f"field() requires a struct value, got {self.value_type}"
            raise TypeError(msg)
        field_type = self.value_type.field_type(name)
        if field_type is None:
            raise KeyError(name)
        if self.value is None:
            return TypedValue.null(field_type)
        for field_name, item in self.value:
            if field_name == name:
                return item
        raise KeyError(name)

    def to_python(self) -> Any:
        """Unwrap into plain Python values (lists, dicts, scalars, None)."""
        if self.value is None:
            return None
        if self.value_type.kind == TypeKind.LIST:
            return [item.to_python() for item in self.value]
        if self.value_type.kind == TypeKind.STRUCT:
            return {name: item.to_python() for name, item in self.value}
        return self.value


_SCALAR_PARSERS: dict[TypeKind, Callable[[str], Any]] = {
    TypeKind.BOOLEAN: parse_boolean,
    TypeKind.DOUBLE: parse_double,
    TypeKind.DATE: parse_date,
    TypeKind.TIME: parse_time,
    TypeKind.TIMESTAMP: parse_timestamp,
}


class ValueConverter:
    """Converts Node trees into TypedValues.

    Stateless; one instance can be shared across any number of documents and
    schemas.

    Example::

        converter = ValueConverter()
        value = converter.convert(Node.scalar("42"), INTEGER32)
        value.value   # 42
    """

    def convert(self, node: Node | None, target: InferredType) -> TypedValue:
        """Convert ``node`` to a value of type ``target``."""
        if node is None:
            return TypedValue.null(target)

        if target.kind == TypeKind.ANY:
            return TypedValue(target, serializer.to_json(node))

        if node.kind == NodeKind.NULL:
            return TypedValue.null(target)

        if target.kind == TypeKind.STRUCT:
            return self._convert_struct(node, target)

        if target.kind == TypeKind.LIST:
            return self._convert_list(node, target)

        if target.kind == TypeKind.STRING:
            if node.kind == NodeKind.SCALAR:
                return TypedValue(target, node.text)
            return TypedValue(target, serializer.to_json(node))

        if node.kind != NodeKind.SCALAR or target.kind == TypeKind.NULL:
            return TypedValue.null(target)

        text = cast(str, node.text)
        if target.kind == TypeKind.INTEGER:
            return TypedValue(target, self._parse_integer(text, target))
        return TypedValue(target, _SCALAR_PARSERS[target.kind](text))

    def convert_row(self, node: Node, schema: Schema) -> TypedValue:
        """Convert one row document into a STRUCT value shaped by ``schema``.

        For a value-fallback schema the whole node is the single column.
        """
        row_type = schema.as_type()
        if schema.value_fallback:
            name, column_type = schema.fields[0]
            return TypedValue(row_type, ((name, self.convert(node, column_type)),))
        return self.convert(node, row_type)

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def _convert_list(self, node: Node, target: InferredType) -> TypedValue:
        if node.kind != NodeKind.SEQUENCE:
            return TypedValue.null(target)
        element = cast(InferredType, target.element)
        return TypedValue(target, tuple(self.convert(item, element) for item in node.items))

    def _convert_struct(self, node: Node, target: InferredType) -> TypedValue:
        if node.kind != NodeKind.MAP:
            return TypedValue.null(target)
        return TypedValue(
            target,
            tuple(
                (name, self.convert(node.get(name), field_type))
                for name, field_type in target.fields
            ),
        )

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def _parse_integer(self, text: str, target: InferredType) -> int | None:
        value = parse_integer(text)
        if value is None:
            return None
        width = integer_width(value)
        if width is None or width > cast(int, target.width):
            return None
        return value
