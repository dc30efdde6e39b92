"""Type unifier: combines two InferredTypes into one that can represent both.

Rules, in priority order:

- Equal types are returned unchanged.
- NULL is the identity: unify(NULL, X) == X.
- STRUCT + STRUCT merges field-wise (see ``merge_structs``).
- LIST + LIST unifies the element types with these same rules.
- Two numerics promote: DOUBLE if either side is DOUBLE, else the wider INTEGER.
- Anything else falls back to STRING, never to ANY.

Inside a struct merge the rules are stricter, matching how nested columns are
materialised: fields whose types differ become STRING (no numeric promotion),
and LIST fields merge element-wise only when both elements are structs,
otherwise they become ``List(String)``.

Both functions are commutative and associative, so per-shard results can be
folded in any order.
"""

from __future__ import annotations

from typing import cast

from yaml_tabular.schema.types import DOUBLE, STRING, InferredType, TypeKind

__all__ = ["merge_structs", "unify"]


def unify(left: InferredType, right: InferredType) -> InferredType:
    """Return the narrowest type able to represent values of both ``left`` and ``right``."""
    if left == right:
        return left
    if left.kind == TypeKind.NULL:
        return right
    if right.kind == TypeKind.NULL:
        return left

    if left.kind == TypeKind.STRUCT and right.kind == TypeKind.STRUCT:
        return merge_structs(left, right)

    if left.kind == TypeKind.LIST and right.kind == TypeKind.LIST:
        return InferredType.list_of(
            unify(cast(InferredType, left.element), cast(InferredType, right.element))
        )

    if left.is_numeric and right.is_numeric:
        return _promote_numeric(left, right)

    return STRING


def merge_structs(left: InferredType, right: InferredType) -> InferredType:
    """Merge two STRUCT types, keeping fields from both in first-seen order.

    A field present on one side only is kept as-is (it is optional, not a
    conflict).  An empty struct therefore merges to the other side unchanged.

    Raises:
        ValueError: If either argument is not a STRUCT.
    """
    if left.kind != TypeKind.STRUCT or right.kind != TypeKind.STRUCT:
        msg = f"merge_structs requires two structs, got {left} and {right}"
        raise ValueError(msg)

    merged = dict(left.fields)
    for name, field_type in right.fields:
        existing = merged.get(name)
        merged[name] = field_type if existing is None else _merge_field(existing, field_type)
    return InferredType.struct(merged.items())


def _merge_field(left: InferredType, right: InferredType) -> InferredType:
    if left == right:
        return left
    if left.kind == TypeKind.NULL:
        return right
    if right.kind == TypeKind.NULL:
        return left

    if left.kind == TypeKind.STRUCT and right.kind == TypeKind.STRUCT:
        return merge_structs(left, right)

    if left.kind == TypeKind.LIST and right.kind == TypeKind.LIST:
        left_element = cast(InferredType, left.element)
        right_element = cast(InferredType, right.element)
        if left_element.kind == TypeKind.NULL:
            return right
        if right_element.kind == TypeKind.NULL:
            return left
        if left_element.kind == TypeKind.STRUCT and right_element.kind == TypeKind.STRUCT:
            return InferredType.list_of(merge_structs(left_element, right_element))
        return InferredType.list_of(STRING)

    return STRING


def _promote_numeric(left: InferredType, right: InferredType) -> InferredType:
    if left.kind == TypeKind.DOUBLE or right.kind == TypeKind.DOUBLE:
        return DOUBLE
    return InferredType.integer(max(cast(int, left.width), cast(int, right.width)))
