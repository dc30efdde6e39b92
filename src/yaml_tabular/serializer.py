"""Canonical JSON rendering of document trees.

Scalars are rendered according to their classified type so that the same
document always produces the same text:

- NULL -> ``null``; BOOLEAN -> ``true``/``false``
- INTEGER and finite DOUBLE -> JSON numbers
- infinities and NaN -> the strings ``"Infinity"``, ``"-Infinity"``, ``"NaN"``
- DATE / TIME / TIMESTAMP -> ISO 8601 strings
- everything else -> the raw text as a JSON string

Maps and sequences keep their order.  Output is compact (no whitespace).
"""

from __future__ import annotations

import json
import math
from typing import Any, cast

from yaml_tabular.schema.scalars import (
    classify_scalar,
    parse_boolean,
    parse_date,
    parse_double,
    parse_integer,
    parse_time,
    parse_timestamp,
)
from yaml_tabular.schema.types import TypeKind
from yaml_tabular.tree.nodes import Node, NodeKind

__all__ = ["to_json", "to_plain"]


def to_plain(node: Node) -> Any:
    """Convert a Node to JSON-compatible Python values (dict, list, str, int, ...)."""
    if node.kind == NodeKind.MAP:
        return {key: to_plain(value) for key, value in node.entries}
    if node.kind == NodeKind.SEQUENCE:
        return [to_plain(item) for item in node.items]
    if node.kind == NodeKind.NULL:
        return None
    return _plain_scalar(cast(str, node.text))


def to_json(node: Node) -> str:
    """Render a Node as compact canonical JSON text."""
    return json.dumps(
        to_plain(node), ensure_ascii=False, separators=(",", ":"), allow_nan=False
    )


def _plain_scalar(text: str) -> Any:
    kind = classify_scalar(text).kind

    if kind == TypeKind.NULL:
        return None
    if kind == TypeKind.BOOLEAN:
        return parse_boolean(text)
    if kind == TypeKind.INTEGER:
        return parse_integer(text)
    if kind == TypeKind.DOUBLE:
        number = cast(float, parse_double(text))
        if math.isnan(number):
            return "NaN"
        if math.isinf(number):
            return "Infinity" if number > 0 else "-Infinity"
        return number
    if kind == TypeKind.DATE:
        return _isoformat(parse_date(text))
    if kind == TypeKind.TIME:
        return _isoformat(parse_time(text))
    if kind == TypeKind.TIMESTAMP:
        return _isoformat(parse_timestamp(text))
    return text


def _isoformat(value: Any) -> str:
    return value.isoformat()
