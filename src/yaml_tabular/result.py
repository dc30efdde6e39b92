"""ReadResult dataclass for reader output.

This module provides the result type returned by ``YamlReader.read`` calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from yaml_tabular.schema.convert import TypedValue
from yaml_tabular.schema.inference import Schema

__all__ = ["ReadResult"]


@dataclass(frozen=True, slots=True)
class ReadResult:
    """Result of reading one or more YAML inputs.

    Attributes:
        schema: The schema every row was converted with.
        rows: One STRUCT TypedValue per row, fields in schema order.
        document_count: Number of documents parsed (before row selection).
    """

    schema: Schema
    rows: list[TypedValue]
    document_count: int

    def to_records(self) -> list[dict[str, Any]]:
        """Rows as plain dicts (column name -> Python value)."""
        return [row.to_python() or dict.fromkeys(self.schema.names) for row in self.rows]
