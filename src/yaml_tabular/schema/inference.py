"""Schema and SchemaInferrer: one stable columnar schema for a document population.

Row mode (``infer`` / ``infer_batches``) keeps an ordered list of top-level
field names in first-seen order and folds each field's detected type through
``unify``.  A population without any map degenerates to a single ``value``
column typed from those documents (STRING when there is no data at all).

Jagged mode (``infer_jagged``) types whole documents instead of their fields
and folds ``unify`` over them.

Sampling is prefix-based and deterministic.  Once ``sample_size`` rows or
``maximum_sample_files`` batches have been inspected, no further document is
looked at for schema purposes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import cast

from yaml_tabular.schema.config import InferenceConfig
from yaml_tabular.schema.scalars import classify_scalar
from yaml_tabular.schema.types import NULL, STRING, InferredType, TypeKind
from yaml_tabular.schema.unify import unify
from yaml_tabular.tree.nodes import Node, NodeKind

__all__ = ["VALUE_COLUMN", "Schema", "SchemaInferrer", "detect_type"]

logger = logging.getLogger(__name__)

VALUE_COLUMN = "value"


def detect_type(node: Node) -> InferredType:
    """Classify a whole node: scalars by text, sequences by unified elements, maps as structs.

    An empty sequence is ``List(Null)`` so that it yields to any populated list.
    """
    if node.kind == NodeKind.NULL:
        return NULL
    if node.kind == NodeKind.SCALAR:
        return classify_scalar(cast(str, node.text))
    if node.kind == NodeKind.SEQUENCE:
        element = NULL
        for item in node.items:
            element = unify(element, detect_type(item))
        return InferredType.list_of(element)
    return InferredType.struct((key, detect_type(value)) for key, value in node.entries)


def _finalize(value_type: InferredType) -> InferredType:
    """Replace NULL (never observed with a value) by STRING, recursively."""
    if value_type.kind == TypeKind.NULL:
        return STRING
    if value_type.kind == TypeKind.LIST:
        return InferredType.list_of(_finalize(cast(InferredType, value_type.element)))
    if value_type.kind == TypeKind.STRUCT:
        return InferredType.struct(
            (name, _finalize(field_type)) for name, field_type in value_type.fields
        )
    return value_type


@dataclass(frozen=True, slots=True)
class Schema:
    """An ordered list of (column name, type) pairs.

    Attributes:
        fields: Columns in first-seen order.
        value_fallback: True when the population held no maps and the schema
            is the single synthetic ``value`` column describing whole
            documents.
    """

    fields: tuple[tuple[str, InferredType], ...]
    value_fallback: bool = False

    @classmethod
    def from_fields(cls, fields: Iterable[tuple[str, InferredType]]) -> Schema:
        return cls(fields=tuple(fields))

    @classmethod
    def value(cls, value_type: InferredType) -> Schema:
        return cls(fields=((VALUE_COLUMN, value_type),), value_fallback=True)

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.fields]

    @property
    def types(self) -> list[InferredType]:
        return [field_type for _, field_type in self.fields]

    def __getitem__(self, name: str) -> InferredType:
        for field_name, field_type in self.fields:
            if field_name == name:
                return field_type
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        return any(field_name == name for field_name, _ in self.fields)

    def as_type(self) -> InferredType:
        """The row type: a STRUCT of all columns in schema order."""
        return InferredType.struct(self.fields)


class SchemaInferrer:
    """Infers a Schema from a sampled prefix of a document population.

    Each call starts from scratch; the inferrer holds configuration only.

    Example::

        inferrer = SchemaInferrer(InferenceConfig(sample_size=100))
        schema = inferrer.infer(rows)
        schema.names   # ["id", "name", ...] in first-seen order
    """

    def __init__(self, config: InferenceConfig | None = None) -> None:
        self._config = config if config is not None else InferenceConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def infer(self, documents: Iterable[Node]) -> Schema:
        """Infer a schema from a single batch of row documents."""
        return self.infer_batches([documents])

    def infer_batches(self, batches: Iterable[Iterable[Node]]) -> Schema:
        """Infer a schema from several batches (e.g. one per source file)."""
        declared = self._config.column_types
        order: list[str] = []
        types: dict[str, InferredType] = {}
        fallback: InferredType | None = None
        sampled = 0

        for node in self._sample(batches):
            sampled += 1
            if node.kind != NodeKind.MAP:
                detected = self._detect(node)
                fallback = detected if fallback is None else unify(fallback, detected)
                continue

            for key, value in node.entries:
                if key not in types:
                    order.append(key)
                if key in declared:
                    types[key] = declared[key]
                    continue
                detected = self._detect(value)
                existing = types.get(key)
                types[key] = detected if existing is None else unify(existing, detected)

        if order:
            schema = Schema.from_fields(
                (name, types[name] if name in declared else _finalize(types[name]))
                for name in order
            )
        elif fallback is not None:
            schema = Schema.value(_finalize(fallback))
        else:
            schema = Schema.value(STRING)

        logger.debug(
            "Inferred %d column(s) from %d sampled document(s)", len(schema.fields), sampled
        )
        return schema

    def infer_jagged(self, documents: Iterable[Node]) -> InferredType:
        """Type whole documents and fold them into a single type.

        Returns STRING for an empty population.
        """
        merged: InferredType | None = None
        for node in self._sample([documents]):
            detected = self._detect(node)
            merged = detected if merged is None else unify(merged, detected)
        return STRING if merged is None else _finalize(merged)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _detect(self, node: Node) -> InferredType:
        if not self._config.auto_detect:
            return STRING
        return detect_type(node)

    def _sample(self, batches: Iterable[Iterable[Node]]) -> Iterator[Node]:
        max_rows = self._config.sample_size
        max_files = self._config.maximum_sample_files
        sampled = 0

        for batch_idx, batch in enumerate(batches):
            if max_files is not None and batch_idx >= max_files:
                logger.debug("Sampling stopped after %d batch(es)", batch_idx)
                return
            for node in batch:
                if max_rows is not None and sampled >= max_rows:
                    logger.debug("Sampling stopped after %d row(s)", sampled)
                    return
                sampled += 1
                yield node
