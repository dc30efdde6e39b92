"""YamlReader: orchestrator that wires DocumentParser + SchemaInferrer + ValueConverter.

This is the central wiring layer between the individual components and the
public API.  ``read`` turns raw text into typed rows:

1. Parse every input with ``DocumentParser`` (strict or resilient).
2. Select rows: a root map is one row; with ``expand_root_sequence`` every
   map inside a root sequence is a row.  When no input yields a map row, every
   non-null document becomes a row of the single ``value`` column.
3. Infer the schema from a sampled prefix of the rows, one batch per input,
   unless the caller supplied a schema.
4. Convert every row (sampled or not) with ``ValueConverter``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from yaml_tabular.result import ReadResult
from yaml_tabular.schema.config import ReadOptions
from yaml_tabular.schema.convert import ValueConverter
from yaml_tabular.schema.inference import Schema, SchemaInferrer
from yaml_tabular.tree.nodes import Node, NodeKind
from yaml_tabular.tree.parser import DocumentParser

__all__ = ["YamlReader", "extract_rows"]

logger = logging.getLogger(__name__)


def extract_rows(documents: Iterable[Node], expand_root_sequence: bool = True) -> list[Node]:
    """Select the documents (or root sequence items) that become rows.

    Only maps are rows; other documents and non-map sequence items are skipped.
    """
    rows: list[Node] = []
    for doc in documents:
        if doc.kind == NodeKind.SEQUENCE and expand_root_sequence:
            rows.extend(item for item in doc.items if item.kind == NodeKind.MAP)
        elif doc.kind == NodeKind.MAP:
            rows.append(doc)
    return rows


class YamlReader:
    """Reads YAML text into a schema and typed rows.

    Example::

        reader = YamlReader(ReadOptions(ignore_errors=True))
        result = reader.read("id: 1\\nname: a\\n---\\nid: 2\\nname: b\\n")
        result.schema.names    # ["id", "name"]
        result.to_records()    # [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]
    """

    def __init__(self, options: ReadOptions | None = None, schema: Schema | None = None) -> None:
        """Initialise the reader.

        Args:
            options: Parsing, row selection and inference options.  Defaults
                to ``ReadOptions()``.
            schema:  A user-declared schema.  When given, inference is
                skipped and every row is converted with this schema.
        """
        self._options = options if options is not None else ReadOptions()
        self._schema = schema
        self._parser = DocumentParser(
            ignore_errors=self._options.ignore_errors,
            multi_document=self._options.multi_document,
        )
        self._inferrer = SchemaInferrer(self._options.inference)
        self._converter = ValueConverter()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def read(self, text: str | bytes) -> ReadResult:
        """Read a single input."""
        return self.read_batches([text])

    def read_batches(self, texts: Iterable[str | bytes]) -> ReadResult:
        """Read several inputs (e.g. one per file) into one schema and row list.

        Raises:
            DocumentParseError: If an input fails to parse and
                ``ignore_errors`` is False.
        """
        documents = [self._parser.parse(text) for text in texts]
        document_count = sum(len(docs) for docs in documents)

        batches = [extract_rows(docs, self._options.expand_root_sequence) for docs in documents]
        if not any(batches):
            batches = [[doc for doc in docs if doc.kind != NodeKind.NULL] for docs in documents]

        schema = self._schema if self._schema is not None else self._inferrer.infer_batches(batches)
        rows = [self._converter.convert_row(node, schema) for batch in batches for node in batch]

        logger.debug(
            "Read %d row(s) from %d document(s) in %d input(s)",
            len(rows),
            document_count,
            len(documents),
        )
        return ReadResult(schema=schema, rows=rows, document_count=document_count)
