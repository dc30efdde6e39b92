"""Public API functions for yaml-tabular.

Each call builds fresh parsers, inferrers and extractors so that no state is
shared between calls.  Callers that issue many path queries against the same
paths should hold a ``PathExtractor`` instead, which keeps its compiled-path
cache across calls.
"""

from __future__ import annotations

from collections.abc import Iterable

from yaml_tabular import serializer
from yaml_tabular.extraction import PathExtractor
from yaml_tabular.reader import YamlReader
from yaml_tabular.result import ReadResult
from yaml_tabular.schema.config import InferenceConfig, ReadOptions
from yaml_tabular.schema.convert import TypedValue, ValueConverter
from yaml_tabular.schema.inference import Schema, SchemaInferrer
from yaml_tabular.schema.scalars import classify_scalar
from yaml_tabular.schema.types import InferredType
from yaml_tabular.tree.nodes import Node
from yaml_tabular.tree.parser import DocumentParser

__all__ = [
    "array_length",
    "classify",
    "convert",
    "exists",
    "extract",
    "extract_string",
    "infer_jagged_type",
    "infer_schema",
    "is_valid",
    "keys",
    "parse_documents",
    "read_yaml",
    "to_json",
    "type_of",
]


def parse_documents(text: str | bytes, ignore_errors: bool = False) -> list[Node]:
    """Parse a YAML stream into its documents.

    Args:
        text:          YAML text, possibly holding several ``---`` separated
                       documents.
        ignore_errors: Keep the documents that parse and drop the rest instead
                       of raising.

    Raises:
        DocumentParseError: If parsing fails and ``ignore_errors`` is False.
    """
    return DocumentParser(ignore_errors=ignore_errors).parse(text)


def is_valid(text: str | bytes) -> bool:
    """Return True if ``text`` parses and holds at least one document; never raises."""
    return DocumentParser().is_valid(text)


def classify(text: str) -> InferredType:
    """Return the narrowest scalar type for a raw scalar text."""
    return classify_scalar(text)


def infer_schema(
    documents: Iterable[Node],
    config: InferenceConfig | None = None,
) -> Schema:
    """Infer a columnar schema from row documents.

    Args:
        documents: Row documents, usually maps.
        config:    Sampling and detection parameters.  Defaults to
                   ``InferenceConfig()`` when None.
    """
    return SchemaInferrer(config).infer(documents)


def infer_jagged_type(
    documents: Iterable[Node],
    config: InferenceConfig | None = None,
) -> InferredType:
    """Infer one type that describes every document as a whole."""
    return SchemaInferrer(config).infer_jagged(documents)


def convert(node: Node | None, target: InferredType) -> TypedValue:
    """Convert a node to ``target``; unconvertible values become typed nulls."""
    return ValueConverter().convert(node, target)


def read_yaml(
    text: str | bytes | Iterable[str | bytes],
    options: ReadOptions | None = None,
    schema: Schema | None = None,
) -> ReadResult:
    """Read YAML text into a schema and typed rows.

    Args:
        text:    One input, or an iterable of inputs (e.g. one per file) that
                 share a single schema.
        options: Parsing and inference options.  Defaults to ``ReadOptions()``.
        schema:  A declared schema; skips inference when given.

    Returns:
        A ``ReadResult`` holding the schema and one STRUCT value per row.

    Raises:
        DocumentParseError: If an input fails to parse and
            ``options.ignore_errors`` is False.
    """
    reader = YamlReader(options=options, schema=schema)
    if isinstance(text, (str, bytes)):
        return reader.read(text)
    return reader.read_batches(text)


def to_json(document: Node | str) -> str:
    """Render a document (or the single YAML document in ``document``) as canonical JSON."""
    return serializer.to_json(_as_tree(document))


def extract(document: Node | str, path: str) -> Node | None:
    """Return the sub-node at ``path``, or None when the path is not found.

    Raises:
        PathSyntaxError: If ``path`` is malformed.
    """
    return PathExtractor().extract(_as_tree(document), path)


def extract_string(document: Node | str, path: str) -> str | None:
    """Return the text at ``path``; None when not found or null."""
    return PathExtractor().extract_string(_as_tree(document), path)


def exists(document: Node | str, path: str) -> bool:
    """Return True when ``path`` is found and is not null."""
    return PathExtractor().exists(_as_tree(document), path)


def type_of(document: Node | str, path: str = "$") -> str | None:
    """Return "null", "scalar", "array" or "object"; None when not found."""
    return PathExtractor().type_of(_as_tree(document), path)


def keys(document: Node | str, path: str = "$") -> list[str] | None:
    """Return the key names of the map at ``path``; None when not found or not a map."""
    return PathExtractor().keys(_as_tree(document), path)


def array_length(document: Node | str, path: str = "$") -> int | None:
    """Return the item count of the sequence at ``path``; None when not a sequence."""
    return PathExtractor().array_length(_as_tree(document), path)


def _as_tree(document: Node | str) -> Node:
    if isinstance(document, Node):
        return document
    documents = DocumentParser(multi_document=False).parse(document)
    return documents[0] if documents else Node.null()
