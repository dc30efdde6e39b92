"""yaml-tabular: schema inference and typed row extraction for YAML documents.

Reads YAML streams into a stable columnar schema and typed rows, and answers
path queries (``$.a.b[0]``) against individual documents.

Example::

    from yaml_tabular import read_yaml

    result = read_yaml("id: 1\\nname: a\\n---\\nid: 2\\nname: b\\n")
    result.schema.names    # ["id", "name"]
    result.to_records()    # [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]
"""

from __future__ import annotations

from yaml_tabular.api import (
    array_length,
    classify,
    convert,
    exists,
    extract,
    extract_string,
    infer_jagged_type,
    infer_schema,
    is_valid,
    keys,
    parse_documents,
    read_yaml,
    to_json,
    type_of,
)
from yaml_tabular.errors import DocumentParseError, PathSyntaxError, YamlTabularError
from yaml_tabular.extraction import PathExtractor
from yaml_tabular.path import PathExpression, compile_path
from yaml_tabular.reader import YamlReader
from yaml_tabular.result import ReadResult
from yaml_tabular.schema import (
    InferenceConfig,
    InferredType,
    ReadOptions,
    Schema,
    SchemaInferrer,
    TypedValue,
    TypeKind,
    ValueConverter,
)
from yaml_tabular.tree import DocumentParser, Node, NodeKind, TreeBuilder

__version__ = "0.1.0"

__all__ = [
    "DocumentParseError",
    "DocumentParser",
    "InferenceConfig",
    "InferredType",
    "Node",
    "NodeKind",
    "PathExpression",
    "PathExtractor",
    "PathSyntaxError",
    "ReadOptions",
    "ReadResult",
    "Schema",
    "SchemaInferrer",
    "TreeBuilder",
    "TypeKind",
    "TypedValue",
    "ValueConverter",
    "YamlReader",
    "YamlTabularError",
    "array_length",
    "classify",
    "compile_path",
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
