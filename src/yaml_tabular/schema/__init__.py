"""schema subpackage: type inference and value conversion.

Provides the inferred type model, the scalar classifier, the type unifier,
schema inference and the node-to-value converter.  Import from this module
(not from sub-modules directly) to stay on the stable public interface.

Example::

    from yaml_tabular.schema import SchemaInferrer, ValueConverter

    schema = SchemaInferrer().infer(rows)
    values = [ValueConverter().convert_row(row, schema) for row in rows]
"""

from __future__ import annotations

from yaml_tabular.schema.config import InferenceConfig, ReadOptions
from yaml_tabular.schema.scalars import classify_scalar
from yaml_tabular.schema.types import InferredType, TypeKind
from yaml_tabular.schema.unify import merge_structs, unify
from yaml_tabular.schema.convert import TypedValue, ValueConverter
from yaml_tabular.schema.inference import Schema, SchemaInferrer, detect_type

__all__ = [
    "InferenceConfig",
    "InferredType",
    "ReadOptions",
    "Schema",
    "SchemaInferrer",
    "TypeKind",
    "TypedValue",
    "ValueConverter",
    "classify_scalar",
    "detect_type",
    "merge_structs",
    "unify",
]
