"""InferenceConfig and ReadOptions: immutable configuration for reading documents.

InferenceConfig holds the schema-inference parameters (sampling bounds,
auto-detection, user-declared column types).  ReadOptions wraps it together
with the parsing and row-selection switches used by ``YamlReader``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from yaml_tabular.schema.types import InferredType


@dataclass(frozen=True, slots=True)
class InferenceConfig:
    """Immutable configuration for schema inference.

    Attributes:
        sample_size: Maximum number of rows inspected for schema purposes.
            None (the default) means unbounded.  This is a hard cap: rows past
            it are still converted, they just never influence the schema.
        maximum_sample_files: Maximum number of source batches ("files")
            inspected.  None (the default) means unbounded.
        auto_detect: When False every detected column is typed STRING.
        column_types: User-declared types by column name.  A declared type
            takes precedence over detection for that column.
    """

    sample_size: int | None = None
    maximum_sample_files: int | None = None
    auto_detect: bool = True
    column_types: Mapping[str, InferredType] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        if self.sample_size is not None and self.sample_size < 1:
            msg = f"sample_size must be a positive integer or None, got {self.sample_size}"
            raise ValueError(msg)
        if self.maximum_sample_files is not None and self.maximum_sample_files < 1:
            msg = (
                "maximum_sample_files must be a positive integer or None, "
                f"got {self.maximum_sample_files}"
            )
            raise ValueError(msg)
        for name, declared in self.column_types.items():
            if not isinstance(declared, InferredType):
                msg = f"column_types[{name!r}] must be an InferredType, got {declared!r}"
                raise ValueError(msg)
        # Frozen: copy through object.__setattr__ so callers cannot mutate it later.
        object.__setattr__(self, "column_types", MappingProxyType(dict(self.column_types)))


@dataclass(frozen=True, slots=True)
class ReadOptions:
    """Immutable options for ``YamlReader``.

    Attributes:
        ignore_errors: Recover valid documents from malformed input instead of
            failing the whole input.
        multi_document: Accept a stream of documents.  When False the input
            must hold at most one document.
        expand_root_sequence: Turn each map inside a root sequence into its
            own row.  When False a root sequence is not a row.
        inference: Schema inference parameters.
    """

    ignore_errors: bool = False
    multi_document: bool = True
    expand_root_sequence: bool = True
    inference: InferenceConfig = field(default_factory=InferenceConfig)
