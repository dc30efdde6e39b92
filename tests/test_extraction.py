"""Tests for PathExtractor.

Covers extract, extract_string, exists, type_of, keys and array_length,
including the distinction between a found null and a path that is not found.
"""

from __future__ import annotations

import pytest

from yaml_tabular.errors import PathSyntaxError
from yaml_tabular.extraction import PathExtractor
from yaml_tabular.path import compile_path
from yaml_tabular.tree.nodes import Node
from yaml_tabular.tree.parser import DocumentParser


@pytest.fixture
def extractor() -> PathExtractor:
    return PathExtractor()


@pytest.fixture
def tree() -> Node:
    (doc,) = DocumentParser().parse(
        "name: Alice\nage: 030\nempty: ~\ntags: [a, 1]\nmeta: {ok: yes}\n"
    )
    return doc


class TestExtract:
    def test_found(self, extractor: PathExtractor, tree: Node) -> None:
        assert extractor.extract(tree, "$.name") == Node.scalar("Alice")

    def test_not_found(self, extractor: PathExtractor, tree: Node) -> None:
        assert extractor.extract(tree, "$.nope") is None

    def test_accepts_compiled_expression(self, extractor: PathExtractor, tree: Node) -> None:
        assert extractor.extract(tree, compile_path("$.tags[0]")) == Node.scalar("a")

    def test_malformed_path_raises(self, extractor: PathExtractor, tree: Node) -> None:
        with pytest.raises(PathSyntaxError):
            extractor.extract(tree, "name")


class TestExtractString:
    def test_scalar_raw_text(self, extractor: PathExtractor, tree: Node) -> None:
        assert extractor.extract_string(tree, "$.age") == "030"

    def test_container_canonical_json(self, extractor: PathExtractor, tree: Node) -> None:
        assert extractor.extract_string(tree, "$.tags") == '["a",1]'
        assert extractor.extract_string(tree, "$.meta") == '{"ok":true}'

    def test_null_and_missing_are_none(self, extractor: PathExtractor, tree: Node) -> None:
        assert extractor.extract_string(tree, "$.empty") is None
        assert extractor.extract_string(tree, "$.missing") is None


class TestExists:
    def test_present(self, extractor: PathExtractor, tree: Node) -> None:
        assert extractor.exists(tree, "$.meta.ok")

    def test_null_does_not_exist(self, extractor: PathExtractor, tree: Node) -> None:
        assert not extractor.exists(tree, "$.empty")

    def test_missing(self, extractor: PathExtractor, tree: Node) -> None:
        assert not extractor.exists(tree, "$.tags[9]")


class TestTypeOf:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("$", "object"),
            ("$.name", "scalar"),
            ("$.empty", "null"),
            ("$.tags", "array"),
            ("$.missing", None),
        ],
    )
    def test_type_names(
        self, extractor: PathExtractor, tree: Node, path: str, expected: str | None
    ) -> None:
        assert extractor.type_of(tree, path) == expected

    def test_default_path_is_root(self, extractor: PathExtractor) -> None:
        assert extractor.type_of(Node.sequence()) == "array"


class TestKeys:
    def test_root_keys_in_document_order(self, extractor: PathExtractor, tree: Node) -> None:
        assert extractor.keys(tree) == ["name", "age", "empty", "tags", "meta"]

    def test_nested_map(self, extractor: PathExtractor, tree: Node) -> None:
        assert extractor.keys(tree, "$.meta") == ["ok"]

    def test_empty_map(self, extractor: PathExtractor) -> None:
        assert extractor.keys(Node.mapping()) == []

    @pytest.mark.parametrize("path", ["$.name", "$.tags", "$.empty", "$.missing"])
    def test_not_a_map_is_none(self, extractor: PathExtractor, tree: Node, path: str) -> None:
        assert extractor.keys(tree, path) is None

    def test_malformed_path_raises(self, extractor: PathExtractor, tree: Node) -> None:
        with pytest.raises(PathSyntaxError):
            extractor.keys(tree, "$.meta[")


class TestArrayLength:
    def test_sequence(self, extractor: PathExtractor, tree: Node) -> None:
        assert extractor.array_length(tree, "$.tags") == 2

    def test_empty_sequence_at_root(self, extractor: PathExtractor) -> None:
        assert extractor.array_length(Node.sequence()) == 0

    @pytest.mark.parametrize("path", ["$", "$.name", "$.meta", "$.empty", "$.tags[5]"])
    def test_not_a_sequence_is_none(
        self, extractor: PathExtractor, tree: Node, path: str
    ) -> None:
        assert extractor.array_length(tree, path) is None
