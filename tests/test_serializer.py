"""Tests for canonical JSON rendering."""

from __future__ import annotations

import pytest

from yaml_tabular.serializer import to_json, to_plain
from yaml_tabular.tree.nodes import Node
from yaml_tabular.tree.parser import DocumentParser


def _doc(text: str) -> Node:
    (doc,) = DocumentParser().parse(text)
    return doc


class TestScalars:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("true", "true"),
            ("No", "false"),
            ("42", "42"),
            ("3.0", "3"),
            ("2.5", "2.5"),
            ("inf", '"Infinity"'),
            ("-inf", '"-Infinity"'),
            ("nan", '"NaN"'),
            ("2024-01-02", '"2024-01-02"'),
            ("2024-01-02 03:04:05+01:00", '"2024-01-02T02:04:05"'),
            ("07:05", '"07:05:00"'),
            ("hello", '"hello"'),
            ("0x1F", '"0x1F"'),
        ],
    )
    def test_scalar(self, text: str, expected: str) -> None:
        assert to_json(Node.scalar(text)) == expected

    def test_null(self) -> None:
        assert to_json(Node.null()) == "null"

    def test_non_ascii_kept(self) -> None:
        assert to_json(Node.scalar("café")) == '"café"'


class TestContainers:
    def test_order_preserved_and_compact(self) -> None:
        assert to_json(_doc("b: 1\na: [x, ~, {c: on}]\n")) == '{"b":1,"a":["x",null,{"c":true}]}'

    def test_empty_containers(self) -> None:
        assert to_json(Node.sequence()) == "[]"
        assert to_json(Node.mapping()) == "{}"

    def test_to_plain(self) -> None:
        assert to_plain(_doc("a: [1, 2.5]\n")) == {"a": [1, 2.5]}

    def test_deterministic(self) -> None:
        doc = _doc("x: {y: [1, 2]}\nz: text\n")
        assert to_json(doc) == to_json(doc)
