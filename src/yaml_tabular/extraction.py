"""PathExtractor: path queries over a single document tree.

Wires ``PathCache`` and path evaluation into the extraction queries:

- ``extract``        -> the sub-node at a path, or None when not found
- ``extract_string`` -> raw scalar text; canonical JSON for containers;
                        None when not found or null
- ``exists``         -> True when the path is found and not null
- ``type_of``        -> "null" / "scalar" / "array" / "object", None when not found
- ``keys``           -> key names of a map, None when not found or not a map
- ``array_length``   -> item count of a sequence, None when not found or not
                        a sequence

A malformed path raises ``PathSyntaxError`` from every query; it is never
reported as a missing value.
"""

from __future__ import annotations

from yaml_tabular.cache import PathCache
from yaml_tabular.path import PathExpression
from yaml_tabular.serializer import to_json
from yaml_tabular.tree.nodes import Node, NodeKind

__all__ = ["PathExtractor"]

_TYPE_NAMES = {
    NodeKind.NULL: "null",
    NodeKind.SCALAR: "scalar",
    NodeKind.SEQUENCE: "array",
    NodeKind.MAP: "object",
}


class PathExtractor:
    """Evaluates path queries, compiling each distinct path text only once.

    Two separate ``PathExtractor`` instances never share cache state.

    Example::

        extractor = PathExtractor()
        extractor.extract_string(tree, "$.user.name")   # "Alice"
        extractor.exists(tree, "$.user.missing")        # False
    """

    def __init__(self, max_cache_size: int = 256) -> None:
        self._paths = PathCache(max_size=max_cache_size)

    def extract(self, root: Node, path: str | PathExpression) -> Node | None:
        return self._compile(path).evaluate(root)

    def extract_string(self, root: Node, path: str | PathExpression) -> str | None:
        node = self.extract(root, path)
        if node is None or node.kind == NodeKind.NULL:
            return None
        if node.kind == NodeKind.SCALAR:
            return node.text
        return to_json(node)

    def exists(self, root: Node, path: str | PathExpression) -> bool:
        node = self.extract(root, path)
        return node is not None and node.kind != NodeKind.NULL

    def type_of(self, root: Node, path: str | PathExpression = "$") -> str | None:
        node = self.extract(root, path)
        if node is None:
            return None
        return _TYPE_NAMES[node.kind]

    def keys(self, root: Node, path: str | PathExpression = "$") -> list[str] | None:
        node = self.extract(root, path)
        if node is None or node.kind != NodeKind.MAP:
            return None
        return node.keys()

    def array_length(self, root: Node, path: str | PathExpression = "$") -> int | None:
        node = self.extract(root, path)
        if node is None or node.kind != NodeKind.SEQUENCE:
            return None
        return len(node.items)

    def _compile(self, path: str | PathExpression) -> PathExpression:
        if isinstance(path, PathExpression):
            return path
        return self._paths.compile(path)
