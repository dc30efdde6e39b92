"""Path expressions: parse ``$``-rooted dot/bracket paths and evaluate them on trees.

Grammar::

    path      := "$" component*
    component := "." key | "[" index "]" | key
    key       := bare or quoted text; ' and " toggle quoting, \\ escapes the
                 next character, . and [ are literal inside quotes
    index     := optional sign followed by digits

Malformed paths raise ``PathSyntaxError`` when they are compiled, before any
tree is read.  Evaluation never raises: a key against a non-map, a missing
key, or an index that is negative or out of range yields None ("not found"),
which callers tell apart from a found NULL node.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from yaml_tabular.errors import PathSyntaxError
from yaml_tabular.tree.nodes import Node, NodeKind

__all__ = ["ROOT", "PathExpression", "compile_path", "evaluate"]

ROOT = "$"
_INDEX = re.compile(r"[+-]?\d+")
# Indexes longer than this cannot address any sequence and exceed the int() digit limit.
_MAX_INDEX_DIGITS = 18


@dataclass(frozen=True, slots=True)
class PathExpression:
    """A compiled path: map keys (str) and sequence indexes (int), in order."""

    text: str
    components: tuple[str | int, ...]

    def evaluate(self, root: Node) -> Node | None:
        """Walk ``root`` along the components; None means not found."""
        node = root
        for component in self.components:
            if isinstance(component, int):
                if node.kind != NodeKind.SEQUENCE or not 0 <= component < len(node.items):
                    return None
                node = node.items[component]
            else:
                if node.kind != NodeKind.MAP:
                    return None
                child = node.get(component)
                if child is None:
                    return None
                node = child
        return node

    def __str__(self) -> str:
        return self.text


def compile_path(text: str) -> PathExpression:
    """Parse a textual path.

    Raises:
        PathSyntaxError: If the path does not start with ``$``, has an
            unclosed ``[``, or an index that is not an integer.
    """
    if not text.startswith(ROOT):
        msg = f"Path must start with '{ROOT}': {text!r}"
        raise PathSyntaxError(msg)

    components: list[str | int] = []
    current: list[str] = []
    in_quotes = False
    escaped = False
    idx = 1

    while idx < len(text):
        char = text[idx]
        idx += 1

        if escaped:
            current.append(char)
            escaped = False
            continue
        if char == "\\":
            escaped = True
            continue
        if char in ("'", '"'):
            in_quotes = not in_quotes
            continue
        if in_quotes or char not in (".", "["):
            current.append(char)
            continue

        if current:
            components.append("".join(current))
            current = []
        if char == "[":
            close = text.find("]", idx)
            if close == -1:
                msg = f"Unclosed array index in path: {text!r}"
                raise PathSyntaxError(msg)
            components.append(_parse_index(text[idx:close], text))
            idx = close + 1

    if current:
        components.append("".join(current))
    return PathExpression(text=text, components=tuple(components))


def evaluate(root: Node, path: str | PathExpression) -> Node | None:
    """Compile ``path`` if needed and evaluate it against ``root``."""
    expression = path if isinstance(path, PathExpression) else compile_path(path)
    return expression.evaluate(root)


def _parse_index(raw: str, text: str) -> int:
    index = raw.strip()
    if not _INDEX.fullmatch(index):
        msg = f"Invalid array index {raw!r} in path: {text!r}"
        raise PathSyntaxError(msg)
    if len(index.lstrip("+-")) > _MAX_INDEX_DIGITS:
        return -1
    return int(index)
