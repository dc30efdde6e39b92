"""TreeBuilder: converts decoded Python values and composed YAML nodes into Node trees.

Two entry points share one output model:

- ``build`` takes an already-decoded JSON/YAML value (dict, list, str, int,
  float, bool, None, date/time) and renders every scalar back to text, so
  that ``json.loads`` output and parsed YAML are classified identically.
- ``from_yaml`` takes a PyYAML representation node produced by
  ``yaml.compose``/``yaml.compose_all`` and keeps each scalar's raw lexical
  form.  Aliases are expanded into independent copies; a recursive alias is
  rejected because trees must be acyclic.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any

import yaml

from yaml_tabular.errors import DocumentParseError
from yaml_tabular.tree.nodes import Node

_NULL_TAG = "tag:yaml.org,2002:null"

# Type alias for values accepted by TreeBuilder.build
PlainValue = (
    dict[Any, Any] | list[Any] | tuple[Any, ...] | str | int | float | bool | None
)


@dataclass
class TreeBuilder:
    """Builds immutable Node trees.

    The dispatch order in ``build`` is critical: bool MUST be checked before
    int because bool is a subclass of int in Python, and datetime before date
    for the same reason.

    Example::

        builder = TreeBuilder()
        tree = builder.build({"name": "John", "age": 42})
        # tree: MAP -> [("name", SCALAR "John"), ("age", SCALAR "42")]
    """

    def build(self, value: PlainValue) -> Node:
        """Convert a decoded Python value to a Node tree.

        Raises:
            TypeError: If value (or anything nested in it) is not a supported type.
        """
        if value is None:
            return Node.null()

        if isinstance(value, bool):
            return Node.scalar("true" if value else "false")

        if isinstance(value, dict):
            return Node.mapping(
                (self._plain_key(key), self.build(item)) for key, item in value.items()
            )

        if isinstance(value, (list, tuple)):
            return Node.sequence(self.build(item) for item in value)

        if isinstance(value, str):
            return Node.scalar(value)

        if isinstance(value, (int, float)):
            return Node.scalar(repr(value))

        if isinstance(value, (dt.datetime, dt.date, dt.time)):
            return Node.scalar(value.isoformat())

        raise TypeError(f"Unsupported value type: {type(value)!r}")

    def from_yaml(self, node: yaml.Node | None) -> Node:
        """Convert a composed PyYAML node to a Node tree.

        Raises:
            DocumentParseError: If the node graph contains a recursive alias.
        """
        if node is None:
            return Node.null()
        return self._from_yaml(node, set())

    def _from_yaml(self, node: yaml.Node, active: set[int]) -> Node:
        if isinstance(node, yaml.ScalarNode):
            if node.tag == _NULL_TAG:
                return Node.null()
            return Node.scalar(node.value)

        # Anchored collections are shared by every alias; only a node that is
        # still on the current path makes the graph cyclic.
        if id(node) in active:
            msg = f"Recursive alias at {node.start_mark}"
            raise DocumentParseError(msg)
        active.add(id(node))
        try:
            if isinstance(node, yaml.SequenceNode):
                return Node.sequence(self._from_yaml(item, active) for item in node.value)
            return Node.mapping(
                (self._yaml_key(key), self._from_yaml(value, active))
                for key, value in node.value
            )
        finally:
            active.discard(id(node))

    def _yaml_key(self, key: yaml.Node) -> str:
        if isinstance(key, yaml.ScalarNode):
            return key.value
        # Complex keys are rare; their flow-style text stands in for the name.
        return yaml.serialize(key, default_flow_style=True).strip()

    def _plain_key(self, key: Any) -> str:
        if isinstance(key, str):
            return key
        if key is None:
            return "null"
        built = self.build(key)
        return built.text if built.text is not None else str(key)
