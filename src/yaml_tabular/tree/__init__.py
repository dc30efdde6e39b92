"""Tree subpackage: the document model and the parsers that produce it.

Re-exports the public API for the tree module:
- Node: immutable document tree node
- NodeKind: StrEnum of the four node kinds (NULL, SCALAR, SEQUENCE, MAP)
- TreeBuilder: builds Node trees from decoded Python values or composed YAML
- DocumentParser: strict and resilient multi-document parsing
- split_frontmatter: separates a leading ``---`` block from the body text
"""

from yaml_tabular.tree.builder import TreeBuilder
from yaml_tabular.tree.nodes import Node, NodeKind
from yaml_tabular.tree.parser import DocumentParser, split_frontmatter

__all__ = ["DocumentParser", "Node", "NodeKind", "TreeBuilder", "split_frontmatter"]
