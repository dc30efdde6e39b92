"""Node dataclass and NodeKind StrEnum for the document tree representation.

Provides the foundational data types every other component reads: the
parser and TreeBuilder produce Node trees, the classifier, unifier and
converter consume them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum, auto


class NodeKind(StrEnum):
    """Enumeration of the four node kinds in a document tree.

    - NULL     -> "null"     : an explicit null (``~``, ``null``, empty value)
    - SCALAR   -> "scalar"   : a leaf holding its raw, unparsed text
    - SEQUENCE -> "sequence" : an ordered list of child nodes
    - MAP      -> "map"      : an ordered list of (key, child) entries
    """

    NULL = auto()
    SCALAR = auto()
    SEQUENCE = auto()
    MAP = auto()


@dataclass(frozen=True, slots=True)
class Node:
    """An immutable node of a parsed document.

    Use the ``null``, ``scalar``, ``sequence`` and ``mapping`` constructors
    rather than the raw dataclass signature; they normalise children into
    tuples and resolve duplicate map keys.

    Attributes:
        kind:    Which of the four variants this node is.
        text:    Raw lexical form for SCALAR nodes; None for all others.
        items:   Children of a SEQUENCE node, in document order.
        entries: (key, child) pairs of a MAP node, in insertion order.
    """

    kind: NodeKind
    text: str | None = None
    items: tuple[Node, ...] = field(default=())
    entries: tuple[tuple[str, Node], ...] = field(default=())

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def null(cls) -> Node:
        return _NULL

    @classmethod
    def scalar(cls, text: str) -> Node:
        return cls(kind=NodeKind.SCALAR, text=text)

    @classmethod
    def sequence(cls, items: Iterable[Node] = ()) -> Node:
        return cls(kind=NodeKind.SEQUENCE, items=tuple(items))

    @classmethod
    def mapping(cls, entries: Iterable[tuple[str, Node]] = ()) -> Node:
        """Build a MAP node; a repeated key keeps its first position, last value."""
        merged: dict[str, Node] = {}
        for key, value in entries:
            merged[key] = value
        return cls(kind=NodeKind.MAP, entries=tuple(merged.items()))

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    @property
    def is_null(self) -> bool:
        return self.kind == NodeKind.NULL

    @property
    def is_scalar(self) -> bool:
        return self.kind == NodeKind.SCALAR

    @property
    def is_sequence(self) -> bool:
        return self.kind == NodeKind.SEQUENCE

    @property
    def is_map(self) -> bool:
        return self.kind == NodeKind.MAP

    # ------------------------------------------------------------------
    # Container access
    # ------------------------------------------------------------------

    def get(self, key: str) -> Node | None:
        """Return the child stored under ``key``, or None if absent or not a map."""
        for entry_key, value in self.entries:
            if entry_key == key:
                return value
        return None

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]

    @property
    def size(self) -> int:
        """Number of direct children; 0 for NULL and SCALAR nodes."""
        if self.kind == NodeKind.SEQUENCE:
            return len(self.items)
        if self.kind == NodeKind.MAP:
            return len(self.entries)
        return 0


_NULL = Node(kind=NodeKind.NULL)
