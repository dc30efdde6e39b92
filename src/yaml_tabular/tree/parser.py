"""DocumentParser: strict and resilient multi-document YAML parsing.

The whole input is first composed as one document stream.  If that fails and
the caller asked for error tolerance, the text is cut into segments at every
separator line and each segment is parsed on its own, so a syntax error in one
document never costs the valid documents around it.

Recovery pipeline:
1. Normalise ``\\r\\n`` line endings to ``\\n``.
2. Split at every line that is exactly ``---`` (trailing blanks allowed).
3. Skip segments that are empty or start with a ``#`` comment once trimmed.
4. Prefix every segment but the first with ``---`` again.
5. Parse each segment independently; keep the non-null documents.
6. Drop segments that still fail to parse.

Byte input that is not valid UTF-8 goes through the same pipeline, except that
the bytes are split first and each segment is decoded on its own; segments
that do not decode are dropped with the ones that do not parse.
"""

from __future__ import annotations

import logging

import yaml

from yaml_tabular.errors import DocumentParseError
from yaml_tabular.tree.builder import TreeBuilder
from yaml_tabular.tree.nodes import Node

__all__ = [
    "SEPARATOR",
    "DocumentParser",
    "decode_segments",
    "split_frontmatter",
    "split_segments",
]

logger = logging.getLogger(__name__)

SEPARATOR = "---"
_FRONTMATTER_CLOSERS = (SEPARATOR, "...")


def split_segments(text: str) -> list[str]:
    """Split normalised text into candidate documents at separator lines.

    Text without separators is a single segment.  When the text opens with a
    separator the first segment starts right after it instead of producing an
    empty leading segment.
    """
    segments: list[str] = []
    current: list[str] = []
    for line in text.split("\n"):
        if line.rstrip() == SEPARATOR:
            segments.append("\n".join(current))
            current = []
        else:
            current.append(line)
    segments.append("\n".join(current))

    if len(segments) > 1 and text.split("\n", 1)[0].rstrip() == SEPARATOR:
        segments.pop(0)
    return segments


def decode_segments(data: bytes) -> list[str]:
    """Split raw bytes at separator lines and decode each segment as UTF-8.

    Follows the same splitting rules as :func:`split_segments`.  Segments that
    are not valid UTF-8 are dropped.
    """
    separator = SEPARATOR.encode()
    lines = data.replace(b"\r\n", b"\n").split(b"\n")
    raw_segments: list[list[bytes]] = [[]]
    for line in lines:
        if line.rstrip() == separator:
            raw_segments.append([])
        else:
            raw_segments[-1].append(line)
    if len(raw_segments) > 1 and lines[0].rstrip() == separator:
        raw_segments.pop(0)

    segments: list[str] = []
    for idx, raw in enumerate(raw_segments):
        try:
            segments.append(b"\n".join(raw).decode("utf-8"))
        except UnicodeDecodeError as exc:
            logger.debug("Discarding undecodable segment %d: %s", idx, exc)
    return segments


def split_frontmatter(text: str) -> tuple[str, str]:
    """Split a ``---`` delimited front matter block from the body that follows it.

    The block must open on the very first line and close on a ``---`` or
    ``...`` line.

    Returns:
        ``(frontmatter, body)``.  When there is no opening line or the block is
        never closed, frontmatter is ``""`` and body is the unchanged text.
    """
    lines = text.replace("\r\n", "\n").split("\n")
    if lines[0].rstrip() != SEPARATOR:
        return "", text

    for idx in range(1, len(lines)):
        if lines[idx].rstrip() in _FRONTMATTER_CLOSERS:
            return "\n".join(lines[1:idx]), "\n".join(lines[idx + 1 :])
    return "", text


class DocumentParser:
    """Parses raw YAML text into a list of Node trees.

    Example::

        parser = DocumentParser(ignore_errors=True)
        docs = parser.parse("a: 1\\n---\\nb: c: d\\n---\\nc: 3")
        # docs: [MAP(a), MAP(c)] -- the malformed middle document is dropped
    """

    def __init__(self, ignore_errors: bool = False, multi_document: bool = True) -> None:
        """Initialise the parser.

        Args:
            ignore_errors:  Recover valid segments instead of raising when the
                stream as a whole fails to parse.
            multi_document: Accept any number of documents.  When False the
                input must contain at most one document.
        """
        self._ignore_errors = ignore_errors
        self._multi_document = multi_document
        self._builder = TreeBuilder()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self, text: str | bytes) -> list[Node]:
        """Parse ``text`` into documents, in stream order.

        Raises:
            DocumentParseError: If parsing fails and ``ignore_errors`` is False.
                No partial result is returned in that case.
        """
        if isinstance(text, bytes):
            try:
                text = text.decode("utf-8")
            except UnicodeDecodeError as exc:
                if not self._ignore_errors:
                    msg = f"Error parsing YAML: {exc}"
                    raise DocumentParseError(msg) from exc
                logger.debug("Input is not valid UTF-8, recovering segments: %s", exc)
                return self._parse_segments(decode_segments(text))

        try:
            return self._load(text)
        except (yaml.YAMLError, DocumentParseError) as exc:
            if not self._ignore_errors:
                msg = f"Error parsing YAML: {exc}"
                raise DocumentParseError(msg) from exc
            logger.debug("Stream parse failed, recovering segments: %s", exc)
            return self.recover(text)

    def recover(self, text: str) -> list[Node]:
        """Return every non-null document from the segments of ``text`` that parse."""
        return self._parse_segments(split_segments(text.replace("\r\n", "\n")))

    def is_valid(self, text: str | bytes) -> bool:
        """Return True if ``text`` parses as a stream holding at least one document.

        Never raises.  Empty or comment-only input holds no document and is
        not valid; a lone ``~`` is a (null) document and is.
        """
        try:
            return bool(DocumentParser(multi_document=self._multi_document).parse(text))
        except DocumentParseError:
            return False

    def _parse_segments(self, segments: list[str]) -> list[Node]:
        documents: list[Node] = []
        for idx, segment in enumerate(segments):
            trimmed = segment.strip()
            if not trimmed or trimmed.startswith("#"):
                continue

            source = segment
            if idx > 0 and not segment.startswith(SEPARATOR):
                source = f"{SEPARATOR}\n{segment}"

            try:
                parsed = self._load_all(source)
            except (yaml.YAMLError, DocumentParseError) as exc:
                logger.debug("Discarding segment %d: %s", idx, exc)
                continue
            documents.extend(doc for doc in parsed if not doc.is_null)

        if not documents:
            logger.warning("No valid YAML documents recovered from %d segment(s)", len(segments))
        return documents

    def parse_frontmatter(self, text: str) -> tuple[Node | None, str]:
        """Parse the front matter block of ``text``.

        Returns:
            ``(document, body)`` where document is None when the text has no
            front matter or the block is empty.
        """
        frontmatter, body = split_frontmatter(text)
        if not frontmatter.strip():
            return None, body
        documents = self.parse(frontmatter)
        return (documents[0] if documents else None), body

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _load(self, text: str) -> list[Node]:
        if self._multi_document:
            return self._load_all(text)
        root = yaml.compose(text, Loader=yaml.SafeLoader)
        if root is None:
            return []
        return [self._builder.from_yaml(root)]

    def _load_all(self, text: str) -> list[Node]:
        # Materialised inside the caller's try block: compose_all is lazy.
        return [
            self._builder.from_yaml(root)
            for root in yaml.compose_all(text, Loader=yaml.SafeLoader)
        ]
