"""Fatal error types for yaml-tabular.

Only structural failures raise.  Soft failures (an unparsable scalar, a
discarded document segment, a path that resolves to nothing) are ordinary
return values and never pass through this hierarchy.
"""

from __future__ import annotations

__all__ = ["DocumentParseError", "PathSyntaxError", "YamlTabularError"]


class YamlTabularError(Exception):
    """Base class for every fatal error raised by this package."""


class DocumentParseError(YamlTabularError, ValueError):
    """The raw text could not be parsed and error tolerance was not requested."""


class PathSyntaxError(YamlTabularError, ValueError):
    """A path expression is malformed (missing ``$``, unclosed ``[``, bad index)."""
