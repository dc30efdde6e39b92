"""PathCache: LRU cache of compiled path expressions.

Path text is parsed once and the compiled ``PathExpression`` reused for every
later lookup of the same text.  LRU eviction occurs silently when
``max_size`` is exceeded.  Malformed paths are never cached: each lookup
raises ``PathSyntaxError`` again.

Each ``PathCache`` instance maintains its own ``LRUCache`` -- there is no
class-level shared state, so two separate instances never interfere with
each other.

Example::

    from yaml_tabular.cache import PathCache

    cache = PathCache(max_size=128)
    expr = cache.compile("$.user.tags[0]")
    expr is cache.compile("$.user.tags[0]")   # True, served from memory
"""

from __future__ import annotations

from cachetools import LRUCache

from yaml_tabular.path import PathExpression, compile_path


class PathCache:
    """LRU-backed cache of compiled paths.

    Args:
        max_size: Maximum number of compiled paths to hold in memory.
            Defaults to 256.
    """

    def __init__(self, max_size: int = 256) -> None:
        self._cache: LRUCache[str, PathExpression] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    def __contains__(self, text: object) -> bool:
        return text in self._cache

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def compile(self, text: str) -> PathExpression:
        """Return the compiled form of ``text``, compiling it on a miss.

        Raises:
            PathSyntaxError: If ``text`` is not a valid path.
        """
        expression = self._cache.get(text)
        if expression is None:
            expression = compile_path(text)
            self._cache[text] = expression
        return expression
