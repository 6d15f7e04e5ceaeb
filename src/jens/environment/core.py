"""Environment: configuration and cache for loading template files.

The Environment ties a loader to the parser and caches parsed
``TemplateFile`` objects by name. Parsed files are immutable, so one cached
instance can serve any number of threads; every lookup still returns a fresh
Block.

Example:
    >>> env = Environment(loader=FileSystemLoader("templates/"))
    >>> file = env.get_file("validator.jens")
    >>> main = file.template("main")

"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from jens.block import Block
    from jens.environment.loaders import Loader
    from jens.template import TemplateFile

logger = logging.getLogger(__name__)


class Environment:
    """Central configuration for loading and parsing template files.

    Attributes:
        loader: Source loader, or None for string-only use
        allow_duplicates: Accept duplicate template names in a file (first
            definition wins); when False they are a syntax error
        cache_size: Maximum number of parsed files kept (LRU); 0 disables
            caching

    Thread-Safety:
        The file cache is guarded by a lock. Parsing happens outside the lock,
        so two threads asking for the same uncached file may both parse it;
        the first result stored wins.

    """

    __slots__ = ("_cache", "_hits", "_lock", "_misses", "allow_duplicates", "cache_size", "loader")

    def __init__(
        self,
        loader: Loader | None = None,
        *,
        allow_duplicates: bool = True,
        cache_size: int = 64,
    ):
        if cache_size < 0:
            raise ValueError(f"cache_size must be >= 0, got {cache_size}")
        self.loader = loader
        self.allow_duplicates = allow_duplicates
        self.cache_size = cache_size
        self._cache: OrderedDict[str, TemplateFile] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def from_string(self, source: str, name: str | None = None) -> TemplateFile:
        """Parse template source without caching it.

        Raises:
            TemplateSyntaxError: If the source does not follow the grammar.
        """
        from jens.template import TemplateFile

        return TemplateFile.parse(source, name=name, allow_duplicates=self.allow_duplicates)

    def get_file(self, name: str) -> TemplateFile:
        """Load and parse template file ``name`` through the loader, with caching.

        Raises:
            RuntimeError: If the environment has no loader.
            TemplateNotFoundError: If the loader has no such file.
            TemplateSyntaxError: If the file does not follow the grammar.
        """
        if self.loader is None:
            raise RuntimeError("Environment has no loader; use from_string() or pass loader=")

        with self._lock:
            cached = self._cache.get(name)
            if cached is not None:
                self._cache.move_to_end(name)
                self._hits += 1
                return cached
            self._misses += 1

        from jens.template import TemplateFile

        source, filename = self.loader.get_source(name)
        file = TemplateFile.parse(
            source,
            name=name,
            filename=filename,
            allow_duplicates=self.allow_duplicates,
        )
        logger.debug(f"Loaded template file '{name}' ({len(file)} template(s))")

        if self.cache_size:
            with self._lock:
                file = self._cache.setdefault(name, file)
                self._cache.move_to_end(name)
                while len(self._cache) > self.cache_size:
                    evicted, _ = self._cache.popitem(last=False)
                    logger.debug(f"Evicted template file '{evicted}' from cache")
        return file

    def get_template(self, file_name: str, template_name: str) -> Block:
        """Fresh Block for ``template_name`` in template file ``file_name``.

        Raises:
            TemplateNotFoundError: If the file or the template does not exist.
        """
        return self.get_file(file_name).template(template_name)

    def list_files(self) -> list[str]:
        """Template files the loader can see."""
        if self.loader is None:
            return []
        return self.loader.list_templates()

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def cache_info(self) -> dict[str, Any]:
        """Cache statistics: ``size``, ``max_size``, ``hits``, ``misses``."""
        with self._lock:
            return {
                "size": len(self._cache),
                "max_size": self.cache_size,
                "hits": self._hits,
                "misses": self._misses,
            }

    def __repr__(self) -> str:
        return f"<Environment loader={type(self.loader).__name__} cache_size={self.cache_size}>"
