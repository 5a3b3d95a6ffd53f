"""Process-wide lazy configuration cache and the handles that read from it."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from configro.document import Document
from configro.errors import InvalidSourceNameError
from configro.loader import DocumentLoader, FileDocumentLoader
from configro.rwlock import ReadWriteLock

__all__ = ["ConfigCache", "ConfigHandle", "default_cache", "acquire"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConfigHandle:
    """Lightweight reference to one cached source.

    A handle owns no data; every lookup goes through its cache.
    """

    __slots__ = ("_cache", "_name")

    def __init__(self, cache: ConfigCache, name: str) -> None:
        self._cache = cache
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def cache(self) -> ConfigCache:
        return self._cache

    def get(self, path: str, expected_type: type[T] | Any = Any, default: Any = None) -> T | Any:
        """Get the value at dot-path ``path`` deserialized into ``expected_type``.

        Returns ``default`` when the path is absent or the value does not fit
        ``expected_type``; the two cases are not distinguished.

        Example::

            port = handle.get("database.port", int, default=5432)
        """
        document = self._cache.document(self._name)
        if document is None:
            return default
        return document.extract(path, expected_type, default)

    def has(self, path: str) -> bool:
        """Return True if ``path`` resolves to a node of any type."""
        document = self._cache.document(self._name)
        return document is not None and document.has(path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigHandle):
            return NotImplemented
        return self._cache is other._cache and self._name == other._name

    def __hash__(self) -> int:
        return hash((id(self._cache), self._name))

    def __repr__(self) -> str:
        return f"ConfigHandle({self._name!r})"


class ConfigCache:
    """Maps source names to documents, loading each one at most once.

    Lookups of already-cached sources only take the shared lock and never block
    each other. A miss takes the exclusive lock, checks again, and runs the
    loader inside the critical section. Failed loads leave no entry behind, so
    the next ``acquire`` retries. Entries are never evicted or replaced.
    """

    def __init__(self, loader: DocumentLoader | None = None) -> None:
        self._loader: DocumentLoader = loader if loader is not None else FileDocumentLoader()
        self._documents: dict[str, Document] = {}
        self._lock = ReadWriteLock()

    @property
    def loader(self) -> DocumentLoader:
        return self._loader

    def acquire(self, name: str) -> ConfigHandle:
        """Return a handle for ``name``, loading the source on first use.

        Raises:
            InvalidSourceNameError: If ``name`` is empty or not a string.
            SourceUnavailableError: If the loader cannot locate the source.
            MalformedSourceError: If the source content cannot be parsed.
        """
        if not isinstance(name, str) or not name:
            raise InvalidSourceNameError(source=name)

        with self._lock.read_locked():
            cached = name in self._documents
        if cached:
            logger.debug("Configuration '%s' served from cache", name)
            return ConfigHandle(self, name)

        with self._lock.write_locked():
            if name not in self._documents:
                self._documents[name] = self._load(name)
        return ConfigHandle(self, name)

    def _load(self, name: str) -> Document:
        try:
            result = self._loader.load(name)
        except Exception as e:
            logger.warning("Failed to load configuration '%s': %s", name, e)
            raise
        if not isinstance(result, Document):
            result = Document(source=name, root=result)
        logger.debug("Configuration '%s' loaded and cached", name)
        return result

    def document(self, name: str) -> Document | None:
        """Return the cached document for ``name`` without loading it."""
        with self._lock.read_locked():
            return self._documents.get(name)

    def names(self) -> list[str]:
        """Return the cached source names, sorted."""
        with self._lock.read_locked():
            return sorted(self._documents)

    def __contains__(self, name: object) -> bool:
        with self._lock.read_locked():
            return name in self._documents

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._documents)

    def __repr__(self) -> str:
        return f"ConfigCache(loader={self._loader!r}, sources={len(self)})"


_default_cache = ConfigCache()


def default_cache() -> ConfigCache:
    """Return the process-wide cache, backed by a ``FileDocumentLoader``."""
    return _default_cache


def acquire(name: str) -> ConfigHandle:
    """Acquire ``name`` from the process-wide cache."""
    return _default_cache.acquire(name)
