"""Parsed configuration documents and dot-path access into them."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

__all__ = ["Document", "MISSING", "split_path"]

T = TypeVar("T")

PATH_SEPARATOR = "."


class _Missing:
    """Sentinel type for a path that does not resolve to a node."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def split_path(path: str) -> list[str]:
    """Split a dot-path into its key segments.

    Empty segments are kept as literal empty-string keys.
    """
    return path.split(PATH_SEPARATOR)


@functools.lru_cache(maxsize=256)
def _cached_adapter(expected_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(expected_type)


def _adapter_for(expected_type: Any) -> TypeAdapter[Any]:
    try:
        return _cached_adapter(expected_type)
    except TypeError:
        # Unhashable annotation, build an uncached adapter.
        return TypeAdapter(expected_type)


@dataclass(frozen=True)
class Document:
    """An immutable parsed configuration tree for one source.

    ``root`` holds JSON-shaped nodes: dicts with string keys, lists, strings,
    numbers, booleans and ``None``. The tree is never handed out by reference;
    :meth:`extract` always returns a freshly deserialized value.
    """

    source: str
    root: Any

    def resolve(self, path: str) -> Any:
        """Walk ``path`` key by key and return the raw node, or ``MISSING``."""
        current: Any = self.root
        for part in split_path(path):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return MISSING
        return current

    def has(self, path: str) -> bool:
        """Return True if every segment of ``path`` matches an object key."""
        return self.resolve(path) is not MISSING

    def extract(self, path: str, expected_type: type[T] | Any = Any, default: Any = None) -> T | Any:
        """Get the value at ``path`` deserialized into ``expected_type``.

        Deserialization is strict: a string node never becomes a number and a
        number never becomes a string. Returns ``default`` when the path does
        not resolve or the node does not fit ``expected_type``.
        """
        node = self.resolve(path)
        if node is MISSING:
            return default
        try:
            return _adapter_for(expected_type).validate_json(to_json(node), strict=True)
        except (ValidationError, PydanticSerializationError):
            return default
