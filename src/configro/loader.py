"""Document loaders: turn a source name into a parsed configuration tree."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol, Sequence, runtime_checkable

import yaml

from configro.document import Document
from configro.errors import MalformedSourceError, SourceUnavailableError

__all__ = ["DocumentLoader", "FileDocumentLoader", "DEFAULT_ROOT", "DEFAULT_SUFFIXES"]

logger = logging.getLogger(__name__)

DEFAULT_ROOT = "configs"
DEFAULT_SUFFIXES: tuple[str, ...] = (".json", ".yaml", ".yml")


@runtime_checkable
class DocumentLoader(Protocol):
    """Anything that can load the document for a source name.

    Implementations must raise ``SourceUnavailableError`` when the source
    cannot be located and ``MalformedSourceError`` when its content cannot be
    parsed. ``load`` may return a :class:`Document` or the bare parsed tree.
    It is called while the cache holds its exclusive lock, so it must not call
    back into the same cache.
    """

    def load(self, name: str) -> Document | Any: ...


_SCALAR_TYPES = (str, int, float, bool)


class _JSONCompatibleLoader(yaml.SafeLoader):
    """SafeLoader that leaves unquoted timestamps as plain strings."""


_JSONCompatibleLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _validate_tree(root: Any, name: str) -> None:
    """Reject trees that are not plain JSON data.

    Walks iteratively so deep or alias-heavy YAML cannot exhaust the stack.
    Nodes shared through YAML aliases are checked once; a node that contains
    itself is rejected.
    """
    checked: set[int] = set()
    on_path: set[int] = set()
    stack: list[tuple[Any, bool]] = [(root, False)]
    while stack:
        node, leaving = stack.pop()
        if leaving:
            on_path.discard(id(node))
            checked.add(id(node))
            continue
        if node is None or isinstance(node, _SCALAR_TYPES):
            continue
        if not isinstance(node, (dict, list)):
            raise MalformedSourceError(
                source=name, reason=f"unsupported value of type {type(node).__name__}: {node!r}"
            )
        if id(node) in on_path:
            raise MalformedSourceError(source=name, reason="self-referencing alias")
        if id(node) in checked:
            continue
        on_path.add(id(node))
        stack.append((node, True))
        if isinstance(node, dict):
            for key, value in node.items():
                if not isinstance(key, str):
                    raise MalformedSourceError(source=name, reason=f"non-string object key {key!r}")
                stack.append((value, False))
        else:
            stack.extend((item, False) for item in node)


class FileDocumentLoader:
    """Loads ``<root>/<name><suffix>`` files as JSON or YAML.

    Suffixes are tried in order and the first existing file wins, so with the
    defaults ``configs/database.json`` shadows ``configs/database.yaml``.
    ``.json`` files are parsed as JSON, every other suffix as YAML.
    """

    def __init__(
        self,
        root: str | Path = DEFAULT_ROOT,
        suffixes: Sequence[str] = DEFAULT_SUFFIXES,
        encoding: str = "utf-8",
    ) -> None:
        if not suffixes:
            raise ValueError("At least one file suffix is required")
        self._root = Path(root)
        self._suffixes = tuple(suffixes)
        self._encoding = encoding

    @property
    def root(self) -> Path:
        return self._root

    @property
    def suffixes(self) -> tuple[str, ...]:
        return self._suffixes

    def candidates(self, name: str) -> list[Path]:
        """Return the file paths tried for ``name``, in lookup order."""
        return [self._root / f"{name}{suffix}" for suffix in self._suffixes]

    def locate(self, name: str) -> Path | None:
        for candidate in self.candidates(name):
            if candidate.is_file():
                return candidate
        return None

    def load(self, name: str) -> Document:
        """Read and parse the file for ``name``."""
        file_path = self.locate(name)
        if file_path is None:
            tried = ", ".join(str(p) for p in self.candidates(name))
            raise SourceUnavailableError(source=name, reason=f"no file found (tried {tried})")

        try:
            content = file_path.read_text(encoding=self._encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnavailableError(source=name, reason=f"cannot read {file_path}: {e}", cause=e) from e

        logger.debug("Loading configuration '%s' from %s", name, file_path)
        data = self._parse(name, file_path, content)
        _validate_tree(data, name)
        return Document(source=name, root=data)

    def _parse(self, name: str, file_path: Path, content: str) -> Any:
        if file_path.suffix == ".json":
            try:
                return json.loads(content)
            except json.JSONDecodeError as e:
                raise MalformedSourceError(
                    source=name, reason=f"invalid JSON in {file_path}: {e}", cause=e
                ) from e
            except RecursionError as e:
                raise MalformedSourceError(
                    source=name, reason=f"JSON in {file_path} is nested too deeply", cause=e
                ) from e

        try:
            data = yaml.load(content, Loader=_JSONCompatibleLoader)
        except yaml.YAMLError as e:
            raise MalformedSourceError(source=name, reason=f"invalid YAML in {file_path}: {e}", cause=e) from e
        except RecursionError as e:
            raise MalformedSourceError(
                source=name, reason=f"YAML in {file_path} is nested too deeply", cause=e
            ) from e
        if data is None:
            raise MalformedSourceError(source=name, reason=f"{file_path} is empty")
        return data
