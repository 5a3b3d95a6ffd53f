"""Shared test fixtures for the configro test suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from configro.cache import ConfigCache
from configro.loader import FileDocumentLoader
from loader_helpers import CountingLoader


@pytest.fixture
def configs_dir(tmp_path: Path) -> Path:
    """An empty configs directory."""
    path = tmp_path / "configs"
    path.mkdir()
    return path


@pytest.fixture
def write_config(configs_dir: Path) -> Callable[..., Path]:
    """Factory that writes ``<configs_dir>/<name><suffix>`` and returns its path."""

    def factory(name: str, content: Any, suffix: str = ".json") -> Path:
        path = configs_dir / f"{name}{suffix}"
        path.parent.mkdir(parents=True, exist_ok=True)
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return factory


@pytest.fixture
def file_cache(configs_dir: Path) -> ConfigCache:
    """Isolated cache reading from the temporary configs directory."""
    return ConfigCache(FileDocumentLoader(root=configs_dir))


@pytest.fixture
def counting_loader() -> CountingLoader:
    return CountingLoader(
        {
            "app": {"a": {"b": 7}, "name": "demo"},
            "x": {"value": "from-x"},
            "y": {"value": "from-y"},
        }
    )


@pytest.fixture
def memory_cache(counting_loader: CountingLoader) -> ConfigCache:
    """Isolated cache backed by the counting in-memory loader."""
    return ConfigCache(counting_loader)
