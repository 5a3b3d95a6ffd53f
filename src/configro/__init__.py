"""configro - Thread-safe, load-once configuration cache with dot-path access."""

from __future__ import annotations

# Cache
from configro.cache import ConfigCache, ConfigHandle, acquire, default_cache

# Documents
from configro.document import MISSING, Document

# Loaders
from configro.loader import DocumentLoader, FileDocumentLoader

# Concurrency
from configro.rwlock import ReadWriteLock

# Errors
from configro.errors import (
    ConfigroError,
    ErrorCodes,
    InvalidSourceNameError,
    MalformedSourceError,
    SourceUnavailableError,
)

__version__ = "0.1.0"

__all__ = [
    # Cache
    "ConfigCache",
    "ConfigHandle",
    "acquire",
    "default_cache",
    # Documents
    "Document",
    "MISSING",
    # Loaders
    "DocumentLoader",
    "FileDocumentLoader",
    # Concurrency
    "ReadWriteLock",
    # Errors
    "ErrorCodes",
    "ConfigroError",
    "SourceUnavailableError",
    "MalformedSourceError",
    "InvalidSourceNameError",
]
