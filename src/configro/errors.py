"""Error hierarchy for the configro library."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "ConfigroError",
    "SourceUnavailableError",
    "MalformedSourceError",
    "InvalidSourceNameError",
    "ErrorCodes",
]


class ConfigroError(Exception):
    """Base error for all configro errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class SourceUnavailableError(ConfigroError):
    """Raised when a configuration source cannot be located or read."""

    def __init__(self, source: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="SOURCE_UNAVAILABLE",
            message=f"Configuration source '{source}' is unavailable: {reason}",
            details={"source": source, "reason": reason},
            **kwargs,
        )

    @property
    def source(self) -> str:
        """The source name that could not be loaded."""
        return self.details["source"]

    @property
    def reason(self) -> str:
        return self.details["reason"]


class MalformedSourceError(ConfigroError):
    """Raised when a configuration source was found but cannot be parsed."""

    def __init__(self, source: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="MALFORMED_SOURCE",
            message=f"Configuration source '{source}' is malformed: {reason}",
            details={"source": source, "reason": reason},
            **kwargs,
        )

    @property
    def source(self) -> str:
        """The source name whose content failed to parse."""
        return self.details["source"]

    @property
    def reason(self) -> str:
        return self.details["reason"]


class InvalidSourceNameError(ConfigroError):
    """Raised when a source name is empty or not a string."""

    def __init__(self, source: Any, **kwargs: Any) -> None:
        super().__init__(
            code="INVALID_SOURCE_NAME",
            message=f"Invalid configuration source name: {source!r}",
            details={"source": source},
            **kwargs,
        )


class ErrorCodes:
    """All configro error codes as constants.

    Example:
        if error.code == ErrorCodes.SOURCE_UNAVAILABLE:
            use_builtin_defaults()
    """

    SOURCE_UNAVAILABLE = "SOURCE_UNAVAILABLE"
    MALFORMED_SOURCE = "MALFORMED_SOURCE"
    INVALID_SOURCE_NAME = "INVALID_SOURCE_NAME"
