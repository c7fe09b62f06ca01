"""Exceptions raised by the problem extension itself."""

from __future__ import annotations

from typing import Any, Mapping

ErrorDetails = Mapping[str, Any] | None


class ProblemsError(Exception):
    """Base exception carrying optional structured details."""

    def __init__(self, message: str, *, details: ErrorDetails = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def __str__(self) -> str:  # pragma: no cover - mirrors Exception.__str__
        return self.message


class ProblemsConfigurationError(ProblemsError):
    """Raised when the extension is configured or installed incorrectly."""


class NoConverterConfiguredError(ProblemsConfigurationError):
    """Raised the first time a problem is converted without a converter."""

    def __init__(self, message: str | None = None, *, details: ErrorDetails = None) -> None:
        super().__init__(
            message
            or "No problem converter configured; call Problems.set_converter() before serving traffic",
            details=details,
        )


__all__ = [
    "ProblemsError",
    "ProblemsConfigurationError",
    "NoConverterConfiguredError",
]
