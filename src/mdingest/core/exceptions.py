"""Exception hierarchy for the Markdown ingestion pipeline."""

from __future__ import annotations


class IngestError(RuntimeError):
    """Base exception for ingestion failures."""


class ConfigurationError(IngestError):
    """Raised when an extension hook fails or configuration cannot be loaded."""

    def __init__(
        self,
        message: str,
        *,
        extension: str | None = None,
        phase: str | None = None,
    ) -> None:
        super().__init__(message)
        self.extension = extension
        self.phase = phase


class MalformedMarkupError(IngestError):
    """Raised when rendered markup cannot be parsed into a tree."""


class GuardPatternError(IngestError):
    """Raised when a protection pattern can match an empty string."""

    def __init__(self, message: str, *, pattern: str | None = None) -> None:
        super().__init__(message)
        self.pattern = pattern


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ConfigurationError",
    "GuardPatternError",
    "IngestError",
    "MalformedMarkupError",
    "exception_hint",
    "exception_messages",
]
