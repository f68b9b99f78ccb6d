"""Protect caller-designated substrings from Markdown interpretation.

Every match of every guard pattern is swapped for an opaque token made only of
ASCII letters and digits, which the rendering engine echoes untouched. The
tokens are recorded in a :class:`PlaceholderTable` and swapped back with a
plain textual replacement once the rendered markup is final.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
import logging
import re
import secrets

from .exceptions import GuardPatternError


logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "IGNORE"


@dataclass(slots=True)
class PlaceholderTable:
    """Ordered mapping from placeholder tokens to the text they replaced."""

    entries: list[tuple[str, str]] = field(default_factory=list)

    def add(self, token: str, original: str) -> None:
        self.entries.append((token, original))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.entries)

    def restore(self, markup: str) -> str:
        """Swap every token back, last inserted first."""
        for token, original in reversed(self.entries):
            markup = markup.replace(token, original)
        return markup


def validate_pattern(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    """Compile ``pattern`` and reject it when it can match an empty string."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    if compiled.search("") is not None:
        raise GuardPatternError(
            f"Ignore pattern '{compiled.pattern}' can match an empty string.",
            pattern=compiled.pattern,
        )
    return compiled


class PlaceholderGuard:
    """Substitute guarded substrings with placeholders for one ingestion call."""

    def __init__(self, patterns: Iterable[str | re.Pattern[str]] = ()) -> None:
        self.patterns: tuple[re.Pattern[str], ...] = tuple(
            validate_pattern(pattern) for pattern in patterns
        )

    def protect(self, text: str) -> tuple[str, PlaceholderTable]:
        """Return ``text`` with guarded matches replaced, and the restoration table."""
        table = PlaceholderTable()
        if not self.patterns:
            return text, table

        nonce = _make_nonce(text)
        counter = 0

        for pattern in self.patterns:

            def _substitute(match: re.Match[str], pattern: re.Pattern[str] = pattern) -> str:
                nonlocal counter
                if match.end() == match.start():
                    raise GuardPatternError(
                        f"Ignore pattern '{pattern.pattern}' produced an empty match.",
                        pattern=pattern.pattern,
                    )
                token = f"{PLACEHOLDER_PREFIX}{nonce}N{counter}E"
                counter += 1
                table.add(token, match.group(0))
                return token

            text = pattern.sub(_substitute, text)

        if table:
            logger.debug("Protected %d substring(s) from Markdown rendering", len(table))
        return text, table


def _make_nonce(text: str) -> str:
    nonce = secrets.token_hex(4)
    while f"{PLACEHOLDER_PREFIX}{nonce}" in text:
        nonce = secrets.token_hex(4)
    return nonce


__all__ = ["PLACEHOLDER_PREFIX", "PlaceholderGuard", "PlaceholderTable", "validate_pattern"]
