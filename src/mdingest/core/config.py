"""Configuration models used by the Markdown parser.

MarkdownOptions

`html` (`bool`)
: Allow raw HTML in the Markdown source to pass through to the rendered
  markup. Enabled by default.

`linkify` (`bool`)
: Turn bare URLs found in running text into links. Requires
  ``linkify-it-py``.

`breaks` (`bool`)
: Treat single newlines inside a paragraph as hard line breaks.

`ignore_regex` (`list[str | re.Pattern]`)
: Patterns whose matches are protected from Markdown interpretation. Each
  match is swapped for an inert placeholder before rendering and restored
  verbatim afterwards. Patterns must consume at least one character.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
import yaml

from .exceptions import ConfigurationError


class MarkdownOptions(BaseModel):
    """Options recognised by the Markdown ingestion pipeline."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    html: bool = Field(default=True, description="Allow raw HTML passthrough")
    linkify: bool = Field(default=False, description="Auto-link bare URLs")
    breaks: bool = Field(default=False, description="Single newline becomes <br>")
    ignore_regex: list[Any] = Field(default_factory=list)

    @field_validator("ignore_regex", mode="before")
    @classmethod
    def _coerce_patterns(cls, value: Any) -> list[re.Pattern[str]]:
        if value is None:
            return []
        if isinstance(value, (str, re.Pattern)):
            value = [value]
        patterns: list[re.Pattern[str]] = []
        for item in value:
            if isinstance(item, re.Pattern):
                patterns.append(item)
            elif isinstance(item, str):
                try:
                    patterns.append(re.compile(item))
                except re.error as exc:
                    raise ValueError(f"Invalid ignore pattern '{item}': {exc}") from exc
            else:
                kind = type(item).__name__
                raise ValueError(f"Ignore patterns must be strings or regexes, not {kind}")
        return patterns


def load_options(path: str | Path) -> MarkdownOptions:
    """Load :class:`MarkdownOptions` from a YAML file.

    The mapping may be given at the top level or nested under a ``markdown`` key.
    """
    source = Path(path)
    try:
        payload = yaml.safe_load(source.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Unable to read configuration file '{source}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in configuration file '{source}': {exc}") from exc

    if payload is None:
        return MarkdownOptions()
    if not isinstance(payload, Mapping):
        raise ConfigurationError(
            f"Configuration file '{source}' must contain a mapping, got {type(payload).__name__}."
        )

    nested = payload.get("markdown")
    data = nested if isinstance(nested, Mapping) else payload
    return MarkdownOptions.model_validate(dict(data))


__all__ = ["MarkdownOptions", "load_options"]
