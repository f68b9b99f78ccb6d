"""Convenience functions mirroring the editor commands that consume Markdown."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from mdingest.core.config import MarkdownOptions
from mdingest.core.editor import Editor
from mdingest.core.extensions import Extension
from mdingest.core.parser import MarkdownParser
from mdingest.extensions import default_extensions


def create_parser(
    options: MarkdownOptions | None = None,
    *,
    editor: Editor | None = None,
    extensions: Iterable[Extension] | None = None,
) -> MarkdownParser:
    """Build a parser, creating a default editor handle when none is given.

    ``extensions`` defaults to the bundled extensions and is ignored when an
    ``editor`` is supplied.
    """
    if editor is None:
        active = list(extensions) if extensions is not None else default_extensions()
        editor = Editor.create(active)
    return MarkdownParser(editor, options)


def ingest(
    content: Any,
    *,
    inline: bool = False,
    options: MarkdownOptions | None = None,
    editor: Editor | None = None,
) -> Any:
    """Convert Markdown ``content`` into markup in a single call."""
    return create_parser(options, editor=editor).parse(content, inline=inline)


def set_content(parser: MarkdownParser, content: Any) -> Any:
    """Prepare ``content`` for replacing a whole document."""
    return parser.parse(content)


def insert_content(parser: MarkdownParser, content: Any) -> Any:
    """Prepare ``content`` for insertion at a position inside an existing block."""
    return parser.parse(content, inline=True)


__all__ = ["create_parser", "ingest", "insert_content", "set_content"]
