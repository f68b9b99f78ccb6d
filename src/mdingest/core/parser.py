"""Markdown ingestion pipeline.

``MarkdownParser.parse`` turns Markdown text into markup ready to be parsed by
the document model. The steps are:

1. protect ``ignore_regex`` matches with placeholders,
2. build a patched engine and run extension ``setup`` hooks on it,
3. render and parse the markup into a tree,
4. run extension ``update_dom`` hooks on the tree,
5. serialise, restore the placeholders, and parse again,
6. normalise the tree and serialise the result.

Content that is not a string is returned unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Literal

from markdown_it import MarkdownIt

from mdingest.adapters.dom import parse_fragment, serialize_fragment
from mdingest.adapters.markdown import build_markdown_engine, render_markdown

from .config import MarkdownOptions
from .editor import Editor
from .extensions import run_setup_hooks, run_update_dom_hooks
from .normalize import normalize_tree
from .placeholders import PlaceholderGuard


logger = logging.getLogger(__name__)

IngestMode = Literal["block", "inline"]


@dataclass(frozen=True, slots=True)
class ConversionRequest:
    """One ingestion call."""

    text: str
    mode: IngestMode = "block"

    def __post_init__(self) -> None:
        if self.mode not in ("block", "inline"):
            msg = f"Unknown ingestion mode '{self.mode}', expected 'block' or 'inline'."
            raise ValueError(msg)

    @property
    def inline(self) -> bool:
        return self.mode == "inline"


class MarkdownParser:
    """Convert Markdown text into normalised markup for an editor."""

    def __init__(
        self,
        editor: Editor | None = None,
        options: MarkdownOptions | None = None,
    ) -> None:
        self.editor = editor or Editor()
        self.options = options or MarkdownOptions()
        self.guard = PlaceholderGuard(self.options.ignore_regex)

    def build_engine(self) -> MarkdownIt:
        """Return a fresh patched engine for a single call."""
        return build_markdown_engine(self.options)

    def parse(self, content: Any, *, inline: bool = False) -> Any:
        """Return markup for Markdown ``content``; pass other content through."""
        if not isinstance(content, str):
            return content
        return self.run(ConversionRequest(text=content, mode="inline" if inline else "block"))

    def run(self, request: ConversionRequest) -> str:
        """Execute ``request`` and return the resulting markup."""
        text, placeholders = self.guard.protect(request.text)

        engine = self.build_engine()
        extensions = tuple(self.editor.extensions)
        run_setup_hooks(extensions, self.editor, engine)

        tree = parse_fragment(render_markdown(text, engine))
        run_update_dom_hooks(extensions, self.editor, tree)

        markup = placeholders.restore(serialize_fragment(tree))

        final_tree = parse_fragment(markup)
        normalize_tree(final_tree, self.editor.schema, inline=request.inline, content=request.text)
        result = serialize_fragment(final_tree)
        logger.debug(
            "Ingested %d characters in %s mode across %d extension(s)",
            len(request.text),
            request.mode,
            len(extensions),
        )
        return result


__all__ = ["ConversionRequest", "IngestMode", "MarkdownParser"]
