"""markdown-it-py engine construction for the ingestion pipeline.

The engine's HTML renderer ends several fragments with a line feed, which is
harmless for plain HTML output but turns into stray text once the markup is
parsed back into a tree. :func:`build_markdown_engine` wraps exactly those
render rules so that they drop one trailing line feed, except when the whole
fragment is a single line feed (a soft break that must survive).
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.renderer import RendererHTML

from mdingest.core.config import MarkdownOptions
from mdingest.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

__all__ = [
    "ENGINE_PRESET",
    "PATCHED_RULES",
    "build_markdown_engine",
    "patch_renderer",
    "render_markdown",
    "without_trailing_newline",
]


ENGINE_PRESET = "js-default"

PATCHED_RULES: tuple[str, ...] = ("hardbreak", "softbreak", "fence", "code_block")

RenderCallable = Callable[..., str]


def without_trailing_newline(render: RenderCallable) -> RenderCallable:
    """Wrap a render rule so it drops one trailing line feed from its output."""

    def wrapper(*args: Any, **kwargs: Any) -> str:
        rendered = render(*args, **kwargs)
        if rendered == "\n":
            return rendered
        if rendered.endswith("\n"):
            return rendered[:-1]
        return rendered

    wrapper.__wrapped__ = render  # type: ignore[attr-defined]
    return wrapper


def patch_renderer(engine: MarkdownIt) -> MarkdownIt:
    """Apply :func:`without_trailing_newline` to the patched rules of ``engine``."""
    renderer = engine.renderer
    if not isinstance(renderer, RendererHTML):
        msg = "Cannot patch rules on a non-HTML renderer"
        raise TypeError(msg)

    for name in PATCHED_RULES:
        renderer.rules[name] = without_trailing_newline(renderer.rules[name])
    # Instance attribute shadows the method for every token without a rule.
    wrapped = without_trailing_newline(renderer.renderToken)
    renderer.renderToken = wrapped  # type: ignore[method-assign]
    return engine


def build_markdown_engine(options: MarkdownOptions | None = None) -> MarkdownIt:
    """Return a new patched engine configured from ``options``."""
    active = options or MarkdownOptions()
    try:
        engine = MarkdownIt(
            ENGINE_PRESET,
            {"html": active.html, "linkify": active.linkify, "breaks": active.breaks},
        )
    except Exception as exc:  # pragma: no cover - library-controlled
        raise ConfigurationError(f"Failed to initialise the Markdown engine: {exc}") from exc

    if active.linkify and engine.linkify is None:
        raise ConfigurationError(
            "The 'linkify' option requires the 'linkify-it-py' package to be installed."
        )

    return patch_renderer(engine)


def render_markdown(source: str, engine: MarkdownIt) -> str:
    """Render ``source`` into markup with an engine built by this module."""
    markup = engine.render(source)
    logger.debug("Rendered %d characters of Markdown into %d of markup", len(source), len(markup))
    return markup
