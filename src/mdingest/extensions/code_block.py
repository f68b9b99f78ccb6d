"""Code block extension trimming the line feed left inside ``<pre><code>``."""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.element import NavigableString

from mdingest.adapters.dom import is_text_node
from mdingest.core.extensions import Extension, ExtensionSpec, HookContext


def update_dom(_context: HookContext, tree: BeautifulSoup) -> None:
    """Drop the final line feed of every code block body."""
    for code in tree.select("pre > code"):
        if not code.contents:
            continue
        last = code.contents[-1]
        if is_text_node(last) and last.endswith("\n"):
            last.replace_with(NavigableString(last[:-1]))


CodeBlock = Extension(
    name="code_block",
    markdown=ExtensionSpec(update_dom=update_dom),
)


__all__ = ["CodeBlock", "update_dom"]
