"""Reconcile rendered markup with the structural rules of the document schema.

Three passes run in a fixed order over the parsed tree:

``hoist_blocks``
: Block elements the engine left inside a ``<p>`` are lifted out so that they
  become siblings of the paragraph.

``strip_leading_newlines``
: The line feed the engine emits between sibling elements is removed from the
  text run that follows each element, except inside ``<pre>``.

``unwrap_inline``
: In inline mode a leading paragraph is unwrapped so that the content can be
  inserted into an existing block, and the whitespace the engine trimmed from
  the source is put back.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup
from bs4.element import NavigableString, Tag

from mdingest.adapters.dom import (
    extract_element,
    first_element_child,
    has_ancestor,
    is_text_node,
    next_element_sibling,
    unwrap_element,
)

from .schema import Schema


logger = logging.getLogger(__name__)


def normalize_tree(root: BeautifulSoup, schema: Schema, *, inline: bool, content: str) -> Tag:
    """Run every normalization pass over ``root`` in place and return it."""
    hoist_blocks(root, schema)
    strip_leading_newlines(root)
    if inline:
        unwrap_inline(root, content)
    return root


def hoist_blocks(root: Tag, schema: Schema) -> int:
    """Lift block elements out of their parent paragraphs.

    Returns the number of elements moved.
    """
    selectors = schema.block_selectors()
    if not selectors:
        return 0

    moved = 0
    for element in root.select(",".join(selectors)):
        parent = element.parent
        if parent is not None and parent.name == "p":
            extract_element(element)
            moved += 1

    if moved:
        logger.debug("Hoisted %d block element(s) out of paragraphs", moved)
    return moved


def strip_leading_newlines(root: Tag) -> None:
    """Drop one leading line feed from text runs that directly follow an element.

    Inline elements count too, so a soft break right after ``<em>`` or
    ``<code>`` is dropped along with the separators between blocks.
    """
    for element in root.find_all(True):
        sibling = element.next_sibling
        if not is_text_node(sibling) or not sibling.startswith("\n"):
            continue
        if has_ancestor(element, "pre"):
            continue
        sibling.replace_with(NavigableString(sibling[1:]))


def unwrap_inline(root: Tag, content: str) -> None:
    """Unwrap a leading paragraph so the result can live inside an existing block."""
    paragraph = first_element_child(root)
    if paragraph is None or paragraph.name != "p":
        return

    has_following = next_element_sibling(paragraph) is not None
    start_spaces = content[: len(content) - len(content.lstrip())]
    end_spaces = "" if has_following else content[len(content.rstrip()) :]

    if content.startswith("\n\n"):
        if end_spaces:
            paragraph.append(NavigableString(end_spaces))
        return

    unwrap_element(paragraph)

    if start_spaces:
        root.insert(0, NavigableString(start_spaces))
    if end_spaces:
        root.append(NavigableString(end_spaces))


__all__ = ["hoist_blocks", "normalize_tree", "strip_leading_newlines", "unwrap_inline"]
