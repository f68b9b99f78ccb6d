"""Tree helpers built on BeautifulSoup for rendered markup fragments."""

from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from mdingest.core.exceptions import MalformedMarkupError


PARSER_BACKEND = "html.parser"


def parse_fragment(markup: str) -> BeautifulSoup:
    """Parse a markup fragment into a tree whose root holds the fragment nodes.

    ``html.parser`` keeps nodes where the markup puts them, so block elements
    nested inside ``<p>`` stay nested until the normalizer hoists them.
    """
    try:
        return BeautifulSoup(markup, PARSER_BACKEND)
    except ParserRejectedMarkup as exc:
        raise MalformedMarkupError(f"Unable to parse rendered markup: {exc}") from exc


def serialize_fragment(root: Tag) -> str:
    """Return the inner markup of ``root``."""
    return root.decode_contents()


def is_text_node(node: Any) -> bool:
    """Return True for plain text runs (comments, CDATA and doctypes excluded)."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def first_element_child(node: Tag) -> Tag | None:
    return next((child for child in node.children if isinstance(child, Tag)), None)


def next_element_sibling(node: PageElement) -> Tag | None:
    return next((sibling for sibling in node.next_siblings if isinstance(sibling, Tag)), None)


def has_ancestor(node: Tag, name: str) -> bool:
    """Return True when ``node`` or one of its ancestors is a ``name`` element."""
    if node.name == name:
        return True
    return node.find_parent(name) is not None


def extract_element(node: Tag) -> None:
    """Lift ``node`` out of its parent, splitting the parent around it.

    Siblings before ``node`` move into a shallow copy of the parent inserted
    ahead of it; ``node`` then sits between that copy and the original parent,
    which keeps the trailing siblings and is dropped when left empty.
    """
    parent = node.parent
    if parent is None or parent.parent is None:
        return

    leading = list(node.previous_siblings)
    leading.reverse()
    if leading:
        prepend = _clone_shallow(parent)
        for child in leading:
            prepend.append(child.extract())
        parent.insert_before(prepend)

    parent.insert_before(node.extract())

    if not parent.contents:
        parent.decompose()


def unwrap_element(node: Tag) -> None:
    """Replace ``node`` with its children."""
    node.unwrap()


def _clone_shallow(node: Tag) -> Tag:
    soup = _owner(node)
    attrs = {
        key: list(value) if isinstance(value, list) else value for key, value in node.attrs.items()
    }
    return soup.new_tag(node.name, attrs=attrs)


def _owner(node: PageElement) -> BeautifulSoup:
    current: PageElement | None = node
    while current is not None and not isinstance(current, BeautifulSoup):
        current = current.parent
    if current is None:
        return BeautifulSoup("", PARSER_BACKEND)
    return current


__all__ = [
    "PARSER_BACKEND",
    "extract_element",
    "first_element_child",
    "has_ancestor",
    "is_text_node",
    "next_element_sibling",
    "parse_fragment",
    "serialize_fragment",
    "unwrap_element",
]
