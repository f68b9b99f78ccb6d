"""Minimal view of the target document schema.

Only what ingestion needs is modelled here: each node type knows whether it
is block-level and which CSS selectors recognise its markup. The set of block
selectors is derived on demand because node types can be added while the
parser is alive.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NodeType:
    """Schema node type and the markup patterns it is parsed from."""

    name: str
    block: bool = True
    parse_tags: tuple[str, ...] = ()


class Schema:
    """Ordered collection of node types."""

    def __init__(self, nodes: Iterable[NodeType] = ()) -> None:
        self._nodes: dict[str, NodeType] = {}
        for node in nodes:
            self.add_node(node)

    def add_node(self, node: NodeType) -> None:
        """Register ``node``, replacing any node type with the same name."""
        self._nodes[node.name] = node

    def remove_node(self, name: str) -> None:
        self._nodes.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __iter__(self) -> Iterator[NodeType]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def get(self, name: str) -> NodeType | None:
        return self._nodes.get(name)

    @property
    def block_nodes(self) -> list[NodeType]:
        return [node for node in self._nodes.values() if node.block]

    def block_selectors(self) -> tuple[str, ...]:
        """Return the selectors of every block node type, without duplicates."""
        selectors: list[str] = []
        for node in self.block_nodes:
            for tag in node.parse_tags:
                if tag and tag not in selectors:
                    selectors.append(tag)
        return tuple(selectors)


def default_schema() -> Schema:
    """Return the starter schema used when no editor schema is supplied."""
    return Schema(
        [
            NodeType("doc"),
            NodeType("paragraph", parse_tags=("p",)),
            NodeType("blockquote", parse_tags=("blockquote",)),
            NodeType("bullet_list", parse_tags=("ul",)),
            NodeType("ordered_list", parse_tags=("ol",)),
            NodeType("list_item", parse_tags=("li",)),
            NodeType("code_block", parse_tags=("pre",)),
            NodeType("heading", parse_tags=tuple(f"h{level}" for level in range(1, 7))),
            NodeType("horizontal_rule", parse_tags=("hr",)),
            NodeType("image", parse_tags=("img[src]",)),
            NodeType("task_list", parse_tags=('ul[data-type="taskList"]',)),
            NodeType("task_item", parse_tags=('li[data-type="taskItem"]',)),
            NodeType("text", block=False),
            NodeType("hard_break", block=False, parse_tags=("br",)),
        ]
    )


__all__ = ["NodeType", "Schema", "default_schema"]
