"""Arena-backed generic DOM tree.

Nodes live in a flat list and refer to their children by index. The walk
over the tree is strictly top-down, so no parent pointers are kept.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum


class NodeKind(StrEnum):
    DOCUMENT = "document"
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"
    DOCTYPE = "doctype"
    PROCESSING_INSTRUCTION = "processing_instruction"


@dataclass
class DomNode:
    """A single node of the generic DOM tree."""

    kind: NodeKind
    tag: str = ""
    attrs: list[tuple[str, str]] = field(default_factory=list)
    text: str = ""
    children: list[int] = field(default_factory=list)

    def attr(self, name: str) -> str | None:
        """Return the first value of attribute ``name``, if present."""
        for key, value in self.attrs:
            if key == name:
                return value
        return None

    @property
    def is_element(self) -> bool:
        return self.kind is NodeKind.ELEMENT


@dataclass
class DomTree:
    """The generic DOM tree: ``nodes[0]`` is always the document node."""

    nodes: list[DomNode] = field(default_factory=lambda: [DomNode(NodeKind.DOCUMENT)])

    @property
    def root(self) -> DomNode:
        return self.nodes[0]

    def add(self, parent: int, node: DomNode) -> int:
        """Append ``node`` as the last child of ``parent`` and return its index."""
        self.nodes.append(node)
        index = len(self.nodes) - 1
        self.nodes[parent].children.append(index)
        return index

    def children(self, node: DomNode) -> Iterator[DomNode]:
        for index in node.children:
            yield self.nodes[index]

    def text_content(self, node: DomNode) -> str:
        """Concatenate all descendant text of ``node`` in document order."""
        if node.kind is NodeKind.TEXT:
            return node.text
        parts: list[str] = []
        stack = list(reversed(node.children))
        while stack:
            current = self.nodes[stack.pop()]
            if current.kind is NodeKind.TEXT:
                parts.append(current.text)
            else:
                stack.extend(reversed(current.children))
        return "".join(parts)
