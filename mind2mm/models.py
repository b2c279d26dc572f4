"""Data models shared by the dotMind and freemind encodings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional


@dataclass
class Node:
    """A single labelled node in a mind map.

    Nodes form a tree via the `children` list. There are no parent
    back-references, so a tree built from decoded input can't contain a cycle.
    """
    text: str = ""
    children: list[Node] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def add_child(self, text: str) -> Node:
        """Create and append a new child node."""
        child = Node(text=text)
        self.children.append(child)
        return child

    def walk(self) -> Iterator[Node]:
        """Yield this node and all descendants depth-first, in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def count(self) -> int:
        """Total number of nodes (including self)."""
        return sum(1 for _ in self.walk())

    def depth(self) -> int:
        """Number of levels in this subtree (a leaf is 1)."""
        deepest = 0
        stack = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children)
        return deepest

    def find(self, text: str) -> Optional[Node]:
        """Find first node with matching text (case-insensitive)."""
        text_lower = text.lower()
        for node in self.walk():
            if node.text.lower() == text_lower:
                return node
        return None

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        child_count = len(self.children)
        suffix = f" ({child_count} children)" if child_count else ""
        return f"Node({self.text!r}{suffix})"


@dataclass
class Document:
    """A complete mind map: a format version plus exactly one root node.

    The version string means different things in each encoding and is
    rewritten on every conversion.
    """
    version: str = ""
    node: Node = field(default_factory=Node)

    @property
    def node_count(self) -> int:
        return self.node.count()

    def walk(self) -> Iterator[Node]:
        """Iterate all nodes depth-first."""
        yield from self.node.walk()

    def find(self, text: str) -> Optional[Node]:
        """Find first node with matching text."""
        return self.node.find(text)

    def __repr__(self) -> str:
        return f"Document({self.node.text!r}, version={self.version!r}, {self.node_count} nodes)"
