"""
UI text snapshot - a flat, read-only view of an accessibility tree.

The snapshot is built once per eligible event by a single bounded
depth-first walk: a node's own text is recorded before its descendants'.
Each entry remembers its parent so that sibling relationships survive the
flattening. Child slots that are None (nodes the system failed to deliver)
are skipped along with their subtrees; nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from paycapture.config import MAX_CHILDREN_PER_NODE, MAX_TREE_DEPTH
from paycapture.model.ui_event import UiNode


@dataclass(frozen=True, slots=True)
class SnapshotNode:
    """One walked node. text is "" for nodes without text."""

    index: int
    parent: int | None
    depth: int
    text: str
    children: tuple[int, ...] = ()


@dataclass(frozen=True)
class UiTextSnapshot:
    nodes: tuple[SnapshotNode, ...] = ()

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[SnapshotNode]:
        return iter(self.nodes)

    def fragments(self) -> list[str]:
        """Non-empty text fragments in tree order."""
        return [n.text for n in self.nodes if n.text]

    def full_text(self) -> str:
        """All fragments concatenated in tree order, without separators."""
        return "".join(n.text for n in self.nodes)

    def siblings_of(self, index: int) -> list[SnapshotNode]:
        """Other children of the node's parent, in order. The root has none."""
        parent = self.nodes[index].parent
        if parent is None:
            return []
        return [self.nodes[i] for i in self.nodes[parent].children if i != index]


def build_snapshot(
    root: UiNode | None,
    *,
    max_depth: int = MAX_TREE_DEPTH,
    max_children: int = MAX_CHILDREN_PER_NODE,
) -> UiTextSnapshot:
    """Walk the tree once, pre-order, within the given depth and width bounds.

    Args:
        root: Tree root; None yields an empty snapshot
        max_depth: Number of levels walked (the root is level 0)
        max_children: Children visited per node; the rest are ignored

    Returns:
        UiTextSnapshot in traversal order
    """
    if root is None or max_depth <= 0:
        return UiTextSnapshot()

    entries: list[dict] = []
    stack: list[tuple[UiNode, int | None, int]] = [(root, None, 0)]
    while stack:
        node, parent, depth = stack.pop()
        index = len(entries)
        entries.append({"index": index, "parent": parent, "depth": depth, "text": node.text or "", "children": []})
        if parent is not None:
            entries[parent]["children"].append(index)
        if depth + 1 >= max_depth:
            continue
        children = [c for c in node.children[:max_children] if c is not None]
        for child in reversed(children):
            stack.append((child, index, depth + 1))

    return UiTextSnapshot(
        nodes=tuple(
            SnapshotNode(
                index=e["index"],
                parent=e["parent"],
                depth=e["depth"],
                text=e["text"],
                children=tuple(e["children"]),
            )
            for e in entries
        )
    )


__all__ = ["SnapshotNode", "UiTextSnapshot", "build_snapshot"]
