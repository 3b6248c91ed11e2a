from __future__ import annotations

from typing import Iterator, Sequence

from hn_distill.models import TraversalNode, TreeNode


def build_tree(comments: Sequence[TraversalNode], root_id: int) -> list[TreeNode]:
    """
    Reassemble the flat traversal output into a forest.

    Replies to ``root_id`` become roots. So do orphans whose parent was
    filtered out or never fetched; nothing is dropped. A node only attaches
    to a parent that precedes it in ``comments``, which rules out cycles:
    a self-parent or a forward reference is promoted like an orphan.
    """
    by_id: dict[int, TreeNode] = {}

    roots: list[TreeNode] = []
    for c in comments:
        node = TreeNode(node=c)
        parent_id = c.item.parent
        if parent_id == root_id:
            roots.append(node)
        elif parent_id is not None and parent_id in by_id:
            by_id[parent_id].children.append(node)
        else:
            roots.append(node)
        by_id.setdefault(c.id, node)
    return roots


def iter_forest(nodes: Sequence[TreeNode]) -> Iterator[TreeNode]:
    """Depth-first, in render order."""
    for node in nodes:
        yield node
        yield from iter_forest(node.children)


def forest_size(nodes: Sequence[TreeNode]) -> int:
    return sum(1 for _ in iter_forest(nodes))
