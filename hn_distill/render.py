from __future__ import annotations

from typing import Optional, Sequence

from hn_distill.constants import (
    DELETED_AUTHOR,
    INDENT,
    MAX_DEPTH,
    NO_TITLE,
    SEPARATOR_WIDTH,
    UNKNOWN_AUTHOR,
)
from hn_distill.formatting import relative_time, strip_html
from hn_distill.models import Item, Thread, TreeNode
from hn_distill.url_utils import item_url

RULE = "=" * SEPARATOR_WIDTH


def render_tree(
    nodes: Sequence[TreeNode],
    depth: int = 0,
    *,
    now: Optional[float] = None,
    max_depth: int = MAX_DEPTH,
) -> str:
    """Render a forest as indented ``[author] (when):`` blocks."""
    if depth > max_depth:
        raise ValueError(f"tree nesting {depth} exceeds depth ceiling {max_depth}")

    lines: list[str] = []
    indent = INDENT * depth

    for node in nodes:
        item = node.item
        by = item.by or DELETED_AUTHOR
        when = relative_time(item.time, now=now)
        text = strip_html(item.text)
        body = "\n".join(f"{indent}{INDENT}{line}" for line in text.split("\n"))

        lines.append(f"{indent}[{by}] ({when}):")
        lines.append(body)
        lines.append("")

        if node.children:
            lines.append(
                render_tree(node.children, depth + 1, now=now, max_depth=max_depth)
            )
    return "\n".join(lines)


def render_header(root: Item, item_id: int, now: Optional[float] = None) -> str:
    lines = [
        "=== HN THREAD ===",
        f"Title: {root.title or NO_TITLE}",
    ]
    if root.url:
        lines.append(f"ARTICLE_URL: {root.url}")
    lines.append(f"HN: {item_url(item_id)}")
    lines.append(
        f"By: {root.by or UNKNOWN_AUTHOR} | Score: {root.score or 0} | "
        f"Comments: {root.descendants or 0} | Posted: {relative_time(root.time, now=now)}"
    )

    story_text = strip_html(root.text)
    if story_text:
        lines.append(f"\n{story_text}")
    lines.append(f"\n{RULE}\n")
    return "\n".join(lines)


def render_footer(thread: Thread) -> str:
    return "\n".join(
        [
            f"\n{RULE}",
            f"Total comments fetched: {len(thread.comments)} / {thread.root.descendants or 0}",
            f"Unique authors: {thread.unique_authors}",
        ]
    )


def render_thread(thread: Thread, now: Optional[float] = None) -> str:
    """Full text output: header, comment forest, footer."""
    parts = [render_header(thread.root, thread.root.id, now=now)]
    if not thread.root.kids:
        parts.append("(no comments)")
    else:
        parts.append(render_tree(thread.forest, now=now, max_depth=thread.max_depth))
        parts.append(render_footer(thread))
    return "\n".join(parts) + "\n"
