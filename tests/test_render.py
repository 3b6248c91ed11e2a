import pytest

from hn_distill.models import Item, Thread, TraversalNode, TreeNode
from hn_distill.render import render_footer, render_header, render_thread, render_tree
from hn_distill.tree import build_tree

NOW = 1_700_000_000
HOUR_AGO = NOW - 3600


def tree_node(item, depth=0, children=None):
    return TreeNode(node=TraversalNode(item, depth), children=children or [])


def comment(item_id, parent, by="alice", text="hello", kids=()):
    return Item(
        id=item_id, type="comment", by=by, time=HOUR_AGO, text=text, parent=parent, kids=kids
    )


def test_single_comment_block():
    forest = [tree_node(comment(2, 1))]

    assert render_tree(forest, now=NOW) == "[alice] (1h ago):\n  hello\n"


def test_nested_comments_are_indented():
    child = tree_node(comment(3, 2, by="bob", text="reply"), depth=1)
    forest = [tree_node(comment(2, 1, text="parent"), children=[child])]

    assert render_tree(forest, now=NOW) == (
        "[alice] (1h ago):\n"
        "  parent\n"
        "\n"
        "  [bob] (1h ago):\n"
        "    reply\n"
    )


def test_siblings_follow_child_order():
    forest = [
        tree_node(comment(2, 1, by="a", text="x")),
        tree_node(comment(3, 1, by="b", text="y")),
    ]

    assert render_tree(forest, now=NOW) == "[a] (1h ago):\n  x\n\n[b] (1h ago):\n  y\n"


def test_missing_author_and_multiline_body():
    item = Item(id=2, type="comment", time=HOUR_AGO, text="one<p>two", parent=1)
    out = render_tree([tree_node(item)], depth=1, now=NOW)

    assert out == "  [[deleted]] (1h ago):\n    one\n    \n    two\n"


def test_missing_time_is_unknown():
    item = Item(id=2, type="comment", by="x", text="t", parent=1)
    assert render_tree([tree_node(item)], now=NOW).startswith("[x] (unknown):")


def test_depth_ceiling_is_enforced():
    child = tree_node(comment(3, 2), depth=1)
    forest = [tree_node(comment(2, 1), children=[child])]

    with pytest.raises(ValueError):
        render_tree(forest, now=NOW, max_depth=0)


def test_header_full():
    root = Item(
        id=1,
        type="story",
        by="pg",
        time=HOUR_AGO,
        title="Ask HN: Something",
        url="https://example.com/a",
        score=42,
        descendants=7,
        text="Body &amp; soul",
    )

    assert render_header(root, 1, now=NOW) == (
        "=== HN THREAD ===\n"
        "Title: Ask HN: Something\n"
        "ARTICLE_URL: https://example.com/a\n"
        "HN: https://news.ycombinator.com/item?id=1\n"
        "By: pg | Score: 42 | Comments: 7 | Posted: 1h ago\n"
        "\n"
        "Body & soul\n"
        "\n" + "=" * 60 + "\n"
    )


def test_header_defaults():
    out = render_header(Item(id=5), 5, now=NOW)

    assert "Title: (no title)" in out
    assert "ARTICLE_URL" not in out
    assert "By: unknown | Score: 0 | Comments: 0 | Posted: unknown" in out


def test_footer_counts():
    comments = [
        TraversalNode(comment(2, 1, by="a"), 0),
        TraversalNode(comment(3, 2, by="a"), 1),
        TraversalNode(comment(4, 1, by="b"), 0),
    ]
    thread = Thread(root=Item(id=1, type="story", descendants=10), comments=comments)

    assert render_footer(thread) == (
        "\n" + "=" * 60 + "\nTotal comments fetched: 3 / 10\nUnique authors: 2"
    )


def test_thread_without_comments():
    thread = Thread(root=Item(id=1, type="story", title="Quiet"))
    out = render_thread(thread, now=NOW)

    assert out.endswith("=" * 60 + "\n\n(no comments)\n")
    assert "Total comments fetched" not in out


def test_thread_with_comments():
    root = Item(id=1, type="story", title="T", kids=(2,), descendants=1)
    comments = [TraversalNode(comment(2, 1), 0)]
    thread = Thread(root=root, comments=comments, forest=build_tree(comments, 1))

    out = render_thread(thread, now=NOW)

    assert "[alice] (1h ago):\n  hello\n" in out
    assert out.endswith("Total comments fetched: 1 / 1\nUnique authors: 1\n")
