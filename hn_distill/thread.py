from __future__ import annotations

from typing import Callable, Optional

from hn_distill.client import HNClient
from hn_distill.constants import CONCURRENT_FETCHES, DEFAULT_MAX_COMMENTS, MAX_DEPTH
from hn_distill.logging_config import get_logger
from hn_distill.models import Thread
from hn_distill.traversal import fetch_comment_tree
from hn_distill.tree import build_tree

logger = get_logger(__name__)


async def fetch_thread(
    client: HNClient,
    item_id: int,
    *,
    max_comments: int = DEFAULT_MAX_COMMENTS,
    max_depth: int = MAX_DEPTH,
    concurrency: int = CONCURRENT_FETCHES,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> Optional[Thread]:
    """Fetch a root item and a budget-capped sample of its comments.

    Returns None when the root item cannot be fetched.
    """
    root = await client.fetch_item(item_id)
    if root is None:
        logger.debug(f"Root item {item_id} unavailable")
        return None

    if not root.kids:
        return Thread(root=root, max_depth=max_depth)

    comments = await fetch_comment_tree(
        client,
        root.kids,
        max_comments,
        max_depth,
        concurrency=concurrency,
        progress_callback=progress_callback,
    )
    logger.debug(
        "thread_fetched",
        item_id=item_id,
        accepted=len(comments),
        declared=root.descendants or 0,
    )
    return Thread(
        root=root,
        comments=comments,
        forest=build_tree(comments, item_id),
        max_depth=max_depth,
    )
