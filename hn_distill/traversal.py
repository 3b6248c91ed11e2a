from __future__ import annotations

from collections import deque
from typing import Callable, Optional, Sequence

from hn_distill.client import HNClient
from hn_distill.constants import CONCURRENT_FETCHES
from hn_distill.logging_config import get_logger
from hn_distill.models import TraversalNode

logger = get_logger(__name__)


async def fetch_comment_tree(
    client: HNClient,
    root_kids: Sequence[int],
    max_comments: int,
    max_depth: int,
    *,
    concurrency: int = CONCURRENT_FETCHES,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> list[TraversalNode]:
    """
    Breadth-first sample of a comment tree.

    Each wave dequeues at most ``max_comments - accepted`` ids, so the budget
    is enforced when the wave is sized rather than per item. Accepted nodes
    keep queue order, and their depth is always below ``max_depth``.

    ``progress_callback(fetched, max_comments)`` fires after every wave.
    ``fetched`` counts successful fetches, not accepted comments, so it can
    run ahead of the returned list when items get filtered out.
    """
    accepted: list[TraversalNode] = []
    if max_comments <= 0 or max_depth <= 0:
        return accepted

    queue: deque[tuple[int, int]] = deque()
    seen: set[int] = set()

    def enqueue(ids: Sequence[int], depth: int) -> None:
        for kid_id in ids:
            if kid_id in seen:
                continue
            seen.add(kid_id)
            queue.append((kid_id, depth))

    enqueue(root_kids, 0)
    wave = 0

    while queue and len(accepted) < max_comments:
        batch_size = min(len(queue), max_comments - len(accepted))
        batch = [queue.popleft() for _ in range(batch_size)]

        items = await client.fetch_batch(
            [sid for sid, _ in batch], concurrency=concurrency
        )
        wave += 1
        if progress_callback:
            progress_callback(len(accepted) + len(items), max_comments)

        # Walk the wave in enqueue order, not fetch-completion order
        for sid, depth in batch:
            item = items.get(sid)
            if item is None:
                continue
            if item.deleted or item.dead:
                continue
            if item.type != "comment":
                continue

            accepted.append(TraversalNode(item=item, depth=depth))

            if depth < max_depth - 1 and item.kids:
                enqueue(item.kids, depth + 1)

        logger.debug(
            "wave_done",
            wave=wave,
            requested=len(batch),
            fetched=len(items),
            accepted=len(accepted),
            queued=len(queue),
        )

    return accepted
