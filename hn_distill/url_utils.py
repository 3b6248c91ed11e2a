from __future__ import annotations

import re

from hn_distill.constants import HN_ITEM_URL

ITEM_ID_RE = re.compile(r"(?:item\?id=|^)(\d+)")


def parse_item_id(value: str) -> int:
    """Extract an item ID from a bare number or an ``item?id=`` URL."""
    m = ITEM_ID_RE.search(value.strip()) if value else None
    if not m:
        raise ValueError(f"cannot parse item ID from '{value}'")
    return int(m.group(1))


def item_url(item_id: int) -> str:
    return HN_ITEM_URL.format(id=item_id)
