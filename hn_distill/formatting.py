from __future__ import annotations

import re
import time
from typing import Optional

# Closed set of entities the HN API emits. Order matters: &amp; first.
_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#x27;", "'"),
    ("&#x2F;", "/"),
)

_PARAGRAPH_RE = re.compile(r"<p>", re.IGNORECASE)
_BREAK_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_ANCHOR_RE = re.compile(r'<a\s+href="([^"]*)"[^>]*>([^<]*)</a>', re.IGNORECASE)
_PRE_RE = re.compile(r"<pre><code>(.*?)</code></pre>", re.IGNORECASE | re.DOTALL)
_CODE_RE = re.compile(r"<code>(.*?)</code>", re.IGNORECASE)
_ITALIC_RE = re.compile(r"<i>(.*?)</i>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_FENCE_RE = re.compile(r"(```\n.*?\n```)", re.DOTALL)


def _strip_inline(segment: str) -> str:
    segment = _CODE_RE.sub(r"`\1`", segment)
    segment = _ITALIC_RE.sub(r"*\1*", segment)
    return _TAG_RE.sub("", segment)


def _strip_once(txt: str) -> str:
    for entity, char in _ENTITIES:
        txt = txt.replace(entity, char)
    txt = _PARAGRAPH_RE.sub("\n\n", txt)
    txt = _BREAK_RE.sub("\n", txt)
    txt = _ANCHOR_RE.sub(r"\2 (\1)", txt)
    txt = _PRE_RE.sub(lambda m: f"\n```\n{m.group(1)}\n```\n", txt)
    # Odd indices are fenced code blocks; their contents stay verbatim
    parts = _FENCE_RE.split(txt)
    txt = "".join(p if i % 2 else _strip_inline(p) for i, p in enumerate(parts))
    return txt.strip()


def strip_html(text: Optional[str]) -> str:
    """
    Convert HN comment markup into plain multi-line text.

    The substitution table is re-applied until the text stops changing, so
    the result is a fixed point: strip_html(strip_html(x)) == strip_html(x).
    Every substitution shortens the text, which bounds the loop.
    """
    if not text:
        return ""
    txt = text
    while True:
        cleaned = _strip_once(txt)
        if cleaned == txt:
            return cleaned
        txt = cleaned


def relative_time(unix_ts: Optional[int], now: Optional[float] = None) -> str:
    if not unix_ts:
        return "unknown"
    if now is None:
        now = time.time()
    delta = now - unix_ts
    minutes = int(delta // 60)
    hours = int(delta // 3600)
    days = int(delta // 86400)
    if days > 365:
        return f"{days // 365}y ago"
    if days > 30:
        return f"{days // 30}mo ago"
    if days > 0:
        return f"{days}d ago"
    if hours > 0:
        return f"{hours}h ago"
    if minutes > 0:
        return f"{minutes}m ago"
    return "just now"
