"""Typed data models for HN thread distillation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, TypedDict

from hn_distill.constants import MAX_DEPTH


class ItemDict(TypedDict, total=False):
    """Raw Firebase item payload."""

    id: int
    type: str
    by: str
    time: int
    text: str
    parent: int
    kids: list[int]
    deleted: bool
    dead: bool
    title: str
    url: str
    score: int
    descendants: int


def _opt_int(d: ItemDict, key: str) -> Optional[int]:
    value = d.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r} must be an integer, got {value!r}")
    return value


def _opt_str(d: ItemDict, key: str) -> Optional[str]:
    value = d.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {value!r}")
    return value


@dataclass(frozen=True)
class Item:
    """A single item (story, comment, ...) fetched from the HN API."""

    id: int
    type: str = ""
    by: Optional[str] = None
    time: Optional[int] = None
    text: Optional[str] = None
    parent: Optional[int] = None
    kids: tuple[int, ...] = ()
    deleted: bool = False
    dead: bool = False
    title: Optional[str] = None
    url: Optional[str] = None
    score: Optional[int] = None
    descendants: Optional[int] = None

    @classmethod
    def from_dict(cls, d: ItemDict) -> Item:
        """Create Item from an API payload. Raises ValueError if malformed."""
        if not isinstance(d, dict):
            raise ValueError(f"item payload must be an object, got {type(d).__name__}")
        item_id = _opt_int(d, "id")
        if item_id is None:
            raise ValueError("item payload has no id")

        kids = d.get("kids") or []
        if not isinstance(kids, list):
            raise ValueError(f"field 'kids' must be a list, got {kids!r}")
        for kid in kids:
            if isinstance(kid, bool) or not isinstance(kid, int):
                raise ValueError(f"kid id must be an integer, got {kid!r}")

        return cls(
            id=item_id,
            type=str(d.get("type") or ""),
            by=_opt_str(d, "by"),
            time=_opt_int(d, "time"),
            text=_opt_str(d, "text"),
            parent=_opt_int(d, "parent"),
            kids=tuple(kids),
            deleted=bool(d.get("deleted", False)),
            dead=bool(d.get("dead", False)),
            title=_opt_str(d, "title"),
            url=_opt_str(d, "url"),
            score=_opt_int(d, "score"),
            descendants=_opt_int(d, "descendants"),
        )


@dataclass(frozen=True)
class TraversalNode:
    """An accepted item plus its distance from the thread root."""

    item: Item
    depth: int  # Assigned at enqueue time

    @property
    def id(self) -> int:
        return self.item.id


@dataclass
class TreeNode:
    """A traversal node owning its ordered replies."""

    node: TraversalNode
    children: list[TreeNode] = field(default_factory=list)

    @property
    def id(self) -> int:
        return self.node.item.id

    @property
    def item(self) -> Item:
        return self.node.item

    @property
    def depth(self) -> int:
        return self.node.depth


@dataclass
class Thread:
    """Root item plus the sampled comment forest."""

    root: Item
    comments: list[TraversalNode] = field(default_factory=list)
    forest: list[TreeNode] = field(default_factory=list)
    max_depth: int = MAX_DEPTH

    @property
    def unique_authors(self) -> int:
        return len({c.item.by for c in self.comments if c.item.by})
