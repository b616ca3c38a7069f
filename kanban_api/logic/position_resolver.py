"""Resolve the rank an inserted or moved item must receive.

The caller passes the target parent's children ordered ascending by rank and
the ids of the neighbours the client believes the item will sit between. The
neighbours must be where the request says they are: a ``prev_id`` alone must
be the last child, a ``next_id`` alone the first child, and a pair must be
adjacent and in order. Anything else is rejected rather than guessed at, so a
client acting on a stale list never lands an item in the wrong place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from kanban_api.logic.errors import (
    ISSUE,
    CannotAppend,
    CannotInsertBetween,
    CannotPrepend,
    ItemKind,
    NotFound,
)
from kanban_api.logic.rank import RankValue, between, gen_next, gen_prev, middle

APPEND = "append"
PREPEND = "prepend"
DEFAULT_PLACEMENTS = (APPEND, PREPEND)


@dataclass(frozen=True)
class OrderedItem:
    id: str
    parent_id: str
    rank: RankValue
    title: str = ""


def _index_of(children: Sequence[OrderedItem], item_id: str, kind: ItemKind) -> int:
    for idx, child in enumerate(children):
        if child.id == item_id:
            return idx
    raise NotFound(kind)


def resolve_position(
    children: Sequence[OrderedItem],
    prev_id: Optional[str] = None,
    next_id: Optional[str] = None,
    *,
    kind: ItemKind = ISSUE,
    default_placement: str = APPEND,
) -> RankValue:
    """Return the rank for an item placed among ``children``.

    ``children`` must already be sorted ascending by rank and must not contain
    the item being placed. Raises a ``PositionError`` subclass when the
    neighbours are unknown (``NotFound``) or not where the request claims.
    """
    # Unknown ids are reported before any adjacency check.
    prev_idx = _index_of(children, prev_id, kind) if prev_id is not None else None
    next_idx = _index_of(children, next_id, kind) if next_id is not None else None

    if prev_idx is None and next_idx is None:
        if not children:
            return middle()
        if default_placement == PREPEND:
            return gen_prev(children[0].rank)
        return gen_next(children[-1].rank)

    if prev_idx is None:
        if next_idx != 0:
            raise CannotPrepend(kind)
        return gen_prev(children[next_idx].rank)

    if next_idx is None:
        if prev_idx != len(children) - 1:
            raise CannotAppend(kind)
        return gen_next(children[prev_idx].rank)

    if prev_idx + 1 != next_idx:
        raise CannotInsertBetween(kind)
    return between(children[prev_idx].rank, children[next_idx].rank)


__all__ = [
    "APPEND",
    "PREPEND",
    "DEFAULT_PLACEMENTS",
    "OrderedItem",
    "resolve_position",
]
