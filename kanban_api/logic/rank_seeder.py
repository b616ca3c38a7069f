"""Bulk rank generation for seeding and rebalancing.

``sequence`` is consumed by demo seeding and test fixtures only; no request
path calls it. ``rebalance`` hands out fresh, evenly spaced ranks for a whole
parent once its ranks have grown too long.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from kanban_api.logic.rank import RankValue, gen_next, middle, spread


def iter_sequence(start: RankValue | None = None) -> Iterator[RankValue]:
    """Yield ascending ranks forever, beginning at ``start`` (or ``middle()``)."""
    rank = start if start is not None else middle()
    while True:
        yield rank
        rank = gen_next(rank)


def sequence(n: int, start: RankValue | None = None) -> list[RankValue]:
    """Return ``n`` strictly ascending ranks from repeated ``gen_next``."""
    if n < 0:
        raise ValueError("n must be non-negative")
    ranks = iter_sequence(start)
    return [next(ranks) for _ in range(n)]


def rebalance(item_ids: Sequence[str], current_bucket: int = 0) -> list[tuple[str, RankValue]]:
    """Assign evenly spread ranks in the next bucket to ``item_ids`` in order."""
    bucket = middle(current_bucket).in_next_bucket().bucket
    return list(zip(item_ids, spread(len(item_ids), bucket)))


__all__ = ["iter_sequence", "sequence", "rebalance", "spread"]
