"""Insert-or-move orchestration over a snapshot of sibling state.

``ReorderService.place`` loads the target parent's children, resolves the new
rank and hands back a ``Placement``. It never writes: the caller persists the
result, and must read the snapshot and write the placement inside one
transaction so a concurrent move cannot invalidate the computed rank.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from kanban_api.logic.errors import ISSUE, ItemKind
from kanban_api.logic.position_resolver import APPEND, OrderedItem, resolve_position
from kanban_api.logic.rank import RankValue
from kanban_api.logic import rank_seeder

SiblingSource = Callable[[str], Sequence[OrderedItem]]


@dataclass(frozen=True)
class PlacementRequest:
    parent_id: str
    prev_id: Optional[str] = None
    next_id: Optional[str] = None
    # Set when an existing item is moved; None for a brand new item.
    item_id: Optional[str] = None


@dataclass(frozen=True)
class Placement:
    parent_id: str
    rank: RankValue
    # Full reassignment of the parent's ranks when a rebalance was needed.
    rebalanced: Tuple[Tuple[str, RankValue], ...] = field(default=())


class ReorderService:
    """Compute ``(parent_id, rank)`` for inserts and moves of one item kind."""

    def __init__(
        self,
        load_children: SiblingSource,
        *,
        kind: ItemKind = ISSUE,
        default_placement: str = APPEND,
        max_rank_length: int = 128,
    ) -> None:
        self._load_children = load_children
        self.kind = kind
        self.default_placement = default_placement
        self.max_rank_length = max_rank_length

    def place(self, request: PlacementRequest) -> Placement:
        siblings: List[OrderedItem] = [
            child
            for child in self._load_children(request.parent_id)
            if request.item_id is None or child.id != request.item_id
        ]
        rank = resolve_position(
            siblings,
            request.prev_id,
            request.next_id,
            kind=self.kind,
            default_placement=self.default_placement,
        )
        if not rank.is_long(self.max_rank_length):
            return Placement(parent_id=request.parent_id, rank=rank)
        return self._rebalance(request, siblings, rank)

    def _rebalance(
        self,
        request: PlacementRequest,
        siblings: List[OrderedItem],
        rank: RankValue,
    ) -> Placement:
        placeholder = request.item_id or ""
        ordered = sorted(
            [(child.rank, child.id) for child in siblings] + [(rank, placeholder)],
            key=lambda pair: pair[0],
        )
        assignments = rank_seeder.rebalance([item_id for _, item_id in ordered], rank.bucket)
        new_rank = next(r for item_id, r in assignments if item_id == placeholder)
        return Placement(
            parent_id=request.parent_id,
            rank=new_rank,
            rebalanced=tuple((item_id, r) for item_id, r in assignments if item_id != placeholder),
        )


__all__ = ["Placement", "PlacementRequest", "ReorderService", "SiblingSource"]
