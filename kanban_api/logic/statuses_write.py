"""Create and reposition statuses within a board.

Every function expects to run inside ``kanban_api.db.transaction()`` so the
sibling snapshot read by the ordering engine and the resulting write commit
together.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
import logging

from sqlalchemy.engine import Connection

from kanban_api.config import RankingConfig
from kanban_api.logic.errors import BOARD, STATUS, DuplicateTitle, ResourceNotFound
from kanban_api.logic.reorder_service import Placement, PlacementRequest, ReorderService
from kanban_api.logic.repository_boards import get_board, lock_board
from kanban_api.logic.repository_statuses import (
    get_status,
    insert_status,
    ordered_statuses,
    set_status_ranks,
    title_taken,
    update_status_fields,
)

logger = logging.getLogger(__name__)


def status_reorder_service(conn: Connection, ranking: RankingConfig) -> ReorderService:
    return ReorderService(
        lambda board_id: ordered_statuses(conn, board_id),
        kind=STATUS,
        default_placement=ranking.default_placement,
        max_rank_length=ranking.max_rank_length,
    )


def _apply_rebalance(conn: Connection, placement: Placement) -> None:
    if not placement.rebalanced:
        return
    logger.warning(
        "status_ranks_rebalanced board_id=%s count=%s bucket=%s",
        placement.parent_id,
        len(placement.rebalanced),
        placement.rank.bucket,
    )
    set_status_ranks(conn, placement.rebalanced)


def _require_board(conn: Connection, board_id: str) -> None:
    if get_board(conn, board_id) is None:
        raise ResourceNotFound(BOARD)


def create_status(
    conn: Connection,
    board_id: str,
    *,
    title: str,
    description: Optional[str],
    prev_status_id: Optional[str],
    next_status_id: Optional[str],
    ranking: RankingConfig,
) -> Dict[str, Any]:
    _require_board(conn, board_id)
    lock_board(conn, board_id)
    if title_taken(conn, board_id, title):
        raise DuplicateTitle(STATUS)
    placement = status_reorder_service(conn, ranking).place(
        PlacementRequest(parent_id=board_id, prev_id=prev_status_id, next_id=next_status_id)
    )
    _apply_rebalance(conn, placement)
    status = insert_status(conn, board_id, title, placement.rank, description=description)
    logger.info("status_created board_id=%s status_id=%s rank=%s", board_id, status["id"], status["rank"])
    return status


def update_status(
    conn: Connection,
    board_id: str,
    status_id: str,
    *,
    fields: Dict[str, Any],
    reposition: bool,
    prev_status_id: Optional[str],
    next_status_id: Optional[str],
    ranking: RankingConfig,
) -> Dict[str, Any]:
    """Edit a status and, when ``reposition`` is set, move it within its board."""
    _require_board(conn, board_id)
    if get_status(conn, board_id, status_id) is None:
        raise ResourceNotFound(STATUS)
    title = fields.get("title")
    if title is not None and title_taken(conn, board_id, title, exclude_status_id=status_id):
        raise DuplicateTitle(STATUS)
    update_status_fields(conn, status_id, fields)
    if reposition:
        lock_board(conn, board_id)
        placement = status_reorder_service(conn, ranking).place(
            PlacementRequest(
                parent_id=board_id,
                prev_id=prev_status_id,
                next_id=next_status_id,
                item_id=status_id,
            )
        )
        _apply_rebalance(conn, placement)
        set_status_ranks(conn, [(status_id, placement.rank)])
        logger.info("status_moved board_id=%s status_id=%s rank=%s", board_id, status_id, placement.rank)
    updated = get_status(conn, board_id, status_id)
    if updated is None:
        raise ResourceNotFound(STATUS)
    return updated


__all__ = ["create_status", "update_status", "status_reorder_service"]
