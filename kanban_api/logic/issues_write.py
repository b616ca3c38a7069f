"""Create and move issues within and across statuses.

A move names the target status (defaulting to the current one) and the
neighbours in that status; the ordering engine reads the target's issues, so
same-status reorders and cross-status moves share one code path. Issues left
behind in the source status keep their ranks.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
import logging

from sqlalchemy.engine import Connection

from kanban_api.config import RankingConfig
from kanban_api.logic.errors import BOARD, ISSUE, STATUS, ResourceNotFound
from kanban_api.logic.reorder_service import Placement, PlacementRequest, ReorderService
from kanban_api.logic.repository_boards import get_board
from kanban_api.logic.repository_issues import (
    get_issue,
    insert_issue,
    move_issue,
    ordered_issues,
    set_issue_ranks,
    update_issue_fields,
)
from kanban_api.logic.repository_statuses import get_status, lock_status

logger = logging.getLogger(__name__)


def issue_reorder_service(conn: Connection, ranking: RankingConfig) -> ReorderService:
    return ReorderService(
        lambda status_id: ordered_issues(conn, status_id),
        kind=ISSUE,
        default_placement=ranking.default_placement,
        max_rank_length=ranking.max_rank_length,
    )


def _apply_rebalance(conn: Connection, placement: Placement) -> None:
    if not placement.rebalanced:
        return
    logger.warning(
        "issue_ranks_rebalanced status_id=%s count=%s bucket=%s",
        placement.parent_id,
        len(placement.rebalanced),
        placement.rank.bucket,
    )
    set_issue_ranks(conn, placement.rebalanced)


def _require_status(conn: Connection, board_id: str, status_id: str) -> None:
    if get_board(conn, board_id) is None:
        raise ResourceNotFound(BOARD)
    if get_status(conn, board_id, status_id) is None:
        raise ResourceNotFound(STATUS)


def create_issue(
    conn: Connection,
    board_id: str,
    status_id: str,
    *,
    title: str,
    content: str,
    prev_issue_id: Optional[str],
    next_issue_id: Optional[str],
    ranking: RankingConfig,
) -> Dict[str, Any]:
    _require_status(conn, board_id, status_id)
    lock_status(conn, status_id)
    placement = issue_reorder_service(conn, ranking).place(
        PlacementRequest(parent_id=status_id, prev_id=prev_issue_id, next_id=next_issue_id)
    )
    _apply_rebalance(conn, placement)
    issue = insert_issue(conn, status_id, title, content, placement.rank)
    logger.info("issue_created status_id=%s issue_id=%s rank=%s", status_id, issue["id"], issue["rank"])
    return issue


def update_issue(
    conn: Connection,
    board_id: str,
    status_id: str,
    issue_id: str,
    *,
    fields: Dict[str, Any],
    move: bool,
    target_status_id: Optional[str],
    prev_issue_id: Optional[str],
    next_issue_id: Optional[str],
    ranking: RankingConfig,
) -> Dict[str, Any]:
    """Edit an issue and, when ``move`` is set, reposition it (possibly in another status)."""
    _require_status(conn, board_id, status_id)
    if get_issue(conn, board_id, status_id, issue_id) is None:
        raise ResourceNotFound(ISSUE)
    update_issue_fields(conn, issue_id, fields)
    final_status_id = status_id
    if move:
        final_status_id = target_status_id or status_id
        if final_status_id != status_id and get_status(conn, board_id, final_status_id) is None:
            raise ResourceNotFound(STATUS)
        lock_status(conn, final_status_id)
        placement = issue_reorder_service(conn, ranking).place(
            PlacementRequest(
                parent_id=final_status_id,
                prev_id=prev_issue_id,
                next_id=next_issue_id,
                item_id=issue_id,
            )
        )
        _apply_rebalance(conn, placement)
        move_issue(conn, issue_id, placement.parent_id, placement.rank)
        logger.info(
            "issue_moved issue_id=%s from_status=%s to_status=%s rank=%s",
            issue_id,
            status_id,
            placement.parent_id,
            placement.rank,
        )
    updated = get_issue(conn, board_id, final_status_id, issue_id)
    if updated is None:
        raise ResourceNotFound(ISSUE)
    return updated


__all__ = ["create_issue", "update_issue", "issue_reorder_service"]
