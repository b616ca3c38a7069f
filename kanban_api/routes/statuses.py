"""Status routes: list, create at a position, edit and reorder."""

from __future__ import annotations

from typing import List
import logging

from fastapi import APIRouter, Depends

from kanban_api.config import RankingConfig
from kanban_api.db.base import transaction
from kanban_api.logic.errors import BOARD, ResourceNotFound
from kanban_api.logic.repository_boards import get_board
from kanban_api.logic.repository_statuses import list_statuses
from kanban_api.logic.statuses_write import create_status, update_status
from kanban_api.models.status import StatusCreate, StatusOut, StatusUpdate
from kanban_api.routes.deps import get_ranking

router = APIRouter(prefix="/boards/{board_id}/statuses")
logger = logging.getLogger(__name__)


@router.get("", response_model=List[StatusOut])
def list_statuses_route(board_id: str) -> List[StatusOut]:
    with transaction() as conn:
        if get_board(conn, board_id) is None:
            raise ResourceNotFound(BOARD)
        statuses = list_statuses(conn, board_id)
    return [StatusOut(**s) for s in statuses]


@router.post("", status_code=201, response_model=StatusOut)
def create_status_route(
    board_id: str,
    payload: StatusCreate,
    ranking: RankingConfig = Depends(get_ranking),
) -> StatusOut:
    logger.info(
        "status.create.entry board_id=%s prev=%s next=%s",
        board_id,
        payload.prev_status_id,
        payload.next_status_id,
    )
    with transaction() as conn:
        status = create_status(
            conn,
            board_id,
            title=payload.title,
            description=payload.description,
            prev_status_id=payload.prev_status_id,
            next_status_id=payload.next_status_id,
            ranking=ranking,
        )
    return StatusOut(**status)


@router.patch("/{status_id}", response_model=StatusOut)
def update_status_route(
    board_id: str,
    status_id: str,
    payload: StatusUpdate,
    ranking: RankingConfig = Depends(get_ranking),
) -> StatusOut:
    fields = payload.model_dump(include={"title", "description"}, exclude_unset=True)
    with transaction() as conn:
        status = update_status(
            conn,
            board_id,
            status_id,
            fields=fields,
            reposition=payload.repositions(),
            prev_status_id=payload.prev_status_id,
            next_status_id=payload.next_status_id,
            ranking=ranking,
        )
    return StatusOut(**status)
