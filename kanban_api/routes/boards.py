"""Board routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from kanban_api.db.base import transaction
from kanban_api.logic.errors import BOARD, ResourceNotFound
from kanban_api.logic.repository_boards import create_board, get_board
from kanban_api.models.board import BoardCreate, BoardOut

router = APIRouter(prefix="/boards")
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=BoardOut)
def create_board_route(payload: BoardCreate) -> BoardOut:
    with transaction() as conn:
        board = create_board(conn, payload.title, payload.description)
    logger.info("board_created board_id=%s", board["id"])
    return BoardOut(**board)


@router.get("/{board_id}", response_model=BoardOut)
def get_board_route(board_id: str) -> BoardOut:
    with transaction() as conn:
        board = get_board(conn, board_id)
    if board is None:
        raise ResourceNotFound(BOARD)
    return BoardOut(**board)
