"""Issue routes: list, read, create at a position, edit and move."""

from __future__ import annotations

from typing import List
import logging

from fastapi import APIRouter, Depends

from kanban_api.config import RankingConfig
from kanban_api.db.base import transaction
from kanban_api.logic.errors import BOARD, ISSUE, STATUS, ResourceNotFound
from kanban_api.logic.issues_write import create_issue, update_issue
from kanban_api.logic.repository_boards import get_board
from kanban_api.logic.repository_issues import get_issue, list_issues
from kanban_api.logic.repository_statuses import get_status
from kanban_api.models.issue import IssueCreate, IssueOut, IssueUpdate
from kanban_api.routes.deps import get_ranking

router = APIRouter(prefix="/boards/{board_id}/statuses/{status_id}/issues")
logger = logging.getLogger(__name__)


@router.get("", response_model=List[IssueOut])
def list_issues_route(board_id: str, status_id: str) -> List[IssueOut]:
    with transaction() as conn:
        if get_board(conn, board_id) is None:
            raise ResourceNotFound(BOARD)
        if get_status(conn, board_id, status_id) is None:
            raise ResourceNotFound(STATUS)
        issues = list_issues(conn, status_id)
    return [IssueOut(**i) for i in issues]


@router.get("/{issue_id}", response_model=IssueOut)
def get_issue_route(board_id: str, status_id: str, issue_id: str) -> IssueOut:
    with transaction() as conn:
        issue = get_issue(conn, board_id, status_id, issue_id)
    if issue is None:
        raise ResourceNotFound(ISSUE)
    return IssueOut(**issue)


@router.post("", status_code=201, response_model=IssueOut)
def create_issue_route(
    board_id: str,
    status_id: str,
    payload: IssueCreate,
    ranking: RankingConfig = Depends(get_ranking),
) -> IssueOut:
    logger.info(
        "issue.create.entry status_id=%s prev=%s next=%s",
        status_id,
        payload.prev_issue_id,
        payload.next_issue_id,
    )
    with transaction() as conn:
        issue = create_issue(
            conn,
            board_id,
            status_id,
            title=payload.title,
            content=payload.content,
            prev_issue_id=payload.prev_issue_id,
            next_issue_id=payload.next_issue_id,
            ranking=ranking,
        )
    return IssueOut(**issue)


@router.patch("/{issue_id}", response_model=IssueOut)
def update_issue_route(
    board_id: str,
    status_id: str,
    issue_id: str,
    payload: IssueUpdate,
    ranking: RankingConfig = Depends(get_ranking),
) -> IssueOut:
    fields = payload.model_dump(include={"title", "content"}, exclude_unset=True)
    with transaction() as conn:
        issue = update_issue(
            conn,
            board_id,
            status_id,
            issue_id,
            fields=fields,
            move=payload.repositions(),
            target_status_id=payload.status_id,
            prev_issue_id=payload.prev_issue_id,
            next_issue_id=payload.next_issue_id,
            ranking=ranking,
        )
    return IssueOut(**issue)
