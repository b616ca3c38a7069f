"""Demo data seeding.

Creates a board with a handful of statuses, each holding issues, ranked with
``rank_seeder.sequence``. Run with ``python -m kanban_api.logic.seed``.
"""

from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.engine import Connection

from kanban_api.db.base import get_engine, transaction
from kanban_api.db.migrations_runner import apply_migrations
from kanban_api.logging_setup import configure_logging
from kanban_api.logic.rank_seeder import sequence
from kanban_api.logic.repository_boards import create_board
from kanban_api.logic.repository_issues import insert_issue
from kanban_api.logic.repository_statuses import insert_status

logger = logging.getLogger(__name__)

DEFAULT_STATUSES = ("todo", "on hold", "in progress", "done")
DEMO_ISSUES = (
    (
        "Adjust column titles",
        "To rename a status, open its menu from the three dots icon next to the status title.",
    ),
    (
        "Create your own issues",
        "Click on the floating action button in the bottom-right corner of the screen to add more issues.",
    ),
    (
        "Get familiar with the kanban board",
        "Get to know the kanban board. Customize statuses and issues to fit your needs.",
    ),
)


def seed_board(
    conn: Connection,
    *,
    title: str = "Board #1",
    status_titles: Sequence[str] = DEFAULT_STATUSES,
    issues_per_status: int = len(DEMO_ISSUES),
    board_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Insert one board with ranked statuses and issues; return what was created."""
    board = create_board(
        conn,
        title,
        "Edit your board's title and description. Manage your issues within it.",
        board_id=board_id,
    )
    statuses: List[Dict[str, Any]] = []
    for status_title, status_rank in zip(status_titles, sequence(len(status_titles))):
        status = insert_status(conn, board["id"], status_title, status_rank)
        issues = []
        for idx, issue_rank in enumerate(sequence(issues_per_status)):
            issue_title, content = DEMO_ISSUES[idx % len(DEMO_ISSUES)]
            if idx >= len(DEMO_ISSUES):
                issue_title = f"{issue_title} #{idx + 1}"
            issues.append(insert_issue(conn, status["id"], issue_title, content, issue_rank))
        statuses.append({**status, "issues": issues})
    logger.info(
        "seed_board_created board_id=%s statuses=%s issues_per_status=%s",
        board["id"],
        len(statuses),
        issues_per_status,
    )
    return {**board, "statuses": statuses}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed a demo kanban board.")
    parser.add_argument("--boards", type=int, default=1, help="number of boards to create")
    parser.add_argument("--issues", type=int, default=len(DEMO_ISSUES), help="issues per status")
    args = parser.parse_args(argv)

    configure_logging()
    apply_migrations(get_engine())
    with transaction() as conn:
        for n in range(args.boards):
            seed_board(conn, title=f"Board #{n + 1}", issues_per_status=args.issues)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
