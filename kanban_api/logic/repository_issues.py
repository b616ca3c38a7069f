"""Issue data access helpers.

Issues are the ordered children of a status. Lookups are always scoped by
board so an id belonging to another board reads as missing.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple
import uuid

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection

from kanban_api.logic.position_resolver import OrderedItem
from kanban_api.logic.rank import RankValue, parse
from kanban_api.logic.timestamps import format_created_at

_COLUMNS = "i.issue_id, i.status_id, i.title, i.content, i.rank, i.created_at"


def _row_to_issue(row: Any) -> Dict[str, Any]:
    return {
        "id": str(row[0]),
        "status_id": str(row[1]),
        "title": str(row[2]),
        "content": str(row[3]),
        "rank": str(row[4]),
        "created_at": str(row[5]),
    }


def list_issues(conn: Connection, status_id: str) -> List[Dict[str, Any]]:
    """Return all issues of a status in display order."""
    rows = conn.execute(
        sql_text(f"SELECT {_COLUMNS} FROM issue i WHERE i.status_id = :sid ORDER BY i.rank ASC"),
        {"sid": status_id},
    ).fetchall()
    issues = [_row_to_issue(r) for r in rows]
    issues.sort(key=lambda i: parse(i["rank"]))
    return issues


def ordered_issues(conn: Connection, status_id: str) -> List[OrderedItem]:
    return [
        OrderedItem(id=i["id"], parent_id=i["status_id"], rank=parse(i["rank"]), title=i["title"])
        for i in list_issues(conn, status_id)
    ]


def get_issue(conn: Connection, board_id: str, status_id: str, issue_id: str) -> Optional[Dict[str, Any]]:
    row = conn.execute(
        sql_text(
            f"SELECT {_COLUMNS} FROM issue i JOIN status s ON s.status_id = i.status_id "
            "WHERE i.issue_id = :iid AND i.status_id = :sid AND s.board_id = :bid"
        ),
        {"iid": issue_id, "sid": status_id, "bid": board_id},
    ).fetchone()
    return _row_to_issue(row) if row else None


def insert_issue(
    conn: Connection,
    status_id: str,
    title: str,
    content: str,
    rank: RankValue,
    issue_id: Optional[str] = None,
) -> Dict[str, Any]:
    issue = {
        "id": issue_id or str(uuid.uuid4()),
        "status_id": status_id,
        "title": title,
        "content": content,
        "rank": rank.format(),
        "created_at": format_created_at(),
    }
    conn.execute(
        sql_text(
            "INSERT INTO issue (issue_id, status_id, title, content, rank, created_at) "
            "VALUES (:id, :status_id, :title, :content, :rank, :created_at)"
        ),
        issue,
    )
    return issue


def update_issue_fields(conn: Connection, issue_id: str, fields: Dict[str, Any]) -> None:
    allowed = {k: v for k, v in fields.items() if k in {"title", "content"} and v is not None}
    if not allowed:
        return
    assignments = ", ".join(f"{k} = :{k}" for k in sorted(allowed))
    conn.execute(
        sql_text(f"UPDATE issue SET {assignments} WHERE issue_id = :iid"),
        {**allowed, "iid": issue_id},
    )


def move_issue(conn: Connection, issue_id: str, status_id: str, rank: RankValue) -> None:
    conn.execute(
        sql_text("UPDATE issue SET status_id = :sid, rank = :rank WHERE issue_id = :iid"),
        {"sid": status_id, "rank": rank.format(), "iid": issue_id},
    )


def set_issue_ranks(conn: Connection, ranks: Iterable[Tuple[str, RankValue]]) -> None:
    for issue_id, rank in ranks:
        conn.execute(
            sql_text("UPDATE issue SET rank = :rank WHERE issue_id = :iid"),
            {"rank": rank.format(), "iid": issue_id},
        )


__all__ = [
    "list_issues",
    "ordered_issues",
    "get_issue",
    "insert_issue",
    "update_issue_fields",
    "move_issue",
    "set_issue_ranks",
]
