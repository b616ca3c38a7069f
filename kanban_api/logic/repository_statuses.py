"""Status data access helpers.

Statuses are the ordered children of a board. Reads that feed the ordering
engine return ``OrderedItem`` snapshots sorted ascending by rank.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple
import uuid

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection

from kanban_api.logic.position_resolver import OrderedItem
from kanban_api.logic.rank import RankValue, parse
from kanban_api.logic.timestamps import format_created_at

_COLUMNS = "status_id, board_id, title, description, rank, created_at"


def _row_to_status(row: Any) -> Dict[str, Any]:
    return {
        "id": str(row[0]),
        "board_id": str(row[1]),
        "title": str(row[2]),
        "description": row[3],
        "rank": str(row[4]),
        "created_at": str(row[5]),
    }


def list_statuses(conn: Connection, board_id: str) -> List[Dict[str, Any]]:
    """Return all statuses of a board in display order."""
    rows = conn.execute(
        sql_text(f"SELECT {_COLUMNS} FROM status WHERE board_id = :bid ORDER BY rank ASC"),
        {"bid": board_id},
    ).fetchall()
    statuses = [_row_to_status(r) for r in rows]
    # Collations differ between dialects; the parsed rank is authoritative.
    statuses.sort(key=lambda s: parse(s["rank"]))
    return statuses


def ordered_statuses(conn: Connection, board_id: str) -> List[OrderedItem]:
    return [
        OrderedItem(id=s["id"], parent_id=s["board_id"], rank=parse(s["rank"]), title=s["title"])
        for s in list_statuses(conn, board_id)
    ]


def get_status(conn: Connection, board_id: str, status_id: str) -> Optional[Dict[str, Any]]:
    row = conn.execute(
        sql_text(f"SELECT {_COLUMNS} FROM status WHERE status_id = :sid AND board_id = :bid"),
        {"sid": status_id, "bid": board_id},
    ).fetchone()
    return _row_to_status(row) if row else None


def title_taken(conn: Connection, board_id: str, title: str, exclude_status_id: Optional[str] = None) -> bool:
    query = "SELECT COUNT(*) FROM status WHERE board_id = :bid AND LOWER(title) = LOWER(:title)"
    params: Dict[str, Any] = {"bid": board_id, "title": title}
    if exclude_status_id is not None:
        query += " AND status_id <> :exclude"
        params["exclude"] = exclude_status_id
    row = conn.execute(sql_text(query), params).fetchone()
    return bool(row and int(row[0]) > 0)


def insert_status(
    conn: Connection,
    board_id: str,
    title: str,
    rank: RankValue,
    description: Optional[str] = None,
    status_id: Optional[str] = None,
) -> Dict[str, Any]:
    status = {
        "id": status_id or str(uuid.uuid4()),
        "board_id": board_id,
        "title": title,
        "description": description,
        "rank": rank.format(),
        "created_at": format_created_at(),
    }
    conn.execute(
        sql_text(
            "INSERT INTO status (status_id, board_id, title, description, rank, created_at) "
            "VALUES (:id, :board_id, :title, :description, :rank, :created_at)"
        ),
        status,
    )
    return status


def update_status_fields(conn: Connection, status_id: str, fields: Dict[str, Any]) -> None:
    allowed = {k: v for k, v in fields.items() if k == "description" or (k == "title" and v is not None)}
    if not allowed:
        return
    assignments = ", ".join(f"{k} = :{k}" for k in sorted(allowed))
    conn.execute(
        sql_text(f"UPDATE status SET {assignments} WHERE status_id = :sid"),
        {**allowed, "sid": status_id},
    )


def set_status_ranks(conn: Connection, ranks: Iterable[Tuple[str, RankValue]]) -> None:
    for status_id, rank in ranks:
        conn.execute(
            sql_text("UPDATE status SET rank = :rank WHERE status_id = :sid"),
            {"rank": rank.format(), "sid": status_id},
        )


def lock_status(conn: Connection, status_id: str) -> None:
    """Hold the status row until commit so issue placements in it run one at a time."""
    if conn.dialect.name == "sqlite":
        return
    conn.execute(
        sql_text("SELECT status_id FROM status WHERE status_id = :sid FOR UPDATE"),
        {"sid": status_id},
    )


__all__ = [
    "list_statuses",
    "lock_status",
    "ordered_statuses",
    "get_status",
    "title_taken",
    "insert_status",
    "update_status_fields",
    "set_status_ranks",
]
