"""Board data access helpers."""

from __future__ import annotations

from typing import Any, Dict, Optional
import uuid

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection

from kanban_api.logic.timestamps import format_created_at


def _row_to_board(row: Any) -> Dict[str, Any]:
    return {
        "id": str(row[0]),
        "title": str(row[1]),
        "description": row[2],
        "created_at": str(row[3]),
    }


def create_board(
    conn: Connection,
    title: str,
    description: Optional[str] = None,
    board_id: Optional[str] = None,
) -> Dict[str, Any]:
    board = {
        "id": board_id or str(uuid.uuid4()),
        "title": title,
        "description": description,
        "created_at": format_created_at(),
    }
    conn.execute(
        sql_text(
            "INSERT INTO board (board_id, title, description, created_at) "
            "VALUES (:id, :title, :description, :created_at)"
        ),
        board,
    )
    return board


def get_board(conn: Connection, board_id: str) -> Optional[Dict[str, Any]]:
    row = conn.execute(
        sql_text("SELECT board_id, title, description, created_at FROM board WHERE board_id = :bid"),
        {"bid": board_id},
    ).fetchone()
    return _row_to_board(row) if row else None


def lock_board(conn: Connection, board_id: str) -> None:
    """Hold the board row until commit so status reorders on it run one at a time.

    SQLite has no row locks; its database-wide write lock serializes writers.
    """
    if conn.dialect.name == "sqlite":
        return
    conn.execute(
        sql_text("SELECT board_id FROM board WHERE board_id = :bid FOR UPDATE"),
        {"bid": board_id},
    )


__all__ = ["create_board", "get_board", "lock_board"]
