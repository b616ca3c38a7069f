"""Unit tests for the parent-row locks taken before placing an item."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, List, Tuple

from kanban_api.logic.repository_boards import lock_board
from kanban_api.logic.repository_statuses import lock_status


class _RecordingConnection:
    def __init__(self, dialect: str) -> None:
        self.dialect = SimpleNamespace(name=dialect)
        self.executed: List[Tuple[str, Any]] = []

    def execute(self, statement, params=None):  # type: ignore[no-untyped-def]
        self.executed.append((str(statement), params))


def test_status_row_is_locked_for_update_on_postgres():
    conn = _RecordingConnection("postgresql")
    lock_status(conn, "s1")  # type: ignore[arg-type]
    assert len(conn.executed) == 1
    sql, params = conn.executed[0]
    assert "FROM status" in sql and sql.rstrip().endswith("FOR UPDATE")
    assert params == {"sid": "s1"}


def test_board_row_is_locked_for_update_on_postgres():
    conn = _RecordingConnection("postgresql")
    lock_board(conn, "b1")  # type: ignore[arg-type]
    sql, params = conn.executed[0]
    assert "FROM board" in sql and sql.rstrip().endswith("FOR UPDATE")
    assert params == {"bid": "b1"}


def test_sqlite_takes_no_row_lock():
    conn = _RecordingConnection("sqlite")
    lock_status(conn, "s1")  # type: ignore[arg-type]
    lock_board(conn, "b1")  # type: ignore[arg-type]
    assert conn.executed == []
