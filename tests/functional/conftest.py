"""Functional test bootstrap.

Points the service at a file-backed SQLite database before any
``kanban_api`` import, applies the SQL migrations once per session and empties
the tables before every test so each scenario starts from a clean board.
"""

from __future__ import annotations

import os
import pathlib

import pytest

_ROOT = pathlib.Path(__file__).resolve().parents[2]
_DB_FILE = _ROOT / "tmp" / "functional_tests.db"
_DB_FILE.parent.mkdir(parents=True, exist_ok=True)
if _DB_FILE.exists():
    _DB_FILE.unlink()

os.environ["TEST_DATABASE_URL"] = f"sqlite:///{_DB_FILE}"
os.environ["DATABASE_URL"] = os.environ["TEST_DATABASE_URL"]
# Migrations are applied explicitly below
os.environ["AUTO_APPLY_MIGRATIONS"] = "0"
for _key in ("RANK_DEFAULT_PLACEMENT", "RANK_MAX_LENGTH"):
    os.environ.pop(_key, None)


@pytest.fixture(scope="session", autouse=True)
def functional_sqlite_bootstrap():
    """Session-level bootstrap: apply migrations once for the shared DB."""
    from kanban_api.db.base import get_engine, reset_engine
    from kanban_api.db.migrations_runner import apply_migrations

    apply_migrations(get_engine(os.environ["TEST_DATABASE_URL"]))
    yield
    reset_engine()


@pytest.fixture(autouse=True)
def clean_tables():
    from sqlalchemy import text as sql_text

    from kanban_api.db.base import transaction

    with transaction() as conn:
        for table in ("issue", "status", "board"):
            conn.execute(sql_text(f"DELETE FROM {table}"))
    yield


@pytest.fixture(scope="session")
def client():
    from fastapi.testclient import TestClient

    from kanban_api.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def board(client):
    resp = client.post("/api/boards", json={"title": "Sprint board"})
    assert resp.status_code == 201, resp.text
    return resp.json()
