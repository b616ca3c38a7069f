"""Database bootstrap utilities for the kanban service.

Exposes engine construction, the per-request transaction scope and the SQL
migrations runner that applies the SQL files shipped in kanban_api/db/migrations/.
"""

from kanban_api.db.base import get_engine, reset_engine, transaction
from kanban_api.db.migrations_runner import apply_migrations

__all__ = [
    "get_engine",
    "reset_engine",
    "transaction",
    "apply_migrations",
]
