"""Central error mapping for domain errors.

Single source of truth for translating ``KanbanError.kind`` values into
problem+json codes and HTTP statuses. Handlers and routes import from here
instead of hardcoding strings or numbers.
"""

from __future__ import annotations

from typing import Dict

# Referenced neighbour is not a child of the target parent
NOT_FOUND = {
    "code": "POSITION_REFERENCE_NOT_FOUND",
    "status": 404,
    "title": "Not Found",
}

# Neighbour(s) exist but are not where the request says they are
CANNOT_DETERMINE = {
    "status": 400,
    "title": "Bad Request",
}

KANBAN_ERROR_MAP: Dict[str, Dict[str, object]] = {
    "not_found": NOT_FOUND,
    "cannot_prepend": {**CANNOT_DETERMINE, "code": "POSITION_CANNOT_PREPEND"},
    "cannot_append": {**CANNOT_DETERMINE, "code": "POSITION_CANNOT_APPEND"},
    "cannot_insert_between": {**CANNOT_DETERMINE, "code": "POSITION_CANNOT_INSERT_BETWEEN"},
    "resource_not_found": {"code": "RESOURCE_NOT_FOUND", "status": 404, "title": "Not Found"},
    "duplicate_title": {"code": "DUPLICATE_TITLE", "status": 400, "title": "Bad Request"},
}

# A unique rank or title was taken by a concurrent write
CONFLICT = {"code": "CONCURRENT_UPDATE_CONFLICT", "status": 409, "title": "Conflict"}

_FALLBACK = {"code": "KANBAN_ERROR", "status": 400, "title": "Bad Request"}


def lookup(kind: str) -> Dict[str, object]:
    """Return the mapping entry for an error kind (fallback: 400)."""
    return KANBAN_ERROR_MAP.get(kind, _FALLBACK)


__all__ = ["KANBAN_ERROR_MAP", "CONFLICT", "lookup"]
