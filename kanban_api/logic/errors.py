"""Domain error types raised by the ordering engine and repositories.

Each error carries a stable ``kind`` that ``kanban_api.http.error_mapping``
translates into an HTTP status and problem code, and a ``message`` that is
returned to clients verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ItemKind:
    """Wording for one kind of ordered item ("issue", "status")."""

    name: str
    possessive: str
    plural: str

    @property
    def title(self) -> str:
        return self.name.capitalize()


ISSUE = ItemKind(name="issue", possessive="issue's", plural="issues")
STATUS = ItemKind(name="status", possessive="status'", plural="statuses")
BOARD = ItemKind(name="board", possessive="board's", plural="boards")


class KanbanError(Exception):
    kind = "kanban_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class PositionError(KanbanError):
    """A requested position cannot be resolved against the current siblings."""

    kind = "position_error"


class NotFound(PositionError):
    kind = "not_found"

    def __init__(self, item: ItemKind) -> None:
        super().__init__(f"{item.title} not found")
        self.item = item


class CannotPrepend(PositionError):
    kind = "cannot_prepend"

    def __init__(self, item: ItemKind) -> None:
        super().__init__(f"Cannot determine {item.possessive} position when prepending it")
        self.item = item


class CannotAppend(PositionError):
    kind = "cannot_append"

    def __init__(self, item: ItemKind) -> None:
        super().__init__(f"Cannot determine {item.possessive} position when appending it")
        self.item = item


class CannotInsertBetween(PositionError):
    kind = "cannot_insert_between"

    def __init__(self, item: ItemKind) -> None:
        super().__init__(f"Cannot determine {item.possessive} position when putting one in between")
        self.item = item


class ResourceNotFound(KanbanError):
    """A board, status or issue named in the request path does not exist."""

    kind = "resource_not_found"

    def __init__(self, item: ItemKind) -> None:
        super().__init__(f"{item.title} not found")
        self.item = item


class DuplicateTitle(KanbanError):
    kind = "duplicate_title"

    def __init__(self, item: ItemKind) -> None:
        super().__init__(f"This title has already been used by one of your {item.plural}")
        self.item = item


__all__ = [
    "ItemKind",
    "ISSUE",
    "STATUS",
    "BOARD",
    "KanbanError",
    "PositionError",
    "NotFound",
    "CannotPrepend",
    "CannotAppend",
    "CannotInsertBetween",
    "ResourceNotFound",
    "DuplicateTitle",
]
