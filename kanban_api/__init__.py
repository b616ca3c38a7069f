"""Kanban ordering service.

Exposes the FastAPI application factory. The rank ordering engine lives in
`kanban_api.logic` (``rank``, ``rank_seeder``, ``position_resolver``,
``reorder_service``); route handlers live in `kanban_api.routes`.
"""

from __future__ import annotations

from kanban_api.main import create_app

__all__ = ["create_app"]
