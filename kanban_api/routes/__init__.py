"""APIRouter registration for the kanban service."""

from __future__ import annotations

from fastapi import APIRouter

from kanban_api.routes.boards import router as boards_router
from kanban_api.routes.issues import router as issues_router
from kanban_api.routes.statuses import router as statuses_router

api_router = APIRouter()
api_router.include_router(boards_router, tags=["Board"])
api_router.include_router(statuses_router, tags=["Status"])
api_router.include_router(issues_router, tags=["Issue"])

__all__ = ["api_router"]
