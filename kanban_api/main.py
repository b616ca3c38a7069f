from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text as sql_text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from kanban_api.config import load_config
from kanban_api.db.base import get_engine
from kanban_api.db.migrations_runner import apply_migrations
from kanban_api.http.problem import (
    handle_http_exception,
    handle_integrity_error,
    handle_kanban_error,
    handle_request_validation_error,
    handle_unexpected_error,
)
from kanban_api.http.request_id import RequestIdMiddleware
from kanban_api.logging_setup import configure_logging
from kanban_api.logic.errors import KanbanError
from kanban_api.routes import api_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def _health_check() -> dict:
    try:
        with get_engine().connect() as conn:
            conn.execute(sql_text("SELECT 1")).fetchone()
    except SQLAlchemyError as e:
        logger.error("Health DB check failed", exc_info=True)
        return {"status": "degraded", "db": False, "reason": type(e).__name__}
    return {"status": "ok", "db": True}


def create_app() -> FastAPI:
    """Build the FastAPI application.

    Configures logging, loads configuration, applies pending SQL migrations
    (unless ``AUTO_APPLY_MIGRATIONS=0``), registers the problem+json handlers
    and mounts the API routers under ``/api``.
    """
    configure_logging()
    config = load_config()

    if config.database.auto_apply_migrations:
        applied = apply_migrations(get_engine(config.database.dsn))
        if applied:
            logger.info("startup_migrations_applied files=%s", applied)

    app = FastAPI(title="Kanban Ordering Service")
    app.state.config = config

    app.add_exception_handler(KanbanError, handle_kanban_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
        expose_headers=["X-Request-Id"],
    )

    @app.get("/health", tags=["Health"])
    def health() -> dict:
        return _health_check()

    app.include_router(api_router, prefix=API_PREFIX)
    logger.info(
        "app_created default_placement=%s max_rank_length=%s",
        config.ranking.default_placement,
        config.ranking.max_rank_length,
    )
    return app
