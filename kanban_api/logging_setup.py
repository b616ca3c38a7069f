"""Central logging configuration for the kanban service.

Installs one stdout handler on the root logger so every module logger emits
without per-module setup. The level comes from ``LOG_LEVEL`` (default INFO).
uvicorn keeps its own loggers on the same handler; SQLAlchemy engine echo is
held at WARNING so statement logs stay opt-in.
"""
from __future__ import annotations

import logging
import os
from logging.config import dictConfig
from typing import Any, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"


def _build_config(level: str) -> dict[str, Any]:
    handler_ref = {"handlers": ["console"], "propagate": False}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": LOG_FORMAT}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            "uvicorn": {"level": level, **handler_ref},
            "uvicorn.error": {"level": level, **handler_ref},
            "uvicorn.access": {"level": level, **handler_ref},
            "sqlalchemy.engine": {"level": "WARNING"},
        },
    }


def configure_logging(level: Optional[str] = None) -> None:
    """Configure application-wide logging once.

    Returns early when the root logger already has handlers (reloaders, pytest
    capture) so output is never duplicated.
    """
    if logging.getLogger().handlers:
        return
    resolved = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    dictConfig(_build_config(resolved))


__all__ = ["configure_logging", "LOG_FORMAT"]
