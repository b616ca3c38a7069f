"""Configuration utilities for the kanban ordering service.

This module loads application configuration with the following rules:
- Primary source: `kanban_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from kanban_api.logic.position_resolver import APPEND, DEFAULT_PLACEMENTS


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("kanban_config.json")
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        # Recoverable: log and ignore unreadable override
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class DatabaseConfig(BaseModel):
    dsn: str
    auto_apply_migrations: bool = Field(default=True)

    @field_validator("dsn")
    @classmethod
    def dsn_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("database.dsn must be a non-empty string")
        return v


class RankingConfig(BaseModel):
    default_placement: str = Field(default=APPEND)
    max_rank_length: int = Field(default=128, ge=16)

    @field_validator("default_placement")
    @classmethod
    def placement_must_be_allowed(cls, v: str) -> str:
        if v not in DEFAULT_PLACEMENTS:
            raise ValueError(f"ranking.default_placement must be one of {sorted(DEFAULT_PLACEMENTS)}")
        return v


class AppConfig(BaseModel):
    database: DatabaseConfig
    ranking: RankingConfig


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) kanban_config.json at project root (primary base)
    4) Safe defaults for development
    """

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    # Database
    dsn = (
        _env("TEST_DATABASE_URL")
        or _env("DATABASE_URL")
        or _read_config_file("database.url")
        or _base("database.dsn")
        or "sqlite+pysqlite:///:memory:"
    )
    auto_apply_text = _env("AUTO_APPLY_MIGRATIONS") or _read_config_file("database.auto_apply_migrations") or _base("database.auto_apply_migrations", "1")
    auto_apply = str(auto_apply_text).strip().lower() in {"1", "true", "yes"}

    # Ranking
    placement = (_env("RANK_DEFAULT_PLACEMENT") or _read_config_file("ranking.default_placement") or _base("ranking.default_placement", APPEND)).strip().lower()
    max_length_text = _env("RANK_MAX_LENGTH") or _read_config_file("ranking.max_rank_length") or _base("ranking.max_rank_length", "128")

    try:
        cfg = AppConfig(
            database=DatabaseConfig(dsn=dsn, auto_apply_migrations=auto_apply),
            ranking=RankingConfig(
                default_placement=placement,
                max_rank_length=int(str(max_length_text).strip()),
            ),
        )
        return cfg
    except PydanticValidationError as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "RankingConfig",
    "load_config",
]
