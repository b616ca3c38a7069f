"""Shared route dependencies."""

from __future__ import annotations

from fastapi import Request

from kanban_api.config import AppConfig, RankingConfig, load_config


def get_config(request: Request) -> AppConfig:
    config = getattr(request.app.state, "config", None)
    if config is None:
        config = load_config()
        request.app.state.config = config
    return config


def get_ranking(request: Request) -> RankingConfig:
    return get_config(request).ranking
