"""Shared field helpers for request models."""

from __future__ import annotations

from typing import Optional

from pydantic_core import PydanticCustomError


def required_text(value: Optional[str], message: str) -> str:
    """Strip ``value`` and reject blanks with a client-facing ``message``."""
    text = (value or "").strip()
    if not text:
        raise PydanticCustomError("blank_text", message)
    return text


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    text = value.strip()
    return text or None
