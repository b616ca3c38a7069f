"""Board request/response models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kanban_api.models._fields import optional_text, required_text


class BoardCreate(BaseModel):
    title: str = Field(default="", validate_default=True)
    description: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_required(cls, v: Optional[str]) -> str:
        return required_text(v, "You have to give your board a title")

    @field_validator("description", mode="before")
    @classmethod
    def description_optional(cls, v: Optional[str]) -> Optional[str]:
        return optional_text(v)


class BoardOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: Optional[str] = None
    created_at: str = Field(alias="createdAt")


__all__ = ["BoardCreate", "BoardOut"]
