"""Status request/response models.

Positions are expressed by neighbour ids (``prevStatusId``/``nextStatusId``);
the server derives the rank, clients never send one.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kanban_api.models._fields import optional_text, required_text

TITLE_REQUIRED = "You have to give your status a unique title"


class StatusCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(default="", validate_default=True)
    description: Optional[str] = None
    prev_status_id: Optional[str] = Field(default=None, alias="prevStatusId")
    next_status_id: Optional[str] = Field(default=None, alias="nextStatusId")

    @field_validator("title", mode="before")
    @classmethod
    def title_required(cls, v: Optional[str]) -> str:
        return required_text(v, TITLE_REQUIRED)

    @field_validator("description", mode="before")
    @classmethod
    def description_optional(cls, v: Optional[str]) -> Optional[str]:
        return optional_text(v)


class StatusUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    prev_status_id: Optional[str] = Field(default=None, alias="prevStatusId")
    next_status_id: Optional[str] = Field(default=None, alias="nextStatusId")

    @field_validator("title", mode="before")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return required_text(v, TITLE_REQUIRED)

    @field_validator("description", mode="before")
    @classmethod
    def description_optional(cls, v: Optional[str]) -> Optional[str]:
        return optional_text(v)

    def repositions(self) -> bool:
        return bool({"prev_status_id", "next_status_id"} & self.model_fields_set)


class StatusOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    board_id: str = Field(alias="boardId")
    title: str
    description: Optional[str] = None
    rank: str
    created_at: str = Field(alias="createdAt")


__all__ = ["StatusCreate", "StatusUpdate", "StatusOut", "TITLE_REQUIRED"]
