"""Issue request/response models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kanban_api.models._fields import required_text

TITLE_REQUIRED = "You have to give your issue a title"
CONTENT_REQUIRED = "You have to give your issue some content"


class IssueCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(default="", validate_default=True)
    content: str = Field(default="", validate_default=True)
    prev_issue_id: Optional[str] = Field(default=None, alias="prevIssueId")
    next_issue_id: Optional[str] = Field(default=None, alias="nextIssueId")

    @field_validator("title", mode="before")
    @classmethod
    def title_required(cls, v: Optional[str]) -> str:
        return required_text(v, TITLE_REQUIRED)

    @field_validator("content", mode="before")
    @classmethod
    def content_required(cls, v: Optional[str]) -> str:
        return required_text(v, CONTENT_REQUIRED)


class IssueUpdate(BaseModel):
    """Edit and/or move an issue.

    Supplying any of ``statusId``, ``prevIssueId`` or ``nextIssueId`` makes the
    request a move; ``statusId`` defaults to the issue's current status.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    content: Optional[str] = None
    status_id: Optional[str] = Field(default=None, alias="statusId")
    prev_issue_id: Optional[str] = Field(default=None, alias="prevIssueId")
    next_issue_id: Optional[str] = Field(default=None, alias="nextIssueId")

    @field_validator("title", mode="before")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else required_text(v, TITLE_REQUIRED)

    @field_validator("content", mode="before")
    @classmethod
    def content_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else required_text(v, CONTENT_REQUIRED)

    def repositions(self) -> bool:
        return bool({"status_id", "prev_issue_id", "next_issue_id"} & self.model_fields_set)


class IssueOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    status_id: str = Field(alias="statusId")
    title: str
    content: str
    rank: str
    created_at: str = Field(alias="createdAt")


__all__ = ["IssueCreate", "IssueUpdate", "IssueOut", "TITLE_REQUIRED", "CONTENT_REQUIRED"]
