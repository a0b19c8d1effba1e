"""Pydantic schemas for Backlog issues and comments."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class BacklogModel(BaseModel):
    """Base model mapping snake_case fields onto Backlog's camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class User(BacklogModel):
    """A Backlog user reference."""

    model_config = ConfigDict(frozen=True)

    name: str


class Status(BacklogModel):
    """Issue status as configured in the Backlog project."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    color: str  # hex, e.g. "#ed8077"


class Comment(BacklogModel):
    """A comment on an issue.

    Backlog records status changes and attachments as comments without
    content; those never reach the store.
    """

    model_config = ConfigDict(frozen=True)

    content: Optional[str] = None
    created_user: User
    created: str
    updated: str

    @property
    def has_content(self) -> bool:
        return bool(self.content)


class Issue(BacklogModel):
    """A Backlog issue.

    ``comments`` is not part of the issues payload. ``None`` means the
    comments have not been fetched yet, an empty list means they were
    fetched and none had content.
    """

    id: int
    issue_key: str
    summary: str
    description: str = ""
    assignee: Optional[User] = None
    updated: str
    status: Status
    comments: Optional[list[Comment]] = Field(default=None, exclude=True)

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, value: Optional[str]) -> str:
        return value or ""

    @property
    def comments_loaded(self) -> bool:
        return self.comments is not None
