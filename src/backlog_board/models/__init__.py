"""Data models for backlog-board."""

from .schemas import (
    BacklogModel,
    Comment,
    Issue,
    Status,
    User,
)

__all__ = [
    "BacklogModel",
    "Comment",
    "Issue",
    "Status",
    "User",
]
