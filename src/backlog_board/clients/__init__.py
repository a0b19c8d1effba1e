"""API clients for backlog-board."""

from .backlog import (
    BacklogClient,
    CommentQuery,
    IssueQuery,
    clamp_page_size,
)

__all__ = [
    "BacklogClient",
    "CommentQuery",
    "IssueQuery",
    "clamp_page_size",
]
