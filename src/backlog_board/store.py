"""Issue collection with a lazily filled per-issue comment cache."""

import logging
from typing import Iterable, Optional, Protocol

from backlog_board.errors import DecodeError, TransportError
from backlog_board.models import Comment, Issue
from backlog_board.selection import SelectionList


logger = logging.getLogger(__name__)


class CommentSource(Protocol):
    """Anything that can list an issue's comments (``BacklogClient`` in practice)."""

    def fetch_comments(self, issue_key: str) -> list[Comment]: ...


class IssueStore:
    """Owns the loaded issues and mediates comment fetching.

    An issue's ``comments`` goes from ``None`` to a list at most once. A
    failed fetch leaves it at ``None``, so the next request for that issue
    tries again.
    """

    def __init__(self, source: CommentSource, issues: Iterable[Issue] = ()) -> None:
        self.source = source
        self.selection: SelectionList[Issue] = SelectionList(issues)

    @property
    def issues(self) -> tuple[Issue, ...]:
        return self.selection.items

    def load(self, issues: Iterable[Issue]) -> None:
        """Replace the issue collection; nothing is selected afterwards."""
        self.selection.replace(issues)
        logger.debug("Loaded %d issues", len(self.selection))

    def ensure_comments_loaded(self, index: int) -> None:
        """Fetch comments for the issue at ``index`` unless already cached.

        Transport and decode failures are logged and swallowed.

        Raises:
            IndexError: If ``index`` is outside the collection.
        """
        if not 0 <= index < len(self.selection):
            raise IndexError(index)

        issue = self.selection.items[index]
        if issue.comments_loaded:
            return

        try:
            comments = self.source.fetch_comments(issue.issue_key)
        except (TransportError, DecodeError) as e:
            logger.warning("Could not load comments for %s: %s", issue.issue_key, e)
            return

        issue.comments = comments

    def selected_issue(self) -> Optional[Issue]:
        return self.selection.selected()
