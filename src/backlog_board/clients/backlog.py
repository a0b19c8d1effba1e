"""Backlog API client for backlog-board.

This module provides:
- Query builders for the issue and comment listing endpoints
- An httpx-based client that authenticates every request with the API key
- Decoding of responses into typed models
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, TypeVar
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from backlog_board.config import MAX_PAGE_SIZE, BacklogConfig
from backlog_board.errors import ConfigError, DecodeError, TransportError
from backlog_board.models import Comment, Issue


logger = logging.getLogger(__name__)

T = TypeVar("T")

QueryParams = list[tuple[str, str]]

DEFAULT_ISSUE_SORT = "status"
DEFAULT_MAX_ISSUES = 1000

_ISSUES = TypeAdapter(list[Issue])
_COMMENTS = TypeAdapter(list[Comment])


def clamp_page_size(page_size: int) -> int:
    """Keep a requested page size within Backlog's 1..100 window."""
    return max(1, min(page_size, MAX_PAGE_SIZE))


@dataclass
class IssueQuery:
    """Query parameters for ``GET /issues``.

    List filters are sent as repeated ``name[]`` parameters, one entry per
    value, which is how Backlog expects array arguments.
    """

    project_ids: Sequence[str]
    status_ids: Sequence[str] = field(default_factory=tuple)
    count: int = MAX_PAGE_SIZE
    sort: str = DEFAULT_ISSUE_SORT
    offset: int = 0

    def to_params(self) -> QueryParams:
        params: QueryParams = [("projectId[]", str(pid)) for pid in self.project_ids]
        params.extend(("statusId[]", str(sid)) for sid in self.status_ids)
        params.append(("count", str(clamp_page_size(self.count))))
        params.append(("sort", self.sort))
        if self.offset:
            params.append(("offset", str(self.offset)))
        return params


@dataclass
class CommentQuery:
    """Query parameters for ``GET /issues/{issueKey}/comments``."""

    count: int = MAX_PAGE_SIZE
    order: str = "asc"

    def to_params(self) -> QueryParams:
        return [
            ("order", self.order),
            ("count", str(clamp_page_size(self.count))),
        ]


class BacklogClient:
    """Read-only client for the Backlog v2 API."""

    def __init__(self, config: BacklogConfig, transport: Optional[httpx.BaseTransport] = None):
        """Initialize the client.

        Args:
            config: Space, credentials and filters to use.
            transport: Optional httpx transport, mainly for tests.
        """
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.config.api_url,
                headers={"User-Agent": "backlog-board"},
                timeout=self.config.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "BacklogClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def issue_url(self, issue_key: str) -> str:
        """Browser URL of an issue."""
        return f"{self.config.base_url}/view/{quote(issue_key, safe='')}"

    def get(self, path: str, params: QueryParams) -> httpx.Response:
        """Make an authenticated GET request.

        The API key always travels as the first query parameter.

        Raises:
            TransportError: On connection failure or a non-2xx status.
        """
        query: QueryParams = [("apiKey", self.config.api_key), *params]
        try:
            response = self.client.get(path, params=query)
        except httpx.HTTPError as e:
            logger.debug("GET %s failed: %s", path, e)
            raise TransportError(f"GET {path} failed: {e}") from e

        if not response.is_success:
            raise TransportError(
                f"GET {path} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _decode(response: httpx.Response, adapter: TypeAdapter[T]) -> T:
        try:
            return adapter.validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(
                f"Unexpected response from {response.request.url.path}: {e.error_count()} error(s)"
            ) from e

    def fetch_issues(
        self,
        project_id: str,
        status_ids: Sequence[str],
        page_size: int = MAX_PAGE_SIZE,
        sort: str = DEFAULT_ISSUE_SORT,
        offset: int = 0,
    ) -> list[Issue]:
        """Fetch one page of issues for a project.

        Args:
            project_id: Backlog project id.
            status_ids: Status ids to include; each becomes a ``statusId[]``.
            page_size: Issues per page, capped at 100.
            sort: Sort key, ``status`` by default.
            offset: Number of issues to skip.

        Returns:
            Issues in server order, with comments not yet fetched.

        Raises:
            ConfigError: If ``project_id`` is empty.
            TransportError: On network failure or non-2xx status.
            DecodeError: If the body does not match the issue schema.
        """
        if not project_id:
            raise ConfigError("project id is required to list issues")

        query = IssueQuery(
            project_ids=[project_id],
            status_ids=status_ids,
            count=page_size,
            sort=sort,
            offset=offset,
        )
        response = self.get("/issues", query.to_params())
        issues = self._decode(response, _ISSUES)
        logger.info("Fetched %d issues for project %s (offset %d)", len(issues), project_id, offset)
        return issues

    def fetch_all_issues(
        self,
        project_id: str,
        status_ids: Sequence[str],
        page_size: int = MAX_PAGE_SIZE,
        max_issues: int = DEFAULT_MAX_ISSUES,
    ) -> list[Issue]:
        """Fetch issues page by page until a short page or ``max_issues``."""
        page_size = clamp_page_size(page_size)
        issues: list[Issue] = []

        while len(issues) < max_issues:
            page = self.fetch_issues(
                project_id,
                status_ids,
                page_size=page_size,
                offset=len(issues),
            )
            issues.extend(page)
            if len(page) < page_size:
                break

        return issues[:max_issues]

    def fetch_comments(self, issue_key: str) -> list[Comment]:
        """Fetch an issue's comments, oldest first.

        Comments without content (status changes, attachments) are dropped.

        Raises:
            TransportError: On network failure or non-2xx status.
            DecodeError: If the body does not match the comment schema.
        """
        response = self.get(
            f"/issues/{quote(issue_key, safe='')}/comments",
            CommentQuery().to_params(),
        )
        comments = self._decode(response, _COMMENTS)
        kept = [c for c in comments if c.has_content]
        logger.debug(
            "Fetched %d comments for %s (%d without content dropped)",
            len(kept),
            issue_key,
            len(comments) - len(kept),
        )
        return kept

    def fetch_configured_issues(self, fetch_all: bool = False) -> list[Issue]:
        """Fetch issues using the configured project and status filter.

        Only the first page is fetched unless ``fetch_all`` is set.
        """
        if fetch_all:
            return self.fetch_all_issues(self.config.project_id, self.config.status_ids)
        return self.fetch_issues(self.config.project_id, self.config.status_ids)
