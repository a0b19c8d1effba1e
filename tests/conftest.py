"""Shared fixtures for backlog-board tests."""

import logging
from typing import Optional

import pytest

from backlog_board.config import BacklogConfig
from backlog_board.errors import TransportError
from backlog_board.models import Comment, Issue


API_URL = "https://example.backlog.com/api/v2"


def issue_json(number: int, **overrides) -> dict:
    """Issue as returned by GET /issues."""
    data = {
        "id": 1000 + number,
        "issueKey": f"PROJ-{number}",
        "summary": f"Issue number {number}",
        "description": f"Description of issue {number}",
        "assignee": {"id": 7, "name": "Hanako"},
        "updated": "2024-03-01T09:00:00Z",
        "status": {"id": 1, "projectId": 42, "name": "Open", "color": "#ed8077"},
        "priority": {"id": 3, "name": "Normal"},
    }
    data.update(overrides)
    return data


def comment_json(content: Optional[str], author: str = "Taro") -> dict:
    """Comment as returned by GET /issues/{key}/comments."""
    return {
        "id": 1,
        "content": content,
        "createdUser": {"id": 3, "name": author},
        "created": "2024-03-02T10:00:00Z",
        "updated": "2024-03-02T10:00:00Z",
        "changeLog": [],
    }


def make_issues(count: int) -> list[Issue]:
    return [Issue.model_validate(issue_json(n)) for n in range(1, count + 1)]


class FakeCommentSource:
    """Records fetch_comments calls; can fail on demand."""

    def __init__(self, comments: Optional[list[Comment]] = None) -> None:
        self.comments = comments if comments is not None else []
        self.calls: list[str] = []
        self.fail = False

    def fetch_comments(self, issue_key: str) -> list[Comment]:
        self.calls.append(issue_key)
        if self.fail:
            raise TransportError("connection refused")
        return list(self.comments)


@pytest.fixture
def config() -> BacklogConfig:
    """Configuration pointing at a fake space."""
    return BacklogConfig(
        space_id="example",
        api_key="secret-key",
        project_id="42",
        status_ids=("1", "2", "3"),
    )


@pytest.fixture
def source() -> FakeCommentSource:
    return FakeCommentSource(
        [Comment.model_validate(comment_json("Looks good"))]
    )


@pytest.fixture
def backlog_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Complete BACKLOG_* environment, run from an empty directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BACKLOG_SPACE_ID", "example")
    monkeypatch.setenv("BACKLOG_API_KEY", "secret-key")
    monkeypatch.setenv("BACKLOG_PROJECT_ID", "42")
    monkeypatch.setenv("BACKLOG_STATUS_ID_LIST", "1,2,3")
    monkeypatch.delenv("BACKLOG_DOMAIN", raising=False)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo setup_logging() so caplog keeps seeing package records."""
    logger = logging.getLogger("backlog_board")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    for handler in list(logger.handlers):
        if handler not in saved[0]:
            handler.close()
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
