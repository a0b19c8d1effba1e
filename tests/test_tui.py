"""Tests for backlog-board TUI application."""

import pytest

from backlog_board.models import Comment, Status
from backlog_board.navigation import KEYMAP
from backlog_board.store import IssueStore
from backlog_board.tui import BacklogApp
from backlog_board.tui.app import (
    IssueDetailPanel,
    IssueList,
    format_comments,
    format_status,
)

from conftest import FakeCommentSource, comment_json, make_issues


def issue_url(key: str) -> str:
    return f"https://example.backlog.com/view/{key}"


@pytest.fixture
def store(source: FakeCommentSource) -> IssueStore:
    return IssueStore(source, make_issues(3))


class TestFormatting:
    """Tests for detail pane rendering helpers."""

    def test_status_with_hex_color(self) -> None:
        """Test status badges use the server colour."""
        badge = format_status(Status(id=1, name="Open", color="#ed8077"))
        assert "on #ed8077" in badge
        assert "Open" in badge

    def test_status_with_bad_color(self) -> None:
        """Test colours that are not hex are ignored."""
        badge = format_status(Status(id=1, name="Open", color="red; blink"))
        assert " on " not in badge

    def test_comments_not_loaded(self) -> None:
        """Test unfetched and empty threads render identically."""
        assert format_comments(None) == ""
        assert format_comments([]) == ""

    def test_comments_markup_escaped(self) -> None:
        """Test comment text cannot inject markup."""
        text = format_comments([Comment.model_validate(comment_json("[red]alert[/red]"))])
        assert "Comments (1)" in text
        assert "\\[red]alert" in text


class TestAppClass:
    """Tests for BacklogApp class attributes."""

    def test_app_bindings(self) -> None:
        """Test BacklogApp has the expected key bindings."""
        binding_keys = [b.key for b in BacklogApp.BINDINGS]
        for key in ("q", "j", "k", "up", "down", "left", "escape", "o", "v"):
            assert key in binding_keys

    def test_navigation_keys_follow_keymap(self) -> None:
        """Test every navigation key is bound and routed through the controller."""
        actions = {b.key: b.action for b in BacklogApp.BINDINGS}
        for key in KEYMAP:
            assert actions[key] == f"navigate('{key}')"
        bound = {key for key, action in actions.items() if action.startswith("navigate(")}
        assert bound == set(KEYMAP)


class TestAppNavigation:
    """Pilot tests driving the app with the keyboard."""

    @pytest.mark.asyncio
    async def test_starts_without_selection(self, store: IssueStore, source: FakeCommentSource) -> None:
        """Test nothing is selected or fetched on startup."""
        app = BacklogApp(store, issue_url)
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            assert app.query_one("#issue-list", IssueList).index is None
            assert app.query_one("#issue-detail", IssueDetailPanel).issue is None
        assert source.calls == []

    @pytest.mark.asyncio
    async def test_move_down_loads_comments(self, store: IssueStore, source: FakeCommentSource) -> None:
        """Test j selects the first issue and loads its comments."""
        app = BacklogApp(store, issue_url)
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("j")
            await pilot.pause()
            assert app.query_one("#issue-list", IssueList).index == 0
            panel = app.query_one("#issue-detail", IssueDetailPanel)
            assert panel.issue.issue_key == "PROJ-1"
            assert panel.issue.comments is not None
        assert source.calls == ["PROJ-1"]

    @pytest.mark.asyncio
    async def test_arrow_keys_wrap(self, store: IssueStore, source: FakeCommentSource) -> None:
        """Test up from the first issue wraps to the last one."""
        app = BacklogApp(store, issue_url)
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("down", "up")
            await pilot.pause()
            assert store.selection.index == 2
            assert app.query_one("#issue-list", IssueList).index == 2
        assert source.calls == ["PROJ-1", "PROJ-3"]

    @pytest.mark.asyncio
    async def test_clear_selection(self, store: IssueStore) -> None:
        """Test left clears the selection and the detail pane."""
        app = BacklogApp(store, issue_url)
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("j", "j", "left")
            await pilot.pause()
            assert store.selected_issue() is None
            assert app.query_one("#issue-detail", IssueDetailPanel).issue is None

    @pytest.mark.asyncio
    async def test_escape_clears_selection(self, store: IssueStore) -> None:
        """Test escape behaves like left."""
        app = BacklogApp(store, issue_url)
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("j", "escape")
            await pilot.pause()
            assert store.selected_issue() is None
            assert app.query_one("#issue-list", IssueList).index is None

    @pytest.mark.asyncio
    async def test_revisit_uses_cache(self, store: IssueStore, source: FakeCommentSource) -> None:
        """Test going back to an issue does not fetch again."""
        app = BacklogApp(store, issue_url)
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("j", "j", "k", "j")
            await pilot.pause()
        assert source.calls == ["PROJ-1", "PROJ-2"]

    @pytest.mark.asyncio
    async def test_quit(self, store: IssueStore, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test q exits the app."""
        app = BacklogApp(store, issue_url)
        exited = []
        async with app.run_test(size=(120, 40)) as pilot:
            monkeypatch.setattr(app, "exit", lambda *args, **kwargs: exited.append(True))
            await pilot.press("q")
            await pilot.pause()
            assert exited == [True]

    @pytest.mark.asyncio
    async def test_toggle_layout(self, store: IssueStore) -> None:
        """Test v switches between side-by-side and stacked panes."""
        app = BacklogApp(store, issue_url)
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("v")
            await pilot.pause()
            assert app.query_one("#main").has_class("vertical")
            await pilot.press("v")
            await pilot.pause()
            assert not app.query_one("#main").has_class("vertical")

    @pytest.mark.asyncio
    async def test_open_browser(self, store: IssueStore, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test o opens the selected issue's page."""
        opened: list[str] = []
        monkeypatch.setattr("backlog_board.tui.app.webbrowser.open", opened.append)
        app = BacklogApp(store, issue_url)
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("o")
            await pilot.pause()
            assert opened == []
            await pilot.press("j", "o")
            await pilot.pause()
        assert opened == ["https://example.backlog.com/view/PROJ-1"]
