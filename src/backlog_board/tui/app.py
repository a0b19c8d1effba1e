"""Main backlog-board TUI application."""

import re
import webbrowser
from typing import Callable, Optional

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical, VerticalScroll
from textual.reactive import reactive
from textual.widgets import Footer, Header, Label, ListItem, ListView, Rule, Static

from backlog_board.models import Comment, Issue, Status
from backlog_board.navigation import KEYMAP, InputSymbol, NavigationController
from backlog_board.store import IssueStore


HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def format_status(status: Status) -> str:
    """Status badge in Rich markup, coloured with the server's hex colour."""
    name = escape(status.name)
    if HEX_COLOR.match(status.color):
        return f"[bold white on {status.color}] {name} [/]"
    return f"[bold] {name} [/]"


def format_issue_info(issue: Issue) -> str:
    """Metadata lines shown above the description."""
    assignee = escape(issue.assignee.name) if issue.assignee else "[dim]unassigned[/]"
    return "\n".join([
        f"{format_status(issue.status)}  {escape(issue.issue_key)}",
        f"👤 {assignee}",
        f"🕒 Updated: {escape(issue.updated)}",
    ])


def format_comments(comments: Optional[list[Comment]]) -> str:
    """Comment thread in Rich markup.

    Not-yet-loaded and empty threads both render as an empty string, so a
    failed fetch looks like an issue without comments.
    """
    if not comments:
        return ""
    blocks = []
    for comment in comments:
        blocks.append(
            f"[b]{escape(comment.created_user.name)}[/] [dim]{escape(comment.created)}[/]\n"
            f"{escape(comment.content or '')}"
        )
    return f"💬 Comments ({len(comments)})\n\n" + "\n\n".join(blocks)


class IssueListItem(ListItem):
    """An issue row in the list view."""

    def __init__(self, issue: Issue) -> None:
        super().__init__()
        self.issue = issue

    def compose(self) -> ComposeResult:
        yield Label(f"{self.issue.issue_key}: {self.issue.summary}", markup=False)


class IssueList(ListView):
    """Issue list; the highlight follows the store's cursor, not the keyboard."""

    can_focus = False


class DetailScroll(VerticalScroll):
    can_focus = False


class IssueDetailPanel(Vertical):
    """Panel showing the selected issue and its comments."""

    issue: reactive[Optional[Issue]] = reactive(None, always_update=True, init=False)

    def compose(self) -> ComposeResult:
        yield Label("Select an issue", id="issue-title", classes="title")
        yield Rule()
        yield DetailScroll(
            Static("", id="issue-info"),
            Static("", id="issue-description", markup=False),
            Static("", id="issue-comments"),
            id="detail-scroll",
        )

    def watch_issue(self, issue: Optional[Issue]) -> None:
        if issue is None:
            self.query_one("#issue-title", Label).update("Select an issue")
            self.query_one("#issue-info", Static).update("")
            self.query_one("#issue-description", Static).update("")
            self.query_one("#issue-comments", Static).update("")
            return

        self.query_one("#issue-title", Label).update(escape(issue.summary))
        self.query_one("#issue-info", Static).update(format_issue_info(issue))
        self.query_one("#issue-description", Static).update(issue.description)
        self.query_one("#issue-comments", Static).update(format_comments(issue.comments))
        self.query_one("#detail-scroll", DetailScroll).scroll_home(animate=False)


NAVIGATION_LABELS = {
    InputSymbol.QUIT: "Quit",
    InputSymbol.CLEAR_SELECTION: "Clear Selection",
    InputSymbol.MOVE_DOWN: "Down",
    InputSymbol.MOVE_UP: "Up",
}

# Keys widgets would otherwise consume
PRIORITY_KEYS = {"down", "up", "left", "escape"}
FOOTER_KEYS = {"q", "j", "k", "escape"}


def navigation_bindings() -> list[Binding]:
    """One binding per ``KEYMAP`` entry, each routed to ``action_navigate``."""
    bindings = []
    for key, symbol in KEYMAP.items():
        bindings.append(
            Binding(
                key,
                f"navigate({key!r})",
                NAVIGATION_LABELS[symbol],
                show=key in FOOTER_KEYS,
                priority=key in PRIORITY_KEYS,
            )
        )
    return bindings


class BacklogApp(App):
    """Browse a Backlog project's issues with the keyboard."""

    TITLE = "Backlog Board"
    SUB_TITLE = "Issues"

    CSS = """
    #main {
        layout: horizontal;
        height: 1fr;
    }

    #main.vertical {
        layout: vertical;
    }

    #issue-list, #issue-detail {
        width: 1fr;
        height: 1fr;
        border: round $primary;
    }

    #issue-list > ListItem.-highlight {
        background: $success;
        text-style: bold;
    }

    #issue-detail {
        padding: 0 1;
    }

    #issue-detail .title {
        text-style: bold;
    }

    #issue-info, #issue-description {
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        *navigation_bindings(),
        Binding("o", "open_browser", "Open in Browser", show=True),
        Binding("v", "toggle_layout", "Toggle Split", show=True),
    ]

    vertical: reactive[bool] = reactive(False, init=False)

    def __init__(self, store: IssueStore, issue_url: Callable[[str], str]):
        """Create the app.

        Args:
            store: Issue store, already loaded.
            issue_url: Builds the browser URL for an issue key.
        """
        super().__init__()
        self.store = store
        self.controller = NavigationController(store)
        self.issue_url = issue_url

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main"):
            yield IssueList(
                *[IssueListItem(issue) for issue in self.store.issues],
                initial_index=None,
                id="issue-list",
            )
            yield IssueDetailPanel(id="issue-detail")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#issue-list", IssueList).border_title = "List of Issues"
        self.query_one("#issue-detail", IssueDetailPanel).border_title = "Issue"
        self.sub_title = f"{len(self.store.issues)} issues"

    def watch_vertical(self, vertical: bool) -> None:
        self.query_one("#main", Container).set_class(vertical, "vertical")

    def action_navigate(self, key: str) -> None:
        """Feed a navigation key to the controller and refresh the view."""
        if not self.controller.handle_key(key):
            self.exit()
            return
        self._sync_view()

    def _sync_view(self) -> None:
        """Push the store's cursor and selected issue into the widgets."""
        self.query_one("#issue-list", IssueList).index = self.store.selection.index
        self.query_one("#issue-detail", IssueDetailPanel).issue = self.store.selected_issue()

    def action_toggle_layout(self) -> None:
        self.vertical = not self.vertical

    def action_open_browser(self) -> None:
        """Open the selected issue in the system browser."""
        issue = self.store.selected_issue()
        if issue is None:
            self.notify("Select an issue first", severity="warning")
            return
        url = self.issue_url(issue.issue_key)
        webbrowser.open(url)
        self.notify(f"Opening {url[:50]}...")
