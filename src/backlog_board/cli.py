"""Click CLI for backlog-board."""

from pathlib import Path
from typing import Optional

import click
from trogon import tui

from backlog_board import __version__
from backlog_board.clients import BacklogClient
from backlog_board.config import BacklogConfig
from backlog_board.errors import BacklogError, ConfigError
from backlog_board.logging import DEFAULT_LEVEL, LEVELS, setup_logging
from backlog_board.models import Issue


def _load_config(ctx: click.Context) -> BacklogConfig:
    """Read configuration, exiting with status 1 if it is incomplete."""
    try:
        return BacklogConfig.from_env(dotenv_path=ctx.obj["env_file"])
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


def _fetch_issues(client: BacklogClient, fetch_all: bool) -> list[Issue]:
    try:
        return client.fetch_configured_issues(fetch_all=fetch_all)
    except BacklogError as e:
        click.echo(f"Error loading issues: {e}", err=True)
        raise SystemExit(1)


@tui()
@click.group()
@click.version_option(version=__version__, prog_name="backlog-board")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=".env",
    show_default=True,
    help="File with BACKLOG_* variables (existing environment wins)",
)
@click.option(
    "--log-level",
    type=click.Choice(list(LEVELS), case_sensitive=False),
    default=DEFAULT_LEVEL,
    show_default=True,
    help="Logging level",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write logs to this file",
)
@click.pass_context
def cli(ctx: click.Context, env_file: Path, log_level: str, log_file: Optional[Path]) -> None:
    """backlog-board - browse Backlog issues from the terminal.

    Reads BACKLOG_SPACE_ID, BACKLOG_API_KEY, BACKLOG_PROJECT_ID and
    BACKLOG_STATUS_ID_LIST (comma-separated) from the environment.

    Quick start:
        backlog-board dashboard         Launch interactive TUI dashboard
        backlog-board issues            List issues
        backlog-board comments KEY      Show comments of an issue
    """
    ctx.ensure_object(dict)
    ctx.obj.update(env_file=env_file, log_level=log_level, log_file=log_file)


@cli.command()
@click.option("--all", "fetch_all", is_flag=True, help="Load every page, not just the first 100 issues")
@click.pass_context
def dashboard(ctx: click.Context, fetch_all: bool) -> None:
    """Launch the interactive TUI dashboard.

    Issue list on one side, description and comments of the selected
    issue on the other. Comments are fetched the first time an issue is
    selected.

    Keyboard shortcuts:
        q       - Quit
        j / ↓   - Next issue
        k / ↑   - Previous issue
        ← / Esc - Clear selection
        o       - Open issue in browser
        v       - Toggle horizontal/vertical split
    """
    from backlog_board.store import IssueStore
    from backlog_board.tui import BacklogApp

    config = _load_config(ctx)
    setup_logging(ctx.obj["log_level"], ctx.obj["log_file"], to_textual=True)

    with BacklogClient(config) as client:
        store = IssueStore(client)
        store.load(_fetch_issues(client, fetch_all))
        app = BacklogApp(store, client.issue_url)
        app.run()


@cli.command("issues")
@click.option("--all", "fetch_all", is_flag=True, help="Load every page, not just the first 100 issues")
@click.pass_context
def issues_list(ctx: click.Context, fetch_all: bool) -> None:
    """List issues matching the configured project and statuses."""
    config = _load_config(ctx)
    setup_logging(ctx.obj["log_level"], ctx.obj["log_file"])

    with BacklogClient(config) as client:
        issues = _fetch_issues(client, fetch_all)

    if not issues:
        click.echo("No issues found.")
        return

    for issue in issues:
        assignee = issue.assignee.name if issue.assignee else "-"
        click.echo(f"{issue.issue_key:<12} [{issue.status.name}] {issue.summary} ({assignee})")


@cli.command("comments")
@click.argument("issue_key")
@click.pass_context
def comments_show(ctx: click.Context, issue_key: str) -> None:
    """Show the comments of an issue, oldest first.

    ISSUE_KEY: Backlog issue key (e.g., PROJ-123)
    """
    config = _load_config(ctx)
    setup_logging(ctx.obj["log_level"], ctx.obj["log_file"])

    with BacklogClient(config) as client:
        try:
            comments = client.fetch_comments(issue_key)
        except BacklogError as e:
            click.echo(f"Error loading comments: {e}", err=True)
            raise SystemExit(1)

    if not comments:
        click.echo("No comments.")
        return

    for comment in comments:
        click.echo(f"\n{comment.created_user.name} ({comment.created})")
        for line in (comment.content or "").splitlines():
            click.echo(f"    {line}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
