"""Console report of a resolved commit history."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from convrelease.core.history import CommitHistory


def history_table(history: CommitHistory, *, limit: int | None = None) -> Table:
    """Build a table with one row per commit (newest first).

    The increment column shows what each unreleased commit counted for
    when the history was resolved. Released commits no longer affect the
    next version.
    """
    table = Table(title="Commit history", show_lines=False)
    table.add_column("Commit", style="dim")
    table.add_column("Date")
    table.add_column("Type", style="cyan")
    table.add_column("Increment", style="magenta")
    table.add_column("Release", style="green")
    table.add_column("Tag")

    commits = history.commits if limit is None else history.commits[:limit]
    for commit in commits:
        table.add_row(
            commit.short_id,
            commit.date.strftime("%Y-%m-%d"),
            commit.commit_type or "--",
            "--" if commit.bump is None else str(commit.bump),
            commit.release_tag.name if commit.release_tag else "[yellow]unreleased[/]",
            f"<- {commit.tag.name}" if commit.tag else "",
        )
    return table


def print_history(history: CommitHistory, console: Console, *, limit: int | None = None) -> None:
    """Print the commit table, the versions and any warnings."""
    console.print(history_table(history, limit=limit))
    print_versions(history, console)

    if history.warnings:
        console.print(f"\n[yellow]{len(history.warnings)} warning(s):[/]")
        for warning in history.warnings:
            console.print(f"  [yellow]![/] [dim]{warning.commit_id[:7]}[/] {warning.message}")


def print_versions(history: CommitHistory, console: Console) -> None:
    current = history.current_version_str() or "none"
    if history.has_unreleased_changes or history.current_version is None:
        body = (
            f"Current version: [cyan]{current}[/]\n"
            f"Next version:    [green]{history.next_version_str()}[/] "
            f"[dim]({history.increment})[/]"
        )
        border = "green"
    else:
        body = f"Current version: [cyan]{current}[/]\n[dim]No unreleased changes.[/]"
        border = "yellow"
    console.print(Panel(body, title="Version", border_style=border))
