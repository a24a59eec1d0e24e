"""CLI commands for browsing issues: issues list, issues view."""

from __future__ import annotations

from typing import Any

import click

from linear_cli.cli_common import emit_json, fail, open_fetcher
from linear_cli.client import LinearAPIError
from linear_cli.config import ConfigError
from linear_cli.data_fetcher import TeamNotFoundError
from linear_cli.display import render_table
from linear_cli.reporting import label_names
from linear_cli.types.core import IssueRecord

PRIORITY_LABELS: dict[int, str] = {0: "No priority", 1: "Urgent", 2: "High", 3: "Medium", 4: "Low"}


def priority_label(value: Any) -> str:
    return PRIORITY_LABELS.get(value, "No priority") if isinstance(value, int) else "No priority"


def _name(record: Any, default: str = "") -> str:
    return (record or {}).get("name") or default


def _issue_row(issue: IssueRecord, detail: bool) -> list[Any]:
    row: list[Any] = [
        issue.get("identifier") or issue.get("id", ""),
        issue.get("title", ""),
        _name(issue.get("state")),
        _name(issue.get("assignee"), "Unassigned"),
        _name(issue.get("team")),
    ]
    if detail:
        estimate = issue.get("estimate")
        row += [
            priority_label(issue.get("priority")),
            "" if estimate is None else estimate,
            ", ".join(label_names(issue.get("labels"))),
        ]
    return row


@click.group()
def issues() -> None:
    """Browse Linear issues."""


@issues.command("list")
@click.option("--team", "team_name", default=None, help="Only issues of this team (name or key)")
@click.option("--limit", type=click.IntRange(min=1), default=20, show_default=True, help="Maximum issues to show")
@click.option("--detail", is_flag=True, help="Add priority, estimate and labels columns")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_issues(ctx: click.Context, team_name: str | None, limit: int, detail: bool, as_json: bool) -> None:
    """List issues, optionally for one team."""
    try:
        with open_fetcher(ctx) as fetcher:
            team_id = fetcher.fetch_team_by_name(team_name)["id"] if team_name else None
            result = fetcher.fetch_issues(team_id=team_id, limit=limit)
    except (LinearAPIError, ConfigError, TeamNotFoundError) as e:
        fail(str(e), as_json)

    if as_json:
        emit_json(result)
        return
    if not result:
        click.echo("No issues found matching your criteria.")
        return
    headers = ["ID", "Title", "Status", "Assignee", "Team"]
    if detail:
        headers += ["Priority", "Estimate", "Labels"]
    click.echo(render_table(headers, [_issue_row(i, detail) for i in result]))
    click.echo(f"\n{len(result)} issues")


@issues.command("view")
@click.argument("issue_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def view_issue(ctx: click.Context, issue_id: str, as_json: bool) -> None:
    """Show one issue by ID or identifier (e.g. ENG-123)."""
    try:
        with open_fetcher(ctx) as fetcher:
            result = fetcher.fetch_issue(issue_id)
    except (LinearAPIError, ConfigError) as e:
        fail(str(e), as_json)
    if result is None:
        fail(f"Issue not found: {issue_id}", as_json)

    if as_json:
        emit_json(result)
        return
    click.echo(f"{result.get('identifier') or result.get('id', '')}: {result.get('title', '')}")
    click.echo(f"Status: {_name(result.get('state'), 'Unknown')}")
    click.echo(f"Team: {_name(result.get('team'), 'None')}")
    click.echo(f"Assignee: {_name(result.get('assignee'), 'Unassigned')}")
    click.echo(f"Project: {_name(result.get('project'), 'None')}")
    click.echo(f"Priority: {priority_label(result.get('priority'))}")
    if result.get("estimate") is not None:
        click.echo(f"Estimate: {result['estimate']}")
    labels = label_names(result.get("labels"))
    if labels:
        click.echo(f"Labels: {', '.join(labels)}")
    click.echo("\nDescription:")
    click.echo(result.get("description") or "No description provided.")

    comments = [c for c in ((result.get("comments") or {}).get("nodes") or []) if c]
    if comments:
        click.echo(f"\nComments ({len(comments)}):")
        for comment in comments:
            author = _name(comment.get("user"), "Unknown")
            click.echo(f"- {author} ({comment.get('createdAt', '')}): {comment.get('body', '')}")


def register(cli: click.Group) -> None:
    """Register issue commands with the CLI group."""
    cli.add_command(issues)
