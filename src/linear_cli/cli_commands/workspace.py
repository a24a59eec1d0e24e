"""CLI commands for browsing the workspace: teams list/view, projects list/view."""

from __future__ import annotations

from typing import Any

import click

from linear_cli.cli_common import emit_json, fail, open_fetcher
from linear_cli.client import LinearAPIError
from linear_cli.config import ConfigError
from linear_cli.data_fetcher import TeamNotFoundError
from linear_cli.display import render_table
from linear_cli.reporting import has_capitalization_label, label_names
from linear_cli.validation import validate_team_name


def _nodes(connection: Any) -> list[Any]:
    return [n for n in ((connection or {}).get("nodes") or []) if n]


@click.group()
def teams() -> None:
    """Browse Linear teams."""


@teams.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_teams(ctx: click.Context, as_json: bool) -> None:
    """List the teams in the workspace."""
    try:
        with open_fetcher(ctx) as fetcher:
            result = fetcher.fetch_teams()
    except (LinearAPIError, ConfigError) as e:
        fail(str(e), as_json)

    if as_json:
        emit_json(result)
        return
    if not result:
        click.echo("No teams found.")
        return
    click.echo(render_table(["Key", "Name", "ID"], [[t.get("key", ""), t.get("name", ""), t.get("id", "")] for t in result]))
    click.echo(f"\n{len(result)} teams")


@teams.command("view")
@click.argument("team_name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def view_team(ctx: click.Context, team_name: str, as_json: bool) -> None:
    """Show a team (by name or key) with its members, states and labels."""
    try:
        team_name = validate_team_name(team_name)
    except ValueError as e:
        fail(str(e), as_json)
    try:
        with open_fetcher(ctx) as fetcher:
            team = fetcher.fetch_team_by_name(team_name)
            result = fetcher.fetch_team(team["id"])
    except (LinearAPIError, ConfigError, TeamNotFoundError) as e:
        fail(str(e), as_json)
    if result is None:
        fail(f"Team not found: {team_name}", as_json)

    if as_json:
        emit_json(result)
        return
    click.echo(f"{result.get('key', '')}: {result.get('name', '')}")
    click.echo(f"Description: {result.get('description') or 'No description'}")

    members = _nodes(result.get("members"))
    click.echo(f"\nMembers ({len(members)}):")
    if members:
        click.echo(render_table(["Name", "Email"], [[m.get("name", ""), m.get("email") or ""] for m in members]))

    states = _nodes(result.get("states"))
    if states:
        click.echo("\nWorkflow States:")
        click.echo(render_table(["Name", "Type"], [[s.get("name", ""), s.get("type") or ""] for s in states]))

    labels = label_names(result.get("labels"))
    if labels:
        click.echo(f"\nLabels: {', '.join(labels)}")


@click.group()
def projects() -> None:
    """Browse Linear projects."""


@projects.command("list")
@click.option("--team", "team_name", default=None, help="Only projects this team is a member of")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_projects(ctx: click.Context, team_name: str | None, as_json: bool) -> None:
    """List projects with their teams and capitalization status."""
    try:
        with open_fetcher(ctx) as fetcher:
            team_id = fetcher.fetch_team_by_name(team_name)["id"] if team_name else None
            result = fetcher.fetch_projects(team_id=team_id)
    except (LinearAPIError, ConfigError, TeamNotFoundError) as e:
        fail(str(e), as_json)

    if as_json:
        emit_json(result)
        return
    if not result:
        click.echo("No projects found.")
        return
    rows = []
    for p in result:
        team_names = ", ".join(t.get("name", "") for t in (p.get("teams") or {}).get("nodes") or [] if t)
        capex = "yes" if has_capitalization_label(p.get("labels")) else ""
        rows.append([p.get("name", ""), p.get("state") or "", team_names, capex])
    click.echo(render_table(["Name", "State", "Teams", "Capitalized"], rows))
    click.echo(f"\n{len(result)} projects")


@projects.command("view")
@click.argument("project_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def view_project(ctx: click.Context, project_id: str, as_json: bool) -> None:
    """Show one project with its lead, teams, members and issues."""
    try:
        with open_fetcher(ctx) as fetcher:
            result = fetcher.fetch_project(project_id)
    except (LinearAPIError, ConfigError) as e:
        fail(str(e), as_json)
    if result is None:
        fail(f"Project not found: {project_id}", as_json)

    if as_json:
        emit_json(result)
        return
    click.echo(result.get("name", ""))
    click.echo(f"State: {result.get('state') or 'Unknown'}")
    progress = result.get("progress")
    if progress is not None:
        click.echo(f"Progress: {round(progress * 100)}%")
    click.echo(f"Lead: {(result.get('lead') or {}).get('name') or 'None'}")
    click.echo(f"Start Date: {result.get('startDate') or 'Not set'}")
    click.echo(f"Target Date: {result.get('targetDate') or 'Not set'}")
    click.echo(f"Capitalized: {'yes' if has_capitalization_label(result.get('labels')) else 'no'}")
    click.echo(f"Teams: {', '.join(t.get('name', '') for t in _nodes(result.get('teams'))) or 'None'}")
    click.echo("\nDescription:")
    click.echo(result.get("description") or "No description provided.")

    members = _nodes(result.get("members"))
    if members:
        click.echo(f"\nMembers: {', '.join(m.get('name', '') for m in members)}")

    project_issues = _nodes(result.get("issues"))
    click.echo(f"\nIssues ({len(project_issues)}):")
    if project_issues:
        rows = [
            [i.get("identifier") or i.get("id", ""), i.get("title", ""), (i.get("state") or {}).get("name") or ""]
            for i in project_issues
        ]
        click.echo(render_table(["ID", "Title", "Status"], rows))


def register(cli: click.Group) -> None:
    """Register workspace commands with the CLI group."""
    cli.add_command(teams)
    cli.add_command(projects)
