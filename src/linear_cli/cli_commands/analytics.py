"""CLI commands for analytics: report, team-workload, engineer-workload."""

from __future__ import annotations

from time import perf_counter
from typing import Any

import click

from linear_cli import display
from linear_cli.cli_common import emit_json, fail, log_command, open_fetcher, progress
from linear_cli.client import LinearAPIError
from linear_cli.config import ConfigError
from linear_cli.data_fetcher import TeamNotFoundError
from linear_cli.monthly import MonthlyProcessor
from linear_cli.period_filter import PeriodFilter
from linear_cli.reporting import generate_report
from linear_cli.validation import FORMATS, PERIODS, VIEWS, validate_team_name
from linear_cli.workload import WorkloadCalculator

_format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(FORMATS, case_sensitive=False),
    default="table",
    show_default=True,
    help="Output format",
)
_period_option = click.option(
    "--period",
    type=click.Choice(PERIODS, case_sensitive=False),
    default="all",
    show_default=True,
    help="Time period to analyze (all = past 6 months, month by month)",
)
_view_option = click.option(
    "--view",
    type=click.Choice(VIEWS, case_sensitive=False),
    default="detailed",
    show_default=True,
    help="Per-project tables (detailed) or one matrix per team (summary)",
)

_RECOVERABLE = (LinearAPIError, ConfigError, TeamNotFoundError, ValueError)


@click.group()
def analytics() -> None:
    """Analytics and reporting over Linear data."""


@analytics.command()
@_format_option
@click.pass_context
def report(ctx: click.Context, output_format: str) -> None:
    """Summarize teams, projects, and issues across the workspace.

    Includes issue counts by status and team, team completion rates, and
    capitalization metrics.
    """
    as_json = output_format.lower() == "json"
    started = perf_counter()
    try:
        with open_fetcher(ctx) as fetcher:
            progress("Fetching teams, projects, and issues...", as_json)
            teams = fetcher.fetch_teams()
            projects = fetcher.fetch_projects()
            issues = fetcher.fetch_issues()
    except _RECOVERABLE as e:
        log_command("report", {"format": output_format}, _elapsed(started), error=str(e))
        fail(str(e), as_json)

    result = generate_report(teams, projects, issues)
    log_command("report", {"format": output_format}, _elapsed(started))
    if as_json:
        emit_json(result)
    else:
        display.display_summary(result["summary"])


@analytics.command("team-workload")
@click.argument("team_name")
@_format_option
@_period_option
@_view_option
@click.pass_context
def team_workload(ctx: click.Context, team_name: str, output_format: str, period: str, view: str) -> None:
    """Show how TEAM_NAME's points split across projects and contributors.

    Issues count toward the team when they belong to it directly or sit in a
    project the team is a member of. Unestimated issues count as 1 point.
    """
    as_json = output_format.lower() == "json"
    period = period.lower()
    args = {"team": team_name, "format": output_format, "period": period, "view": view}
    started = perf_counter()
    try:
        team_name = validate_team_name(team_name)
        with open_fetcher(ctx) as fetcher:
            team = fetcher.fetch_team_by_name(team_name)
            progress(f"Fetching data for team {team.get('name')}...", as_json)
            projects = fetcher.fetch_projects()
            all_issues = fetcher.fetch_issues()
    except _RECOVERABLE as e:
        log_command("team-workload", args, _elapsed(started), error=str(e))
        fail(str(e), as_json)

    issues = PeriodFilter().filter(all_issues, period)
    progress(f"Analyzing {len(issues)} issues from {_time_description(period)}...", as_json)

    result: Any
    if period == "all":
        result = MonthlyProcessor().process_monthly_team_data(issues, team, projects)
    else:
        result = WorkloadCalculator().team_project_workload(issues, team, projects)
    log_command("team-workload", args, _elapsed(started))

    if as_json:
        emit_json(result)
    elif period == "all":
        display.display_team_monthly_workload(result, team, view.lower())
    else:
        display.display_team_workload(result, period, view.lower())


@analytics.command("engineer-workload")
@_format_option
@_period_option
@_view_option
@click.pass_context
def engineer_workload(ctx: click.Context, output_format: str, period: str, view: str) -> None:
    """Show each team's completed, estimated work by project and contributor.

    With --period all (the default) the report covers the past 6 months,
    one rollup per calendar month.
    """
    as_json = output_format.lower() == "json"
    period = period.lower()
    args = {"format": output_format, "period": period, "view": view}
    started = perf_counter()
    try:
        with open_fetcher(ctx) as fetcher:
            progress("Fetching teams data...", as_json)
            teams = fetcher.fetch_teams()
            progress("Fetching projects data...", as_json)
            projects = fetcher.fetch_projects()
            progress("Fetching issues data...", as_json)
            all_issues = fetcher.fetch_issues()
    except _RECOVERABLE as e:
        log_command("engineer-workload", args, _elapsed(started), error=str(e))
        fail(str(e), as_json)

    issues = PeriodFilter().filter(all_issues, period)
    progress(f"Analyzing {len(issues)} issues from {_time_description(period)}...", as_json)

    result: Any
    if period == "all":
        result = MonthlyProcessor().process_monthly_data(issues, teams, projects)
    else:
        result = WorkloadCalculator().engineer_project_workload(issues, teams, projects)
    log_command("engineer-workload", args, _elapsed(started))

    if as_json:
        emit_json(result)
    elif period == "all":
        display.display_monthly_workload(result, teams, view.lower())
    else:
        display.display_single_period_workload(result, teams, period, view.lower())


def _elapsed(started: float) -> float:
    return round((perf_counter() - started) * 1000, 1)


def _time_description(period: str) -> str:
    return "the past 6 months" if period == "all" else f"the current {period}"


def register(cli: click.Group) -> None:
    """Register analytics commands with the CLI group."""
    cli.add_command(analytics)
