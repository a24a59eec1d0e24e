"""Plain-text rendering of reports and workload rollups for the terminal."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import click

from linear_cli.types.analytics import MonthlyReport, ReportSummary, TeamWorkload
from linear_cli.types.core import TeamRecord
from linear_cli.workload import sorted_by_points

_RULE = "=" * 80


def render_table(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Render rows as a pipe-separated table with padded columns."""
    rows = [[str(cell) for cell in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            if i < len(widths):
                widths[i] = max(widths[i], len(cell))
    lines = [
        " | ".join(h.ljust(w) for h, w in zip(headers, widths, strict=False)),
        "-+-".join("-" * w for w in widths),
    ]
    lines.extend(" | ".join(c.ljust(w) for c, w in zip(row, widths, strict=False)) for row in rows)
    return "\n".join(lines)


def _team_header(name: str) -> None:
    click.echo(f"\n{_RULE}")
    click.echo(f"Team: {name}")
    click.echo(_RULE)


def _period_description(period: str) -> str:
    return "All Time" if period == "all" else f"Current {period.capitalize()}"


# ---------------------------------------------------------------------------
# report
# ---------------------------------------------------------------------------


def display_summary(summary: ReportSummary) -> None:
    click.echo("Workspace Summary")
    click.echo(
        render_table(
            ["Teams", "Projects", "Issues"],
            [[summary["teams_count"], summary["projects_count"], summary["issues_count"]]],
        )
    )

    click.echo("\nIssues by Status")
    by_status = sorted(summary["issues_by_status"].items(), key=lambda kv: -kv[1])
    click.echo(render_table(["Status", "Count"], by_status))

    click.echo("\nIssues by Team")
    by_team = sorted(summary["issues_by_team"].items(), key=lambda kv: -kv[1])
    click.echo(render_table(["Team", "Count"], by_team))

    click.echo("\nTeam Completion Rates")
    rates = summary["team_completion_rates"]
    click.echo(
        render_table(
            ["Team", "Total", "Completed", "Rate"],
            [[team, r["total"], r["completed"], f"{r['rate']}%"] for team, r in rates.items()],
        )
    )

    cap = summary["capitalization_metrics"]
    click.echo("\nCapitalization")
    click.echo(
        render_table(
            ["Capitalized", "Non-capitalized", "Total", "Rate"],
            [[cap["capitalized_count"], cap["non_capitalized_count"], cap["total_issues"], f"{cap['capitalization_rate']}%"]],
        )
    )
    if cap["capitalized_projects"]:
        click.echo(f"Capitalized projects: {', '.join(cap['capitalized_projects'])}")
    else:
        click.echo("No capitalized projects.")
    team_cap = cap["team_capitalization"]
    if team_cap:
        click.echo(
            render_table(
                ["Team", "Capitalized", "Non-capitalized", "Total", "Rate"],
                [
                    [team, t["capitalized"], t["non_capitalized"], t["total"], f"{t['capitalization_rate']}%"]
                    for team, t in team_cap.items()
                ],
            )
        )


# ---------------------------------------------------------------------------
# workload
# ---------------------------------------------------------------------------


def _project_tables(team_data: TeamWorkload, empty_suffix: str = "") -> None:
    if not team_data["projects"]:
        click.echo(f"  No projects for this team{empty_suffix}")
        return
    for _project_id, project in sorted_by_points(team_data["projects"]):
        click.echo(f"\n  Project: {project['name']} ({project['total_points']} points)")
        rows = []
        for contributor_id, share in sorted_by_points(project["contributors"], "points"):
            contributor_total = team_data["contributors"][contributor_id]["total_points"]
            rows.append([share["name"], share["points"], f"{contributor_total} points", f"{share['percentage']}%"])
        click.echo(render_table(["Contributor", "Project Points", "Total Points", "Share of Project"], rows))


def _contributor_matrix(team_data: TeamWorkload) -> None:
    project_ids = list(team_data["projects"])
    headers = ["Contributor", "Total Points"] + [team_data["projects"][p]["name"] for p in project_ids]
    rows = []
    for _contributor_id, contributor in sorted_by_points(team_data["contributors"]):
        row: list[Any] = [contributor["name"], contributor["total_points"]]
        for project_id in project_ids:
            share = contributor["projects"].get(project_id)
            row.append(f"{share['percentage']}%" if share else "0%")
        rows.append(row)
    click.echo(render_table(headers, rows))


def display_single_period_workload(
    workload: Mapping[str, TeamWorkload],
    teams: Iterable[TeamRecord],
    period: str,
    view: str,
) -> None:
    title = "Workload Report" if view == "detailed" else "Workload Summary"
    click.echo(f"\n{title} ({_period_description(period)})")
    shown = 0
    for team in teams:
        team_data = workload.get(team.get("id", ""))
        if not team_data or not team_data["contributors"]:
            continue
        shown += 1
        _team_header(team_data["name"])
        if view == "detailed":
            _project_tables(team_data)
        else:
            _contributor_matrix(team_data)
    if not shown:
        click.echo("No completed, estimated work found for this period.")


def display_monthly_workload(monthly: Mapping[str, MonthlyReport], teams: Iterable[TeamRecord], view: str) -> None:
    months = sorted(monthly)
    title = "Monthly Workload Report" if view == "detailed" else "Monthly Workload Summary"
    click.echo(f"\n{title} (Past {len(months)} Months)")
    for team in teams:
        team_id = team.get("id", "")
        active = [m for m in months if monthly[m].get(team_id) and monthly[m][team_id]["contributors"]]
        _team_header(team.get("name", team_id))
        if not active:
            click.echo(f"  No data available for this team in the past {len(months)} months.")
            continue
        if view == "detailed":
            for month in active:
                click.echo(f"\nMonth: {monthly[month]['month_name']} ({monthly[month]['issue_count']} issues)")
                _project_tables(monthly[month][team_id], f" in {monthly[month]['month_name']}")
        else:
            _monthly_totals(
                [monthly[m]["month_name"] for m in months],
                [monthly[m].get(team_id) for m in months],
            )


def display_team_monthly_workload(monthly: Mapping[str, MonthlyReport], team: TeamRecord, view: str) -> None:
    months = sorted(monthly)
    click.echo(f"\nTeam Workload Report: {team.get('name')} (Past {len(months)} Months)")
    if view == "summary":
        _monthly_totals([monthly[m]["month_name"] for m in months], [monthly[m] for m in months])  # type: ignore[misc]
        return
    for month in months:
        report = monthly[month]
        click.echo(f"\nMonth: {report['month_name']} ({report['issue_count']} issues)")
        _project_tables(report, f" in {report['month_name']}")  # type: ignore[arg-type]


def display_team_workload(team_data: TeamWorkload, period: str, view: str) -> None:
    click.echo(f"\nTeam Workload Report: {team_data['name']} ({_period_description(period)})")
    click.echo(f"Total: {team_data['total_points']} points across {team_data['issue_count']} issues")
    if view == "detailed":
        _project_tables(team_data)
    else:
        _contributor_matrix(team_data)


def _monthly_totals(month_names: Sequence[str], per_month: Sequence[TeamWorkload | None]) -> None:
    names: dict[str, str] = {}
    for data in per_month:
        for contributor_id, contributor in (data or {}).get("contributors", {}).items():
            names.setdefault(contributor_id, contributor["name"])

    rows = []
    for contributor_id, name in names.items():
        points = [
            ((data or {}).get("contributors", {}).get(contributor_id) or {}).get("total_points", 0)
            for data in per_month
        ]
        if sum(points):
            rows.append([name, *points, sum(points)])
    rows.sort(key=lambda row: -row[-1])
    if not rows:
        click.echo("  No contributions in this window.")
        return
    click.echo(render_table(["Contributor", *month_names, "Total"], rows))
