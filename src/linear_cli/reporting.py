"""Workspace summary metrics: histograms, completion rates, capitalization.

Pure functions over the flat team/project/issue lists returned by the
fetch layer. Nothing here depends on the workload rollups.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from linear_cli.types.analytics import (
    CapitalizationMetrics,
    CompletionRate,
    ContributorCapitalization,
    Report,
    TeamCapitalization,
)
from linear_cli.types.core import IssueRecord, LabelConnection, LabelNode, ProjectRecord, TeamRecord
from linear_cli.workload import calculate_percentage

UNKNOWN = "Unknown"

CAPITALIZATION_LABELS: tuple[str, ...] = ("capitalization", "capex", "fixed asset")


def _dig(record: Any, path: Sequence[str]) -> Any:
    value = record
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def count_by(issues: Iterable[IssueRecord] | None, *path: str) -> dict[str, int]:
    """Histogram of issues keyed by the nested field at ``path``.

    ``count_by(issues, "state", "name")`` counts issues per status name.
    Missing or empty values are counted under ``"Unknown"``.
    """
    counts: dict[str, int] = {}
    for issue in issues or []:
        key = _dig(issue, path) or UNKNOWN
        counts[key] = counts.get(key, 0) + 1
    return counts


def count_issues_by_status(issues: Iterable[IssueRecord] | None) -> dict[str, int]:
    return count_by(issues, "state", "name")


def count_issues_by_team(issues: Iterable[IssueRecord] | None) -> dict[str, int]:
    return count_by(issues, "team", "name")


def _team_name(issue: IssueRecord) -> str:
    return _dig(issue, ("team", "name")) or UNKNOWN


def calculate_team_completion_rates(issues: Iterable[IssueRecord] | None) -> dict[str, CompletionRate]:
    """Per team name: total issues, completed issues, completion rate (%)."""
    rates: dict[str, CompletionRate] = {}
    for issue in issues or []:
        entry = rates.setdefault(_team_name(issue), {"total": 0, "completed": 0, "rate": 0.0})
        entry["total"] += 1
        if issue.get("completedAt"):
            entry["completed"] += 1
    for entry in rates.values():
        entry["rate"] = calculate_percentage(entry["completed"], entry["total"])
    return rates


# ---------------------------------------------------------------------------
# Capitalization
# ---------------------------------------------------------------------------


def label_names(labels: LabelConnection | Sequence[str | LabelNode] | None) -> list[str]:
    """Label names from a ``{nodes: [{name}]}`` connection or a plain list.

    List entries may be strings or ``{name}`` dicts; anything else is skipped.
    """
    if not labels:
        return []
    nodes: Any = labels.get("nodes") if isinstance(labels, dict) else labels
    if not isinstance(nodes, (list, tuple)):
        return []
    names: list[str] = []
    for node in nodes:
        name = node.get("name") if isinstance(node, dict) else node
        if isinstance(name, str) and name:
            names.append(name)
    return names


def has_capitalization_label(
    labels: LabelConnection | Sequence[str | LabelNode] | None,
    vocabulary: Iterable[str] = CAPITALIZATION_LABELS,
) -> bool:
    """True when any label name contains a vocabulary term (case-insensitive)."""
    terms = [term.lower() for term in vocabulary]
    return any(term in name.lower() for name in label_names(labels) for term in terms)


def capitalized_project_ids(
    projects: Iterable[ProjectRecord] | None,
    vocabulary: Iterable[str] = CAPITALIZATION_LABELS,
) -> dict[str, str]:
    """Map id → name of the projects carrying a capitalization label."""
    vocabulary = tuple(vocabulary)
    return {
        project["id"]: project.get("name") or project["id"]
        for project in projects or []
        if project.get("id") and has_capitalization_label(project.get("labels"), vocabulary)
    }


def is_capitalized(
    issue: IssueRecord,
    capitalized_projects: dict[str, str],
    vocabulary: Iterable[str] = CAPITALIZATION_LABELS,
) -> bool:
    """Decide whether an issue counts as capitalized work.

    The project's labels win: an issue inside a project is capitalized only
    when that project is. Issues without a project fall back to their own
    labels.
    """
    project_id = _dig(issue, ("project", "id"))
    if project_id:
        return project_id in capitalized_projects
    return has_capitalization_label(issue.get("labels"), vocabulary)


def _estimate(issue: IssueRecord) -> float:
    raw = issue.get("estimate")
    try:
        return float(raw) if raw is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


def calculate_capitalization_metrics(
    issues: Iterable[IssueRecord] | None,
    projects: Iterable[ProjectRecord] | None = None,
    labels: Iterable[str] = CAPITALIZATION_LABELS,
) -> CapitalizationMetrics:
    """Overall, per-team, and per-contributor capitalization breakdown."""
    issues = list(issues or [])
    vocabulary = tuple(labels)
    cap_projects = capitalized_project_ids(projects, vocabulary)

    capitalized_count = 0
    by_team: dict[str, TeamCapitalization] = {}
    by_contributor: dict[str, ContributorCapitalization] = {}

    for issue in issues:
        capitalized = is_capitalized(issue, cap_projects, vocabulary)
        if capitalized:
            capitalized_count += 1

        team = by_team.setdefault(
            _team_name(issue),
            {"capitalized": 0, "non_capitalized": 0, "total": 0, "capitalization_rate": 0.0},
        )
        team["total"] += 1
        team["capitalized" if capitalized else "non_capitalized"] += 1

        assignee_name = _dig(issue, ("assignee", "name"))
        if not assignee_name:
            continue
        person = by_contributor.setdefault(
            assignee_name,
            {
                "total_issues": 0,
                "capitalized_issues": 0,
                "non_capitalized_issues": 0,
                "percentage": 0.0,
                "total_estimate": 0.0,
                "capitalized_estimate": 0.0,
                "estimate_percentage": 0.0,
            },
        )
        estimate = _estimate(issue)
        person["total_issues"] += 1
        person["total_estimate"] += estimate
        if capitalized:
            person["capitalized_issues"] += 1
            person["capitalized_estimate"] += estimate
        else:
            person["non_capitalized_issues"] += 1

    for team in by_team.values():
        team["capitalization_rate"] = calculate_percentage(team["capitalized"], team["total"])
    for person in by_contributor.values():
        person["percentage"] = calculate_percentage(person["capitalized_issues"], person["total_issues"])
        person["estimate_percentage"] = calculate_percentage(
            person["capitalized_estimate"], person["total_estimate"]
        )

    total = len(issues)
    return {
        "capitalized_count": capitalized_count,
        "non_capitalized_count": total - capitalized_count,
        "total_issues": total,
        "capitalization_rate": calculate_percentage(capitalized_count, total),
        "team_capitalization": by_team,
        "capitalized_projects": list(cap_projects.values()),
        "contributor_capitalization": by_contributor,
    }


def generate_report(
    teams: Iterable[TeamRecord] | None,
    projects: Iterable[ProjectRecord] | None,
    issues: Iterable[IssueRecord] | None,
) -> Report:
    """Compose every summary metric into the report handed to the display layer."""
    teams = list(teams or [])
    projects = list(projects or [])
    issues = list(issues or [])
    return {
        "teams": teams,
        "projects": projects,
        "issues": issues,
        "summary": {
            "teams_count": len(teams),
            "projects_count": len(projects),
            "issues_count": len(issues),
            "issues_by_status": count_issues_by_status(issues),
            "issues_by_team": count_issues_by_team(issues),
            "team_completion_rates": calculate_team_completion_rates(issues),
            "capitalization_metrics": calculate_capitalization_metrics(issues, projects),
        },
    }
