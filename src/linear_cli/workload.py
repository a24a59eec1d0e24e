"""Workload rollups: how story points spread across projects and contributors.

Two aggregation modes are kept side by side because they encode different
business rules:

``team_project_workload``
    One team. Every issue attributed to the team, directly through
    ``issue.team`` or indirectly through the project's team membership, counts.
    Unestimated issues count as 1 point.

``engineer_project_workload``
    Every team at once. Only completed issues with a team count, and by
    default issues without a nonzero estimate are skipped entirely.

Both produce the same shape per team (see ``linear_cli.types.TeamWorkload``)
and finish with a percentage pass in both directions: a contributor's share of
a project, and a project's share of a contributor.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from linear_cli.types.analytics import (
    ContributorWorkload,
    ProjectWorkload,
    TeamWorkload,
)
from linear_cli.types.core import IssueRecord, ProjectRecord, TeamRecord

logger = logging.getLogger(__name__)

NO_PROJECT_ID = "no_project"
NO_PROJECT_NAME = "No Project"
UNASSIGNED_ID = "unassigned"
UNASSIGNED_NAME = "Unassigned"


def calculate_percentage(numerator: float, denominator: float) -> float:
    """Percentage rounded to 2 decimals; 0.0 when the denominator is zero."""
    if not denominator:
        return 0.0
    return round(numerator / denominator * 100, 2)


def estimate_points(issue: IssueRecord) -> int:
    """Integer estimate of an issue, or 0 when absent or unusable."""
    raw = issue.get("estimate")
    if raw is None or isinstance(raw, bool):
        return 0
    try:
        points = int(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-numeric estimate on issue %s: %r", issue.get("id", "?"), raw)
        return 0
    return max(points, 0)


def build_project_team_map(projects: Iterable[ProjectRecord] | None) -> dict[str, set[str]]:
    """Map project id → ids of the teams the project belongs to."""
    mapping: dict[str, set[str]] = {}
    for project in projects or []:
        project_id = project.get("id")
        if not project_id:
            continue
        team_ids = mapping.setdefault(project_id, set())
        teams = project.get("teams") or {}
        for team in teams.get("nodes") or []:
            if team and team.get("id"):
                team_ids.add(team["id"])
    return mapping


def _project_of(issue: IssueRecord) -> tuple[str, str]:
    project = issue.get("project")
    if project and project.get("id"):
        return project["id"], project.get("name") or project["id"]
    return NO_PROJECT_ID, NO_PROJECT_NAME


def _contributor_of(issue: IssueRecord) -> tuple[str, str]:
    assignee = issue.get("assignee")
    if assignee and assignee.get("id"):
        return assignee["id"], assignee.get("name") or assignee["id"]
    return UNASSIGNED_ID, UNASSIGNED_NAME


def empty_team_workload(team: TeamRecord | Mapping[str, Any]) -> TeamWorkload:
    return {
        "id": team.get("id", ""),
        "name": team.get("name", ""),
        "total_points": 0,
        "issue_count": 0,
        "projects": {},
        "contributors": {},
    }


def sorted_by_points(mapping: Mapping[str, Any], key: str = "total_points") -> list[tuple[str, Any]]:
    """(id, node) pairs ordered by descending points, ties kept in insertion order."""
    return sorted(mapping.items(), key=lambda item: -item[1].get(key, 0))


class WorkloadCalculator:
    """Build team/project/contributor rollups from flat issue lists.

    The calculator holds no state between calls; a single instance can be
    shared by the monthly processor and the CLI.
    """

    def team_project_workload(
        self,
        issues: Iterable[IssueRecord] | None,
        team: TeamRecord,
        projects: Iterable[ProjectRecord] | None,
    ) -> TeamWorkload:
        """Rollup for one team over all of its issues (1-point floor)."""
        result = empty_team_workload(team)
        team_id = team.get("id")
        project_teams = build_project_team_map(projects)

        for issue in issues or []:
            if not self._belongs_to_team(issue, team_id, project_teams):
                continue
            points = estimate_points(issue) or 1
            self._accumulate(result, issue, points)

        self._finish(result)
        return result

    def engineer_project_workload(
        self,
        issues: Iterable[IssueRecord] | None,
        teams: Iterable[TeamRecord] | None,
        projects: Iterable[ProjectRecord] | None,
        *,
        skip_unestimated: bool = True,
    ) -> dict[str, TeamWorkload]:
        """Rollup for every team over completed issues only.

        With ``skip_unestimated`` (the default) issues without a nonzero
        estimate contribute nothing; otherwise they count as 1 point.
        """
        result: dict[str, TeamWorkload] = {}
        for team in teams or []:
            if team.get("id"):
                result[team["id"]] = empty_team_workload(team)
        project_teams = build_project_team_map(projects)

        for issue in issues or []:
            issue_team = issue.get("team")
            if not issue_team or not issue_team.get("id"):
                continue
            if not issue.get("completedAt"):
                continue
            team_id = issue_team["id"]
            if team_id not in result:
                logger.debug("Skipping issue %s: team %s not in team list", issue.get("id", "?"), team_id)
                continue

            project = issue.get("project")
            if project and project.get("id"):
                members = project_teams.get(project["id"])
                if members and team_id not in members:
                    continue

            points = estimate_points(issue)
            if not points:
                if skip_unestimated:
                    continue
                points = 1
            self._accumulate(result[team_id], issue, points)

        for team_workload in result.values():
            self._finish(team_workload)
        return result

    # -- internals ---------------------------------------------------------

    @staticmethod
    def _belongs_to_team(
        issue: IssueRecord,
        team_id: str | None,
        project_teams: Mapping[str, set[str]],
    ) -> bool:
        if not team_id:
            return False
        issue_team = issue.get("team")
        if issue_team and issue_team.get("id") == team_id:
            return True
        project = issue.get("project")
        if project and project.get("id"):
            return team_id in project_teams.get(project["id"], set())
        return False

    @staticmethod
    def _accumulate(result: TeamWorkload, issue: IssueRecord, points: int) -> None:
        project_id, project_name = _project_of(issue)
        contributor_id, contributor_name = _contributor_of(issue)

        project: ProjectWorkload = result["projects"].setdefault(
            project_id,
            {"name": project_name, "total_points": 0, "issue_count": 0, "contributors": {}},
        )
        contributor: ContributorWorkload = result["contributors"].setdefault(
            contributor_id,
            {"name": contributor_name, "total_points": 0, "issue_count": 0, "projects": {}},
        )
        in_project = project["contributors"].setdefault(
            contributor_id,
            {"name": contributor_name, "points": 0, "issue_count": 0, "percentage": 0.0},
        )
        in_contributor = contributor["projects"].setdefault(
            project_id,
            {"name": project_name, "points": 0, "issue_count": 0, "percentage": 0.0},
        )

        result["total_points"] += points
        result["issue_count"] += 1
        project["total_points"] += points
        project["issue_count"] += 1
        contributor["total_points"] += points
        contributor["issue_count"] += 1
        in_project["points"] += points
        in_project["issue_count"] += 1
        in_contributor["points"] += points
        in_contributor["issue_count"] += 1

    @staticmethod
    def _finish(result: TeamWorkload) -> None:
        for project in result["projects"].values():
            for share in project["contributors"].values():
                share["percentage"] = calculate_percentage(share["points"], project["total_points"])
        for contributor in result["contributors"].values():
            for share in contributor["projects"].values():
                share["percentage"] = calculate_percentage(share["points"], contributor["total_points"])


def team_project_workload(
    issues: Iterable[IssueRecord] | None,
    team: TeamRecord,
    projects: Iterable[ProjectRecord] | None,
) -> TeamWorkload:
    return WorkloadCalculator().team_project_workload(issues, team, projects)


def engineer_project_workload(
    issues: Iterable[IssueRecord] | None,
    teams: Iterable[TeamRecord] | None,
    projects: Iterable[ProjectRecord] | None,
    *,
    skip_unestimated: bool = True,
) -> dict[str, TeamWorkload]:
    return WorkloadCalculator().engineer_project_workload(
        issues, teams, projects, skip_unestimated=skip_unestimated
    )
