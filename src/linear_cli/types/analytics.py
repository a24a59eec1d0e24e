"""TypedDicts for workload.py, monthly.py, and reporting.py return types."""

from __future__ import annotations

from typing import Any, TypedDict

from linear_cli.types.core import IssueRecord, ProjectRecord, TeamRecord

# ---------------------------------------------------------------------------
# workload.py types
# ---------------------------------------------------------------------------


class ContributorShare(TypedDict):
    """A contributor's slice of one project (``project.contributors[id]``)."""

    name: str
    points: int
    issue_count: int
    percentage: float


class ProjectShare(TypedDict):
    """A project's slice of one contributor (``contributor.projects[id]``)."""

    name: str
    points: int
    issue_count: int
    percentage: float


class ProjectWorkload(TypedDict):
    name: str
    total_points: int
    issue_count: int
    contributors: dict[str, ContributorShare]


class ContributorWorkload(TypedDict):
    name: str
    total_points: int
    issue_count: int
    projects: dict[str, ProjectShare]


class TeamWorkload(TypedDict):
    """Rollup for one team: project → contributor and the transpose."""

    id: str
    name: str
    total_points: int
    issue_count: int
    projects: dict[str, ProjectWorkload]
    contributors: dict[str, ContributorWorkload]


# ---------------------------------------------------------------------------
# monthly.py types
# ---------------------------------------------------------------------------


class MonthBucket(TypedDict):
    name: str
    issues: list[IssueRecord]


# ``process_monthly_data`` merges team rollups with month metadata in one
# mapping, so the value type is left open.
MonthlyReport = dict[str, Any]


# ---------------------------------------------------------------------------
# reporting.py types
# ---------------------------------------------------------------------------


class CompletionRate(TypedDict):
    total: int
    completed: int
    rate: float


class TeamCapitalization(TypedDict):
    capitalized: int
    non_capitalized: int
    total: int
    capitalization_rate: float


class ContributorCapitalization(TypedDict):
    total_issues: int
    capitalized_issues: int
    non_capitalized_issues: int
    percentage: float
    total_estimate: float
    capitalized_estimate: float
    estimate_percentage: float


class CapitalizationMetrics(TypedDict):
    capitalized_count: int
    non_capitalized_count: int
    total_issues: int
    capitalization_rate: float
    team_capitalization: dict[str, TeamCapitalization]
    capitalized_projects: list[str]
    contributor_capitalization: dict[str, ContributorCapitalization]


class ReportSummary(TypedDict):
    teams_count: int
    projects_count: int
    issues_count: int
    issues_by_status: dict[str, int]
    issues_by_team: dict[str, int]
    team_completion_rates: dict[str, CompletionRate]
    capitalization_metrics: CapitalizationMetrics


class Report(TypedDict):
    teams: list[TeamRecord]
    projects: list[ProjectRecord]
    issues: list[IssueRecord]
    summary: ReportSummary
