"""Fetch the flat team/project/issue lists the analytics work on, plus single records."""

from __future__ import annotations

import logging
from typing import Any

from linear_cli import queries
from linear_cli.client import LinearClient
from linear_cli.types.core import IssueDetail, IssueRecord, ProjectDetail, ProjectRecord, TeamDetail, TeamRecord

logger = logging.getLogger(__name__)


class TeamNotFoundError(LookupError):
    """No team matched the requested name."""

    def __init__(self, team_name: str, available: list[TeamRecord]) -> None:
        self.team_name = team_name
        self.available = available
        if available:
            names = ", ".join(f"{t.get('name')} ({t.get('key')})" for t in available)
            message = f"Team '{team_name}' not found. Available teams: {names}"
        else:
            message = "No teams found in your Linear workspace."
        super().__init__(message)

    def __str__(self) -> str:
        return str(self.args[0])


class DataFetcher:
    """Read-only access to the records the analytics and browse commands need."""

    def __init__(self, client: LinearClient) -> None:
        self.client = client

    def fetch_teams(self) -> list[TeamRecord]:
        teams: list[TeamRecord] = self.client.fetch_paginated(queries.LIST_TEAMS, {}, "teams")  # type: ignore[assignment]
        logger.info("Fetched %d teams", len(teams))
        return teams

    def fetch_team_by_name(self, team_name: str) -> TeamRecord:
        """Case-insensitive lookup by name or key; raises TeamNotFoundError."""
        teams = self.fetch_teams()
        wanted = team_name.strip().lower()
        for team in teams:
            if (team.get("name") or "").lower() == wanted:
                return team
        for team in teams:
            if (team.get("key") or "").lower() == wanted:
                return team
        raise TeamNotFoundError(team_name, teams)

    def fetch_projects(self, team_id: str | None = None) -> list[ProjectRecord]:
        """All projects, or only those whose team membership includes ``team_id``.

        Projects can belong to several teams and the API cannot filter on
        that, so the team filter is applied client-side.
        """
        projects: list[ProjectRecord] = self.client.fetch_paginated(queries.LIST_PROJECTS, {}, "projects")  # type: ignore[assignment]
        if team_id is not None:
            projects = [
                p
                for p in projects
                if any(t and t.get("id") == team_id for t in ((p.get("teams") or {}).get("nodes") or []))
            ]
        logger.info("Fetched %d projects", len(projects))
        return projects

    def fetch_issues(self, team_id: str | None = None, *, limit: int | None = None) -> list[IssueRecord]:
        """All issues, or the issues of one team (filtered server-side).

        ``limit`` caps the result and stops paging once it is reached.
        """
        if team_id is None:
            issues = self.client.fetch_paginated(queries.LIST_ISSUES, {}, "issues", limit=limit)
        else:
            issues = self.client.fetch_paginated(
                queries.LIST_TEAM_ISSUES, {"teamId": team_id}, "issues", limit=limit
            )
        logger.info("Fetched %d issues", len(issues))
        return issues  # type: ignore[return-value]

    def fetch_issue(self, issue_id: str) -> IssueDetail | None:
        """One issue by UUID or identifier, with description and comments."""
        return self._fetch_one(queries.GET_ISSUE, "issue", issue_id)  # type: ignore[return-value]

    def fetch_team(self, team_id: str) -> TeamDetail | None:
        """One team with its members, workflow states and labels."""
        return self._fetch_one(queries.GET_TEAM, "team", team_id)  # type: ignore[return-value]

    def fetch_project(self, project_id: str) -> ProjectDetail | None:
        """One project with its lead, members and issues."""
        return self._fetch_one(queries.GET_PROJECT, "project", project_id)  # type: ignore[return-value]

    def _fetch_one(self, query: str, field: str, record_id: str) -> dict[str, Any] | None:
        record = self.client.query(query, {"id": record_id}).get(field)
        if not isinstance(record, dict):
            logger.info("No %s found for id %s", field, record_id)
            return None
        return record
