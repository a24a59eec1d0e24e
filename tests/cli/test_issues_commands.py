"""CLI tests for issue listing and viewing."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest
from click.testing import Result

from tests._factories import make_issue, make_project, make_team
from tests._graphql import FakeLinear

Run = Callable[..., Result]


@pytest.fixture
def detailed_issue() -> dict[str, Any]:
    issue = make_issue(
        team=make_team("t1", "Platform", "PLT"),
        project=make_project("p1", "Billing"),
        assignee=("u1", "Ann"),
        estimate=3,
        labels=["Bug", "CapEx"],
        issue_id="uuid-1",
    )
    issue.update(
        identifier="PLT-7",
        title="Invoices render twice",
        priority=2,
        description="Seen on the June statement.",
        comments={"nodes": [{"body": "Reproduced.", "createdAt": "2023-06-02", "user": {"name": "Bob"}}]},
    )
    return issue


class TestIssuesList:
    def test_table(self, run: Run) -> None:
        result = run("issues", "list")
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert [h.strip() for h in lines[0].split("|")] == ["ID", "Title", "Status", "Assignee", "Team"]
        assert "5 issues" in result.output
        assert "Unassigned" not in result.output

    def test_limit_stops_paging(self, run: Run, fake_linear: FakeLinear) -> None:
        result = run("issues", "list", "--limit", "3", "--json")
        assert result.exit_code == 0, result.output
        assert len(json.loads(result.output)) == 3
        assert [r["variables"]["first"] for r in fake_linear.requests] == [3, 1]

    def test_team_filter_by_key(self, run: Run, fake_linear: FakeLinear) -> None:
        result = run("issues", "list", "--team", "mob", "--json")
        assert result.exit_code == 0, result.output
        assert {i["team"]["name"] for i in json.loads(result.output)} == {"Mobile"}
        assert fake_linear.operations()[:2] == ["Teams", "TeamIssues"]

    def test_detail_columns(self, run: Run, detailed_issue: dict[str, Any]) -> None:
        result = run("issues", "list", "--detail", transport=FakeLinear(issues=[detailed_issue]).transport)
        assert result.exit_code == 0, result.output
        row = next(line for line in result.output.splitlines() if line.startswith("PLT-7"))
        assert "High" in row
        assert "Bug, CapEx" in row

    def test_empty(self, run: Run) -> None:
        result = run("issues", "list", transport=FakeLinear().transport)
        assert result.exit_code == 0, result.output
        assert "No issues found matching your criteria." in result.output

    def test_limit_must_be_positive(self, run: Run) -> None:
        result = run("issues", "list", "--limit", "0")
        assert result.exit_code == 2

    def test_unknown_team(self, run: Run) -> None:
        result = run("issues", "list", "--team", "Growth")
        assert result.exit_code == 1
        assert "Team 'Growth' not found" in result.output


class TestIssuesView:
    def test_text(self, run: Run, detailed_issue: dict[str, Any]) -> None:
        result = run("issues", "view", "PLT-7", transport=FakeLinear(issues=[detailed_issue]).transport)
        assert result.exit_code == 0, result.output
        assert result.output.startswith("PLT-7: Invoices render twice\n")
        assert "Assignee: Ann" in result.output
        assert "Priority: High" in result.output
        assert "Labels: Bug, CapEx" in result.output
        assert "Seen on the June statement." in result.output
        assert "- Bob (2023-06-02): Reproduced." in result.output

    def test_json(self, run: Run, detailed_issue: dict[str, Any]) -> None:
        result = run("issues", "view", "uuid-1", "--json", transport=FakeLinear(issues=[detailed_issue]).transport)
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["identifier"] == "PLT-7"

    def test_without_description(self, run: Run) -> None:
        issue = make_issue(issue_id="bare")
        result = run("issues", "view", "bare", transport=FakeLinear(issues=[issue]).transport)
        assert result.exit_code == 0, result.output
        assert "No description provided." in result.output
        assert "Priority: No priority" in result.output
        assert "Comments" not in result.output

    def test_not_found(self, run: Run) -> None:
        result = run("issues", "view", "PLT-404", "--json")
        assert result.exit_code == 1
        assert json.loads(result.output) == {"error": "Issue not found: PLT-404"}
